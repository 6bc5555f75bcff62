"""Services Layer — imperative shell around the cold-transfer core.

Invariants:
    - Services load records through repository Protocols, call pure core
      functions, then persist — business rules live in core/, not here
    - The clock is injected so time-dependent behavior is testable

Design Decisions:
    - One service class per workflow (create, advance, monitor): max ~4 public methods each
"""
