"""Infrastructure — database session management, SQL repositories, logging setup.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - SQLAlchemy exceptions never escape this package unmapped
"""
