"""ORM Models — SQLAlchemy declarative models for wallets and transfer requests.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM models never leave the shell: repositories map them to core dataclasses

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata holds every table (ForeignKey
      "wallets.id" resolves at create_all)
    - No ORM relationships: repositories query by id, never navigate rows
"""

from coldflow.models.wallet import WalletModel  # noqa: F401
from coldflow.models.transfer_request import TransferRequestModel  # noqa: F401
