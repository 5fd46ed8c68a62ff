"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from sweetshop.models.sweet import Sweet  # noqa: F401
from sweetshop.models.user import User  # noqa: F401
