# models/base.py
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


# Deterministic constraint names so alembic migrations stay stable across dialects
NAMING_CONVENTION = {
     "ix": "ix_%(column_0_label)s",
     "uq": "uq_%(table_name)s_%(column_0_name)s",
     "fk": "fk_%(table_name)s_%(column_0_name)s",
     "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
     """
     Base class for all registry models.
     """
     metadata = MetaData(naming_convention=NAMING_CONVENTION)
