"""
SQLAlchemy declarative base.

Dependencies: sqlalchemy
System role: Metadata registry for the chunks table
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base; create_tables() creates everything registered here."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
