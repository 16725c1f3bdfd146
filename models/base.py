from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


# Stable constraint names so Alembic can diff and drop them
NAMING_CONVENTION = {
     "ix": "ix_%(table_name)s_%(column_0_name)s",
     "uq": "uq_%(table_name)s_%(column_0_name)s",
     "ck": "ck_%(table_name)s_%(constraint_name)s",
     "fk": "fk_%(table_name)s_%(column_0_name)s",
     "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Every model names its table explicitly.
     """

     metadata = MetaData(naming_convention=NAMING_CONVENTION)
