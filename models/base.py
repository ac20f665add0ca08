# models/base.py
import enum
import re

from sqlalchemy import Enum
from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: SavedPayoutMethod -> saved_payout_methods
          """
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'


def enum_type(enum_cls: type[enum.Enum], name: str) -> Enum:
     """
     Column type for a str enum, stored by value ("paid", not "PAID").
     Plain strings matching a value are accepted on assignment.
     """
     return Enum(
          enum_cls,
          name=name,
          values_callable=lambda members: [m.value for m in members],
          native_enum=False,
          create_constraint=True,
          validate_strings=True,
     )
