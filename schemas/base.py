# schemas/base.py
"""
Shared pieces for API schemas.

Payloads use camelCase keys on the wire (gracePeriodDays, feeType) and
snake_case in Python. Money is validated as Decimal and written to JSON
as a number.
"""
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


Money = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]


class CamelModel(BaseModel):
     """Base model: camelCase aliases, accepts either spelling, reads ORM objects."""
     model_config = ConfigDict(
          alias_generator=to_camel,
          populate_by_name=True,
          from_attributes=True,
     )


class MessageResponse(CamelModel):
     """Plain acknowledgement."""
     success: bool = True
     message: str
