# services/fee_service.py
"""
Fee Service - landlord fee defaults, per-property overrides and the
effective fee for a property.

Resolution order for one fee type on one property:
     1. override.no_fee          -> zero
     2. override.amount present  -> override amount
     3. default not selected     -> does not apply
        (disabled, or apply_to_all is off and the property is not listed)
     4. otherwise                -> default amount
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from models import FeeSetting, PropertyFeeOverride, FeeType, Property
from services.exceptions import NotFoundError
from services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")

# Used until the landlord saves their own settings
DEFAULT_FEES = {
     FeeType.PET_DEPOSIT: {"enabled": False, "amount": Decimal("300")},
     FeeType.PET_RENT: {"enabled": False, "amount": Decimal("50")},
     FeeType.CLEANING_FEE: {"enabled": False, "amount": Decimal("150")},
     FeeType.APPLICATION_FEE: {"enabled": True, "amount": Decimal("50")},
     FeeType.SECURITY_DEPOSIT: {"enabled": True, "amount": Decimal("1")},
     FeeType.LAST_MONTH_RENT: {"enabled": True, "amount": ZERO},
}


@dataclass
class EffectiveFee:
     fee_type: FeeType
     applies: bool
     amount: Decimal
     source: str  # property_no_fee, property_override, landlord_default, disabled, not_selected


def resolve_fee(
     fee_type: FeeType,
     setting: Optional[FeeSetting],
     override: Optional[PropertyFeeOverride],
     property_id: int
) -> EffectiveFee:
     """Resolve one fee for one property. Pure function, no queries."""
     if override is not None and override.no_fee:
          return EffectiveFee(fee_type, True, ZERO, "property_no_fee")

     if override is not None and override.amount is not None:
          return EffectiveFee(fee_type, True, Decimal(override.amount), "property_override")

     if setting is None or not setting.enabled:
          return EffectiveFee(fee_type, False, ZERO, "disabled")

     if not setting.apply_to_all and property_id not in (setting.selected_property_ids or []):
          return EffectiveFee(fee_type, False, ZERO, "not_selected")

     return EffectiveFee(fee_type, True, Decimal(setting.amount), "landlord_default")


class FeeService:
     """Service class for fee configuration."""

     @staticmethod
     def _default_setting(landlord_id: int, fee_type: FeeType) -> FeeSetting:
          """Unsaved FeeSetting carrying the built-in default."""
          defaults = DEFAULT_FEES[fee_type]
          return FeeSetting(
               landlord_id=landlord_id,
               fee_type=fee_type,
               enabled=defaults["enabled"],
               amount=defaults["amount"],
               apply_to_all=True,
               selected_property_ids=[],
          )

     @staticmethod
     def get_settings(db: Session, landlord_id: int) -> dict[FeeType, FeeSetting]:
          """Every fee type, stored rows first, built-in defaults for the rest."""
          stored = {
               row.fee_type: row
               for row in db.query(FeeSetting).filter(FeeSetting.landlord_id == landlord_id).all()
          }
          return {
               fee_type: stored.get(fee_type) or FeeService._default_setting(landlord_id, fee_type)
               for fee_type in FeeType
          }

     @staticmethod
     def update_setting(
          db: Session,
          landlord_id: int,
          fee_type: FeeType,
          enabled: Optional[bool] = None,
          amount: Optional[Decimal] = None,
          apply_to_all: Optional[bool] = None,
          selected_property_ids: Optional[list[int]] = None
     ) -> FeeSetting:
          """
          Upsert one fee default. Fields left as None keep their value.

          Raises:
               NotFoundError: If a selected property is not the landlord's
          """
          setting = db.query(FeeSetting).filter(
               FeeSetting.landlord_id == landlord_id,
               FeeSetting.fee_type == fee_type
          ).first()
          if not setting:
               setting = FeeService._default_setting(landlord_id, fee_type)
               db.add(setting)

          if enabled is not None:
               setting.enabled = enabled
          if amount is not None:
               setting.amount = amount
          if apply_to_all is not None:
               setting.apply_to_all = apply_to_all
          if selected_property_ids is not None:
               owned = {
                    row[0]
                    for row in db.query(Property.id).filter(
                         Property.landlord_id == landlord_id,
                         Property.id.in_(selected_property_ids)
                    ).all()
               }
               missing = sorted(set(selected_property_ids) - owned)
               if missing:
                    raise NotFoundError(f"Properties not found: {', '.join(str(m) for m in missing)}")
               setting.selected_property_ids = sorted(owned)
          if setting.apply_to_all:
               setting.selected_property_ids = []

          db.flush()
          return setting

     # -----------------------------------------------------------------------
     # Per-property overrides
     # -----------------------------------------------------------------------

     @staticmethod
     def list_overrides(db: Session, landlord_id: int, property_id: int) -> list[PropertyFeeOverride]:
          prop = PortfolioService.get_property(db, landlord_id, property_id)
          return (
               db.query(PropertyFeeOverride)
               .filter(PropertyFeeOverride.property_id == prop.id)
               .order_by(PropertyFeeOverride.fee_type)
               .all()
          )

     @staticmethod
     def upsert_override(
          db: Session,
          landlord_id: int,
          property_id: int,
          fee_type: FeeType,
          no_fee: bool = False,
          amount: Optional[Decimal] = None
     ) -> PropertyFeeOverride:
          prop = PortfolioService.get_property(db, landlord_id, property_id)
          override = db.query(PropertyFeeOverride).filter(
               PropertyFeeOverride.property_id == prop.id,
               PropertyFeeOverride.fee_type == fee_type
          ).first()
          if not override:
               override = PropertyFeeOverride(property_id=prop.id, fee_type=fee_type)
               db.add(override)
          override.no_fee = no_fee
          override.amount = None if no_fee else amount
          db.flush()
          return override

     @staticmethod
     def delete_override(db: Session, landlord_id: int, property_id: int, fee_type: FeeType) -> None:
          prop = PortfolioService.get_property(db, landlord_id, property_id)
          override = db.query(PropertyFeeOverride).filter(
               PropertyFeeOverride.property_id == prop.id,
               PropertyFeeOverride.fee_type == fee_type
          ).first()
          if not override:
               raise NotFoundError(f"No {fee_type.value} override for property {property_id}")
          db.delete(override)
          db.flush()

     # -----------------------------------------------------------------------
     # Resolution
     # -----------------------------------------------------------------------

     @staticmethod
     def effective_fees(db: Session, landlord_id: int, property_id: int) -> dict[FeeType, EffectiveFee]:
          """Resolve every fee type for a property."""
          settings = FeeService.get_settings(db, landlord_id)
          overrides = {o.fee_type: o for o in FeeService.list_overrides(db, landlord_id, property_id)}
          return {
               fee_type: resolve_fee(fee_type, settings[fee_type], overrides.get(fee_type), property_id)
               for fee_type in FeeType
          }
