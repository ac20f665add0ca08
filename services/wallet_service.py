# services/wallet_service.py
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from models import LandlordWallet

ZERO = Decimal("0.00")


class WalletService:
     """Landlord wallet balance bookkeeping."""

     @staticmethod
     def get_or_create(db: Session, landlord_id: int) -> LandlordWallet:
          wallet = db.query(LandlordWallet).filter(LandlordWallet.landlord_id == landlord_id).first()
          if not wallet:
               wallet = LandlordWallet(
                    landlord_id=landlord_id,
                    available_balance=ZERO,
                    pending_balance=ZERO,
               )
               db.add(wallet)
               db.flush()
          return wallet

     @staticmethod
     def credit(db: Session, landlord_id: int, amount: Decimal) -> LandlordWallet:
          wallet = WalletService.get_or_create(db, landlord_id)
          wallet.available_balance = Decimal(wallet.available_balance) + Decimal(amount)
          return wallet

     @staticmethod
     def debit(db: Session, landlord_id: int, amount: Decimal, is_payout: bool = False) -> LandlordWallet:
          """
          Raises:
               ValueError: If the available balance does not cover the amount
          """
          wallet = WalletService.get_or_create(db, landlord_id)
          available = Decimal(wallet.available_balance)
          if Decimal(amount) > available:
               raise ValueError(
                    f"Insufficient wallet balance. Available: ${available:,.2f}, required: ${Decimal(amount):,.2f}"
               )
          wallet.available_balance = available - Decimal(amount)
          if is_payout:
               wallet.last_payout_at = datetime.now()
          return wallet
