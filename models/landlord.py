# models/landlord.py
import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class SubscriptionTier(str, enum.Enum):
     """Plans that gate rent automation (pro) and team tools (enterprise)."""
     FREE = "free"
     PRO = "pro"
     ENTERPRISE = "enterprise"


class Landlord(Base):
     """
     Landlord model - the account that owns properties, settings and money.
     One row per user with role='landlord'.
     """
     __tablename__ = "landlords"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
     name = Column(String(200), nullable=False)
     company_name = Column(String(200), nullable=True)
     subscription_tier = Column(
          enum_type(SubscriptionTier, "subscription_tier"),
          default=SubscriptionTier.FREE,
          nullable=False
     )

     # Payment processor references
     stripe_customer_id = Column(String(100), nullable=True)
     stripe_connect_account_id = Column(String(100), nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     user = relationship("User", back_populates="landlord")
     properties = relationship("Property", back_populates="landlord", cascade="all, delete-orphan")
     wallet = relationship("LandlordWallet", back_populates="landlord", uselist=False)

     def has_tier(self, *tiers: SubscriptionTier) -> bool:
          return self.subscription_tier in tiers

     def __repr__(self):
          return f"<Landlord(id={self.id}, name='{self.name}', tier='{self.subscription_tier}')>"
