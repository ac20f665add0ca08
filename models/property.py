# models/property.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Property(Base):
     """
     Property model - a building or house owned by a landlord.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)
     name = Column(String(255), nullable=False)
     property_type = Column(String(50), default="apartment", nullable=False)  # apartment, house, condo, commercial
     description = Column(Text, nullable=True)

     # Address
     street = Column(String(255), nullable=True)
     city = Column(String(100), nullable=True)
     state = Column(String(100), nullable=True)
     zip_code = Column(String(20), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     landlord = relationship("Landlord", back_populates="properties")
     units = relationship("PropertyUnit", back_populates="property", cascade="all, delete-orphan")
     fee_overrides = relationship("PropertyFeeOverride", back_populates="property", cascade="all, delete-orphan")
     maintenance_tickets = relationship("MaintenanceTicket", back_populates="property")

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}')>"
