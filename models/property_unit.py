# models/property_unit.py
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class PropertyUnit(Base):
     """
     PropertyUnit model - individual rentable units within a property.
     """
     __tablename__ = "property_units"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

     unit_number = Column(String(50), nullable=False)
     bedrooms = Column(Integer, nullable=True)
     bathrooms = Column(Numeric(3, 1), nullable=True)
     rent_amount = Column(Numeric(12, 2), nullable=True)
     status = Column(String(50), default="vacant", nullable=False)  # vacant, occupied

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     property = relationship("Property", back_populates="units")
     leases = relationship("Lease", back_populates="unit")

     def __repr__(self):
          return f"<PropertyUnit(id={self.id}, unit_number='{self.unit_number}', status='{self.status}')>"
