"""
Patient Model - Stores patient records owned by the identity that created them.
"""
from sqlalchemy import Column, Integer, String, DateTime, func
from ..database import Base
from ..core.ownership import OwnedMixin

class Patient(OwnedMixin, Base):
    """
    Patient Model - Stores patient information
    
    Fields:
    - id: Primary key
    - name: Patient's name
    - age: Patient's age in years
    - gender: Patient's gender
    - contact: Contact number
    - address: Postal address
    - created_by: Owning identity (immutable)
    - created_at: When the record was created
    - updated_at: When the record was last updated
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(20), nullable=True)
    contact = Column(String(50), nullable=True)
    address = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, created_by={self.created_by})>"
