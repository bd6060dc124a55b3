"""
Doctor Model - Stores doctor records owned by the identity that created them.
"""
from sqlalchemy import Column, Integer, String, DateTime, func
from ..database import Base
from ..core.ownership import OwnedMixin

class Doctor(OwnedMixin, Base):
    """
    Doctor Model - Stores doctor information
    
    Fields:
    - id: Primary key
    - name: Doctor's name
    - specialization: Medical specialization
    - contact: Contact number
    - email: Contact email
    - created_by: Owning identity (immutable)
    - created_at: When the record was created
    - updated_at: When the record was last updated
    """
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    specialization = Column(String(200), nullable=False)
    contact = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        """String representation of the Doctor model"""
        return f"<Doctor(id={self.id}, specialization='{self.specialization}')>"
