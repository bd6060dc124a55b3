"""
Doctor Schemas - Pydantic models for doctor payloads.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class DoctorCreate(BaseModel):
    """Fields accepted when creating a doctor."""
    name: str = Field(..., min_length=1, max_length=200, description="Name is required")
    specialization: str = Field(..., min_length=1, max_length=200, description="Specialization is required")
    contact: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None

class DoctorUpdate(BaseModel):
    """
    Fields accepted when updating a doctor.
    
    Every field is optional; omitted fields keep their stored value.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    specialization: Optional[str] = Field(None, min_length=1, max_length=200)
    contact: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None

class DoctorResponse(BaseModel):
    """Doctor record as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    specialization: str
    contact: Optional[str] = None
    email: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
