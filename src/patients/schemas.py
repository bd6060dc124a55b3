"""
Patient Schemas - Pydantic models for patient payloads.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

class PatientCreate(BaseModel):
    """Fields accepted when creating a patient."""
    name: str = Field(..., min_length=1, max_length=200, description="Name is required")
    age: int = Field(..., ge=0, le=150, description="Age must be a number")
    gender: Optional[str] = Field(None, max_length=20)
    contact: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None

class PatientUpdate(BaseModel):
    """
    Fields accepted when updating a patient.
    
    Every field is optional; omitted fields keep their stored value.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[str] = Field(None, max_length=20)
    contact: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None

class PatientResponse(BaseModel):
    """Patient record as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    age: int
    gender: Optional[str] = None
    contact: Optional[str] = None
    address: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
