"""
Mapping Schemas - Pydantic models for patient-doctor assignments.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from ..database import MAX_ID

class MappingCreate(BaseModel):
    """Assign a doctor to a patient."""
    patient_id: int = Field(..., ge=1, le=MAX_ID, description="Patient ID is required")
    doctor_id: int = Field(..., ge=1, le=MAX_ID, description="Doctor ID is required")

class MappingResponse(BaseModel):
    """A stored mapping row."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    doctor_id: int
    created_at: Optional[datetime] = None

class MappingDetailResponse(BaseModel):
    """A mapping joined with the names of both sides."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    patient_name: str
    doctor_id: int
    doctor_name: str
    created_at: Optional[datetime] = None

class AssignedDoctorResponse(BaseModel):
    """A doctor assigned to a patient."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    specialization: str
    contact: Optional[str] = None
    email: Optional[str] = None
