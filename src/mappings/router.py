"""
Mapping Router - API endpoints for assigning doctors to patients.

Routes require a valid token but are not scoped to the caller's own records.
"""
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import MAX_ID, get_db
from ..auth.dependencies import get_current_identity
from ..auth.schemas import CurrentIdentity
from .schemas import MappingCreate, MappingResponse, MappingDetailResponse, AssignedDoctorResponse
from .service import create_mapping, list_mappings, list_doctors_for_patient, delete_mapping

router = APIRouter()

@router.post("", response_model=MappingResponse, status_code=status.HTTP_201_CREATED)
async def assign_doctor(
    mapping_data: MappingCreate,
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Assign a doctor to a patient."""
    return await create_mapping(db, mapping_data.patient_id, mapping_data.doctor_id, current_identity.id)

@router.get("", response_model=List[MappingDetailResponse])
async def get_mappings(
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Retrieve all patient-doctor mappings."""
    return await list_mappings(db)

@router.get("/{patient_id}", response_model=List[AssignedDoctorResponse])
async def get_doctors_for_patient(
    patient_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Get all doctors assigned to a specific patient."""
    return await list_doctors_for_patient(db, patient_id)

@router.delete("/{mapping_id}")
async def remove_mapping(
    mapping_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Remove a doctor from a patient."""
    await delete_mapping(db, mapping_id, current_identity.id)
    return {"message": "Mapping removed successfully", "id": mapping_id}
