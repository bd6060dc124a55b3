"""
Patient Router - API endpoints for patient records.

Every route requires a valid token and only ever sees the caller's own patients.
"""
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import MAX_ID, get_db
from ..auth.dependencies import get_current_identity
from ..auth.schemas import CurrentIdentity
from .schemas import PatientCreate, PatientUpdate, PatientResponse
from .service import patient_policy

router = APIRouter()

@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    patient_data: PatientCreate,
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Create a patient owned by the caller."""
    return await patient_policy.create(db, current_identity.id, patient_data.model_dump())

@router.get("", response_model=List[PatientResponse])
async def list_patients(
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """List the patients created by the caller."""
    return await patient_policy.list(db, current_identity.id)

@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Get one of the caller's patients."""
    return await patient_policy.get(db, patient_id, current_identity.id)

@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_data: PatientUpdate,
    patient_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """
    Update one of the caller's patients.
    
    Only the supplied fields change.
    """
    changes = patient_data.model_dump(exclude_unset=True)
    return await patient_policy.update(db, patient_id, current_identity.id, changes)

@router.delete("/{patient_id}")
async def delete_patient(
    patient_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Delete one of the caller's patients."""
    await patient_policy.delete(db, patient_id, current_identity.id)
    return {"message": "Patient removed successfully", "id": patient_id}
