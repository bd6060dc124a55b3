"""
Doctor Router - API endpoints for doctor records.

Every route requires a valid token and only ever sees the caller's own doctors.
"""
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import MAX_ID, get_db
from ..auth.dependencies import get_current_identity
from ..auth.schemas import CurrentIdentity
from .schemas import DoctorCreate, DoctorUpdate, DoctorResponse
from .service import doctor_policy

router = APIRouter()

@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    doctor_data: DoctorCreate,
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Add a doctor owned by the caller."""
    return await doctor_policy.create(db, current_identity.id, doctor_data.model_dump())

@router.get("", response_model=List[DoctorResponse])
async def list_doctors(
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """List the doctors created by the caller."""
    return await doctor_policy.list(db, current_identity.id)

@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(
    doctor_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """
    Get a doctor by ID
    
    Doctors created by other users answer exactly like missing ones.
    """
    return await doctor_policy.get(db, doctor_id, current_identity.id)

@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_data: DoctorUpdate,
    doctor_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Update one of the caller's doctors."""
    changes = doctor_data.model_dump(exclude_unset=True)
    return await doctor_policy.update(db, doctor_id, current_identity.id, changes)

@router.delete("/{doctor_id}")
async def delete_doctor(
    doctor_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
    current_identity: CurrentIdentity = Depends(get_current_identity)
):
    """Delete one of the caller's doctors."""
    await doctor_policy.delete(db, doctor_id, current_identity.id)
    return {"message": "Doctor removed successfully", "id": doctor_id}
