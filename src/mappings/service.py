"""
Mapping Service - Links doctors to patients.

Mappings are a shared record: any authenticated identity may create, list or
delete them, whether or not it owns the patient or doctor involved.
"""
import logging
from typing import List
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ReferenceValidationException, ResourceNotFoundException, StorageFailureException
from ..patients.models import Patient
from ..doctors.models import Doctor
from .models import PatientDoctorMapping

# Set up logging
logger = logging.getLogger(__name__)

def _reference_error(field: str, message: str) -> dict:
    return {"loc": ["body", field], "msg": message, "type": "reference_not_found"}

async def _missing_references(db: AsyncSession, patient_id: int, doctor_id: int) -> List[dict]:
    errors = []
    if await db.scalar(select(Patient.id).where(Patient.id == patient_id)) is None:
        errors.append(_reference_error("patient_id", f"Patient {patient_id} does not exist"))
    if await db.scalar(select(Doctor.id).where(Doctor.id == doctor_id)) is None:
        errors.append(_reference_error("doctor_id", f"Doctor {doctor_id} does not exist"))
    return errors

async def create_mapping(db: AsyncSession, patient_id: int, doctor_id: int, current_user_id: int) -> PatientDoctorMapping:
    """
    Assign a doctor to a patient.
    
    Args:
        db: Database session
        patient_id: ID of the patient
        doctor_id: ID of the doctor
        current_user_id: ID of the caller, only used for logging
        
    Returns:
        PatientDoctorMapping: The stored mapping
        
    Raises:
        ReferenceValidationException: If the patient or doctor does not exist
        StorageFailureException: If the mapping could not be stored
    """
    errors = await _missing_references(db, patient_id, doctor_id)
    if errors:
        raise ReferenceValidationException(errors)

    mapping = PatientDoctorMapping(patient_id=patient_id, doctor_id=doctor_id)
    db.add(mapping)
    try:
        await db.commit()
    except IntegrityError:
        # A referenced row was deleted between the check and the insert
        await db.rollback()
        errors = await _missing_references(db, patient_id, doctor_id)
        if not errors:
            logger.error(f"Integrity error creating mapping for patient {patient_id} and doctor {doctor_id}")
            raise StorageFailureException()
        raise ReferenceValidationException(errors)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error creating mapping for patient {patient_id} and doctor {doctor_id}: {str(e)}")
        raise StorageFailureException()

    await db.refresh(mapping)
    logger.info(f"Mapping {mapping.id} (patient {patient_id}, doctor {doctor_id}) created by user {current_user_id}")
    return mapping

async def list_mappings(db: AsyncSession) -> List[dict]:
    """Return every mapping with patient and doctor names."""
    result = await db.execute(
        select(
            PatientDoctorMapping.id,
            PatientDoctorMapping.patient_id,
            Patient.name.label("patient_name"),
            PatientDoctorMapping.doctor_id,
            Doctor.name.label("doctor_name"),
            PatientDoctorMapping.created_at
        )
        .join(Patient, PatientDoctorMapping.patient_id == Patient.id)
        .join(Doctor, PatientDoctorMapping.doctor_id == Doctor.id)
        .order_by(PatientDoctorMapping.id)
    )
    return [dict(row) for row in result.mappings().all()]

async def list_doctors_for_patient(db: AsyncSession, patient_id: int) -> List[Doctor]:
    """Return the doctors assigned to a patient. Unknown patients yield an empty list."""
    result = await db.execute(
        select(Doctor)
        .join(PatientDoctorMapping, PatientDoctorMapping.doctor_id == Doctor.id)
        .where(PatientDoctorMapping.patient_id == patient_id)
        .order_by(PatientDoctorMapping.id)
    )
    return list(result.scalars().all())

async def delete_mapping(db: AsyncSession, mapping_id: int, current_user_id: int) -> None:
    """
    Remove a mapping.
    
    Raises:
        ResourceNotFoundException: If the mapping does not exist
    """
    try:
        result = await db.execute(
            delete(PatientDoctorMapping)
            .where(PatientDoctorMapping.id == mapping_id)
            .returning(PatientDoctorMapping.id)
        )
        deleted_id = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error deleting mapping {mapping_id}: {str(e)}")
        raise StorageFailureException()

    if deleted_id is None:
        await db.rollback()
        raise ResourceNotFoundException("Mapping not found")

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error deleting mapping {mapping_id}: {str(e)}")
        raise StorageFailureException()
    logger.info(f"Mapping {mapping_id} deleted by user {current_user_id}")
