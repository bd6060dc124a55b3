"""
Patient Service - Owner-scoped business logic for patient records.
"""
from .models import Patient
from ..core.ownership import OwnershipPolicy

patient_policy = OwnershipPolicy(Patient, "Patient")
