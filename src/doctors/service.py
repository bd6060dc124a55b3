"""
Doctor Service - Owner-scoped business logic for doctor records.
"""
from .models import Doctor
from ..core.ownership import OwnershipPolicy

doctor_policy = OwnershipPolicy(Doctor, "Doctor")
