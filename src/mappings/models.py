"""
Patient-Doctor Mapping Model - Many-to-many link between patients and doctors.

Mappings are not owned by any identity.
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, func
from ..database import Base

class PatientDoctorMapping(Base):
    """
    PatientDoctorMapping Model - Assigns a doctor to a patient
    
    Fields:
    - id: Primary key
    - patient_id: Foreign key to Patient
    - doctor_id: Foreign key to Doctor
    - created_at: When the assignment was made
    """
    __tablename__ = "patient_doctor_mapping"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        """String representation of the PatientDoctorMapping model"""
        return f"<PatientDoctorMapping(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id})>"
