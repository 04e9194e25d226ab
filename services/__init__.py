from .patient_service import save_patient, list_patients, get_patient, delete_patient
from .seed_service import ensure_demo_data

# Import the remaining service modules directly where needed.

__all__ = ["save_patient", "list_patients", "get_patient", "delete_patient", "ensure_demo_data"]
