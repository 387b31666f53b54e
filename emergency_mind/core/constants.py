"""
Constants for Medico-Legal Document Generation

Constant Categories:
    SPECIALTY_SERVICES          → Specialty → ordered service codes (catalog)
    SERVICE_DISPLAY_NAMES       → Service code → display name
    SERVICE_DESCRIPTIONS        → Service code → one-line description
    SPECIALTY_INFO              → Specialty → display name/description
    VALIDATOR_ALLOWED_SERVICES  → Service codes accepted for generation
    STORAGE_KEY                 → Key under which reports are persisted

The catalog tables and the validator allow-list are maintained separately.
A code reachable through the catalog but missing from the allow-list is
rejected at dispatch time.

Author: Emergency-Mind Team
Date: October 2026
"""

from typing import Dict, Tuple

from emergency_mind.core.enums import ServiceCode, Specialty


# =============================================================================
# STAGE 1: SERVICE CATALOG
# =============================================================================

SPECIALTY_SERVICES: Dict[str, Tuple[str, ...]] = {
    Specialty.EMERGENCY.value: (
        ServiceCode.FINAL_REPORT.value,
        ServiceCode.INSURANCE_APPROVAL.value,
        ServiceCode.DAMA_FORM.value,
        ServiceCode.POLICE_REPORT.value,
        ServiceCode.DISCHARGE_SUMMARY.value,
    ),
    Specialty.ICU.value: (
        ServiceCode.FINAL_REPORT.value,
        ServiceCode.INSURANCE_APPROVAL.value,
        ServiceCode.CONSULTATION.value,
        ServiceCode.DISCHARGE_SUMMARY.value,
    ),
    Specialty.SURGERY.value: (
        ServiceCode.FINAL_REPORT.value,
        ServiceCode.INSURANCE_APPROVAL.value,
        ServiceCode.CONSULTATION.value,
        ServiceCode.DISCHARGE_SUMMARY.value,
    ),
    Specialty.INTERNAL_MEDICINE.value: (
        ServiceCode.FINAL_REPORT.value,
        ServiceCode.INSURANCE_APPROVAL.value,
        ServiceCode.CONSULTATION.value,
        ServiceCode.ICD10_FINDER.value,
        ServiceCode.DISCHARGE_SUMMARY.value,
    ),
    Specialty.OBGYN.value: (
        ServiceCode.FINAL_REPORT.value,
        ServiceCode.INSURANCE_APPROVAL.value,
        ServiceCode.CONSULTATION.value,
        ServiceCode.DISCHARGE_SUMMARY.value,
    ),
    Specialty.PEDIATRICS.value: (
        ServiceCode.FINAL_REPORT.value,
        ServiceCode.INSURANCE_APPROVAL.value,
        ServiceCode.CONSULTATION.value,
        ServiceCode.DISCHARGE_SUMMARY.value,
    ),
    Specialty.CLINIC_DOCTOR.value: (
        ServiceCode.FINAL_REPORT.value,
        ServiceCode.CONSULTATION.value,
        ServiceCode.ICD10_FINDER.value,
    ),
    Specialty.GENERAL_SERVICES.value: (
        ServiceCode.FINAL_REPORT.value,
        ServiceCode.CONSULTATION.value,
        ServiceCode.ICD10_FINDER.value,
        ServiceCode.DISCHARGE_SUMMARY.value,
    ),
}

SERVICE_DISPLAY_NAMES: Dict[str, str] = {
    ServiceCode.FINAL_REPORT.value: "Final Medical Report",
    ServiceCode.INSURANCE_APPROVAL.value: "Insurance Approval Request",
    ServiceCode.DAMA_FORM.value: "DAMA Form",
    ServiceCode.CONSULTATION.value: "Medical Consultation",
    ServiceCode.ICD10_FINDER.value: "ICD-10 Code Finder",
    ServiceCode.POLICE_REPORT.value: "Police Medical Report",
    ServiceCode.DISCHARGE_SUMMARY.value: "Discharge Summary",
}

SERVICE_DESCRIPTIONS: Dict[str, str] = {
    ServiceCode.FINAL_REPORT.value: "Generate comprehensive final medical reports",
    ServiceCode.INSURANCE_APPROVAL.value: "Create insurance approval requests",
    ServiceCode.DAMA_FORM.value: "Generate DAMA (Discharge Against Medical Advice) forms",
    ServiceCode.CONSULTATION.value: "Create medical consultation reports",
    ServiceCode.ICD10_FINDER.value: "Find appropriate ICD-10 codes for diagnoses",
    ServiceCode.POLICE_REPORT.value: "Generate police medical reports",
    ServiceCode.DISCHARGE_SUMMARY.value: "Create patient discharge summaries",
}

DEFAULT_SERVICE_DESCRIPTION = "Generate medical document"

SPECIALTY_INFO: Dict[str, Dict[str, str]] = {
    Specialty.EMERGENCY.value: {
        "name": "Emergency Medicine",
        "description": "Critical care and emergency procedures",
    },
    Specialty.ICU.value: {
        "name": "Intensive Care Unit",
        "description": "Critical patient monitoring and care",
    },
    Specialty.SURGERY.value: {
        "name": "Surgery",
        "description": "Surgical procedures and operations",
    },
    Specialty.INTERNAL_MEDICINE.value: {
        "name": "Internal Medicine",
        "description": "Adult medical care and diagnosis",
    },
    Specialty.OBGYN.value: {
        "name": "OB/GYN",
        "description": "Obstetrics and gynecology care",
    },
    Specialty.PEDIATRICS.value: {
        "name": "Pediatrics",
        "description": "Children's medical care",
    },
    Specialty.CLINIC_DOCTOR.value: {
        "name": "Clinic Doctor",
        "description": "General practice and outpatient care",
    },
    Specialty.GENERAL_SERVICES.value: {
        "name": "General Services",
        "description": "General medical services and support",
    },
}

UNKNOWN_SPECIALTY_INFO: Dict[str, str] = {
    "name": "Unknown Specialty",
    "description": "Medical specialty not recognized",
}


# =============================================================================
# STAGE 2: VALIDATOR ALLOW-LIST
# =============================================================================
# Independent of SPECIALTY_SERVICES. Keep the two in sync by hand.

VALIDATOR_ALLOWED_SERVICES: Tuple[str, ...] = (
    "final-report",
    "insurance-approval",
    "dama-form",
    "consultation",
    "icd-10-finder",
    "police-report",
    "discharge-summary",
)


# =============================================================================
# STAGE 3: STORAGE
# =============================================================================

STORAGE_KEY = "emergency-mind-reports"

BULLET_MARKER = "•"
