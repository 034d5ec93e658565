"""Vitara Data Models.

This module contains the dataclasses shared by the analysis engine and the dashboard.

Models:
    VitalsRecord: Immutable snapshot of a patient's vital signs and lab markers.
    PatientInfo: Who the vitals belong to (only age feeds the analysis).
    Insight: A categorized, human-readable finding.
    OrganAnnotation: A body system flagged by the current vitals.
    CareStrategy: Medications, exercises and lifestyle recommendations.
    DashboardSnapshot: All derived values for one evaluation.
    ConsultationRequest: A specialist consultation request raised from the dashboard.
"""
from models.vitals import (
    VitalsRecord,
    PatientInfo,
    SAMPLE_VITALS,
    SAMPLE_PATIENT_INFO,
)
from models.analysis import (
    InsightType,
    Severity,
    Organ,
    VitalStatus,
    Insight,
    OrganAnnotation,
    Medication,
    Exercise,
    LifestyleItem,
    CareStrategy,
    RiskLevel,
    VitalCard,
    KeyConcern,
    HeartAgeComparison,
    DashboardSnapshot,
)
from models.consultation import ConsultationRequest, URGENCY_LEVELS

__all__ = [
    "VitalsRecord",
    "PatientInfo",
    "SAMPLE_VITALS",
    "SAMPLE_PATIENT_INFO",
    "InsightType",
    "Severity",
    "Organ",
    "VitalStatus",
    "Insight",
    "OrganAnnotation",
    "Medication",
    "Exercise",
    "LifestyleItem",
    "CareStrategy",
    "RiskLevel",
    "VitalCard",
    "KeyConcern",
    "HeartAgeComparison",
    "DashboardSnapshot",
    "ConsultationRequest",
    "URGENCY_LEVELS",
]
