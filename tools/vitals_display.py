"""Dashboard-facing classification of vitals.

Status labels, risk levels and concern lists used by the panels. Like the
analysis engine these are pure functions of their inputs.
"""
from typing import List

from models.vitals import VitalsRecord
from models.analysis import (
    Insight,
    VitalStatus,
    VitalCard,
    RiskLevel,
    KeyConcern,
    HeartAgeComparison,
)


def blood_pressure_status(systolic: float, diastolic: float) -> VitalStatus:
    if systolic > 140 or diastolic > 90:
        return VitalStatus.RISK
    if systolic > 130 or diastolic > 85:
        return VitalStatus.MODERATE
    return VitalStatus.OPTIMAL


def heart_rate_status(heart_rate: float) -> VitalStatus:
    # Wider "risk" band than the risk score uses
    if heart_rate > 100 or heart_rate < 50:
        return VitalStatus.RISK
    if heart_rate > 90 or heart_rate < 60:
        return VitalStatus.MODERATE
    return VitalStatus.OPTIMAL


def blood_glucose_status(glucose: float) -> VitalStatus:
    if glucose > 126:
        return VitalStatus.RISK
    if glucose > 100:
        return VitalStatus.MODERATE
    return VitalStatus.OPTIMAL


def cholesterol_status(cholesterol: float) -> VitalStatus:
    if cholesterol > 240:
        return VitalStatus.RISK
    if cholesterol > 200:
        return VitalStatus.MODERATE
    return VitalStatus.OPTIMAL


def hba1c_status(hba1c: float) -> VitalStatus:
    if hba1c > 6.5:
        return VitalStatus.RISK
    if hba1c > 5.7:
        return VitalStatus.MODERATE
    return VitalStatus.OPTIMAL


def _fmt(value: float) -> str:
    """145.0 -> '145', 98.6 -> '98.6'"""
    return f"{value:g}"


def build_vital_cards(vitals: VitalsRecord) -> List[VitalCard]:
    """Headline vitals, in display order."""
    return [
        VitalCard(
            "Blood Pressure",
            f"{_fmt(vitals.systolic)}/{_fmt(vitals.diastolic)}",
            "mmHg",
            blood_pressure_status(vitals.systolic, vitals.diastolic),
        ),
        VitalCard("Heart Rate", _fmt(vitals.heart_rate), "BPM", heart_rate_status(vitals.heart_rate)),
        VitalCard("Temperature", _fmt(vitals.temperature), "°F", VitalStatus.OPTIMAL),
        VitalCard("Blood Sugar", _fmt(vitals.blood_glucose), "mg/dL", blood_glucose_status(vitals.blood_glucose)),
        VitalCard("Cholesterol", _fmt(vitals.cholesterol), "mg/dL", cholesterol_status(vitals.cholesterol)),
        VitalCard("HbA1c", _fmt(vitals.hba1c), "%", hba1c_status(vitals.hba1c)),
    ]


def risk_level(score: int) -> RiskLevel:
    """
    Bucket the risk score for display.
    - 70+: High
    - 40-69: Moderate
    - below 40: Low
    """
    if score >= 70:
        return RiskLevel(
            "High", "red",
            "Immediate medical attention recommended. Schedule consultation with specialist.",
        )
    if score >= 40:
        return RiskLevel(
            "Moderate", "yellow",
            "Some health markers need attention. Follow care strategy and monitor closely.",
        )
    return RiskLevel(
        "Low", "green",
        "Good overall health. Maintain current lifestyle and routine check-ups.",
    )


def heart_age_comparison(heart_age: int, chronological_age: int) -> HeartAgeComparison:
    years_older = heart_age - chronological_age
    if years_older > 0:
        unit = "year" if years_older == 1 else "years"
        message = f"Your heart is {years_older} {unit} older than your actual age"
    else:
        message = "Your heart age is healthy for your age"
    return HeartAgeComparison(
        heart_age=heart_age,
        chronological_age=chronological_age,
        years_older=years_older,
        message=message,
    )


def identify_key_concerns(vitals: VitalsRecord) -> List[KeyConcern]:
    """Markers outside target, flagged 'critical' in their upper band."""
    concerns: List[KeyConcern] = []

    if vitals.hba1c > 5.7:
        concerns.append(KeyConcern(
            "HbA1c", vitals.hba1c, "< 5.7",
            "critical" if vitals.hba1c > 6.5 else "warning",
        ))

    if vitals.apob > 90:
        concerns.append(KeyConcern(
            "APOB", vitals.apob, "< 90",
            "critical" if vitals.apob > 120 else "warning",
        ))

    if vitals.vldl > 30:
        concerns.append(KeyConcern("VLDL", vitals.vldl, "< 30", "warning"))

    if vitals.systolic > 130:
        concerns.append(KeyConcern(
            "Blood Pressure",
            f"{_fmt(vitals.systolic)}/{_fmt(vitals.diastolic)}",
            "< 120/80",
            "critical" if vitals.systolic > 140 else "warning",
        ))

    return concerns


def top_insights(insights: List[Insight], n: int = 3) -> List[Insight]:
    """First `n` insights in rule order (the list is not re-sorted)."""
    return list(insights[:n])
