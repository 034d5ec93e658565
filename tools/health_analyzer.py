from typing import List, Optional

from models.vitals import VitalsRecord
from models.analysis import (
    Insight,
    InsightType,
    Severity,
    Organ,
    OrganAnnotation,
    Medication,
    Exercise,
    LifestyleItem,
    CareStrategy,
)


# ============================================================================
# RISK SCORE
# ============================================================================

def calc_risk_score(vitals: VitalsRecord) -> int:
    """
    Composite Health Risk Score (0-100)

    Higher score = higher overall risk. Each factor contributes at most one tier:

    - Blood pressure: >140/90 → 25, >130/85 → 15
    - Heart rate: >100 or <60 → 15
    - Blood glucose: >126 → 20, >100 → 10
    - Total cholesterol: >240 → 20, >200 → 10
    - HbA1c: >6.5 → 20, >5.7 → 10

    Not a calibrated clinical probability.
    """
    score = 0

    # Blood pressure
    if vitals.systolic > 140 or vitals.diastolic > 90:
        score += 25
    elif vitals.systolic > 130 or vitals.diastolic > 85:
        score += 15

    # Heart rate
    if vitals.heart_rate > 100 or vitals.heart_rate < 60:
        score += 15

    # Blood glucose
    if vitals.blood_glucose > 126:
        score += 20
    elif vitals.blood_glucose > 100:
        score += 10

    # Cholesterol
    if vitals.cholesterol > 240:
        score += 20
    elif vitals.cholesterol > 200:
        score += 10

    # HbA1c
    if vitals.hba1c > 6.5:
        score += 20
    elif vitals.hba1c > 5.7:
        score += 10

    return min(score, 100)


# ============================================================================
# HEART AGE
# ============================================================================

def calc_heart_age(vitals: VitalsRecord, chronological_age: int) -> int:
    """
    Estimated "biological" heart age.

    Chronological age plus penalty years (never negative):
    - Systolic BP: >140 → +8, >130 → +4
    - Cholesterol: >240 → +10, >200 → +5
    - Blood glucose: >126 → +7, >100 → +3
    - Heart rate: >100 → +5
    """
    modifier = 0

    if vitals.systolic > 140:
        modifier += 8
    elif vitals.systolic > 130:
        modifier += 4

    if vitals.cholesterol > 240:
        modifier += 10
    elif vitals.cholesterol > 200:
        modifier += 5

    if vitals.blood_glucose > 126:
        modifier += 7
    elif vitals.blood_glucose > 100:
        modifier += 3

    if vitals.heart_rate > 100:
        modifier += 5

    return chronological_age + modifier


# ============================================================================
# INSIGHTS
# ============================================================================

def generate_health_insights(vitals: VitalsRecord) -> List[Insight]:
    """
    Categorized findings in fixed rule order: blood pressure, glucose,
    cholesterol, HbA1c, heart rate. Never empty.

    HbA1c and cholesterol only produce an insight in their high tier.
    """
    insights: List[Insight] = []

    # Blood pressure
    if vitals.systolic > 140 or vitals.diastolic > 90:
        insights.append(Insight(
            type=InsightType.WARNING,
            category="Cardiovascular",
            message="High blood pressure detected. Hypertension increases risk of heart disease and stroke.",
            recommendation="Reduce sodium intake, exercise regularly, and consult a cardiologist.",
            severity=Severity.HIGH,
        ))
    elif vitals.systolic > 130:
        insights.append(Insight(
            type=InsightType.CAUTION,
            category="Cardiovascular",
            message="Elevated blood pressure. Early stage hypertension detected.",
            recommendation="Monitor BP regularly, reduce stress, maintain healthy weight.",
            severity=Severity.MEDIUM,
        ))

    # Blood glucose
    if vitals.blood_glucose > 126:
        insights.append(Insight(
            type=InsightType.WARNING,
            category="Metabolic",
            message="High blood glucose levels. Diabetes range detected.",
            recommendation="Consult an endocrinologist. Reduce sugar intake, increase physical activity.",
            severity=Severity.HIGH,
        ))
    elif vitals.blood_glucose > 100:
        insights.append(Insight(
            type=InsightType.CAUTION,
            category="Metabolic",
            message="Prediabetes zone. Blood sugar levels are elevated.",
            recommendation="Adopt low-glycemic diet, exercise 30 mins daily, lose excess weight.",
            severity=Severity.MEDIUM,
        ))

    # Cholesterol
    if vitals.cholesterol > 240:
        insights.append(Insight(
            type=InsightType.WARNING,
            category="Cardiovascular",
            message="High cholesterol levels increase cardiovascular disease risk.",
            recommendation="Reduce saturated fats, increase fiber intake, consider statin therapy.",
            severity=Severity.HIGH,
        ))

    # HbA1c
    if vitals.hba1c > 6.5:
        insights.append(Insight(
            type=InsightType.WARNING,
            category="Metabolic",
            message="HbA1c indicates poor glucose control over past 3 months.",
            recommendation="Strict diabetic diet, regular glucose monitoring, medication review.",
            severity=Severity.HIGH,
        ))

    # Heart rate
    if vitals.heart_rate > 100:
        insights.append(Insight(
            type=InsightType.CAUTION,
            category="Cardiovascular",
            message="Elevated resting heart rate detected. May indicate stress or fitness issues.",
            recommendation="Practice stress reduction, improve cardiovascular fitness.",
            severity=Severity.MEDIUM,
        ))
    elif 40 < vitals.heart_rate < 60:
        insights.append(Insight(
            type=InsightType.INFO,
            category="Cardiovascular",
            message="Low heart rate. Common in athletes but monitor for symptoms.",
            recommendation="If experiencing dizziness or fatigue, consult a doctor.",
            severity=Severity.LOW,
        ))

    if not insights:
        insights.append(Insight(
            type=InsightType.SUCCESS,
            category="Overall Health",
            message="All vital signs are within normal range. Excellent health markers!",
            recommendation="Maintain current lifestyle, continue regular check-ups.",
            severity=Severity.LOW,
        ))

    return insights


# ============================================================================
# AFFECTED ORGANS
# ============================================================================

ORGAN_COLORS = {
    Organ.HEART: "#ef4444",
    Organ.PANCREAS: "#f59e0b",
    Organ.LIVER: "#10b981",
    Organ.BRAIN: "#eab308",
}

ORGAN_LABELS = {
    Organ.HEART: "Cardiovascular System",
    Organ.PANCREAS: "Metabolic System",
    Organ.LIVER: "Liver Function",
    Organ.BRAIN: "Neurological Health",
}


def _organ(organ: Organ, severity: Severity) -> OrganAnnotation:
    return OrganAnnotation(
        organ=organ,
        severity=severity,
        color=ORGAN_COLORS[organ],
        label=ORGAN_LABELS[organ],
    )


def identify_affected_organs(vitals: VitalsRecord) -> List[OrganAnnotation]:
    """
    Organs implicated by the current vitals, at most one entry per organ.

    - Heart: systolic >130, heart rate >100 or cholesterol >200 (high if systolic >140)
    - Pancreas: glucose >100 or HbA1c >5.7 (high if glucose >126)
    - Liver: VLDL >30 or APOB >100
    - Brain: systolic >140 or stress >7
    """
    affected: List[OrganAnnotation] = []

    if vitals.systolic > 130 or vitals.heart_rate > 100 or vitals.cholesterol > 200:
        affected.append(_organ(
            Organ.HEART,
            Severity.HIGH if vitals.systolic > 140 else Severity.MEDIUM,
        ))

    if vitals.blood_glucose > 100 or vitals.hba1c > 5.7:
        affected.append(_organ(
            Organ.PANCREAS,
            Severity.HIGH if vitals.blood_glucose > 126 else Severity.MEDIUM,
        ))

    # VLDL / APOB as liver markers
    if vitals.vldl > 30 or vitals.apob > 100:
        affected.append(_organ(Organ.LIVER, Severity.MEDIUM))

    # Stress markers and hypertension
    if vitals.systolic > 140 or vitals.stress_level > 7:
        affected.append(_organ(Organ.BRAIN, Severity.MEDIUM))

    return affected


# ============================================================================
# CARE STRATEGY
# ============================================================================

BASELINE_SUPPLEMENTS = [
    Medication(
        name="Magnesium Citrate",
        dosage="400mg daily",
        purpose="Improves heart rhythm & blood pressure",
        note="Supports muscle and nerve function",
    ),
    Medication(
        name="Vitamin D3",
        dosage="2000 IU daily",
        purpose="Bone health & immune support",
        note="Especially important if low sun exposure",
    ),
]

HIGH_RISK_EXERCISES = [
    Exercise(
        activity="Light Walking",
        duration="15-20 minutes",
        frequency="2x daily",
        benefits="Gentle cardiovascular activity",
    ),
    Exercise(
        activity="Breathing Exercises",
        duration="10 minutes",
        frequency="Daily",
        benefits="Reduces stress and blood pressure",
    ),
]

STANDARD_EXERCISES = [
    Exercise(
        activity="Brisk Walking",
        duration="30-45 minutes",
        frequency="Daily",
        benefits="Improves heart health and circulation",
    ),
    Exercise(
        activity="Yoga or Stretching",
        duration="20 minutes",
        frequency="3-4x weekly",
        benefits="Flexibility, stress reduction",
    ),
    Exercise(
        activity="Strength Training",
        duration="30 minutes",
        frequency="2-3x weekly",
        benefits="Builds muscle, improves metabolism",
    ),
]

BASELINE_LIFESTYLE = [
    LifestyleItem("Diet", "Mediterranean diet rich in fruits, vegetables, whole grains", Severity.HIGH),
    LifestyleItem("Hydration", "Drink 8-10 glasses of water daily", Severity.MEDIUM),
    LifestyleItem("Sleep", "7-9 hours of quality sleep per night", Severity.HIGH),
    LifestyleItem("Stress Management", "Practice meditation, mindfulness, or deep breathing", Severity.MEDIUM),
]

# Above this risk score the exercise plan switches to light activity
HIGH_RISK_EXERCISE_THRESHOLD = 50


def build_care_strategy(vitals: VitalsRecord, insights: Optional[List[Insight]] = None) -> CareStrategy:
    """
    Personalized care plan: medications, exercises and lifestyle changes.

    `insights` is accepted so callers can pass what they already computed;
    the plan is derived from the vitals alone. The exercise plan recomputes
    the risk score itself.
    """
    strategy = CareStrategy()

    # Medications by condition
    if vitals.systolic > 140:
        strategy.medications.append(Medication(
            name="ACE Inhibitor",
            dosage="10mg once daily",
            purpose="Controls high blood pressure",
            note="Consult doctor before taking",
        ))
        strategy.medications.append(Medication(
            name="Omega-3 Fatty Acids",
            dosage="1000mg daily",
            purpose="Supports cardiovascular health",
            note="Available over-the-counter",
        ))

    if vitals.cholesterol > 200:
        strategy.medications.append(Medication(
            name="Statin Therapy",
            dosage="20mg at bedtime",
            purpose="Reduces LDL cholesterol",
            note="Prescription required",
        ))

    if vitals.blood_glucose > 100:
        strategy.medications.append(Medication(
            name="Metformin",
            dosage="500mg twice daily",
            purpose="Controls blood glucose levels",
            note="Take with meals",
        ))

    strategy.medications.extend(BASELINE_SUPPLEMENTS)

    # Exercise intensity follows overall risk
    risk_score = calc_risk_score(vitals)
    if risk_score > HIGH_RISK_EXERCISE_THRESHOLD:
        strategy.exercises.extend(HIGH_RISK_EXERCISES)
    else:
        strategy.exercises.extend(STANDARD_EXERCISES)

    strategy.lifestyle.extend(BASELINE_LIFESTYLE)
    if vitals.systolic > 130:
        strategy.lifestyle.append(LifestyleItem(
            "Sodium Intake", "Limit to less than 2000mg per day", Severity.HIGH,
        ))

    return strategy
