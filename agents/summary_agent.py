"""SummaryAgent - Plain-Language Dashboard Summary

Turns a DashboardSnapshot into a short paragraph the patient can read.

Design Decisions:
    1. LLM-Optional: Uses Gemini when GOOGLE_API_KEY is configured
    2. Grounded Input: The prompt only contains values already on the dashboard
    3. No New Advice: The model is told not to add diagnoses or medications
    4. Graceful Fallback: A rule-based summary is returned if the LLM is missing or fails
"""
from typing import List
import logging

from config.llm import get_gemini_model
from models.vitals import PatientInfo
from models.analysis import DashboardSnapshot

logger = logging.getLogger(__name__)


class SummaryAgent:
    """
    SummaryAgent - the readable voice of the dashboard.

    Never raises: any generation problem falls back to the rule-based summary.
    """

    def __init__(self):
        self.model = get_gemini_model()

    def run(self, snapshot: DashboardSnapshot, patient: PatientInfo) -> str:
        if not self.model:
            return self._fallback_run(snapshot, patient)

        prompt = self._build_prompt(snapshot, patient)
        try:
            response = self.model.generate_content(prompt)
            text = (response.text or "").replace("```", "").strip()
            if not text:
                raise ValueError("empty response")
            logger.info("SummaryAgent: Generated summary via Gemini")
            return text
        except Exception as e:
            logger.error(f"Gemini generation failed: {e}", exc_info=True)
            return self._fallback_run(snapshot, patient)

    def _build_prompt(self, snapshot: DashboardSnapshot, patient: PatientInfo) -> str:
        insights = "\n".join(
            f"- [{i.severity.value}] {i.category}: {i.message}" for i in snapshot.top_insights
        )
        organs = ", ".join(
            f"{a.label} ({a.severity.value})" for a in snapshot.affected_organs
        ) or "none"
        meds = ", ".join(m.name for m in snapshot.care_strategy.medications)

        return f"""You are a careful health dashboard assistant. Summarize the results below
for {patient.name} in 3-4 plain sentences.

RULES:
- Use only the facts given here. Do not add diagnoses, doses or new medications.
- Keep a calm, supportive tone.
- End by suggesting the patient review the results with their doctor.

RESULTS:
- Risk score: {snapshot.risk_score}/100 ({snapshot.risk_level.level})
- Heart age: {snapshot.heart_age.heart_age} (actual age {patient.age})
- Top insights:
{insights}
- Systems flagged: {organs}
- Suggested in care plan: {meds}
"""

    def _fallback_run(self, snapshot: DashboardSnapshot, patient: PatientInfo) -> str:
        """Rule-based summary built from the dashboard values."""
        parts: List[str] = [
            f"{patient.name}, your risk score is {snapshot.risk_score}/100 "
            f"({snapshot.risk_level.level} risk). {snapshot.risk_level.message}",
            f"{snapshot.heart_age.message}.",
        ]
        if snapshot.top_insights:
            parts.append("Key findings: " + " ".join(i.message for i in snapshot.top_insights))
        parts.append("Please review these results with your doctor.")
        return " ".join(parts)
