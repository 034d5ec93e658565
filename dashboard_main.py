"""Vitara Health Dashboard - Terminal Edition

Holds the current vitals and patient info, recomputes the analysis whenever
either changes, and renders the dashboard panels as text:
- Vitals overview (status per vital)
- Risk score, heart age and key concerns
- Top insights and flagged organs
- Care strategy (medications, exercises, lifestyle)
"""
import sys
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from config.settings import HIGH_RISK_ALERT_SCORE
from core.observability import get_metrics_summary
from models.vitals import VitalsRecord, PatientInfo, SAMPLE_VITALS, SAMPLE_PATIENT_INFO
from models.analysis import DashboardSnapshot
from models.consultation import ConsultationRequest
from agents.analysis_agent import AnalysisAgent
from agents.summary_agent import SummaryAgent
from services.report_service import AcquisitionResult, ReportService, get_report_service

logger = logging.getLogger(__name__)

DISCLAIMER = "Screening & education only. Not medical advice."


class HealthDashboard:
    """
    Owns the dashboard state and keeps the snapshot in sync with it.

    The analysis itself is stateless; this class is the only place vitals
    are held between evaluations.

    Attributes:
        vitals: The record currently displayed.
        patient: Patient info (age feeds the heart-age estimate).
        snapshot: Analysis of the current vitals, refreshed on every change.
        last_acquisition: Result of the most recent report load, if any.
        last_updated: When the snapshot was last recomputed.
        consultations: Consultation requests raised this session.
    """

    def __init__(
        self,
        vitals: VitalsRecord = SAMPLE_VITALS,
        patient: PatientInfo = SAMPLE_PATIENT_INFO,
        report_service: Optional[ReportService] = None,
    ):
        self.vitals = vitals
        self.patient = patient
        self.analysis = AnalysisAgent()
        self.summary = SummaryAgent()
        self.report_service = report_service or get_report_service()
        self.last_acquisition: Optional[AcquisitionResult] = None
        self.consultations: List[ConsultationRequest] = []
        self.snapshot: DashboardSnapshot = self.refresh()

    # === State changes (each one triggers a refresh) ===

    def set_vitals(self, vitals: VitalsRecord) -> DashboardSnapshot:
        self.vitals = vitals
        return self.refresh()

    def update_vital(self, name: str, value: Union[str, float]) -> DashboardSnapshot:
        """Change one vital. Raises ValueError and keeps the old record if invalid."""
        self.vitals = self.vitals.with_updates(**{name: value})
        return self.refresh()

    def set_patient_age(self, age: int) -> DashboardSnapshot:
        self.patient = self.patient.with_age(age)
        return self.refresh()

    def load_report(self, path: Union[str, Path]) -> AcquisitionResult:
        """Load vitals from a report. Always succeeds, possibly with sample vitals."""
        result = self.report_service.extract_from_file(path)
        self.last_acquisition = result
        if result.is_defaulted:
            logger.warning(f"Report fallback: {result.message}")
        self.set_vitals(result.vitals)
        return result

    def refresh(self) -> DashboardSnapshot:
        self.snapshot = self.analysis.run(self.vitals, self.patient)
        self.last_updated = datetime.now()
        if self.snapshot.risk_score >= HIGH_RISK_ALERT_SCORE:
            logger.warning(f"High risk detected (score {self.snapshot.risk_score})")
        return self.snapshot

    def summarize(self) -> str:
        return self.summary.run(self.snapshot, self.patient)

    def request_consultation(
        self, phone: str, email: str, symptoms: str, urgency: str = "normal"
    ) -> ConsultationRequest:
        """Record a specialist consultation request for the current patient.

        The request is only logged and kept in `consultations`. Raises
        ValueError when a field is missing or the urgency is unknown.
        """
        request = ConsultationRequest(
            name=self.patient.name,
            age=self.patient.age,
            phone=phone,
            email=email,
            symptoms=symptoms,
            urgency=urgency,
        )
        self.consultations.append(request)
        logger.info(f"Consultation request ({request.urgency}): {request.to_dict()}")
        return request

    # === Rendering ===

    def render(self) -> str:
        s = self.snapshot
        lines: List[str] = []
        p = self.patient

        lines.append(f"=== {p.name} | Age {p.age} | Last checkup {p.last_checkup or 'N/A'} ===")
        lines.append(f"Last updated: {self.last_updated.strftime('%Y-%m-%d %H:%M')}")
        if self.last_acquisition:
            lines.append(f"Report: {self.last_acquisition.message}")

        lines.append("\n-- Vitals Overview --")
        for card in s.vital_cards:
            lines.append(f"  {card.label:<15} {card.value:>8} {card.unit:<6} [{card.status.value.upper()}]")
        v = self.vitals
        lines.append(
            f"  APOB {v.apob:g} | VLDL {v.vldl:g} | LDL {v.ldl:g} | HDL {v.hdl:g} | "
            f"TG {v.triglycerides:g} | Stress {v.stress_level:g}/10 | SpO2 {v.oxygen_saturation:g}%"
        )

        lines.append("\n-- Health Analytics --")
        lines.append(f"  Risk score: {s.risk_score}/100 (Risk Level: {s.risk_level.level})")
        lines.append(f"  {s.risk_level.message}")
        lines.append(f"  Heart age: {s.heart_age.heart_age} vs actual {s.heart_age.chronological_age}")
        lines.append(f"  {s.heart_age.message}")
        if s.key_concerns:
            lines.append("  Key concerns:")
            for c in s.key_concerns:
                lines.append(f"    {c.metric}: {c.value} (target {c.target}) {c.status.upper()}")

        lines.append("\n-- Top Insights --")
        for i in s.top_insights:
            lines.append(f"  [{i.type.value.upper()}] {i.category}: {i.message}")
            lines.append(f"      → {i.recommendation}")

        lines.append("\n-- Body Map --")
        for organ, severity in s.organ_severity.items():
            lines.append(f"  {organ:<9} {severity}")

        lines.append("\n-- Care Strategy --")
        lines.append("  Medications:")
        for m in s.care_strategy.medications:
            lines.append(f"    • {m.name} ({m.dosage}): {m.purpose}. {m.note}")
        lines.append("  Exercises:")
        for e in s.care_strategy.exercises:
            lines.append(f"    • {e.activity}, {e.duration}, {e.frequency}: {e.benefits}")
        lines.append("  Lifestyle:")
        for item in s.care_strategy.lifestyle:
            lines.append(f"    • [{item.priority.value}] {item.category}: {item.recommendation}")

        lines.append(f"\n{DISCLAIMER}")
        return "\n".join(lines)


HELP = """Commands:
  show                  Render the dashboard
  set <field> <value>   Change one vital (e.g. 'set systolic 128')
  age <years>           Change the patient's age
  load <path>           Load vitals from a report (.pdf, .txt or image)
  consult <phone> <email> <urgency> <symptoms...>
                        Request a specialist consultation
                        (urgency: normal, moderate or urgent)
  summary               Plain-language summary
  metrics               Pipeline timing metrics
  fields                List vital field names
  exit                  Quit"""


def handle_command(dashboard: HealthDashboard, line: str) -> Optional[str]:
    """Run one CLI command and return the text to print (None means quit)."""
    parts = line.strip().split()
    if not parts:
        return ""
    cmd, args = parts[0].lower(), parts[1:]

    if cmd in ("exit", "quit"):
        return None
    if cmd == "show":
        return dashboard.render()
    if cmd == "set":
        if len(args) != 2:
            return "Usage: set <field> <value>"
        try:
            dashboard.update_vital(args[0], args[1])
        except ValueError as e:
            return f"Not updated: {e}"
        return dashboard.render()
    if cmd == "age":
        if len(args) != 1:
            return "Usage: age <years>"
        try:
            dashboard.set_patient_age(int(args[0]))
        except ValueError as e:
            return f"Not updated: {e}"
        return dashboard.render()
    if cmd == "load":
        if not args:
            return "Usage: load <path>"
        result = dashboard.load_report(" ".join(args))
        return f"{result.message}\n\n{dashboard.render()}"
    if cmd == "consult":
        if len(args) < 4:
            return "Usage: consult <phone> <email> <urgency> <symptoms...>"
        try:
            request = dashboard.request_consultation(
                args[0], args[1], " ".join(args[3:]), urgency=args[2].lower()
            )
        except ValueError as e:
            return f"Not submitted: {e}"
        return (
            f"Consultation request submitted for {request.name} ({request.urgency}). "
            "A specialist will contact you shortly."
        )
    if cmd == "summary":
        return dashboard.summarize()
    if cmd == "metrics":
        return str(get_metrics_summary())
    if cmd == "fields":
        return ", ".join(VitalsRecord.field_names())
    return HELP


def main():
    print("=== Vitara Health Dashboard ===")

    dashboard = HealthDashboard()
    if len(sys.argv) > 1:
        result = dashboard.load_report(sys.argv[1])
        print(result.message)

    print(dashboard.render())
    print("\n" + HELP)

    while True:
        try:
            line = input("\n> ")
        except EOFError:
            break
        output = handle_command(dashboard, line)
        if output is None:
            print("Goodbye.")
            break
        if output:
            print(output)


if __name__ == "__main__":
    main()
