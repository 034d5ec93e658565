"""Dashboard, pipeline and summary tests (no API key needed).

Run with: pytest tests/ -v
"""
import json

import pytest
from models.vitals import SAMPLE_VITALS, SAMPLE_PATIENT_INFO
from models.analysis import Organ
from models.consultation import ConsultationRequest
from agents.analysis_agent import AnalysisAgent
from agents.summary_agent import SummaryAgent
from core.observability import metrics, get_metrics_summary, Tracer
from dashboard_main import HealthDashboard, handle_command


@pytest.fixture
def dashboard(monkeypatch):
    monkeypatch.setattr("agents.summary_agent.get_gemini_model", lambda: None)
    return HealthDashboard()


class TestAnalysisAgent:
    """Deterministic pipeline over the five engine functions."""

    def test_sample_snapshot(self):
        """Sample vitals produce the documented snapshot."""
        snapshot = AnalysisAgent().run(SAMPLE_VITALS, SAMPLE_PATIENT_INFO)

        assert snapshot.risk_score == 55
        assert snapshot.risk_level.level == "Moderate"
        assert snapshot.heart_age.heart_age == 61
        assert len(snapshot.insights) == 2
        assert snapshot.top_insights == snapshot.insights
        assert {a.organ for a in snapshot.affected_organs} == set(Organ)
        assert len(snapshot.care_strategy.medications) == 6

    def test_snapshot_serializes_identically(self):
        """Two runs on the same input serialize to the same JSON."""
        agent = AnalysisAgent()
        first = json.dumps(agent.run(SAMPLE_VITALS, SAMPLE_PATIENT_INFO).to_dict(), sort_keys=True)
        second = json.dumps(agent.run(SAMPLE_VITALS, SAMPLE_PATIENT_INFO).to_dict(), sort_keys=True)
        assert first == second

    def test_to_dict_uses_plain_values(self):
        """Enums serialize to their string values."""
        data = AnalysisAgent().run(SAMPLE_VITALS, SAMPLE_PATIENT_INFO).to_dict()
        assert data["insights"][0]["type"] == "warning"
        assert data["affected_organs"][0]["organ"] == "heart"
        assert data["care_strategy"]["lifestyle"][0]["priority"] == "high"

    def test_organ_severity_reports_none(self):
        """Organs that are not flagged show as 'none'."""
        healthy = SAMPLE_VITALS.with_updates(
            systolic=115, diastolic=75, cholesterol=180, blood_glucose=90,
            hba1c=5.2, apob=80, vldl=20,
        )
        snapshot = AnalysisAgent().run(healthy, SAMPLE_PATIENT_INFO)
        assert snapshot.organ_severity == {
            "heart": "none", "pancreas": "none", "liver": "none", "brain": "none",
        }

    def test_zero_top_insights_is_honoured(self):
        """An explicit count of 0 shows no top insights."""
        snapshot = AnalysisAgent(top_insights_count=0).run(SAMPLE_VITALS, SAMPLE_PATIENT_INFO)
        assert snapshot.top_insights == []
        assert len(snapshot.insights) == 2

    def test_top_insights_count_default(self):
        """No count means the configured default of three."""
        assert AnalysisAgent().top_insights_count == 3
        assert AnalysisAgent(top_insights_count=1).top_insights_count == 1

    def test_stages_are_traced(self):
        """Every engine function runs under its own trace."""
        metrics.reset()
        AnalysisAgent().run(SAMPLE_VITALS, SAMPLE_PATIENT_INFO)
        summary = get_metrics_summary()
        assert summary["total_requests"] == 5
        assert set(summary["stage_avg_latency"]) == {
            "RiskScorer", "HeartAgeEstimator", "InsightGenerator",
            "OrganRiskMapper", "CareStrategyBuilder",
        }


class TestTracer:
    """Stage tracing and metrics."""

    def test_failure_is_recorded_and_reraised(self):
        """A failing stage is counted and its exception propagates."""
        metrics.reset()
        with pytest.raises(RuntimeError):
            with Tracer("Broken"):
                raise RuntimeError("boom")
        assert metrics.failed_requests == 1
        assert metrics.success_rate == 0.0


class TestHealthDashboard:
    """Dashboard state and refresh-on-change."""

    def test_starts_with_sample(self, dashboard):
        """A new dashboard shows the sample record."""
        assert dashboard.vitals == SAMPLE_VITALS
        assert dashboard.snapshot.risk_score == 55

    def test_update_vital_recomputes(self, dashboard):
        """Changing a vital refreshes the snapshot."""
        dashboard.update_vital("systolic", "120")
        dashboard.update_vital("diastolic", 80)
        assert dashboard.snapshot.risk_score == 30
        assert dashboard.snapshot.care_strategy.exercises[0].activity == "Brisk Walking"

    def test_invalid_update_keeps_vitals(self, dashboard):
        """A rejected value leaves the record untouched."""
        with pytest.raises(ValueError):
            dashboard.update_vital("heart_rate", "-3")
        assert dashboard.vitals == SAMPLE_VITALS

    def test_age_change_moves_heart_age(self, dashboard):
        """Heart age follows the patient's age."""
        dashboard.set_patient_age(60)
        assert dashboard.snapshot.heart_age.heart_age == 76

    def test_load_report(self, dashboard, tmp_path):
        """A readable report replaces the vitals and is remembered."""
        report = tmp_path / "labs.txt"
        report.write_text("BP: 118/76\nGlucose: 92\nCholesterol: 180\nHbA1c: 5.1\n", encoding="utf-8")

        result = dashboard.load_report(report)

        assert not result.is_defaulted
        assert dashboard.vitals.systolic == 118
        assert dashboard.snapshot.risk_score == 0
        assert dashboard.last_acquisition is result

    def test_failed_report_still_renders(self, dashboard, tmp_path):
        """A failed load shows sample vitals and the fallback message."""
        dashboard.update_vital("systolic", 120)
        result = dashboard.load_report(tmp_path / "missing.pdf")
        assert result.is_defaulted
        assert dashboard.vitals == SAMPLE_VITALS
        assert result.message in dashboard.render()

    def test_render_sections(self, dashboard):
        """All panels appear in the text view."""
        text = dashboard.render()
        for section in ("Vitals Overview", "Health Analytics", "Top Insights", "Body Map", "Care Strategy"):
            assert section in text
        assert "ACE Inhibitor" in text
        assert "145/92" in text

    def test_summary_fallback(self, dashboard):
        """Without a model the summary is built from the snapshot."""
        summary = dashboard.summarize()
        assert "55/100" in summary
        assert "16 years older" in summary

    def test_request_consultation(self, dashboard):
        """A consultation request carries the patient's name and age."""
        request = dashboard.request_consultation(
            "555-0100", "john@example.com", "Chest tightness", urgency="urgent",
        )
        assert isinstance(request, ConsultationRequest)
        assert (request.name, request.age, request.urgency) == ("John Doe", 45, "urgent")
        assert dashboard.consultations == [request]
        assert request.to_dict()["symptoms"] == "Chest tightness"

    @pytest.mark.parametrize("kwargs", [
        {"phone": "", "email": "a@b.c", "symptoms": "Dizzy"},
        {"phone": "555", "email": "a@b.c", "symptoms": "  "},
        {"phone": "555", "email": "a@b.c", "symptoms": "Dizzy", "urgency": "asap"},
    ])
    def test_invalid_consultation(self, dashboard, kwargs):
        """Missing fields or unknown urgency are rejected and not kept."""
        with pytest.raises(ValueError):
            dashboard.request_consultation(**kwargs)
        assert dashboard.consultations == []


class TestSummaryAgent:
    """LLM summary with deterministic fallback."""

    def test_llm_failure_falls_back(self, monkeypatch):
        """A model error never reaches the caller."""
        class BrokenModel:
            def generate_content(self, prompt):
                raise RuntimeError("quota exceeded")

        monkeypatch.setattr("agents.summary_agent.get_gemini_model", lambda: BrokenModel())
        agent = SummaryAgent()
        snapshot = AnalysisAgent().run(SAMPLE_VITALS, SAMPLE_PATIENT_INFO)

        summary = agent.run(snapshot, SAMPLE_PATIENT_INFO)
        assert summary.startswith("John Doe")

    def test_llm_response_used(self, monkeypatch):
        """The model's text is returned and the prompt carries the score."""
        class FakeResponse:
            text = "All good, talk to your doctor."

        class FakeModel:
            def __init__(self):
                self.prompts = []

            def generate_content(self, prompt):
                self.prompts.append(prompt)
                return FakeResponse()

        model = FakeModel()
        monkeypatch.setattr("agents.summary_agent.get_gemini_model", lambda: model)
        snapshot = AnalysisAgent().run(SAMPLE_VITALS, SAMPLE_PATIENT_INFO)

        assert SummaryAgent().run(snapshot, SAMPLE_PATIENT_INFO) == "All good, talk to your doctor."
        assert "Risk score: 55/100" in model.prompts[0]


class TestCommands:
    """Text commands of the terminal dashboard."""

    def test_set_and_show(self, dashboard):
        """'set' updates the vital and re-renders."""
        output = handle_command(dashboard, "set heart_rate 110")
        assert dashboard.vitals.heart_rate == 110
        assert "Health Analytics" in output

    def test_bad_set(self, dashboard):
        """Unknown fields and missing values are reported."""
        assert handle_command(dashboard, "set pulse 70").startswith("Not updated")
        assert handle_command(dashboard, "set systolic").startswith("Usage")

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf", "NaN"])
    def test_set_non_finite_is_rejected(self, dashboard, raw):
        """nan and inf are rejected and the score is unchanged."""
        output = handle_command(dashboard, f"set systolic {raw}")
        assert output.startswith("Not updated")
        assert dashboard.vitals == SAMPLE_VITALS
        assert dashboard.snapshot.risk_score == 55

    def test_consult(self, dashboard):
        """'consult' records a request and confirms it."""
        output = handle_command(dashboard, "consult 555-0100 john@example.com Moderate short of breath")
        assert output.startswith("Consultation request submitted for John Doe (moderate)")
        assert dashboard.consultations[0].symptoms == "short of breath"

    def test_bad_consult(self, dashboard):
        """Too few arguments or a bad urgency are reported."""
        assert handle_command(dashboard, "consult 555-0100").startswith("Usage")
        assert handle_command(dashboard, "consult 555 a@b.c whenever headache").startswith("Not submitted")
        assert dashboard.consultations == []

    def test_exit(self, dashboard):
        """'exit' ends the loop."""
        assert handle_command(dashboard, "exit") is None

    def test_unknown_shows_help(self, dashboard):
        """Unknown commands print the help text."""
        assert "Commands:" in handle_command(dashboard, "dance")

    def test_fields(self, dashboard):
        """'fields' lists the vital names."""
        assert "oxygen_saturation" in handle_command(dashboard, "fields")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
