"""AnalysisAgent - Dashboard Snapshot Builder

Runs the deterministic health analysis for one vitals record and collects
everything the dashboard panels need into a DashboardSnapshot.

Design Decision:
    No LLM here. Scores, insights and care plans must be reproducible:
    the same vitals always produce the same snapshot.
"""
from typing import Optional
import logging

from config.settings import TOP_INSIGHTS_COUNT
from core.observability import Tracer
from models.vitals import VitalsRecord, PatientInfo
from models.analysis import DashboardSnapshot
from tools.health_analyzer import (
    calc_risk_score,
    calc_heart_age,
    generate_health_insights,
    identify_affected_organs,
    build_care_strategy,
)
from tools.vitals_display import (
    build_vital_cards,
    risk_level,
    heart_age_comparison,
    identify_key_concerns,
    top_insights,
)

logger = logging.getLogger(__name__)


class AnalysisAgent:
    """
    AnalysisAgent - Deterministic Health Analysis

    Each engine function is called independently on the same record; the
    care strategy recomputes the risk score on its own. Every call is traced.
    """

    def __init__(self, top_insights_count: Optional[int] = None):
        self.top_insights_count = TOP_INSIGHTS_COUNT if top_insights_count is None else top_insights_count

    def run(self, vitals: VitalsRecord, patient: PatientInfo) -> DashboardSnapshot:
        with Tracer("RiskScorer", vitals):
            score = calc_risk_score(vitals)

        with Tracer("HeartAgeEstimator", patient.age):
            heart_age = calc_heart_age(vitals, patient.age)

        with Tracer("InsightGenerator"):
            insights = generate_health_insights(vitals)

        with Tracer("OrganRiskMapper"):
            organs = identify_affected_organs(vitals)

        with Tracer("CareStrategyBuilder"):
            strategy = build_care_strategy(vitals, insights)

        snapshot = DashboardSnapshot(
            risk_score=score,
            risk_level=risk_level(score),
            heart_age=heart_age_comparison(heart_age, patient.age),
            insights=insights,
            top_insights=top_insights(insights, self.top_insights_count),
            affected_organs=organs,
            care_strategy=strategy,
            vital_cards=build_vital_cards(vitals),
            key_concerns=identify_key_concerns(vitals),
        )

        logger.info(
            f"Analysis complete: risk={score} ({snapshot.risk_level.level}), "
            f"heart_age={heart_age}, insights={len(insights)}, organs={len(organs)}"
        )
        return snapshot
