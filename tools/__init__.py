"""Vitara Tools Module.

This module contains the deterministic health analysis functions.

Tools:
    calc_risk_score: Composite 0-100 risk score.
    calc_heart_age: Estimated heart age from vitals and chronological age.
    generate_health_insights: Ordered, categorized findings.
    identify_affected_organs: Organs flagged by the current vitals.
    build_care_strategy: Medications, exercises and lifestyle plan.
    parse_vitals_text: Best-effort extraction of vitals from report text.
"""
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
from tools.report_parser import parse_vitals_text

__all__ = [
    "calc_risk_score",
    "calc_heart_age",
    "generate_health_insights",
    "identify_affected_organs",
    "build_care_strategy",
    "build_vital_cards",
    "risk_level",
    "heart_age_comparison",
    "identify_key_concerns",
    "top_insights",
    "parse_vitals_text",
]
