"""Vitara Agent Module.

This module contains the pipeline stages behind the dashboard.

Agents:
    AnalysisAgent: Deterministic risk, heart-age, insight, organ and care-plan analysis.
    SummaryAgent: Plain-language summary with an LLM and a rule-based fallback.
"""
from agents.analysis_agent import AnalysisAgent
from agents.summary_agent import SummaryAgent

__all__ = [
    "AnalysisAgent",
    "SummaryAgent",
]
