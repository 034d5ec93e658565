"""Vitara Core Module.

Cross-cutting infrastructure: logging, stage tracing and pipeline metrics.
"""
