"""Vitara Configuration Module.

This module handles environment settings and the optional LLM configuration.

Functions:
    get_gemini_model: Initialize and return a configured Gemini model.
"""
from config.llm import get_gemini_model

__all__ = ["get_gemini_model"]
