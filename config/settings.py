"""Central Configuration for Vitara Dashboard."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Base Directory (Root of the project)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load Environment Variables
load_dotenv(BASE_DIR / ".env")

# LLM Settings (narrative summary only; analysis never uses the LLM)
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-2.0-flash")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Dashboard Settings
TOP_INSIGHTS_COUNT = int(os.getenv("TOP_INSIGHTS_COUNT", "3"))
HIGH_RISK_ALERT_SCORE = int(os.getenv("HIGH_RISK_ALERT_SCORE", "70"))
