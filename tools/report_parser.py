"""Best-effort extraction of vitals from lab report text.

Only a handful of headline values are recognised. Anything not found is left
out of the result; the caller decides how to fill the gaps.
"""
import re
from typing import Dict, Optional

# Field -> pattern. Each pattern captures the value(s) right after the label.
PATTERNS: Dict[str, str] = {
    # "BP: 145/92", "Blood Pressure 145 92"
    "blood_pressure": r"(?:\bBP|Blood\s+Pressure)[:\s]+(\d{2,3})[/\s]+(\d{2,3})",
    "heart_rate": r"(?:\bHR|Heart\s+Rate|Pulse)[:\s]+(\d{2,3})",
    "blood_glucose": r"(?:Blood\s+Sugar|Glucose|Sugar)[:\s]+(\d{2,3})",
    # Skip "HDL Cholesterol" / "LDL Cholesterol" lines
    "cholesterol": r"(?:Total\s+Cholesterol|(?<!HDL )(?<!LDL )Cholesterol)[:\s]+(\d{2,3})",
    "hba1c": r"(?:HbA1c|\bA1C)[:\s]+(\d+\.?\d*)",
}


def _search(key: str, text: str) -> Optional[re.Match]:
    return re.search(PATTERNS[key], text, flags=re.I)


def parse_vitals_text(text: str) -> Dict[str, float]:
    """
    Pull recognised vitals out of free text.

    Returns a dict keyed by VitalsRecord field names, e.g.
    {"systolic": 145.0, "diastolic": 92.0, "hba1c": 6.2}. Empty if nothing matched.
    """
    if not text:
        return {}

    # Normalise runs of horizontal whitespace (PDF text tends to be ragged)
    t = re.sub(r"[^\S\r\n]+", " ", text)
    values: Dict[str, float] = {}

    m = _search("blood_pressure", t)
    if m:
        values["systolic"] = float(m.group(1))
        values["diastolic"] = float(m.group(2))

    for key in ("heart_rate", "blood_glucose", "cholesterol", "hba1c"):
        m = _search(key, t)
        if m:
            try:
                values[key] = float(m.group(1))
            except ValueError:
                continue

    return values
