"""Report Service Module

Turns an uploaded lab report into a VitalsRecord.

This module provides:
1. Text extraction from PDFs (pdfplumber), images (pytesseract) and
   plain-text reports
2. Best-effort parsing of headline vitals
3. An explicit extracted/defaulted result, so the dashboard always has
   something to display

Images are run through Tesseract OCR (pytesseract). A missing tesseract binary
or an OCR error falls back to the default record like any other read failure.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import pdfplumber
import pytesseract
from PIL import Image

from models.vitals import VitalsRecord, SAMPLE_VITALS
from tools.report_parser import parse_vitals_text

logger = logging.getLogger(__name__)

EXTRACTED = "extracted"
DEFAULTED = "defaulted"

TEXT_SUFFIXES = {".txt", ".md", ".csv"}
PDF_SUFFIXES = {".pdf"}
IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif"}


@dataclass(frozen=True)
class AcquisitionResult:
    """Vitals for the dashboard plus where they came from."""
    vitals: VitalsRecord
    source: str  # EXTRACTED | DEFAULTED
    message: str
    extracted_fields: List[str] = field(default_factory=list)
    raw_text: str = ""

    @property
    def is_defaulted(self) -> bool:
        return self.source == DEFAULTED


class ReportService:
    """
    Reads lab reports and layers whatever vitals it recognises over a
    default record. Never raises: every failure becomes a DEFAULTED result.
    """

    def __init__(self, defaults: VitalsRecord = SAMPLE_VITALS):
        self.defaults = defaults

    def extract_from_file(self, path: Union[str, Path]) -> AcquisitionResult:
        path = Path(path)
        if not path.exists():
            logger.warning(f"Report not found: {path}")
            return self._defaulted(f"Report '{path.name}' not found, showing sample vitals.")

        suffix = path.suffix.lower()
        try:
            if suffix in PDF_SUFFIXES:
                text = self._read_pdf(path)
            elif suffix in IMAGE_SUFFIXES:
                text = self._read_image(path)
            elif suffix in TEXT_SUFFIXES:
                text = path.read_text(encoding="utf-8", errors="replace")
            else:
                logger.warning(f"Unsupported report type '{suffix}' for {path.name}")
                return self._defaulted(
                    f"Could not read '{path.name}' (unsupported file type), showing sample vitals."
                )
        except Exception as e:
            logger.warning(f"Failed to read report {path.name}: {e}")
            return self._defaulted(f"Could not read '{path.name}', showing sample vitals.")

        return self.extract_from_text(text)

    def extract_from_text(self, text: str) -> AcquisitionResult:
        values = parse_vitals_text(text)
        if not values:
            logger.info("No vitals recognised in report text, using defaults")
            return self._defaulted("No vitals recognised in the report, showing sample vitals.", raw_text=text)

        try:
            vitals = VitalsRecord.from_dict(values, defaults=self.defaults)
        except ValueError as e:
            logger.warning(f"Extracted vitals rejected: {e}")
            return self._defaulted("Extracted values were invalid, showing sample vitals.", raw_text=text)

        extracted = sorted(values.keys())
        logger.info(f"Extracted {len(extracted)} vital(s) from report: {', '.join(extracted)}")
        return AcquisitionResult(
            vitals=vitals,
            source=EXTRACTED,
            message=f"Extracted {len(extracted)} value(s) from the report; the rest use sample values.",
            extracted_fields=extracted,
            raw_text=text,
        )

    def _read_pdf(self, path: Path) -> str:
        with pdfplumber.open(path) as pdf:
            texts = [page.extract_text() or "" for page in pdf.pages]
        return "\n".join(texts)

    def _read_image(self, path: Path) -> str:
        with Image.open(path) as image:
            return pytesseract.image_to_string(image)

    def _defaulted(self, message: str, raw_text: str = "") -> AcquisitionResult:
        return AcquisitionResult(
            vitals=self.defaults,
            source=DEFAULTED,
            message=message,
            raw_text=raw_text,
        )


# Global service instance
_report_service: Optional[ReportService] = None


def get_report_service() -> ReportService:
    """Get or create the global report service."""
    global _report_service
    if _report_service is None:
        _report_service = ReportService()
    return _report_service
