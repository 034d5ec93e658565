"""Parsing and acquisition tests for uploaded lab reports.

Every failure path must end in sample vitals plus a readable status, never an
exception.

Run with: pytest tests/ -v
"""
import pytest
from models.vitals import SAMPLE_VITALS
from tools.report_parser import parse_vitals_text
from services.report_service import ReportService, EXTRACTED, DEFAULTED


class TestParseVitalsText:
    """Regex extraction of headline vitals."""

    @pytest.mark.parametrize("text,expected", [
        ("BP: 145/92", {"systolic": 145.0, "diastolic": 92.0}),
        ("Blood Pressure 128 84", {"systolic": 128.0, "diastolic": 84.0}),
        ("Heart Rate: 72", {"heart_rate": 72.0}),
        ("Pulse 64", {"heart_rate": 64.0}),
        ("HR: 101", {"heart_rate": 101.0}),
        ("Blood Sugar: 118", {"blood_glucose": 118.0}),
        ("Glucose: 95", {"blood_glucose": 95.0}),
        ("Total Cholesterol: 215", {"cholesterol": 215.0}),
        ("HbA1c: 6.2", {"hba1c": 6.2}),
        ("A1C 7", {"hba1c": 7.0}),
    ])
    def test_single_values(self, text, expected):
        """Each label variant maps to the right field."""
        assert parse_vitals_text(text) == expected

    def test_case_insensitive(self):
        """Labels match regardless of case."""
        assert parse_vitals_text("blood pressure: 130/85") == {"systolic": 130.0, "diastolic": 85.0}

    def test_full_report(self):
        """A multi-line report yields every recognised field, HDL is not total cholesterol."""
        text = """
        Patient Name: Jane Roe
        BP:   150/95
        Pulse: 76
        Fasting Glucose: 132
        HDL Cholesterol: 45
        Total Cholesterol: 250
        HbA1c: 6.8 %
        """
        assert parse_vitals_text(text) == {
            "systolic": 150.0,
            "diastolic": 95.0,
            "heart_rate": 76.0,
            "blood_glucose": 132.0,
            "cholesterol": 250.0,
            "hba1c": 6.8,
        }

    def test_nothing_recognised(self):
        """Unrelated or empty text yields an empty dict."""
        assert parse_vitals_text("Invoice #123, thank you for your visit") == {}
        assert parse_vitals_text("") == {}


class TestReportService:
    """Extracted-or-defaulted acquisition from files and text."""

    def setup_method(self):
        self.service = ReportService()

    def test_text_layers_over_defaults(self):
        """Recognised values replace defaults; the rest stay sample values."""
        result = self.service.extract_from_text("BP: 120/80\nHbA1c: 5.4")

        assert result.source == EXTRACTED
        assert not result.is_defaulted
        assert result.extracted_fields == ["diastolic", "hba1c", "systolic"]
        assert result.vitals.systolic == 120
        assert result.vitals.hba1c == 5.4
        # Untouched fields keep sample values
        assert result.vitals.cholesterol == SAMPLE_VITALS.cholesterol

    def test_unrecognised_text_is_defaulted(self):
        """No recognised vitals means the sample record."""
        result = self.service.extract_from_text("no numbers here")
        assert result.source == DEFAULTED
        assert result.vitals == SAMPLE_VITALS
        assert "sample vitals" in result.message

    def test_text_file(self, tmp_path):
        """Plain-text reports are read from disk."""
        report = tmp_path / "labs.txt"
        report.write_text("Blood Pressure: 138/88\nHeart Rate: 66\n", encoding="utf-8")

        result = self.service.extract_from_file(report)

        assert result.source == EXTRACTED
        assert result.vitals.systolic == 138
        assert result.vitals.heart_rate == 66

    def test_missing_file(self, tmp_path):
        """A missing report falls back to the sample record."""
        result = self.service.extract_from_file(tmp_path / "nope.pdf")
        assert result.is_defaulted
        assert result.vitals == SAMPLE_VITALS

    def test_unknown_type_is_unsupported(self, tmp_path):
        """File types with no reader fall back with an 'unsupported' message."""
        doc = tmp_path / "labs.docx"
        doc.write_bytes(b"PK\x03\x04")
        result = self.service.extract_from_file(doc)
        assert result.is_defaulted
        assert "unsupported" in result.message

    def test_image_text_is_parsed(self, tmp_path, monkeypatch):
        """Images go through OCR and the recognised text is parsed."""
        scan = tmp_path / "scan.PNG"
        scan.write_bytes(b"\x89PNG\r\n\x1a\n")
        monkeypatch.setattr(ReportService, "_read_image", lambda self, path: "BP: 132/84\nPulse: 71")

        result = self.service.extract_from_file(scan)

        assert result.source == EXTRACTED
        assert result.extracted_fields == ["diastolic", "heart_rate", "systolic"]
        assert result.vitals.systolic == 132
        assert result.vitals.heart_rate == 71

    def test_ocr_failure_is_defaulted(self, tmp_path, monkeypatch):
        """A missing tesseract binary or OCR error falls back softly."""
        scan = tmp_path / "scan.jpg"
        scan.write_bytes(b"\xff\xd8\xff")

        def broken_ocr(self, path):
            raise OSError("tesseract is not installed or it's not in your PATH")

        monkeypatch.setattr(ReportService, "_read_image", broken_ocr)
        result = self.service.extract_from_file(scan)

        assert result.is_defaulted
        assert result.vitals == SAMPLE_VITALS

    def test_unreadable_image(self, tmp_path):
        """A truncated image file cannot be opened and falls back."""
        scan = tmp_path / "scan.png"
        scan.write_bytes(b"\x89PNG\r\n\x1a\n")
        result = self.service.extract_from_file(scan)
        assert result.is_defaulted
        assert result.vitals == SAMPLE_VITALS

    def test_corrupt_pdf(self, tmp_path):
        """A file that is not really a PDF falls back."""
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"this is not a pdf")
        result = self.service.extract_from_file(broken)
        assert result.is_defaulted
        assert result.vitals == SAMPLE_VITALS

    def test_pdf_text_is_parsed(self, tmp_path, monkeypatch):
        """PDF text is parsed like any other report text."""
        report = tmp_path / "labs.pdf"
        report.write_bytes(b"%PDF-1.4")
        monkeypatch.setattr(ReportService, "_read_pdf", lambda self, path: "Glucose: 131")

        result = self.service.extract_from_file(report)

        assert result.source == EXTRACTED
        assert result.extracted_fields == ["blood_glucose"]
        assert result.vitals.blood_glucose == 131

    def test_custom_defaults(self):
        """The fallback record is configurable."""
        defaults = SAMPLE_VITALS.with_updates(systolic=110)
        result = ReportService(defaults=defaults).extract_from_text("")
        assert result.vitals.systolic == 110


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
