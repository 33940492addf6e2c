"""Tests for core.report_exporter module."""

import json
from pathlib import Path

from core.image_preview import create_thumbnail
from core.report_exporter import ReportExporter
from core.utils import AnalysisResult, ImageAsset


class TestGeneratePdf:
    def test_creates_file(self, tmp_dir, sample_result, sample_asset):
        output = str(tmp_dir / "report.pdf")
        assert ReportExporter().generate_pdf(sample_result, sample_asset, output) is True
        assert Path(output).exists()
        assert Path(output).read_bytes()[:4] == b"%PDF"

    def test_progress_steps(self, tmp_dir, sample_result, sample_asset):
        steps = []
        ReportExporter().generate_pdf(
            sample_result, sample_asset, str(tmp_dir / "report.pdf"),
            on_progress=lambda step, total, msg: steps.append((step, total)),
        )
        assert steps == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_undecodable_image_still_exports(self, tmp_dir, sample_result):
        asset = ImageAsset(data=b"not an image", mime_type="image/jpeg", size=12, name="broken.jpg")
        output = str(tmp_dir / "report.pdf")
        assert ReportExporter().generate_pdf(sample_result, asset, output) is True

    def test_unwritable_path_returns_false(self, tmp_dir, sample_result, sample_asset):
        output = str(tmp_dir / "missing" / "dir" / "report.pdf")
        assert ReportExporter().generate_pdf(sample_result, sample_asset, output) is False


class TestGenerateJson:
    def test_contents(self, tmp_dir, sample_result, sample_asset):
        output = tmp_dir / "report.json"
        assert ReportExporter().generate_json(sample_result, sample_asset, str(output)) is True

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["tool"] == "FarmLens"
        assert data["disease"] == "Apple_Black_rot"
        assert data["disease_label"] == "Apple Black rot"
        assert data["confidence"] == 0.92
        assert data["confidence_display"] == "92%"
        assert data["information"]["symptoms"] == "Circular lesions on leaves."
        assert data["image"] == {
            "name": "apple_leaf.jpg",
            "mime_type": "image/jpeg",
            "size": sample_asset.size,
        }
        assert "timestamp" in data


class TestGenerateTxt:
    def test_contents(self, tmp_dir, sample_result, sample_asset):
        output = tmp_dir / "report.txt"
        assert ReportExporter().generate_txt(sample_result, sample_asset, str(output)) is True

        content = output.read_text(encoding="utf-8")
        assert "FARMLENS LEAF ANALYSIS REPORT" in content
        assert "Disease Detected: Apple Black rot" in content
        assert "Confidence: 92%" in content
        assert "SYMPTOMS" in content
        assert "apple_leaf.jpg" in content

    def test_empty_sections_omitted(self, tmp_dir, sample_asset):
        result = AnalysisResult(disease="Tomato_healthy", confidence=0.99)
        output = tmp_dir / "report.txt"
        ReportExporter().generate_txt(result, sample_asset, str(output))
        content = output.read_text(encoding="utf-8")
        assert "SYMPTOMS" not in content
        assert "Tomato healthy" in content


class TestExportDispatch:
    def test_each_format(self, tmp_dir, sample_result, sample_asset):
        exporter = ReportExporter()
        for fmt in ("pdf", "json", "txt"):
            output = tmp_dir / f"report.{fmt}"
            assert exporter.export(sample_result, sample_asset, str(output), fmt) is True
            assert output.exists()

    def test_unknown_format(self, tmp_dir, sample_result, sample_asset):
        assert ReportExporter().export(sample_result, sample_asset, str(tmp_dir / "r.doc"), "doc") is False


class TestThumbnail:
    def test_fits_requested_size(self, leaf_jpeg_bytes):
        from io import BytesIO

        from PIL import Image

        thumb = create_thumbnail(leaf_jpeg_bytes, size=(32, 32))
        img = Image.open(BytesIO(thumb))
        assert img.format == "JPEG"
        assert img.width <= 32 and img.height <= 32

    def test_garbage_returns_empty(self):
        assert create_thumbnail(b"garbage") == b""
