"""Report export for leaf analysis results: PDF, JSON, and plain text."""

import json
import logging
from datetime import datetime
from io import BytesIO
from typing import Optional

from core.image_preview import create_thumbnail
from core.utils import AnalysisResult, ImageAsset, ProgressCallback, format_file_size

logger = logging.getLogger("farmlens.report_exporter")

REPORT_FORMATS = ("pdf", "json", "txt")


class ReportExporter:
    """Generates downloadable reports from a completed leaf analysis."""

    def export(
        self,
        result: AnalysisResult,
        asset: ImageAsset,
        output_path: str,
        fmt: str = "pdf",
        on_progress: Optional[ProgressCallback] = None,
    ) -> bool:
        """Write a report in the requested format. Returns False on failure."""
        if fmt == "pdf":
            return self.generate_pdf(result, asset, output_path, on_progress=on_progress)
        elif fmt == "json":
            return self.generate_json(result, asset, output_path)
        elif fmt == "txt":
            return self.generate_txt(result, asset, output_path)
        logger.error("Unknown report format: %s", fmt)
        return False

    def generate_pdf(
        self,
        result: AnalysisResult,
        asset: ImageAsset,
        output_path: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> bool:
        """Generate a PDF report with the leaf image, diagnosis, and treatment."""
        try:
            from reportlab.lib import colors
            from reportlab.lib.pagesizes import A4
            from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
            from reportlab.lib.units import mm
            from reportlab.platypus import (
                Image,
                Paragraph,
                SimpleDocTemplate,
                Spacer,
                Table,
                TableStyle,
            )

            if on_progress:
                on_progress(1, 4, "Creating PDF layout...")

            doc = SimpleDocTemplate(
                output_path,
                pagesize=A4,
                leftMargin=20 * mm,
                rightMargin=20 * mm,
                topMargin=20 * mm,
                bottomMargin=20 * mm,
            )

            styles = getSampleStyleSheet()
            elements = []

            title_style = ParagraphStyle(
                "ReportTitle",
                parent=styles["Title"],
                fontSize=20,
                spaceAfter=6,
                textColor=colors.HexColor("#166534"),
            )
            elements.append(Paragraph("FarmLens Leaf Analysis Report", title_style))
            elements.append(Spacer(1, 4 * mm))

            meta_style = ParagraphStyle("Meta", parent=styles["Normal"], fontSize=10, textColor=colors.grey)
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            elements.append(Paragraph(f"Image: {asset.name or 'leaf'} ({format_file_size(asset.size)})", meta_style))
            elements.append(Paragraph(f"Date: {timestamp}", meta_style))
            elements.append(Spacer(1, 6 * mm))

            if on_progress:
                on_progress(2, 4, "Adding leaf image...")

            thumbnail = create_thumbnail(asset.data, size=(320, 320))
            if thumbnail:
                elements.append(Image(BytesIO(thumbnail), width=60 * mm, height=60 * mm, kind="proportional"))
                elements.append(Spacer(1, 6 * mm))

            if on_progress:
                on_progress(3, 4, "Adding diagnosis...")

            table = Table(
                [
                    ["Disease Detected", "Confidence"],
                    [result.display_name, result.confidence_percent],
                ],
                colWidths=[240, 100],
            )
            table.setStyle(TableStyle([
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#16A34A")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTSIZE", (0, 0), (-1, 0), 10),
                ("FONTSIZE", (0, 1), (-1, -1), 10),
                ("TEXTCOLOR", (0, 1), (0, 1), colors.HexColor("#DC2626")),
                ("ALIGN", (1, 0), (-1, -1), "CENTER"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#E5E7EB")),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]))
            elements.append(table)
            elements.append(Spacer(1, 6 * mm))

            for heading, text in (
                ("Description", result.description),
                ("Symptoms", result.symptoms),
                ("Treatment Recommendations", result.recommendations or result.treatment),
            ):
                if text:
                    elements.append(Paragraph(heading, styles["Heading2"]))
                    elements.append(Paragraph(text, styles["Normal"]))
                    elements.append(Spacer(1, 4 * mm))

            footer_style = ParagraphStyle("Footer", parent=styles["Normal"], fontSize=8, textColor=colors.grey)
            elements.append(Spacer(1, 8 * mm))
            from i18n import t
            elements.append(Paragraph(t("report.note"), footer_style))
            elements.append(Paragraph("Generated by FarmLens", footer_style))

            if on_progress:
                on_progress(4, 4, "Writing PDF...")

            doc.build(elements)
            return True

        except Exception:
            logger.exception("PDF report generation failed")
            return False

    def generate_json(self, result: AnalysisResult, asset: ImageAsset, output_path: str) -> bool:
        """Generate a JSON export of the analysis."""
        try:
            data = {
                "tool": "FarmLens",
                "version": "1.0.0",
                "timestamp": datetime.now().isoformat(),
                "image": {
                    "name": asset.name,
                    "mime_type": asset.mime_type,
                    "size": asset.size,
                },
                "disease_label": result.display_name,
                "confidence_display": result.confidence_percent,
                **result.to_dict(),
            }

            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            return True

        except Exception:
            logger.exception("JSON report generation failed")
            return False

    def generate_txt(self, result: AnalysisResult, asset: ImageAsset, output_path: str) -> bool:
        """Generate a plain text report."""
        try:
            lines = [
                "=" * 60,
                "FARMLENS LEAF ANALYSIS REPORT",
                "=" * 60,
                "",
                f"Image: {asset.name or 'leaf'} ({format_file_size(asset.size)})",
                f"Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
                "",
                "-" * 40,
                "DIAGNOSIS",
                "-" * 40,
                f"  Disease Detected: {result.display_name}",
                f"  Confidence: {result.confidence_percent}",
                "",
            ]

            for heading, text in (
                ("DESCRIPTION", result.description),
                ("SYMPTOMS", result.symptoms),
                ("TREATMENT RECOMMENDATIONS", result.recommendations or result.treatment),
            ):
                if text:
                    lines.extend(["-" * 40, heading, "-" * 40, text, ""])

            lines.append("Generated by FarmLens")

            with open(output_path, "w", encoding="utf-8") as f:
                f.write("\n".join(lines))
            return True

        except Exception:
            logger.exception("Text report generation failed")
            return False
