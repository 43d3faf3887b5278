"""Campaign table export to CSV and PDF (WeasyPrint)."""
import csv
import enum
import io
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

import structlog
from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel

from insights.exceptions import ExportError, NoDataToExport
from insights.metrics import exports_generated_total
from insights.utils.formatting import format_currency, format_date, format_number

logger = structlog.get_logger(__name__)

Column = tuple[str, str]  # (key, label)
Formatter = Callable[[Any], str]

campaign_export_columns: list[Column] = [
    ("name", "Campaign Name"),
    ("start_date", "Start Date"),
    ("end_date", "End Date"),
    ("spend", "Spend ($)"),
    ("impressions", "Impressions"),
    ("clicks", "Clicks"),
    ("conversions", "Conversions"),
    ("status", "Status"),
]

campaign_formatters: dict[str, Formatter] = {
    "start_date": format_date,
    "end_date": format_date,
    "spend": format_currency,
    "impressions": format_number,
    "clicks": format_number,
    "conversions": format_number,
}


def _row_dict(row: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    if isinstance(row, BaseModel):
        return row.model_dump()
    return dict(row)


def format_rows_for_export(
    rows: Iterable[Mapping[str, Any] | BaseModel],
    formatters: Optional[Mapping[str, Formatter]] = None,
) -> list[dict[str, Any]]:
    """
    Prepare rows for export.

    Column formatters win; otherwise dates become table-style dates, enums
    their value, and nested objects their string form.
    """
    formatters = formatters or {}
    formatted = []
    for row in rows:
        out: dict[str, Any] = {}
        for key, value in _row_dict(row).items():
            formatter = formatters.get(key)
            if formatter is not None and value is not None:
                out[key] = formatter(value)
            elif isinstance(value, (date, datetime)):
                out[key] = format_date(value)
            elif isinstance(value, enum.Enum):
                out[key] = value.value
            elif isinstance(value, (dict, list, tuple)):
                out[key] = str(value)
            else:
                out[key] = value
        formatted.append(out)
    return formatted


def default_columns(rows: Sequence[Mapping[str, Any]]) -> list[Column]:
    """Every key of the first row, labelled with its first letter capitalized."""
    return [(key, key[:1].upper() + key[1:]) for key in rows[0].keys()]


def export_filename(title: str, extension: str, override: Optional[str] = None) -> str:
    """
    Download filename for an export.

    Examples:
        >>> export_filename("Recent Marketing Campaigns", "csv")
        'recent-marketing-campaigns.csv'
        >>> export_filename("ignored", "pdf", override="marketing-campaigns")
        'marketing-campaigns.pdf'
    """
    stem = override or re.sub(r"\s+", "-", title.lower())
    return f"{stem}.{extension}"


def _csv_cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class ExportService:
    """Renders tabular dashboard data as CSV text or a PDF report."""

    def __init__(self, company_name: str = "ADmyBRAND Insights", brand_primary_color: str = "#000000"):
        """Initialize export service with the Jinja2 template environment."""
        templates_dir = Path(__file__).parent.parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=True,
        )
        self.company_name = company_name
        self.brand_primary_color = brand_primary_color

    def to_csv(self, rows: Sequence[Mapping[str, Any]], columns: Optional[Sequence[Column]] = None) -> str:
        """
        Render rows as CSV.

        Cells containing a comma or a double quote are quoted, with embedded
        quotes doubled. Lines end with ``\\n`` and there is no trailing newline.

        Args:
            rows: Rows already passed through format_rows_for_export
            columns: (key, label) pairs; defaults to every key of the first row

        Raises:
            NoDataToExport: If there are no rows
        """
        if not rows:
            raise NoDataToExport()

        columns = list(columns or default_columns(rows))

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
        writer.writerow([label for _, label in columns])
        for row in rows:
            writer.writerow([_csv_cell(row.get(key)) for key, _ in columns])

        exports_generated_total.labels(format="csv").inc()
        logger.info("csv_export_generated", rows=len(rows), columns=len(columns))

        return buffer.getvalue().rstrip("\n")

    def render_html(
        self,
        rows: Sequence[Mapping[str, Any]],
        columns: Sequence[Column],
        title: Optional[str] = None,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """
        Render the printable report HTML.

        Raises:
            NoDataToExport: If there are no rows
        """
        if not rows:
            raise NoDataToExport()

        generated_at = generated_at or datetime.now(timezone.utc)
        template = self.env.get_template("campaign_report.html")
        return template.render(
            title=title,
            columns=list(columns),
            rows=[[_csv_cell(row.get(key)) for key, _ in columns] for row in rows],
            record_count=len(rows),
            generated_on=f"Generated on {format_date(generated_at)} at {generated_at:%H:%M:%S} UTC",
            company_name=self.company_name,
            brand_primary_color=self.brand_primary_color,
        )

    def to_pdf(
        self,
        rows: Sequence[Mapping[str, Any]],
        columns: Sequence[Column],
        title: Optional[str] = None,
    ) -> bytes:
        """
        Render rows as a landscape A4 PDF table.

        Returns:
            PDF bytes

        Raises:
            NoDataToExport: If there are no rows
            ExportError: If WeasyPrint is not installed
        """
        html_content = self.render_html(rows, columns, title=title)

        try:
            # WeasyPrint is heavy; import it only when a PDF is requested
            from weasyprint import HTML
        except ImportError as e:
            logger.error("weasyprint_not_installed", error=str(e))
            raise ExportError(
                "PDF generation library not installed. Install weasyprint: pip install weasyprint"
            ) from e

        try:
            pdf_bytes = HTML(string=html_content).write_pdf()
        except Exception as e:
            logger.exception("pdf_generation_failed", title=title, error=str(e), exc_info=e)
            raise

        exports_generated_total.labels(format="pdf").inc()
        logger.info("pdf_export_generated", rows=len(rows), pdf_size_bytes=len(pdf_bytes))

        return pdf_bytes
