"""Render a StructuredReport as a branded A4 PDF.

Uses ReportLab's Platypus engine: the report is built as a list of flowables
(paragraphs, tables, spacers) and ReportLab handles pagination.  Client
information sits in a bordered card; each report section is a bold header
followed by its table or bullet list.  Table sections use the fixed column
layout of their row record, so a ragged assistant table is padded rather
than breaking the layout, and long tables split across pages with the header
row repeated.

The footer carries "Page N of M", which needs the page count up front, so the
document is built twice: once to count pages, once for the final output.
"""

import logging
import re
from datetime import datetime, timezone
from io import BytesIO
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from creditbanc.config import BRAND_NAME, DEFAULT_TITLE
from creditbanc.report.schema import TABLE_RECORDS, StructuredReport

logger = logging.getLogger(__name__)

# ─── Palette ──────────────────────────────────────────────────────────────────

INK = colors.HexColor("#0F172A")
TEXT = colors.HexColor("#1F2937")
SUB = colors.HexColor("#6B7280")
BORDER = colors.HexColor("#D1D5DB")
TABLE_HEAD_BG = colors.HexColor("#F3F4F6")
ZEBRA = colors.HexColor("#FAFAFB")

PAGE_MARGIN = 28  # points
CARD_PADDING = 10

UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9_-]")

# (section title, report field, text shown when the list is empty) in page order
SECTION_LAYOUT: tuple[tuple[str, str, str], ...] = (
    ("Credit Scores", "scores", ""),
    ("Account Summary", "summary", ""),
    ("Open Revolving Accounts", "revolving_accounts", ""),
    ("Summary Stats", "revolving_stats", ""),
    ("Estimated FICO Score Increase", "score_improvement_tips", "No tips available."),
    ("Flags or Alerts", "alerts", "No alerts."),
    ("Non-Revolving Installment Accounts", "installment_accounts", ""),
)


def _build_styles() -> dict[str, ParagraphStyle]:
    """Create the paragraph styles used by the report."""
    base = getSampleStyleSheet()
    return {
        "h1": ParagraphStyle("ReportTitle", parent=base["Title"], fontSize=18, textColor=INK, alignment=0, spaceAfter=6),
        "card_header": ParagraphStyle("CardHeader", parent=base["Normal"], fontName="Helvetica-Bold", fontSize=12, textColor=INK, spaceAfter=6),
        "p": ParagraphStyle("Body", parent=base["Normal"], fontSize=10, leading=14, textColor=TEXT),
        "small": ParagraphStyle("Small", parent=base["Normal"], fontSize=9, textColor=SUB),
        "bullet": ParagraphStyle("Bullet", parent=base["Normal"], fontSize=10, leading=13, textColor=TEXT, leftIndent=8, spaceAfter=2),
        "th": ParagraphStyle("TableHead", parent=base["Normal"], fontName="Helvetica-Bold", fontSize=9, leading=11, textColor=INK),
        "td": ParagraphStyle("TableCell", parent=base["Normal"], fontSize=9, leading=11, textColor=TEXT),
    }


# ─── Flowable Builders ────────────────────────────────────────────────────────


def _pad_rows(headers: list[str], rows: list[list[str]]) -> tuple[list[str], list[list[str]]]:
    """Pad headers and rows with empty cells so every row has the same width."""
    width = max([len(headers)] + [len(row) for row in rows])
    headers = headers + [""] * (width - len(headers))
    rows = [row + [""] * (width - len(row)) for row in rows]
    return headers, rows


def _column_widths(weights: tuple[float, ...], n_cols: int, total: float) -> list[float]:
    """Split *total* points across *n_cols* columns proportionally to *weights* (extra columns weigh 1)."""
    weights = tuple(weights[:n_cols]) + (1,) * (n_cols - len(weights))
    scale = total / sum(weights)
    return [w * scale for w in weights]


def _table(field_name: str, rows: list[list[str]], styles: dict, avail_width: float) -> Table:
    """Build a zebra-striped table with the field's fixed column headers."""
    record_cls = TABLE_RECORDS[field_name]
    headers, rows = _pad_rows(list(record_cls.COLUMNS), rows)

    data = [[Paragraph(escape(h), styles["th"]) for h in headers]]
    data += [[Paragraph(escape(cell), styles["td"]) for cell in row] for row in rows]

    table = Table(data, colWidths=_column_widths(record_cls.WIDTHS, len(headers), avail_width), repeatRows=1)
    commands = [
        ("GRID", (0, 0), (-1, -1), 0.75, BORDER),
        ("BACKGROUND", (0, 0), (-1, 0), TABLE_HEAD_BG),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 5),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ("RIGHTPADDING", (0, 0), (-1, -1), 6),
    ]
    # Zebra striping on every other data row (row 0 is the header)
    for r_idx in range(1, len(data), 2):
        commands.append(("BACKGROUND", (0, r_idx), (-1, r_idx), ZEBRA))
    table.setStyle(TableStyle(commands))
    return table


def _card(title: str, body: list, styles: dict, avail_width: float) -> Table:
    """Wrap short *body* flowables in a bordered card with a bold header (cannot split across pages)."""
    content = [[Paragraph(escape(title), styles["card_header"])]] + [[flowable] for flowable in body]
    card = Table(content, colWidths=[avail_width])
    card.setStyle(
        TableStyle(
            [
                ("BOX", (0, 0), (-1, -1), 1, BORDER),
                ("LEFTPADDING", (0, 0), (-1, -1), CARD_PADDING),
                ("RIGHTPADDING", (0, 0), (-1, -1), CARD_PADDING),
                ("TOPPADDING", (0, 0), (-1, 0), CARD_PADDING),
                ("BOTTOMPADDING", (0, -1), (-1, -1), CARD_PADDING),
            ]
        )
    )
    return card


def _header_image(path: Path, avail_width: float) -> Image:
    """Scale the header image to the frame width, preserving its aspect ratio."""
    img_width, img_height = ImageReader(str(path)).getSize()
    return Image(str(path), width=avail_width, height=avail_width * img_height / img_width)


def _build_story(report: StructuredReport, title: str, header_image: Path | None, avail_width: float) -> list:
    """Lay out the full report as a list of flowables."""
    styles = _build_styles()
    story: list = []

    if header_image is not None:
        story += [_header_image(header_image, avail_width), Spacer(1, 16)]

    story.append(Paragraph(escape(title), styles["h1"]))

    client_info = [
        Paragraph(f"Full Name: {escape(report.full_name or 'N/A')}", styles["p"]),
        Paragraph(f"Report Date: {escape(report.report_date or 'N/A')}", styles["p"]),
    ]
    story += [Spacer(1, 4), _card("Client Information", client_info, styles, avail_width), Spacer(1, 14)]

    for section_title, field_name, empty_text in SECTION_LAYOUT:
        value = getattr(report, field_name)
        if field_name in TABLE_RECORDS:
            body = [_table(field_name, value, styles, avail_width)]
        elif value:
            body = [Paragraph(f"• {escape(item)}", styles["bullet"]) for item in value]
        else:
            body = [Paragraph(empty_text, styles["small"])]
        # KeepTogether splits anyway when the section is taller than a page
        story += [KeepTogether([Paragraph(escape(section_title), styles["card_header"])] + body), Spacer(1, 14)]

    return story


# ─── Document Assembly ────────────────────────────────────────────────────────


def _footer_drawer(total_pages: int | None):
    """Return an onPage callback drawing the confidential footer with page numbers."""

    def _draw_footer(canvas, doc):
        page_num = canvas.getPageNumber()
        page_label = f"Page {page_num} of {total_pages}" if total_pages else f"Page {page_num}"
        canvas.saveState()
        canvas.setFont("Helvetica", 9)
        canvas.setFillColor(SUB)
        canvas.drawCentredString(doc.pagesize[0] / 2, 16, f"{BRAND_NAME} • Confidential • {page_label}")
        canvas.restoreState()

    return _draw_footer


def _build(report: StructuredReport, title: str, header_image: Path | None, total_pages: int | None) -> tuple[bytes, int]:
    """Build the PDF once; return (pdf_bytes, page_count)."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN + 12,
        title=title,
        author=BRAND_NAME,
    )
    story = _build_story(report, title, header_image, doc.width)
    on_page = _footer_drawer(total_pages)
    doc.build(story, onFirstPage=on_page, onLaterPages=on_page)
    return buffer.getvalue(), doc.page


def render_report_pdf(report: StructuredReport, header_image: Path | None = None, title: str = DEFAULT_TITLE) -> bytes:
    """Render *report* to PDF and return the document bytes."""
    _, n_pages = _build(report, title, header_image, total_pages=None)
    pdf_bytes, _ = _build(report, title, header_image, total_pages=n_pages)
    logger.info("Rendered credit report PDF: %d page(s), %.1f KB", n_pages, len(pdf_bytes) / 1024)
    return pdf_bytes


def report_filename(title: str = DEFAULT_TITLE, when: datetime | None = None) -> str:
    """Build a download filename like 'Credit_Report_2024-01-15T10-30-00-000000+00-00.pdf'.

    Whitespace runs become underscores; anything outside [A-Za-z0-9_-] is
    dropped so the name is safe in a Content-Disposition header.
    """
    when = when or datetime.now(timezone.utc)
    stamp = when.isoformat().replace(":", "-").replace(".", "-")
    safe_title = UNSAFE_FILENAME_RE.sub("", "_".join(title.split())) or "_".join(DEFAULT_TITLE.split())
    return f"{safe_title}_{stamp}.pdf"
