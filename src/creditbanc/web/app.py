"""FastAPI web server for the CreditBanc credit-report pipeline.

Turns assistant-generated credit-report text into a structured JSON report or
a rendered PDF.  The caller is responsible for obtaining the assistant output
and for storing the resulting document.

Usage:
    python -m creditbanc.web.app
    # => Uvicorn running on http://localhost:8000
"""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.responses import Response

from creditbanc.config import CORS_ORIGINS, DEFAULT_TITLE, HOST, LOG_FORMAT, LOG_LEVEL, PORT, header_logo_path
from creditbanc.pdf.render import render_report_pdf, report_filename
from creditbanc.report.payload import parse_assistant_output
from creditbanc.report.schema import StructuredReport

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request model
# ---------------------------------------------------------------------------


class ReportRequest(BaseModel):
    """Body of the parse and generate routes."""

    markdown: str = ""
    title: str | None = None


def _parse_request(body: ReportRequest) -> tuple[StructuredReport, str]:
    """Validate the request and parse its report text; raise 400 if there is nothing to parse."""
    if not body.markdown.strip():
        raise HTTPException(status_code=400, detail="Missing markdown")
    title = (body.title or "").strip() or DEFAULT_TITLE
    return parse_assistant_output(body.markdown), title


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="CreditBanc Credit Reports")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/api/health")
def health():
    """Liveness probe."""
    return JSONResponse({"ok": True})


@app.post("/api/parse-report")
def parse_report_route(body: ReportRequest):
    """Return the structured report (camelCase keys) for the submitted text."""
    report, title = _parse_request(body)
    payload = report.to_json_dict()
    payload["title"] = title
    if report.missing_sections:
        logger.info("Parsed report is missing %d section(s): %s", len(report.missing_sections), ", ".join(report.missing_sections))
    return JSONResponse(payload)


@app.post("/api/generate-report")
def generate_report_route(body: ReportRequest):
    """Render the submitted report text as a PDF download."""
    report, title = _parse_request(body)
    try:
        pdf_bytes = render_report_pdf(report, header_image=header_logo_path(), title=title)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("PDF rendering failed")
        raise HTTPException(status_code=500, detail="Report rendering failed") from exc

    filename = report_filename(title)
    logger.info("Serving %s (%.1f KB)", filename, len(pdf_bytes) / 1024)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the web server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logging.getLogger("reportlab").setLevel(logging.WARNING)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
