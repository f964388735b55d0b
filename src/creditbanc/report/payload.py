"""Read a credit report from raw assistant output.

The credit assistant can answer either with a JSON report (usually inside a
```json fenced block) or with the markdown template handled by
``assembler.parse_report``.  ``parse_assistant_output`` accepts both: it uses
the JSON report when one is present and complete, and falls back to the
markdown pipeline otherwise.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from creditbanc.report.assembler import parse_report
from creditbanc.report.patterns import ANY_FENCE_RE, JSON_FENCE_RE
from creditbanc.report.schema import StructuredReport

logger = logging.getLogger(__name__)

# Keys a JSON report must carry, with the type each must have
REQUIRED_KEYS: dict[str, type] = {
    "fullName": str,
    "reportDate": str,
    "scores": list,
    "summary": list,
    "revolvingAccounts": list,
    "revolvingStats": list,
    "scoreImprovementTips": list,
    "alerts": list,
    "installmentAccounts": list,
}


class ReportPayloadError(ValueError):
    """Raised when assistant output does not contain a usable JSON report."""


def _try_parse(candidate: str) -> Any | None:
    """Return the decoded JSON value, or None if *candidate* is not valid JSON."""
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        return None


def extract_json(text: str) -> Any:
    """Decode the JSON value carried by assistant output.

    Tries, in order: the first ```json block, the first ``` block of any kind,
    and finally the whole trimmed string.
    """
    for pattern in (JSON_FENCE_RE, ANY_FENCE_RE):
        match = pattern.search(text)
        if match:
            parsed = _try_parse(match.group(1).strip())
            if parsed is not None:
                return parsed

    parsed = _try_parse(text.strip())
    if parsed is not None:
        return parsed

    raise ReportPayloadError("Could not parse JSON from assistant output")


def report_from_payload(data: Any) -> StructuredReport:
    """Validate a decoded JSON report and return it as a StructuredReport."""
    if not isinstance(data, dict):
        raise ReportPayloadError(f"Expected a JSON object, got {type(data).__name__}")

    problems = [key for key, expected in REQUIRED_KEYS.items() if not isinstance(data.get(key), expected)]
    if problems:
        raise ReportPayloadError(f"Assistant output is not a valid credit report (bad or missing: {', '.join(problems)})")

    try:
        return StructuredReport.model_validate(data)
    except ValidationError as exc:
        raise ReportPayloadError(f"Assistant output is not a valid credit report: {exc}") from exc


def parse_assistant_output(text: str) -> StructuredReport:
    """Return the report carried by assistant output, JSON first, markdown otherwise."""
    try:
        report = report_from_payload(extract_json(text))
    except ReportPayloadError as exc:
        logger.info("No JSON report in assistant output (%s); parsing as markdown", exc)
        return parse_report(text)

    logger.info("Loaded JSON credit report (%d score rows, %d alerts)", len(report.scores), len(report.alerts))
    return report
