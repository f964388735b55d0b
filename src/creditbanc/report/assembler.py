"""Assemble a StructuredReport from assistant-generated credit-report markdown.

The assistant is prompted to follow a fixed template, so each report field
maps to one known heading and one content kind (table or bullets).  The two
client-information fields are label matches run against the whole text.

Missing or empty sections never fail the parse: the field keeps its default
and its name is recorded in ``missing_sections`` when the heading itself was
absent.

Usage:
    report = parse_report(markdown)
"""

import logging
import re
from typing import Callable

from creditbanc.report.bullets import parse_bullets
from creditbanc.report.patterns import (
    ACCOUNT_SUMMARY,
    CREDIT_SCORES,
    FLAGS_OR_ALERTS,
    FULL_NAME_RE,
    INSTALLMENT_ACCOUNTS,
    OPEN_REVOLVING_ACCOUNTS,
    REPORT_DATE_RE,
    SCORE_INCREASE,
    SUMMARY_STATS,
    UNKNOWN,
)
from creditbanc.report.schema import StructuredReport
from creditbanc.report.sections import find_section, index_sections
from creditbanc.report.tables import parse_table

logger = logging.getLogger(__name__)

TABLE = "table"
BULLETS = "bullets"

PARSERS: dict[str, Callable[[str], list]] = {
    TABLE: parse_table,
    BULLETS: parse_bullets,
}

# (heading, report field, content kind) in report order
SECTION_SPECS: tuple[tuple[str, str, str], ...] = (
    (CREDIT_SCORES, "scores", TABLE),
    (ACCOUNT_SUMMARY, "summary", TABLE),
    (OPEN_REVOLVING_ACCOUNTS, "revolving_accounts", TABLE),
    (SUMMARY_STATS, "revolving_stats", TABLE),
    (SCORE_INCREASE, "score_improvement_tips", BULLETS),
    (FLAGS_OR_ALERTS, "alerts", BULLETS),
    (INSTALLMENT_ACCOUNTS, "installment_accounts", TABLE),
)

# (label pattern, report field)
LABEL_SPECS: tuple[tuple[re.Pattern, str], ...] = (
    (FULL_NAME_RE, "full_name"),
    (REPORT_DATE_RE, "report_date"),
)


def extract_label(markdown: str, pattern: re.Pattern) -> str | None:
    """Return the first non-empty value matched by a label pattern, or None."""
    for match in pattern.finditer(markdown):
        value = match.group("value").strip().strip("*").strip()
        if value:
            return value
    return None


def parse_report(markdown: str) -> StructuredReport:
    """Parse assistant markdown into a fully-populated StructuredReport.

    Never raises for missing sections or labels; every field falls back to
    its default (empty list, or "Unknown" for the two scalar fields).
    """
    sections = index_sections(markdown)
    fields: dict[str, object] = {}
    missing: list[str] = []

    for pattern, field_name in LABEL_SPECS:
        value = extract_label(markdown, pattern)
        if value is None:
            missing.append(field_name)
            value = UNKNOWN
        fields[field_name] = value

    for heading, field_name, kind in SECTION_SPECS:
        body = find_section(sections, heading)
        if body is None:
            logger.debug("Section %r not found", heading)
            missing.append(field_name)
            continue
        fields[field_name] = PARSERS[kind](body)
        logger.debug("Section %r -> %d %s", heading, len(fields[field_name]), "rows" if kind == TABLE else "items")

    report = StructuredReport(**fields, missing_sections=missing)
    n_present = sum(1 for _, name, _ in SECTION_SPECS if name not in missing)
    logger.info("Parsed credit report: %d/%d sections present", n_present, len(SECTION_SPECS))
    return report
