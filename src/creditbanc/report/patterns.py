"""Compiled regex patterns and heading constants for credit-report parsing.

These patterns identify the structural elements of an assistant-generated
credit report: markdown headings, fenced code blocks, blockquotes, pipe-table
rows, bullet items, and the client-information labels.  Used by sections.py,
tables.py, bullets.py, assembler.py and payload.py.
"""

import re

# ─── Section Headings ─────────────────────────────────────────────────────────

CREDIT_SCORES = "## Credit Scores"
ACCOUNT_SUMMARY = "## Account Summary"
OPEN_REVOLVING_ACCOUNTS = "## Open Revolving Accounts"
SUMMARY_STATS = "## Summary Stats"
SCORE_INCREASE = "## Estimated FICO Score Increase"
FLAGS_OR_ALERTS = "## Flags or Alerts"
INSTALLMENT_ACCOUNTS = "## Non-Revolving Installment Accounts"


# ─── Block Structure Patterns ─────────────────────────────────────────────────

# ATX heading such as "## Credit Scores" or "### Credit Scores ##"
ATX_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")

# Opening or closing code fence (``` or ~~~, optionally with an info string)
FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")

# Blockquote marker, e.g. the "> " of "> ## Credit Scores"
BLOCKQUOTE_RE = re.compile(r"^ {0,3}> ?")

# Emphasis markers wrapped around a title, e.g. "**Credit Scores**" or "__Alerts__"
EMPHASIS_RE = re.compile(r"^[*_]+|[*_]+$")

# Runs of whitespace inside a title
WHITESPACE_RE = re.compile(r"\s+")


# ─── Row / Item Markers ───────────────────────────────────────────────────────

TABLE_ROW_PREFIX = "|"
BULLET_PREFIX = "- "

# Header + separator + at least one data row
MIN_TABLE_LINES = 3


# ─── Client Information Labels ────────────────────────────────────────────────

UNKNOWN = "Unknown"


def label_pattern(label: str) -> re.Pattern:
    """Compile a 'Label: value' matcher tolerant of bold markers around label and value.

    Matches "Full Name: Jane Doe", "**Full Name:** Jane Doe" and
    "**Full Name**: Jane Doe"; the value runs to the end of the line.
    """
    return re.compile(rf"{re.escape(label)}\**[ \t]*:[ \t]*(?P<value>[^\n]*)", re.IGNORECASE)


FULL_NAME_RE = label_pattern("Full Name")
REPORT_DATE_RE = label_pattern("Report Date")


# ─── Assistant Payload Patterns ───────────────────────────────────────────────

# ```json ... ``` block (case-insensitive language tag)
JSON_FENCE_RE = re.compile(r"```json\s*([\s\S]*?)```", re.IGNORECASE)

# Any ``` ... ``` block
ANY_FENCE_RE = re.compile(r"```\s*([\s\S]*?)```")
