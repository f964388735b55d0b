"""Pydantic models for structured credit-report data.

StructuredReport is the record produced by the markdown pipeline and by the
assistant JSON payload reader, and consumed by the PDF renderer and the web
API.  It serialises with the camelCase keys the front end expects
(``fullName``, ``revolvingAccounts`` ...) and accepts either spelling on input.

Table fields stay raw string grids so that a malformed assistant table still
renders.  The typed row records below are a checked view over those grids:
each one has a fixed column layout, and ``from_cells`` rejects rows whose
width does not match it.
"""

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from creditbanc.report.patterns import UNKNOWN

logger = logging.getLogger(__name__)

Row = list[str]


# ─── Typed Row Records ────────────────────────────────────────────────────────


class RowRecord(BaseModel):
    """Base class for a fixed-width table row.

    Subclasses declare their fields in column order and list the display
    headers in ``COLUMNS`` and the relative column widths in ``WIDTHS``.
    """

    model_config = ConfigDict(frozen=True)

    COLUMNS: ClassVar[tuple[str, ...]] = ()
    WIDTHS: ClassVar[tuple[float, ...]] = ()

    @classmethod
    def from_cells(cls, cells: Row) -> "RowRecord":
        """Build a record from one parsed row; raise ValueError if the cell count is wrong."""
        if len(cells) != len(cls.COLUMNS):
            raise ValueError(f"{cls.__name__} expects {len(cls.COLUMNS)} cells, got {len(cells)}: {cells!r}")
        return cls(**dict(zip(cls.model_fields, cells)))


class CreditScore(RowRecord):
    """One bureau score row of the Credit Scores table."""

    COLUMNS: ClassVar[tuple[str, ...]] = ("Bureau", "FICO Score", "Score Range")
    WIDTHS: ClassVar[tuple[float, ...]] = (2, 1, 1)

    bureau: str
    score: str
    score_range: str


class AccountSummaryItem(RowRecord):
    """One metric/count row of the Account Summary table."""

    COLUMNS: ClassVar[tuple[str, ...]] = ("Metric", "Count")
    WIDTHS: ClassVar[tuple[float, ...]] = (3, 1)

    metric: str
    count: str


class RevolvingAccount(RowRecord):
    """One open revolving (credit card / line of credit) account."""

    COLUMNS: ClassVar[tuple[str, ...]] = (
        "Creditor Name",
        "Current Balance",
        "Credit Limit",
        "Utilization %",
        "Past Due",
        "Past Due Since",
    )
    WIDTHS: ClassVar[tuple[float, ...]] = (2, 1, 1, 1, 1, 1)

    creditor_name: str
    current_balance: str
    credit_limit: str
    utilization: str
    past_due: str
    past_due_since: str


class RevolvingStats(RowRecord):
    """Totals row of the revolving Summary Stats table."""

    COLUMNS: ClassVar[tuple[str, ...]] = ("Total Revolving Balance", "Total Credit Limit", "Overall Utilization")
    WIDTHS: ClassVar[tuple[float, ...]] = (1, 1, 1)

    total_revolving_balance: str
    total_credit_limit: str
    overall_utilization: str


class InstallmentAccount(RowRecord):
    """One non-revolving installment account (auto, student, mortgage ...)."""

    COLUMNS: ClassVar[tuple[str, ...]] = ("Creditor Name", "Account Type", "Balance", "Monthly Payment", "Status")
    WIDTHS: ClassVar[tuple[float, ...]] = (2, 1.2, 1, 1, 1)

    creditor_name: str
    account_type: str
    balance: str
    monthly_payment: str
    status: str


# Table field name -> record type describing its columns
TABLE_RECORDS: dict[str, type[RowRecord]] = {
    "scores": CreditScore,
    "summary": AccountSummaryItem,
    "revolving_accounts": RevolvingAccount,
    "revolving_stats": RevolvingStats,
    "installment_accounts": InstallmentAccount,
}


# ─── Structured Report ────────────────────────────────────────────────────────


class StructuredReport(BaseModel):
    """Structured credit report, always fully populated.

    Every field has a default, so a report parsed from partial or empty
    assistant output is still renderable.  ``missing_sections`` records which
    fields hold their default because the heading or label was absent, as
    opposed to present but empty.
    """

    # Assistant JSON sometimes carries scores and balances as numbers
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    full_name: str = Field(default=UNKNOWN, alias="fullName")
    report_date: str = Field(default=UNKNOWN, alias="reportDate")
    scores: list[Row] = Field(default_factory=list)
    summary: list[Row] = Field(default_factory=list)
    revolving_accounts: list[Row] = Field(default_factory=list, alias="revolvingAccounts")
    revolving_stats: list[Row] = Field(default_factory=list, alias="revolvingStats")
    score_improvement_tips: list[str] = Field(default_factory=list, alias="scoreImprovementTips")
    alerts: list[str] = Field(default_factory=list)
    installment_accounts: list[Row] = Field(default_factory=list, alias="installmentAccounts")
    missing_sections: list[str] = Field(default_factory=list, alias="missingSections")

    @field_validator("scores", "summary", "revolving_accounts", "revolving_stats", "installment_accounts", mode="before")
    @classmethod
    def blank_null_cells(cls, rows):
        """Read null cells in assistant JSON as empty strings."""
        if not isinstance(rows, list):
            return rows
        return [[("" if cell is None else cell) for cell in row] if isinstance(row, list) else row for row in rows]

    @field_validator("score_improvement_tips", "alerts", mode="before")
    @classmethod
    def blank_null_items(cls, items):
        if not isinstance(items, list):
            return items
        return ["" if item is None else item for item in items]

    def is_missing(self, field_name: str) -> bool:
        """Return True if *field_name* holds its default because its source was absent."""
        return field_name in self.missing_sections

    def records(self, field_name: str) -> list[RowRecord]:
        """Return the rows of table field *field_name* as typed records.

        Rows whose width does not match the record are skipped with a warning;
        the raw grid on the report is left as-is.
        """
        record_cls = TABLE_RECORDS[field_name]
        rows: list[Row] = getattr(self, field_name)

        records: list[RowRecord] = []
        for i, cells in enumerate(rows):
            try:
                records.append(record_cls.from_cells(cells))
            except ValueError as exc:
                logger.warning("Skipping row %d of %s: %s", i, field_name, exc)
        return records

    def to_json_dict(self) -> dict:
        """Serialise with the camelCase keys used by the front end."""
        return self.model_dump(by_alias=True)
