"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")

SAMPLE_REPORT = """\
# Credit Report Analysis

**Client Information**
Full Name: Jane Doe
Report Date: 2024-01-15

## Credit Scores
| Bureau | Score | Range |
|---|---|---|
| Experian | 720 | 300-850 |
| Equifax | 715 | 300-850 |
| TransUnion | 731 | 300-850 |

## Account Summary
| Metric | Count |
|---|---|
| Open Accounts | 7 |
| Closed Accounts | 2 |
| Collections | 0 |

## Open Revolving Accounts
| Creditor Name | Current Balance | Credit Limit | Utilization % | Past Due | Past Due Since |
|---|---|---|---|---|---|
| Capital One | $1,200 | $3,000 | 40% | $0 | - |
| Chase Freedom | $450 | $5,000 | 9% | $0 | - |

## Summary Stats
| Total Revolving Balance | Total Credit Limit | Overall Utilization |
|---|---|---|
| $1,650 | $8,000 | 21% |

## Estimated FICO Score Increase
- Pay Capital One below 30% utilization (+10 to 20 points)
- Keep all accounts current for 6 months (+5 to 15 points)

## Flags or Alerts
- Late payment in March
- High utilization

## Non-Revolving Installment Accounts
| Creditor Name | Account Type | Balance | Monthly Payment | Status |
|---|---|---|---|---|
| Toyota Financial | Auto Loan | $12,400 | $389 | Current |
| Nelnet | Student Loan | $18,900 | $210 | Current |
"""


@pytest.fixture
def sample_report() -> str:
    """A complete assistant response following the credit-report template."""
    return SAMPLE_REPORT
