from typing import Dict, Optional
from app.core.config import settings

EMPLOYEE_RANGES = [
    "1-10",
    "11-50",
    "51-100",
    "101-250",
    "251-500",
    "501-1000",
    "1001-5000",
    "5001-10000",
    "10001+",
    "not sure",
]

NOT_SURE_RANGE = "not sure"
UNKNOWN_RANGE = "unknown"

# 40k instead of the downstream 50k hard cap
SAFE_PEOPLE_LIMIT = settings.SAFE_PEOPLE_LIMIT

DEFAULT_RANGE_MAX = 10

EMPLOYEE_RANGE_MAX: Dict[str, int] = {
    "1-10": 10,
    "11-50": 50,
    "51-100": 100,
    "101-250": 250,
    "251-500": 500,
    "501-1000": 1000,
    "1001-5000": 5000,
    "5001-10000": 10000,
    "10001+": 15000,
    # assume the worst, so one company fills a webhook
    "not sure": 50000,
}

SEND_STATUS_SENT = "sent"
SEND_STATUS_FAILED = "failed"


def get_max_companies_for_range(employee_range: Optional[str]) -> int:
    """Maximum number of companies one webhook may receive in a batch for the given range."""
    max_employees = EMPLOYEE_RANGE_MAX.get(employee_range, DEFAULT_RANGE_MAX) if employee_range else DEFAULT_RANGE_MAX
    return SAFE_PEOPLE_LIMIT // max_employees
