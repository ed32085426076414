import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from app.core.constants import EMPLOYEE_RANGES, NOT_SURE_RANGE, UNKNOWN_RANGE
from app.core.exceptions import CompanyFetchError
from app.models.companies import Company
from app.models.company_sends import CompanySend
from app.schemas.companies import CompanyRead

logger = logging.getLogger(__name__)

company_table = Company.__table__
company_sends_table = CompanySend.__table__


def employee_range_condition(column, employee_range: Optional[str]):
    """Filter for one range bucket; "not sure" is a case-insensitive substring match."""
    if employee_range is None:
        return column.is_(None)
    if employee_range == NOT_SURE_RANGE:
        return column.ilike(f"%{NOT_SURE_RANGE}%")
    return column == employee_range


def get_sent_company_ids(conn) -> List[UUID]:
    result = conn.execute(select(company_sends_table.c.company_id))
    return [row.company_id for row in result.fetchall()]


def list_companies(
    bind,
    employee_range: Optional[str] = None,
    exclude_sent: bool = False,
    limit: int = 100,
    offset: int = 0,
) -> Tuple[List[Dict[str, Any]], int]:
    """Return one page of companies matching the filters and the total number of matches."""
    with bind.connect() as conn:
        conditions = []
        if employee_range:
            conditions.append(employee_range_condition(company_table.c.employee_range, employee_range))

        if exclude_sent:
            sent_ids = get_sent_company_ids(conn)
            if sent_ids:
                # TODO: switch to a NOT EXISTS subquery once the send history outgrows an inline id list
                conditions.append(company_table.c.id.notin_(sent_ids))

        total = conn.execute(
            select(func.count()).select_from(company_table).where(*conditions)
        ).scalar()

        rows = conn.execute(
            select(company_table)
            .where(*conditions)
            .order_by(company_table.c.company_name)
            .offset(offset)
            .limit(limit)
        ).fetchall()

    companies = [dict(row._mapping) for row in rows]
    return companies, total or 0


def get_range_counts(bind) -> Tuple[Dict[str, int], Dict[str, int]]:
    """Totals per employee range plus an "unknown" bucket, and the same bucketing of sent records."""
    counts: Dict[str, int] = {}
    sent_counts: Dict[str, int] = {}

    with bind.connect() as conn:
        for employee_range in EMPLOYEE_RANGES + [None]:
            count = conn.execute(
                select(func.count())
                .select_from(company_table)
                .where(employee_range_condition(company_table.c.employee_range, employee_range))
            ).scalar()
            counts[employee_range or UNKNOWN_RANGE] = count or 0

        result = conn.execute(
            select(company_sends_table.c.employee_range, func.count())
            .group_by(company_sends_table.c.employee_range)
        ).fetchall()

    for employee_range, count in result:
        key = employee_range or UNKNOWN_RANGE
        sent_counts[key] = sent_counts.get(key, 0) + count

    return counts, sent_counts


def fetch_companies_by_ids(bind, company_ids: Sequence[UUID], batch_size: int = 100) -> List[Dict[str, Any]]:
    """Load companies in id chunks and return them JSON-ready, in the order they were requested."""
    found: Dict[UUID, Dict[str, Any]] = {}
    try:
        with bind.connect() as conn:
            for i in range(0, len(company_ids), batch_size):
                batch_ids = list(company_ids[i:i + batch_size])
                rows = conn.execute(
                    select(company_table).where(company_table.c.id.in_(batch_ids))
                ).fetchall()
                for row in rows:
                    found[row.id] = CompanyRead.model_validate(dict(row._mapping)).model_dump(mode="json")
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch companies: {e}")
        raise CompanyFetchError(str(e)) from e

    ordered = []
    seen = set()
    for company_id in company_ids:
        if company_id in found and company_id not in seen:
            ordered.append(found[company_id])
            seen.add(company_id)
    return ordered
