import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

import httpx
from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.constants import SEND_STATUS_FAILED, SEND_STATUS_SENT, get_max_companies_for_range
from app.core.exceptions import NoCompaniesFoundError, SendRecordError
from app.models.company_sends import CompanySend
from app.schemas.send import SendRequest, SendResponse, WebhookSendResult
from app.services.companies import fetch_companies_by_ids
from app.services.dispatcher import build_batch_metadata, dispatch_companies
from app.services.distribution import distribute_companies

logger = logging.getLogger(__name__)

company_sends_table = CompanySend.__table__


def record_sends(bind, records: List[Dict[str, Any]]) -> None:
    if not records:
        return
    try:
        with bind.begin() as conn:
            conn.execute(insert(company_sends_table), records)
    except SQLAlchemyError as e:
        logger.error(f"Failed to record {len(records)} sends: {e}")
        raise SendRecordError(str(e)) from e


def build_send_records(companies, webhook_id, employee_range, batch_id, outcomes=None) -> List[Dict[str, Any]]:
    records = []
    for index, company in enumerate(companies):
        status = SEND_STATUS_SENT
        if settings.RECORD_DELIVERY_OUTCOME and outcomes is not None and not outcomes[index]:
            status = SEND_STATUS_FAILED
        records.append({
            "id": uuid.uuid4(),
            "company_id": uuid.UUID(str(company["id"])),
            "webhook_id": webhook_id,
            "employee_range": employee_range,
            "batch_id": batch_id,
            "status": status,
        })
    return records


async def send_companies(bind, client: httpx.AsyncClient, payload: SendRequest) -> SendResponse:
    """
    Fetch the requested companies, spread them over the webhooks under the
    range capacity and deliver them, recording one send row per company.

    Send rows are written after each webhook finishes; a failure to write
    them aborts the batch even though that webhook was already called.
    """
    companies = fetch_companies_by_ids(bind, payload.company_ids, settings.FETCH_BATCH_SIZE)
    if not companies:
        raise NoCompaniesFoundError("No companies found for the given IDs")

    employee_range = payload.employee_range
    max_companies_per_webhook = get_max_companies_for_range(employee_range)
    distribution, not_assigned = distribute_companies(companies, payload.webhooks, max_companies_per_webhook)

    batch_id = uuid.uuid4()
    batch_timestamp = datetime.now(timezone.utc).isoformat()

    logger.info(
        f"Batch {batch_id}: {len(companies)} companies in range {employee_range} "
        f"over {len(distribution)} webhooks (max {max_companies_per_webhook} each, {not_assigned} unassigned)"
    )

    results = []
    for assignment in distribution:
        webhook = assignment["webhook"]
        webhook_companies = assignment["companies"]
        outcomes = None

        if not payload.skip_webhooks:
            metadata = build_batch_metadata(batch_id, batch_timestamp, employee_range, webhook.name)
            outcomes = await dispatch_companies(client, webhook.webhook_url, webhook_companies, metadata)
            sent = sum(1 for success in outcomes if success)
            failed = len(outcomes) - sent
        else:
            sent = len(webhook_companies)
            failed = 0

        record_sends(bind, build_send_records(webhook_companies, webhook.id, employee_range, batch_id, outcomes))

        logger.info(f"Batch {batch_id}: webhook {webhook.name} sent={sent} failed={failed}")
        results.append(WebhookSendResult(webhook=webhook.name, sent=sent, failed=failed))

    return SendResponse(
        batch_id=batch_id,
        batch_timestamp=batch_timestamp,
        employee_range=employee_range,
        total_companies=len(companies),
        distribution=results,
        companies_not_assigned=not_assigned,
    )
