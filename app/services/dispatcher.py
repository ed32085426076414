import asyncio
import httpx
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from app.core.config import settings

logger = logging.getLogger(__name__)


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.SEND_TIMEOUT_SECONDS) as client:
        yield client


def build_batch_metadata(batch_id, batch_timestamp: str, employee_range, webhook_name: str) -> Dict[str, Any]:
    return {
        "batch_id": str(batch_id),
        "batch_timestamp": batch_timestamp,
        "employee_range": employee_range,
        "webhook_name": webhook_name,
        "source": settings.SEND_SOURCE_TAG,
    }


async def post_company(client: httpx.AsyncClient, webhook_url: str, company: Dict[str, Any], metadata: Dict[str, Any]) -> bool:
    """POST one company to a webhook. Only the transport outcome counts, the body is never read."""
    try:
        company_with_metadata = {**company, "_batch_metadata": metadata}
        response = await client.post(webhook_url, json=company_with_metadata)
        return response.is_success
    except (httpx.HTTPError, httpx.InvalidURL, TypeError, ValueError) as e:
        logger.warning(f"Failed to send company {company.get('id')} to {webhook_url}: {e}")
        return False


async def dispatch_companies(
    client: httpx.AsyncClient,
    webhook_url: str,
    companies: List[Dict[str, Any]],
    metadata: Dict[str, Any],
    rate_limit: Optional[int] = None,
    rate_interval_ms: Optional[int] = None,
) -> List[bool]:
    """
    Send companies to one webhook in paced sub-batches.

    Companies of a sub-batch are posted concurrently; the next sub-batch
    starts ``rate_interval_ms`` after the previous one finished. Returns one
    success flag per company, in input order.
    """
    if rate_limit is None:
        rate_limit = settings.SEND_RATE_LIMIT
    if rate_interval_ms is None:
        rate_interval_ms = settings.SEND_RATE_INTERVAL_MS

    outcomes: List[bool] = []
    for i in range(0, len(companies), rate_limit):
        batch = companies[i:i + rate_limit]
        batch_results = await asyncio.gather(
            *[post_company(client, webhook_url, company, metadata) for company in batch]
        )
        outcomes.extend(batch_results)

        if i + rate_limit < len(companies):
            await asyncio.sleep(rate_interval_ms / 1000)

    return outcomes
