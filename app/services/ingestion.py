import json
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.exceptions import IngestionError
from app.models.clay_enrichment_logs import ClayEnrichmentLog
from app.models.clay_people import ClayPerson

logger = logging.getLogger(__name__)

people_table = ClayPerson.__table__
enrichment_logs_table = ClayEnrichmentLog.__table__

# anything else, _batch_metadata included, is dropped
PERSON_FIELDS = (
    "first_name",
    "last_name",
    "full_name",
    "company_name",
    "company_domain",
    "job_title",
    "location",
    "domain",
    "person_linkedin_url",
    "last_experience_title",
    "last_experience_company",
    "last_experience_start_date",
    "notes",
    "company_linkedin_url",
)


def as_record_list(body: Any) -> List[Dict[str, Any]]:
    records = body if isinstance(body, list) else [body]
    for record in records:
        if not isinstance(record, dict):
            raise ValueError("Each record must be a JSON object")
    return records


def extract_batch_id(records: List[Dict[str, Any]]) -> Optional[str]:
    if not records:
        return None
    metadata = records[0].get("_batch_metadata")
    if isinstance(metadata, dict) and metadata.get("batch_id"):
        return str(metadata["batch_id"])
    return None


def stored_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def to_person_row(record: Dict[str, Any]) -> Dict[str, Any]:
    row = {"id": uuid.uuid4()}
    for field in PERSON_FIELDS:
        value = record.get(field)
        if value in (None, "", False):
            row[field] = None
        else:
            row[field] = stored_text(value)
    return row


def insert_people(bind, records: List[Dict[str, Any]]) -> int:
    rows = [to_person_row(record) for record in records]
    try:
        with bind.begin() as conn:
            conn.execute(insert(people_table), rows)
    except SQLAlchemyError as e:
        logger.error(f"Failed to insert {len(rows)} enriched people: {e}")
        raise IngestionError(str(e)) from e
    return len(rows)


def get_source_ip(headers: Mapping[str, str]) -> Optional[str]:
    return headers.get("x-forwarded-for") or headers.get("cf-connecting-ip") or None


def write_enrichment_log(
    bind,
    batch_id: Optional[str],
    records_received: int,
    records_inserted: int,
    status: str,
    error_message: Optional[str] = None,
    source_ip: Optional[str] = None,
) -> None:
    """Audit one ingestion request. Failures are logged and do not change the response."""
    if not settings.ENRICHMENT_AUDIT_LOG:
        return
    try:
        with bind.begin() as conn:
            conn.execute(insert(enrichment_logs_table).values(
                id=uuid.uuid4(),
                batch_id=batch_id,
                records_received=records_received,
                records_inserted=records_inserted,
                status=status,
                error_message=error_message,
                source_ip=source_ip,
            ))
    except SQLAlchemyError as e:
        logger.error(f"Failed to write enrichment log for batch {batch_id}: {e}")
