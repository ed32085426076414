from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
import logging
from app.db import get_db
from app.core.exceptions import IngestionError
from app.schemas.clay_people import IngestResponse
from app.services.ingestion import (
    as_record_list,
    extract_batch_id,
    get_source_ip,
    insert_people,
    write_enrichment_log,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clay-webhook", tags=["clay-webhook"], redirect_slashes=False)

@router.post("", response_model=IngestResponse)
async def receive_enriched_people(
    request: Request,
    db: Session = Depends(get_db)
):
    source_ip = get_source_ip(request.headers)
    batch_id = None
    records_received = 0

    try:
        try:
            body = await request.json()
            records = as_record_list(body)
        except ValueError as e:
            write_enrichment_log(db.bind, batch_id, records_received, 0, "error", str(e), source_ip)
            raise HTTPException(status_code=400, detail=f"Invalid payload: {e}")

        records_received = len(records)
        batch_id = extract_batch_id(records)

        if not records:
            write_enrichment_log(db.bind, batch_id, 0, 0, "error", "No data provided", source_ip)
            raise HTTPException(status_code=400, detail="No data provided")

        try:
            inserted = insert_people(db.bind, records)
        except IngestionError as e:
            write_enrichment_log(db.bind, batch_id, records_received, 0, "error", str(e), source_ip)
            raise HTTPException(status_code=500, detail=f"Failed to insert: {e}")

        write_enrichment_log(db.bind, batch_id, records_received, inserted, "success", None, source_ip)
        logger.info(f"Inserted {inserted} enriched people for batch {batch_id}")
        return IngestResponse(inserted=inserted)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Enrichment ingestion failed")
        write_enrichment_log(db.bind, batch_id, records_received, 0, "error", str(e), source_ip)
        raise HTTPException(status_code=500, detail=f"Server error: {e}")
