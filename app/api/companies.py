from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
from app.db import get_db
from app.schemas.companies import CompanyListResponse, CompanyRead, CompanyActionRequest, RangeCountsResponse
from app.services.companies import list_companies, get_range_counts
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["companies"], redirect_slashes=False)

@router.get("", response_model=CompanyListResponse)
def get_companies(
    employee_range: Optional[str] = Query(None),
    exclude_sent: bool = Query(False),
    limit: int = Query(100, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    try:
        companies, total = list_companies(db.bind, employee_range, exclude_sent, limit, offset)
    except SQLAlchemyError as e:
        logger.error(f"Failed to list companies: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return CompanyListResponse(
        companies=[CompanyRead.model_validate(company) for company in companies],
        total=total
    )

@router.post("", response_model=RangeCountsResponse)
def company_action(
    payload: CompanyActionRequest,
    db: Session = Depends(get_db)
):
    if payload.action != "counts":
        raise HTTPException(status_code=400, detail="Invalid action")
    try:
        counts, sent_counts = get_range_counts(db.bind)
    except SQLAlchemyError as e:
        logger.error(f"Failed to count companies: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return RangeCountsResponse(counts=counts, sent_counts=sent_counts)
