from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import httpx
import logging
from app.db import get_db
from app.core.exceptions import CompanyFetchError, NoCompaniesFoundError, SendRecordError
from app.schemas.send import SendRequest, SendResponse
from app.services.dispatcher import get_http_client
from app.services.send import send_companies

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/send", tags=["send"], redirect_slashes=False)

@router.post("", response_model=SendResponse)
async def send_to_webhooks(
    payload: SendRequest,
    db: Session = Depends(get_db),
    client: httpx.AsyncClient = Depends(get_http_client)
):
    if not payload.company_ids or not payload.webhooks:
        raise HTTPException(status_code=400, detail="companyIds and webhooks are required")
    try:
        return await send_companies(db.bind, client, payload)
    except CompanyFetchError as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch companies: {e}")
    except NoCompaniesFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SendRecordError as e:
        raise HTTPException(status_code=500, detail=f"Failed to record sends: {e}")
    except Exception as e:
        logger.exception("Send batch failed")
        raise HTTPException(status_code=500, detail=f"Server error: {e}")
