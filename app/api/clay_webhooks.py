from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import select, update, delete, insert, func
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
from uuid import UUID
from app.db import get_db
from app.models.clay_webhooks import ClayWebhook
from app.schemas.clay_webhooks import WebhookCreate, WebhookUpdate, WebhookRead, WebhookResponse, WebhookListResponse
import uuid
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"], redirect_slashes=False)

webhook_table = ClayWebhook.__table__

@router.get("", response_model=WebhookListResponse)
def get_webhooks(db: Session = Depends(get_db)):
    try:
        with db.bind.connect() as conn:
            rows = conn.execute(
                select(webhook_table).order_by(webhook_table.c.created_at.desc())
            ).fetchall()
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch webhooks: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return WebhookListResponse(webhooks=[WebhookRead.model_validate(dict(row._mapping)) for row in rows])

@router.post("", response_model=WebhookResponse)
def create_webhook(
    webhook_data: WebhookCreate,
    db: Session = Depends(get_db)
):
    if not webhook_data.name or not webhook_data.webhook_url:
        raise HTTPException(status_code=400, detail="Name and webhook_url are required")
    try:
        with db.bind.begin() as conn:
            webhook_dict = webhook_data.model_dump()
            webhook_dict['id'] = uuid.uuid4()
            webhook_dict['is_active'] = True
            conn.execute(insert(webhook_table).values(**webhook_dict))
            new_webhook = conn.execute(
                select(webhook_table).where(webhook_table.c.id == webhook_dict['id'])
            ).fetchone()
    except SQLAlchemyError as e:
        logger.error(f"Failed to create webhook: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Created webhook {new_webhook.name} for range {new_webhook.employee_range}")
    return WebhookResponse(webhook=WebhookRead.model_validate(dict(new_webhook._mapping)))

@router.put("", response_model=WebhookResponse)
def update_webhook(
    webhook_data: WebhookUpdate,
    db: Session = Depends(get_db)
):
    if not webhook_data.id:
        raise HTTPException(status_code=400, detail="ID is required")
    update_data = webhook_data.model_dump(exclude_unset=True, exclude={"id"})
    for required_field in ("name", "webhook_url", "is_active"):
        if update_data.get(required_field, "") is None:
            del update_data[required_field]
    update_data['updated_at'] = func.now()
    try:
        with db.bind.begin() as conn:
            result = conn.execute(
                update(webhook_table).where(webhook_table.c.id == webhook_data.id).values(**update_data)
            )
            if result.rowcount == 0:
                raise HTTPException(status_code=404, detail="Webhook not found")
            updated_webhook = conn.execute(
                select(webhook_table).where(webhook_table.c.id == webhook_data.id)
            ).fetchone()
    except SQLAlchemyError as e:
        logger.error(f"Failed to update webhook {webhook_data.id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return WebhookResponse(webhook=WebhookRead.model_validate(dict(updated_webhook._mapping)))

@router.delete("")
def delete_webhook(
    id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db)
):
    if not id:
        raise HTTPException(status_code=400, detail="ID is required")
    try:
        with db.bind.begin() as conn:
            result = conn.execute(delete(webhook_table).where(webhook_table.c.id == id))
            if result.rowcount == 0:
                raise HTTPException(status_code=404, detail="Webhook not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete webhook {id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Deleted webhook {id}")
    return {"success": True}
