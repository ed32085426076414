from pydantic import BaseModel
from uuid import UUID
from typing import Optional, List
from datetime import datetime

class WebhookBase(BaseModel):
    name: str
    webhook_url: str
    description: Optional[str] = None
    employee_range: Optional[str] = None

# required fields are checked by the router so a missing one answers 400
class WebhookCreate(BaseModel):
    name: Optional[str] = None
    webhook_url: Optional[str] = None
    description: Optional[str] = None
    employee_range: Optional[str] = None

class WebhookUpdate(BaseModel):
    id: Optional[UUID] = None
    name: Optional[str] = None
    webhook_url: Optional[str] = None
    description: Optional[str] = None
    employee_range: Optional[str] = None
    is_active: Optional[bool] = None

class WebhookRead(WebhookBase):
    id: UUID
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class WebhookResponse(BaseModel):
    webhook: WebhookRead

class WebhookListResponse(BaseModel):
    webhooks: List[WebhookRead]
