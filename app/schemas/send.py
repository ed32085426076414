from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional, List

class WebhookTarget(BaseModel):
    id: UUID
    webhook_url: str
    name: str

class SendRequest(BaseModel):
    company_ids: Optional[List[UUID]] = Field(default=None, alias="companyIds")
    webhooks: Optional[List[WebhookTarget]] = None
    employee_range: Optional[str] = Field(default=None, alias="employeeRange")
    # testing aid, records the sends without calling any webhook
    skip_webhooks: bool = Field(default=False, alias="skipWebhooks")

    class Config:
        populate_by_name = True

class WebhookSendResult(BaseModel):
    webhook: str
    sent: int
    failed: int

class SendResponse(BaseModel):
    success: bool = True
    batch_id: UUID = Field(alias="batchId")
    batch_timestamp: str = Field(alias="batchTimestamp")
    employee_range: Optional[str] = Field(default=None, alias="employeeRange")
    total_companies: int = Field(alias="totalCompanies")
    distribution: List[WebhookSendResult]
    companies_not_assigned: int = Field(alias="companiesNotAssigned")

    class Config:
        populate_by_name = True
