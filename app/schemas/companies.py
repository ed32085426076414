from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional, List, Dict
from datetime import datetime

class CompanyBase(BaseModel):
    company_name: str
    company_domain: Optional[str] = None
    company_linkedin_url: Optional[str] = None
    full_description: Optional[str] = None
    short_description: Optional[str] = None
    employee_range: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None

class CompanyRead(CompanyBase):
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CompanyListResponse(BaseModel):
    companies: List[CompanyRead]
    total: int

class CompanyActionRequest(BaseModel):
    action: Optional[str] = None

class RangeCountsResponse(BaseModel):
    counts: Dict[str, int]
    sent_counts: Dict[str, int] = Field(alias="sentCounts")

    class Config:
        populate_by_name = True
