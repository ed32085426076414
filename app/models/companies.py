from sqlalchemy import Column, String, DateTime, Text, Uuid
from sqlalchemy.sql import func
import uuid
from app.db import Base


class Company(Base):
    __tablename__ = 'companies_basic_crunchbase_data'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_name = Column(String, nullable=False, index=True)
    company_domain = Column(String)
    company_linkedin_url = Column(String)
    full_description = Column(Text)
    short_description = Column(Text)
    employee_range = Column(String, index=True)
    city = Column(String)
    state = Column(String)
    country = Column(String)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
