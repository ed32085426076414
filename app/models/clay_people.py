from sqlalchemy import Column, String, DateTime, Text, Uuid
import uuid
from sqlalchemy.sql import func
from app.db import Base

class ClayPerson(Base):
    __tablename__ = 'clay_find_people'
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    first_name = Column(String)
    last_name = Column(String)
    full_name = Column(String)
    company_name = Column(String)
    company_domain = Column(String)
    job_title = Column(String)
    location = Column(String)
    domain = Column(String)
    person_linkedin_url = Column(String)
    last_experience_title = Column(String)
    last_experience_company = Column(String)
    last_experience_start_date = Column(String)
    notes = Column(Text)
    company_linkedin_url = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
