from sqlalchemy import Column, String, DateTime, Uuid
import uuid
from sqlalchemy.sql import func
from app.db import Base

class CompanySend(Base):
    """Append-only record of one company dispatched to one webhook."""
    __tablename__ = 'company_sends'
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    company_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    webhook_id = Column(Uuid(as_uuid=True), nullable=False)
    employee_range = Column(String, nullable=True)
    batch_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    status = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
