from sqlalchemy import Column, String, DateTime, Boolean, Uuid
import uuid
from sqlalchemy.sql import func
from app.db import Base

class ClayWebhook(Base):
    __tablename__ = 'clay_webhooks'
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String, nullable=False)
    webhook_url = Column(String, nullable=False)
    description = Column(String, nullable=True)
    # range of companies this webhook is meant to receive
    employee_range = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
