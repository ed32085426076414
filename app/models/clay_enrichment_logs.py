from sqlalchemy import Column, String, DateTime, Integer, Uuid
import uuid
from sqlalchemy.sql import func
from app.db import Base

class ClayEnrichmentLog(Base):
    __tablename__ = 'clay_enrichment_logs'
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    batch_id = Column(String, nullable=True)
    records_received = Column(Integer, nullable=False, default=0)
    records_inserted = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False)
    error_message = Column(String, nullable=True)
    source_ip = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
