from pydantic import BaseModel

class IngestResponse(BaseModel):
    success: bool = True
    inserted: int
