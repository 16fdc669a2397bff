from pydantic import BaseModel, Field
from typing import Optional


class IngestionSummary(BaseModel):
    bucket: str
    key: str
    content_type: Optional[str] = None
    rows: int = Field(default=0, ge=0)
