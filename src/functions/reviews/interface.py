from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ReviewPayload(BaseModel):
    """Body accepted by create and update. Unknown fields are kept as-is."""

    model_config = ConfigDict(extra="allow")

    seId: str = Field(..., min_length=1, description="Subject being reviewed")
    tyId: str = Field(..., min_length=1, description="Reviewer / review type")
    tyReview: Optional[str] = Field(None, description="Free-text review")

    def to_item(self, review_id: str) -> dict:
        # extras are always dumped; declared optionals only when sent
        item = self.model_dump(exclude=set(type(self).model_fields) - self.model_fields_set)
        item["reviewId"] = review_id
        return item
