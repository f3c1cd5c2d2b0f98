"""
Pydantic models for the inventory catalog.

`InventoryItem` is the domain entity handed around by the repository and the
service; the remaining models describe the HTTP request and response bodies.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InventoryItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = ""  # NULL in rows created outside the API
    photo: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================================
# RESPONSES
# ============================================================================

class InventoryItemResponse(InventoryItem):
    """Item as returned by the API, with the derived photo URL."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    photo_url: Optional[str] = Field(
        None,
        alias="photoUrl",
        description="URL of GET /inventory/{id}/photo when the item has a photo"
    )


class InventoryListResponse(BaseModel):
    count: int = Field(..., ge=0, description="Number of items returned")
    items: List[InventoryItemResponse] = Field(default_factory=list)


class ItemMutationResponse(BaseModel):
    """Response for create / update / photo replacement."""
    message: str
    item: InventoryItem


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


# ============================================================================
# REQUESTS
# ============================================================================

class ItemUpdateRequest(BaseModel):
    """
    Partial update body for PUT /inventory/{id}.

    Absent or empty fields leave the stored value unchanged. Numbers are
    stored as their text.
    """
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def numbers_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class SearchRequest(BaseModel):
    """Body for POST /search (form or JSON)."""
    id: int = Field(..., description="ID of the item to look up")
    has_photo: Optional[str] = Field(
        None,
        description="'on', 'true' or '1' to append the photo URL to the description"
    )

    @field_validator("has_photo", mode="before")
    @classmethod
    def non_text_flag_is_unset(cls, value: Any) -> Optional[str]:
        # Only the exact strings count; JSON true / 1 leave the flag unset
        return value if isinstance(value, str) else None
