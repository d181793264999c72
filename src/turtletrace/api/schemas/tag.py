"""Pydantic schemas for tag endpoints."""

from pydantic import BaseModel, Field


class TagCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=30)


class TagResponse(BaseModel):
    model_config = {"from_attributes": True}

    tag_id: str
    name: str
    color: str
