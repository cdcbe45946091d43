"""
Input validation schemas using Pydantic for request bodies.
"""
from pydantic import BaseModel, Field, field_validator

from lunch.utilities.constants import MAX_CATEGORY_LENGTH, MAX_NAME_LENGTH


class RestaurantInput(BaseModel):
    """Schema for adding or editing a restaurant."""
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    category: str = Field(..., min_length=1, max_length=MAX_CATEGORY_LENGTH)

    @field_validator('name', 'category')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError('Value cannot be empty')
        return v


class RollInput(BaseModel):
    """Schema for a roll request."""
    category: str = Field(..., min_length=1, max_length=MAX_CATEGORY_LENGTH)

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Category cannot be empty')
        return v
