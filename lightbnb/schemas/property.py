"""
Pydantic schemas for property records and listing search options.
"""

from pydantic import BaseModel, Field, validator
from typing import Any, Optional


class PropertyCreate(BaseModel):
    """Schema for inserting a new property."""
    
    owner_id: int = Field(..., description="ID of the owning user")
    title: str = Field(..., min_length=1, max_length=255, examples=["Speed lamp"])
    description: str = Field("", description="Listing description")
    thumbnail_photo_url: str = Field(..., max_length=255)
    cover_photo_url: str = Field(..., max_length=255)
    cost_per_night: int = Field(..., ge=0, description="Nightly price", examples=[930])
    street: str = Field(..., max_length=255, examples=["536 Namsub Highway"])
    city: str = Field(..., max_length=255, examples=["Sotboske"])
    province: str = Field(..., max_length=255, examples=["Quebec"])
    post_code: str = Field(..., max_length=255, examples=["28142"])
    country: str = Field(..., max_length=255, examples=["Canada"])
    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)
    
    @validator('title', 'city')
    def strip_text(cls, v):
        """Strip surrounding whitespace."""
        if not v.strip():
            raise ValueError("Value cannot be blank")
        return v.strip()


class PropertyRecord(PropertyCreate):
    """Schema for a persisted property row."""
    
    id: int
    active: bool = True
    
    class Config:
        from_attributes = True


class PropertyListing(PropertyRecord):
    """Property row with the average of its review ratings."""
    
    average_rating: Optional[float] = None
    
    @classmethod
    def from_row(cls, property_obj: Any, average_rating: Any) -> "PropertyListing":
        """Build a listing from an ORM property and an aggregate value."""
        record = PropertyRecord.model_validate(property_obj)
        return cls(
            **record.model_dump(),
            average_rating=float(average_rating) if average_rating is not None else None
        )


class PropertySearchOptions(BaseModel):
    """
    Optional filters for the property listing query.
    Price bounds only apply when both are supplied.
    """
    
    city: Optional[str] = Field(None, description="Case-insensitive substring of the city")
    owner_id: Optional[int] = Field(None, description="Only properties owned by this user")
    minimum_price_per_night: Optional[int] = Field(None, ge=0, description="Exclusive lower price bound")
    maximum_price_per_night: Optional[int] = Field(None, ge=0, description="Exclusive upper price bound")
    minimum_rating: Optional[float] = Field(None, ge=0, le=5, description="Inclusive lower bound on average rating")
    
    @validator('owner_id', 'minimum_price_per_night', 'maximum_price_per_night', 'minimum_rating', pre=True)
    def blank_filter_is_none(cls, v):
        """Treat an empty form field as an absent filter."""
        if isinstance(v, str) and not v.strip():
            return None
        return v
    
    @validator('city')
    def blank_city_is_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v
    
    @property
    def has_price_range(self) -> bool:
        return self.minimum_price_per_night is not None and self.maximum_price_per_night is not None
