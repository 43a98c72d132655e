"""
Pydantic schemas for user records.
"""

from pydantic import BaseModel, Field, validator


class UserCreate(BaseModel):
    """Schema for inserting a new user."""
    
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Devin Sanders"]
    )
    
    email: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="User's email address",
        examples=["tristanjacobs@gmail.com"]
    )
    
    password: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Opaque password string, stored as given"
    )
    
    @validator('email')
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.strip().lower()


class UserRecord(BaseModel):
    """Schema for a persisted user row."""
    
    id: int
    name: str
    email: str
    password: str
    
    class Config:
        from_attributes = True
