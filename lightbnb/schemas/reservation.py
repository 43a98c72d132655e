"""
Pydantic schemas for reservation listings.
"""

from pydantic import BaseModel
from datetime import date
from typing import Any

from .property import PropertyListing


class ReservationListing(BaseModel):
    """A guest's reservation together with the reserved property."""
    
    id: int
    start_date: date
    end_date: date
    guest_id: int
    property: PropertyListing
    
    @classmethod
    def from_row(cls, reservation: Any, property_obj: Any, average_rating: Any) -> "ReservationListing":
        return cls(
            id=reservation.id,
            start_date=reservation.start_date,
            end_date=reservation.end_date,
            guest_id=reservation.guest_id,
            property=PropertyListing.from_row(property_obj, average_rating),
        )
