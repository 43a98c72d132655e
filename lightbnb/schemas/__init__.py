"""
Pydantic schemas for records passed into and out of the query gateway.
"""

# User schemas
from .user import (
    UserCreate,
    UserRecord,
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyRecord,
    PropertyListing,
    PropertySearchOptions,
)

# Reservation schemas
from .reservation import (
    ReservationListing,
)

__all__ = [
    "UserCreate",
    "UserRecord",
    "PropertyCreate",
    "PropertyRecord",
    "PropertyListing",
    "PropertySearchOptions",
    "ReservationListing",
]
