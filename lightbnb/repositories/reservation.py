"""
Reservation repository for listing a guest's reservations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, asc
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.reservation import Reservation
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from typing import Any, List, Tuple
import logging

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository[Reservation]):
    """Repository for reservations joined to the reserved property."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(Reservation, db)
    
    async def get_reservations_for_guest(
        self,
        guest_id: int,
        limit: int = 10
    ) -> List[Tuple[Reservation, Property, Any]]:
        """
        Get a guest's reservations, earliest stay first.
        
        Args:
            guest_id: ID of the guest user
            limit: Maximum number of rows to return
            
        Returns:
            List of (reservation, property, average rating) triples
        """
        try:
            query = (
                select(Reservation, Property, func.avg(PropertyReview.rating).label("average_rating"))
                .join(Property, Reservation.property_id == Property.id)
                .outerjoin(PropertyReview, PropertyReview.property_id == Property.id)
                .where(Reservation.guest_id == guest_id)
                .group_by(Reservation.id, Property.id)
                .order_by(asc(Reservation.start_date), asc(Reservation.id))
                .limit(limit)
            )
            
            result = await self.db.execute(query)
            rows = [(row[0], row[1], row[2]) for row in result.all()]
            
            logger.debug(f"Retrieved {len(rows)} reservations for guest {guest_id}")
            return rows
        except Exception as e:
            logger.error(f"Failed to get reservations for guest {guest_id}: {e}")
            raise
