"""
Property repository for inserting properties and searching listings.
Search filters are built as a list of predicate clauses joined into a single WHERE.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func, asc
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.property import Property, PROPERTY_INSERT_COLUMNS
from lightbnb.models.review import PropertyReview
from lightbnb.schemas.property import PropertySearchOptions
from typing import List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Listing queries average review ratings per property.
    """
    
    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)
    
    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Insert a property from the fixed column layout.
        
        Args:
            property_data: Mapping holding every insert column
            
        Returns:
            Persisted property, including the generated id
            
        Raises:
            KeyError: If an insert column is missing
        """
        create_data = {column: property_data[column] for column in PROPERTY_INSERT_COLUMNS}
        
        created_property = await self.create(create_data)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property
    
    async def search_properties(
        self,
        options: PropertySearchOptions,
        limit: int = 10
    ) -> List[Tuple[Property, Any]]:
        """
        List reviewed properties matching the options, cheapest first.
        
        Args:
            options: Search filters, each optional
            limit: Maximum number of rows to return
            
        Returns:
            List of (property, average rating) pairs
        """
        average_rating = func.avg(PropertyReview.rating)
        
        query = (
            select(Property, average_rating.label("average_rating"))
            .join(PropertyReview, Property.id == PropertyReview.property_id)
        )
        
        conditions = self._build_filter_conditions(options)
        if conditions:
            query = query.where(and_(*conditions))
        
        query = query.group_by(Property.id)
        
        # Rating filters the aggregate, not individual reviews
        if options.minimum_rating is not None:
            query = query.having(average_rating >= options.minimum_rating)
        
        query = query.order_by(asc(Property.cost_per_night), asc(Property.id)).limit(limit)
        
        if logger.isEnabledFor(logging.DEBUG):
            compiled = query.compile(dialect=self.db.bind.dialect)
            logger.debug(f"Property search SQL: {compiled} params={compiled.params}")
        
        try:
            result = await self.db.execute(query)
            rows = [(row[0], row[1]) for row in result.all()]
            
            logger.debug(f"Property search returned {len(rows)} results")
            return rows
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise
    
    def _build_filter_conditions(self, options: PropertySearchOptions) -> List:
        """
        Build SQLAlchemy filter conditions from search options.
        
        Args:
            options: PropertySearchOptions instance
            
        Returns:
            Ordered list of conditions, empty when no filter applies
        """
        conditions = []
        
        # City filter (case-insensitive partial match)
        if options.city:
            conditions.append(Property.city.ilike(f"%{options.city}%"))
        
        # Owner filter
        if options.owner_id is not None:
            conditions.append(Property.owner_id == options.owner_id)
        
        # Price range, exclusive on both ends
        if options.has_price_range:
            conditions.append(Property.cost_per_night > options.minimum_price_per_night)
            conditions.append(Property.cost_per_night < options.maximum_price_per_night)
        
        return conditions
