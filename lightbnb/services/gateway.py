"""
Query gateway mediating between application requests and the relational store.
Each operation checks a session out of the injected database pool, runs one statement
and surfaces failures as typed exceptions.
"""

from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Type, TypeVar, Union
from pydantic import BaseModel, ValidationError as PydanticValidationError
from lightbnb.database import Database
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.schemas.property import PropertyCreate, PropertyRecord, PropertyListing, PropertySearchOptions
from lightbnb.schemas.reservation import ReservationListing
from lightbnb.schemas.user import UserCreate, UserRecord
from lightbnb.utils.exceptions import APIException, ValidationError, translate_database_error
import logging

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)


@contextmanager
def _database_errors(action: str) -> Iterator[None]:
    """Re-raise anything the store raises as a typed failure."""
    try:
        yield
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Database error while trying to {action}: {e}")
        raise translate_database_error(e, action) from e


class QueryGateway:
    """
    Data-access gateway for users, properties and reservations.
    Holds no state besides the injected database handle.
    """
    
    def __init__(self, database: Database, default_limit: Optional[int] = None):
        """
        Args:
            database: Connected database handle shared by all calls
            default_limit: Row limit used when a caller passes none
        """
        self.database = database
        self.default_limit = default_limit or database.settings.default_result_limit
    
    # Users
    
    async def get_user_with_email(self, email: str) -> Optional[UserRecord]:
        """
        Get a single user given their email, ignoring case.
        
        Returns:
            The user, or None if no user has that email
        """
        with _database_errors("get user by email"):
            async with self.database.session() as session:
                user = await UserRepository(session).get_by_email(email)
                return UserRecord.model_validate(user) if user else None
    
    async def get_user_with_id(self, id: int) -> Optional[UserRecord]:
        """
        Get a single user given their id.
        
        Returns:
            The user, or None if no user has that id
        """
        with _database_errors(f"get user {id}"):
            async with self.database.session() as session:
                user = await UserRepository(session).get_by_id(id)
                return UserRecord.model_validate(user) if user else None
    
    async def add_user(self, user: Union[UserCreate, Mapping[str, Any]]) -> UserRecord:
        """
        Add a new user to the database.
        
        Args:
            user: Name, email and password of the new user
            
        Returns:
            The persisted user, including its generated id
            
        Raises:
            ValidationError: If a field is missing or invalid
            ConstraintViolationError: If the email is already taken
        """
        user_in = self._coerce(UserCreate, user)
        
        with _database_errors("add user"):
            async with self.database.session() as session:
                created = await UserRepository(session).create_user(user_in.model_dump())
                return UserRecord.model_validate(created)
    
    # Reservations
    
    async def get_all_reservations(self, guest_id: int, limit: Optional[int] = None) -> List[ReservationListing]:
        """
        Get all reservations for a single guest.
        
        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations to return
            
        Returns:
            Reservations with their property, earliest stay first
        """
        limit = self._check_limit(limit)
        
        with _database_errors(f"get reservations for guest {guest_id}"):
            async with self.database.session() as session:
                rows = await ReservationRepository(session).get_reservations_for_guest(guest_id, limit)
                return [ReservationListing.from_row(*row) for row in rows]
    
    # Properties
    
    async def get_all_properties(
        self,
        options: Union[PropertySearchOptions, Mapping[str, Any], None] = None,
        limit: Optional[int] = None
    ) -> List[PropertyListing]:
        """
        Get properties matching the search options, cheapest first.
        
        Args:
            options: Optional filters (city, owner_id, price range, minimum_rating)
            limit: Maximum number of properties to return
            
        Returns:
            Matching properties with their average rating
            
        Raises:
            ValidationError: If the options or the limit are invalid
        """
        search_options = self._coerce(PropertySearchOptions, options or {})
        limit = self._check_limit(limit)
        
        if (
            search_options.has_price_range
            and search_options.minimum_price_per_night >= search_options.maximum_price_per_night
        ):
            raise ValidationError(
                "minimum_price_per_night must be lower than maximum_price_per_night",
                field_errors=[{
                    "field": "minimum_price_per_night",
                    "message": "must be lower than maximum_price_per_night"
                }]
            )
        
        with _database_errors("get properties"):
            async with self.database.session() as session:
                rows = await PropertyRepository(session).search_properties(search_options, limit)
                return [PropertyListing.from_row(*row) for row in rows]
    
    async def add_property(self, property: Union[PropertyCreate, Mapping[str, Any]]) -> PropertyRecord:
        """
        Add a property to the database.
        
        Args:
            property: All of the property details
            
        Returns:
            The persisted property, including its generated id
            
        Raises:
            ValidationError: If a field is missing or invalid
            ConstraintViolationError: If the owner does not exist
        """
        property_in = self._coerce(PropertyCreate, property)
        
        with _database_errors("add property"):
            async with self.database.session() as session:
                created = await PropertyRepository(session).create_property(property_in.model_dump())
                return PropertyRecord.model_validate(created)
    
    # Helpers
    
    def _check_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.default_limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError(
                "limit must be a positive integer",
                field_errors=[{"field": "limit", "message": f"invalid value: {limit!r}"}]
            )
        return limit
    
    @staticmethod
    def _coerce(schema: Type[SchemaType], value: Union[SchemaType, Mapping[str, Any]]) -> SchemaType:
        """Validate a mapping into the given schema, raising the gateway's ValidationError."""
        if isinstance(value, schema):
            return value
        
        try:
            return schema.model_validate(dict(value))
        except (TypeError, ValueError, PydanticValidationError) as e:
            field_errors = []
            if isinstance(e, PydanticValidationError):
                for error in e.errors():
                    field_errors.append({
                        "field": " -> ".join(str(loc) for loc in error["loc"]),
                        "message": error["msg"]
                    })
            logger.warning(f"Invalid {schema.__name__}: {e}")
            raise ValidationError(f"Invalid {schema.__name__}", field_errors=field_errors) from e
