"""
Test configuration and fixtures for the LightBnB data-access layer.
Provides an in-memory database per test, test data factories, and common test utilities.
"""

import pytest
import uuid
from datetime import date
from typing import AsyncGenerator, List

from lightbnb.config import Settings
from lightbnb.database import Database
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview
from lightbnb.models.user import User
from lightbnb.repositories.base import BaseRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.services.gateway import QueryGateway


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the testing environment."""
    return Settings(environment="testing", database_url=TEST_DATABASE_URL, default_result_limit=10)


@pytest.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """Connected database with a fresh schema."""
    db = Database(settings=test_settings)
    await db.connect()
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
async def db_session(database: Database):
    """Create a test database session."""
    async with database.session() as session:
        yield session


@pytest.fixture
def gateway(database: Database) -> QueryGateway:
    """Create a query gateway bound to the test database."""
    return QueryGateway(database)


# Repository fixtures
@pytest.fixture
def user_repository(db_session) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def reservation_repository(db_session) -> ReservationRepository:
    """Create a reservation repository instance."""
    return ReservationRepository(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""
    
    @staticmethod
    def create_user_data(
        name: str = "Test User",
        email: str = None,
        password: str = "password"
    ) -> dict:
        """Create user data dictionary."""
        return {
            "name": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password
        }
    
    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class PropertyFactory:
    """Factory for creating test properties."""
    
    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Test Property",
        cost_per_night: int = 100,
        city: str = "Vancouver",
        number_of_bedrooms: int = 2
    ) -> dict:
        """Create property data dictionary with every insert column."""
        return {
            "owner_id": owner_id,
            "title": title,
            "description": "A lovely place to stay",
            "thumbnail_photo_url": "https://images.example.com/thumb.jpg",
            "cover_photo_url": "https://images.example.com/cover.jpg",
            "cost_per_night": cost_per_night,
            "street": "123 Main Street",
            "city": city,
            "province": "British Columbia",
            "post_code": "V5K 0A1",
            "country": "Canada",
            "parking_spaces": 1,
            "number_of_bathrooms": 1,
            "number_of_bedrooms": number_of_bedrooms
        }
    
    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: int, **kwargs) -> Property:
        """Create a test property in the database."""
        return await property_repo.create_property(
            PropertyFactory.create_property_data(owner_id, **kwargs)
        )


class ReservationFactory:
    """Factory for creating test reservations and reviews."""
    
    @staticmethod
    async def create_reservation(
        db_session,
        property_id: int,
        guest_id: int,
        start_date: date = date(2026, 6, 1),
        end_date: date = date(2026, 6, 5)
    ) -> Reservation:
        """Create a test reservation in the database."""
        return await BaseRepository(Reservation, db_session).create({
            "property_id": property_id,
            "guest_id": guest_id,
            "start_date": start_date,
            "end_date": end_date
        })
    
    @staticmethod
    async def create_reviews(
        db_session,
        property_id: int,
        guest_id: int,
        ratings: List[int]
    ) -> List[PropertyReview]:
        """Create one reservation and review per rating."""
        reviews = []
        for offset, rating in enumerate(ratings):
            reservation = await ReservationFactory.create_reservation(
                db_session,
                property_id,
                guest_id,
                start_date=date(2025, 1 + offset, 1),
                end_date=date(2025, 1 + offset, 3)
            )
            reviews.append(await BaseRepository(PropertyReview, db_session).create({
                "guest_id": guest_id,
                "property_id": property_id,
                "reservation_id": reservation.id,
                "rating": rating,
                "message": "Review"
            }))
        return reviews


# Common test fixtures
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> User:
    """Create a test property owner."""
    return await UserFactory.create_user(user_repository, name="Owner", email="owner@test.com")


@pytest.fixture
async def test_guest(user_repository: UserRepository) -> User:
    """Create a test guest."""
    return await UserFactory.create_user(user_repository, name="Guest", email="guest@test.com")


@pytest.fixture
async def reviewed_properties(db_session, property_repository: PropertyRepository, test_owner: User, test_guest: User) -> List[Property]:
    """
    Create four reviewed properties:
    Cheap Loft (50, Vancouver, avg 2.5), Harbour Suite (150, Vancouver, avg 4.5),
    Prairie House (200, Calgary, avg 4.0), Lake Cabin (300, North vancouver, avg 5.0).
    """
    specs = [
        ("Cheap Loft", 50, "Vancouver", [2, 3]),
        ("Harbour Suite", 150, "Vancouver", [5, 4]),
        ("Prairie House", 200, "Calgary", [4]),
        ("Lake Cabin", 300, "North vancouver", [5, 5]),
    ]
    properties = []
    for title, cost, city, ratings in specs:
        prop = await PropertyFactory.create_property(
            property_repository,
            owner_id=test_owner.id,
            title=title,
            cost_per_night=cost,
            city=city
        )
        await ReservationFactory.create_reviews(db_session, prop.id, test_guest.id, ratings)
        properties.append(prop)
    return properties
