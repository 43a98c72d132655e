"""
User repository for looking up and inserting users.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.user import User
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user accounts keyed by id or normalized email."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(User, db)
    
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address, ignoring case and surrounding whitespace.
        
        Args:
            email: Email address to search for
            
        Returns:
            User instance if found, None otherwise
        """
        return await self.get_by_field("email", User.normalize_email(email))
    
    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Insert a user with a normalized email.
        
        Args:
            user_data: Dictionary with name, email and password
            
        Returns:
            Persisted user, including the generated id
        """
        create_data = {
            "name": user_data["name"],
            "email": User.normalize_email(user_data["email"]),
            "password": user_data["password"],
        }
        
        created_user = await self.create(create_data)
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user
