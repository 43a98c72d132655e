"""
Service layer for the LightBnB data-access layer.
"""

from lightbnb.services.gateway import QueryGateway

__all__ = [
    "QueryGateway"
]
