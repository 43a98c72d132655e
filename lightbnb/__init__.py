"""
LightBnB data-access layer.
Query gateway over users, properties, reviews and reservations.
"""

__version__ = "1.0.0"
