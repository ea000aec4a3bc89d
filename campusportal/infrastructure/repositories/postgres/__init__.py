"""
PostgreSQL repository implementations (psycopg 3, async pool).
"""

from .event import PostgresEventRepository
from .image import PostgresImageRepository
from .info_screen import PostgresInfoScreenRepository
from .organizer import PostgresOrganizerRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresEventRepository",
    "PostgresImageRepository",
    "PostgresInfoScreenRepository",
    "PostgresOrganizerRepository",
    "PostgresUserRepository",
]
