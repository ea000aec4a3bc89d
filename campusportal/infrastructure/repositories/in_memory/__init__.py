"""
In-memory repository implementations (tests and local development).
"""

from .event import InMemoryEventRepository
from .image import InMemoryImageRepository
from .info_screen import InMemoryInfoScreenRepository
from .organizer import InMemoryOrganizerRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryEventRepository",
    "InMemoryImageRepository",
    "InMemoryInfoScreenRepository",
    "InMemoryOrganizerRepository",
    "InMemoryUserRepository",
]
