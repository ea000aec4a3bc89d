"""
Repository implementations for the domain contracts.
"""

from .in_memory import (
    InMemoryEventRepository,
    InMemoryImageRepository,
    InMemoryInfoScreenRepository,
    InMemoryOrganizerRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresEventRepository,
    PostgresImageRepository,
    PostgresInfoScreenRepository,
    PostgresOrganizerRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemoryEventRepository",
    "InMemoryImageRepository",
    "InMemoryInfoScreenRepository",
    "InMemoryOrganizerRepository",
    "InMemoryUserRepository",
    "PostgresEventRepository",
    "PostgresImageRepository",
    "PostgresInfoScreenRepository",
    "PostgresOrganizerRepository",
    "PostgresUserRepository",
]
