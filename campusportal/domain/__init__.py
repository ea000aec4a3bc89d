"""
Domain layer: entities and the contracts infrastructure must fulfil.
"""

from .entities import (
    Event,
    EventValues,
    Identity,
    Image,
    InfoScreen,
    InfoScreenValues,
    Organizer,
    Role,
    User,
)

__all__ = [
    "Event",
    "EventValues",
    "Identity",
    "Image",
    "InfoScreen",
    "InfoScreenValues",
    "Organizer",
    "Role",
    "User",
]
