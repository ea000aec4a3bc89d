"""
Application use cases.
"""

from .change_password import (
    ChangePasswordInput,
    ChangePasswordResult,
    ChangePasswordUseCase,
    PasswordChangeFailure,
)
from .events import (
    CreateEvent,
    DeleteEvent,
    GetEventUseCase,
    ListEventsUseCase,
    ManageEventUseCase,
    UpdateEvent,
)
from .images import DownloadImageUseCase, UploadImageUseCase
from .infoscreens import (
    CreateInfoScreen,
    DeleteInfoScreen,
    GetInfoScreenUseCase,
    ListActiveInfoScreensUseCase,
    ManageInfoScreenUseCase,
    UpdateInfoScreen,
)
from .organizer_profile import GetOrganizerProfileUseCase, UpdateOrganizerProfileUseCase
from .results import PortalError, PortalErrorCode
from .select_organizer import SelectOrganizerUseCase

__all__ = [
    "ChangePasswordInput",
    "ChangePasswordResult",
    "ChangePasswordUseCase",
    "CreateEvent",
    "CreateInfoScreen",
    "DeleteEvent",
    "DeleteInfoScreen",
    "DownloadImageUseCase",
    "GetEventUseCase",
    "GetInfoScreenUseCase",
    "GetOrganizerProfileUseCase",
    "ListActiveInfoScreensUseCase",
    "ListEventsUseCase",
    "ManageEventUseCase",
    "ManageInfoScreenUseCase",
    "PasswordChangeFailure",
    "PortalError",
    "PortalErrorCode",
    "SelectOrganizerUseCase",
    "UpdateEvent",
    "UpdateInfoScreen",
    "UpdateOrganizerProfileUseCase",
    "UploadImageUseCase",
]
