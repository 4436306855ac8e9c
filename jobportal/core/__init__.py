from .models import (
    UserRole,
    ConnectionStatus,
    JobType,
    ExperienceLevel,
    ApplicationStatus,
    PostType,
    PostVisibility,
    UserProfile,
    User,
    ConnectionRequest,
    Connection,
    ConnectionStatusInfo,
    Job,
    Application,
    Post,
    Notification,
    Page,
    AuthResult
)
from .exceptions import PortalError, ConfigurationError, ApiError, SessionExpiredError

__all__ = [
    'UserRole',
    'ConnectionStatus',
    'JobType',
    'ExperienceLevel',
    'ApplicationStatus',
    'PostType',
    'PostVisibility',
    'UserProfile',
    'User',
    'ConnectionRequest',
    'Connection',
    'ConnectionStatusInfo',
    'Job',
    'Application',
    'Post',
    'Notification',
    'Page',
    'AuthResult',
    'PortalError',
    'ConfigurationError',
    'ApiError',
    'SessionExpiredError'
]
