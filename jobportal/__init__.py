from .modules.api_client import ApiClient, AuthSession, SessionStore
from .modules.portal import AuthAPI, JobsAPI, ApplicationsAPI, UploadAPI
from .modules.social import SocialAPI
from .modules.connections import ConnectionReconciler, Tab
from .modules.boards import JobsBoard, ApplicationsBoard

__version__ = "0.1.0"

__all__ = [
    'ApiClient',
    'AuthSession',
    'SessionStore',
    'AuthAPI',
    'JobsAPI',
    'ApplicationsAPI',
    'UploadAPI',
    'SocialAPI',
    'ConnectionReconciler',
    'Tab',
    'JobsBoard',
    'ApplicationsBoard'
]
