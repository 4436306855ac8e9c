from .client import ApiClient
from .session import AuthSession, SessionStore

__all__ = [
    'ApiClient',
    'AuthSession',
    'SessionStore'
]
