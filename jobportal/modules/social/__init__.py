from .client import SocialAPI

__all__ = [
    'SocialAPI'
]
