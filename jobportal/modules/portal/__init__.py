from .client import AuthAPI, JobsAPI, ApplicationsAPI, UploadAPI

__all__ = [
    'AuthAPI',
    'JobsAPI',
    'ApplicationsAPI',
    'UploadAPI'
]
