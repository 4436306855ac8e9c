from .jobs_board import JobsBoard, JobFilters
from .applications_board import ApplicationsBoard, BoardScope, status_options

__all__ = [
    'JobsBoard',
    'JobFilters',
    'ApplicationsBoard',
    'BoardScope',
    'status_options'
]
