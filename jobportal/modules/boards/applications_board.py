"""
Application status board.

Lists applications for a candidate, a recruiter's jobs, or one job, and
lets recruiters move an application between the fixed status labels. The
backend is the only authority on which transitions are legal; the board
only refuses labels outside the known set.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from jobportal.core.models import Application, ApplicationStatus, Page
from jobportal.modules.portal.client import ApplicationsAPI

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"


class BoardScope(str, Enum):
    MINE = "mine"
    ALL = "all"
    JOB = "job"


def status_options() -> List[str]:
    """Status labels offered in the status dropdown, in pipeline order."""
    return [status.value for status in ApplicationStatus]


def _searchable(application: Application) -> List[str]:
    fields = []
    if application.job:
        fields += [application.job.title, application.job.company]
    if application.candidate:
        fields += [application.candidate.full_name, application.candidate.email or ""]
    return fields


class ApplicationsBoard:
    def __init__(self, applications: ApplicationsAPI):
        self.applications = applications
        self.current: Page[Application] = Page[Application]()

    def load(self, scope: BoardScope = BoardScope.MINE, status: Optional[str] = None,
             job_id: Optional[str] = None, page: int = 1, limit: int = 10) -> Page[Application]:
        scope = BoardScope(scope)
        status = None if status in (None, ALL_STATUSES) else ApplicationStatus(status).value

        if scope == BoardScope.MINE:
            self.current = self.applications.get_my_applications(page=page, limit=limit, status=status)
        elif scope == BoardScope.JOB:
            if not job_id:
                raise ValueError("job_id is required for the job scope")
            self.current = self.applications.get_job_applications(job_id, page=page, limit=limit, status=status)
        else:
            self.current = self.applications.get_all_applications(page=page, limit=limit, status=status, job_id=job_id)
        return self.current

    def filter(self, search_term: str = "", status: str = ALL_STATUSES) -> List[Application]:
        """Filter the loaded page by status label and free-text search."""
        needle = (search_term or "").strip().lower()
        result = []
        for application in self.current.items:
            if status != ALL_STATUSES and application.status.value != status:
                continue
            if needle and not any(needle in (text or "").lower() for text in _searchable(application)):
                continue
            result.append(application)
        return result

    def status_counts(self) -> Dict[str, int]:
        counts = {label: 0 for label in status_options()}
        for application in self.current.items:
            counts[application.status.value] += 1
        counts["total"] = len(self.current.items)
        return counts

    def update_status(self, application_id: str, status: str, notes: Optional[str] = None,
                      feedback: Optional[str] = None,
                      interview_date: Optional[datetime] = None) -> Application:
        if status not in status_options():
            raise ValueError(f"Unknown application status {status!r}; expected one of {status_options()}")

        updated = self.applications.update_application_status(
            application_id, ApplicationStatus(status),
            notes=notes, feedback=feedback, interview_date=interview_date,
        )
        logger.info(f"Application {application_id} moved to {status}")
        self.current.items = [updated if a.id == application_id else a for a in self.current.items]
        return updated

    def apply(self, job_id: str, cover_letter: str = "", resume_url: Optional[str] = None) -> Application:
        application = self.applications.apply_to_job(job_id, cover_letter=cover_letter, resume_url=resume_url)
        self.current.items = [application] + self.current.items
        return application

    def withdraw(self, application_id: str) -> None:
        self.applications.delete_application(application_id)
        self.current.items = [a for a in self.current.items if a.id != application_id]
