import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from jobportal.core.models import ExperienceLevel, Job, JobStats, JobType, Page
from jobportal.modules.portal.client import JobsAPI

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("newest", "oldest", "salary-high", "salary-low")


class JobFilters(BaseModel):
    """Query parameters accepted by the job listing."""
    search: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    min_salary: Optional[int] = Field(None, ge=0)
    max_salary: Optional[int] = Field(None, ge=0)
    sort_by: str = "newest"
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)

    @field_validator('sort_by')
    @classmethod
    def validate_sort(cls, v):
        if v not in SORT_OPTIONS:
            raise ValueError(f'sort_by must be one of: {SORT_OPTIONS}')
        return v

    def to_params(self) -> Dict[str, Any]:
        params = {
            "search": self.search or None,
            "location": self.location or None,
            "jobType": self.job_type.value if self.job_type else None,
            "experienceLevel": self.experience_level.value if self.experience_level else None,
            "minSalary": self.min_salary,
            "maxSalary": self.max_salary,
            "sortBy": self.sort_by,
            "page": self.page,
            "limit": self.limit,
        }
        return {k: v for k, v in params.items() if v is not None}


class JobsBoard:
    """Paginated, filterable listing of jobs plus recruiter job management."""

    def __init__(self, jobs: JobsAPI):
        self.jobs = jobs
        self.filters = JobFilters()
        self.current: Page[Job] = Page[Job]()

    def search(self, filters: Optional[JobFilters] = None) -> Page[Job]:
        if filters is not None:
            self.filters = filters
        self.current = self.jobs.get_jobs(**self.filters.to_params())
        logger.debug(f"Job search returned {len(self.current.items)} of {self.current.total}")
        return self.current

    def next_page(self) -> Page[Job]:
        """Load the following page; stays put when the listing is exhausted."""
        if not self.current.has_next:
            return self.current
        self.filters = self.filters.model_copy(update={"page": self.filters.page + 1})
        return self.search()

    def get(self, job_id: str) -> Job:
        return self.jobs.get_job(job_id)

    def my_jobs(self, page: int = 1, limit: int = 10) -> Page[Job]:
        return self.jobs.get_my_jobs(page=page, limit=limit)

    def create(self, **job_data: Any) -> Job:
        return self.jobs.create_job(**job_data)

    def update(self, job_id: str, **job_data: Any) -> Job:
        job = self.jobs.update_job(job_id, **job_data)
        self.current.items = [job if j.id == job_id else j for j in self.current.items]
        return job

    def delete(self, job_id: str) -> None:
        self.jobs.delete_job(job_id)
        self.current.items = [j for j in self.current.items if j.id != job_id]

    def stats(self) -> JobStats:
        return self.jobs.get_job_stats()
