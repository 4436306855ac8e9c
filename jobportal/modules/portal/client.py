import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from jobportal.core.models import Application, ApplicationStatus, AuthResult, Job, JobStats, Page, User
from jobportal.modules.api_client.client import ApiClient
from jobportal.modules.api_client.responses import parse_page, unwrap

logger = logging.getLogger(__name__)


class AuthAPI:
    """Login, registration and profile endpoints.

    Successful login and registration sign the client's session in.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    def _sign_in(self, body: Dict[str, Any]) -> User:
        result = AuthResult.model_validate(body)
        self.client.session.sign_in(result.token, result.user)
        return result.user

    def login(self, email: str, password: str) -> User:
        return self._sign_in(self.client.post("/auth/login", json={"email": email, "password": password}))

    def register(self, **user_data: Any) -> User:
        return self._sign_in(self.client.post("/auth/register", json=user_data))

    def logout(self) -> None:
        self.client.session.clear()

    def get_me(self) -> User:
        return User.model_validate(self.client.get("/auth/me")["user"])

    def update_profile(self, **profile_data: Any) -> User:
        body = self.client.put("/auth/profile", json=profile_data)
        return User.model_validate(body.get("user") or unwrap(body))

    def change_password(self, current_password: str, new_password: str) -> None:
        self.client.put("/auth/change-password", json={
            "currentPassword": current_password,
            "newPassword": new_password,
        })

    def forgot_password(self, email: str) -> None:
        self.client.post("/auth/forgot-password", json={"email": email})

    def reset_password(self, token: str, password: str) -> None:
        self.client.put(f"/auth/reset-password/{token}", json={"password": password})


class JobsAPI:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_jobs(self, **params: Any) -> Page[Job]:
        return parse_page(self.client.get("/jobs", **params), Job)

    def get_job(self, job_id: str) -> Job:
        return Job.model_validate(unwrap(self.client.get(f"/jobs/{job_id}")))

    def create_job(self, **job_data: Any) -> Job:
        job = Job.model_validate(unwrap(self.client.post("/jobs", json=job_data)))
        logger.info(f"Job created: {job.title} ({job.id})")
        return job

    def update_job(self, job_id: str, **job_data: Any) -> Job:
        return Job.model_validate(unwrap(self.client.put(f"/jobs/{job_id}", json=job_data)))

    def delete_job(self, job_id: str) -> None:
        self.client.delete(f"/jobs/{job_id}")
        logger.info(f"Job {job_id} deleted")

    def get_my_jobs(self, page: int = 1, limit: int = 10) -> Page[Job]:
        return parse_page(self.client.get("/jobs/admin/my-jobs", page=page, limit=limit), Job)

    def get_job_stats(self) -> JobStats:
        return JobStats.model_validate(unwrap(self.client.get("/jobs/admin/stats")) or {})


class ApplicationsAPI:
    def __init__(self, client: ApiClient):
        self.client = client

    def apply_to_job(self, job_id: str, cover_letter: str = "", resume_url: Optional[str] = None) -> Application:
        payload = {"jobId": job_id, "coverLetter": cover_letter}
        if resume_url:
            payload["resumeUrl"] = resume_url
        application = Application.model_validate(unwrap(self.client.post("/applications", json=payload)))
        logger.info(f"Applied to job {job_id}")
        return application

    def get_my_applications(self, page: int = 1, limit: int = 10,
                            status: Optional[str] = None) -> Page[Application]:
        body = self.client.get("/applications/my-applications", page=page, limit=limit, status=status)
        return parse_page(body, Application)

    def get_application(self, application_id: str) -> Application:
        return Application.model_validate(unwrap(self.client.get(f"/applications/{application_id}")))

    def update_application_status(self, application_id: str, status: ApplicationStatus,
                                  notes: Optional[str] = None, feedback: Optional[str] = None,
                                  interview_date: Optional[datetime] = None) -> Application:
        payload: Dict[str, Any] = {"status": ApplicationStatus(status).value}
        if notes:
            payload["notes"] = notes
        if feedback:
            payload["feedback"] = feedback
        if interview_date:
            payload["interviewDate"] = interview_date.isoformat()
        body = self.client.put(f"/applications/{application_id}/status", json=payload)
        return Application.model_validate(unwrap(body))

    def get_all_applications(self, page: int = 1, limit: int = 10, status: Optional[str] = None,
                             job_id: Optional[str] = None) -> Page[Application]:
        body = self.client.get("/applications/admin/all", page=page, limit=limit, status=status, jobId=job_id)
        return parse_page(body, Application)

    def get_job_applications(self, job_id: str, page: int = 1, limit: int = 10,
                             status: Optional[str] = None) -> Page[Application]:
        body = self.client.get(f"/applications/job/{job_id}", page=page, limit=limit, status=status)
        return parse_page(body, Application)

    def delete_application(self, application_id: str) -> None:
        self.client.delete(f"/applications/{application_id}")


class UploadAPI:
    def __init__(self, client: ApiClient):
        self.client = client

    def upload_resume(self, file_path: str) -> Dict[str, Any]:
        path = Path(file_path)
        with path.open("rb") as fh:
            body = self.client.post("/upload/resume", files={"resume": (path.name, fh)})
        return unwrap(body) or {}

    def delete_resume(self) -> None:
        self.client.delete("/upload/resume")

    def resume_url(self, filename: str) -> str:
        """Absolute download link for a stored resume."""
        return f"{self.client.base_url}/upload/resume/{filename}"
