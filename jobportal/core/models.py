"""
Core data models for the job portal client using Pydantic.

This module defines the documents exchanged with the backend. The backend
speaks Mongo-style documents (``_id`` and camelCase keys); every model
accepts the wire aliases as well as the snake_case field names.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class PortalModel(BaseModel):
    """Base model for backend documents."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _coerce_reference(value: Any) -> Any:
    """Unpopulated references arrive as bare id strings."""
    if isinstance(value, str):
        return {"_id": value}
    return value


class UserRole(str, Enum):
    """User role enumeration."""
    CANDIDATE = "candidate"
    RECRUITER = "recruiter"
    ADMIN = "admin"


class ConnectionStatus(str, Enum):
    """Lifecycle of a connection request."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    BLOCKED = "blocked"


class JobType(str, Enum):
    """Job type enumeration."""
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class ExperienceLevel(str, Enum):
    """Experience level enumeration."""
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"


class ApplicationStatus(str, Enum):
    """Labels a recruiter can assign to an application, in pipeline order."""
    PENDING = "pending"
    REVIEWING = "reviewing"
    INTERVIEW = "interview"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class PostType(str, Enum):
    """Post type enumeration."""
    TEXT = "text"
    JOB_SHARE = "job_share"
    ACHIEVEMENT = "achievement"
    ARTICLE = "article"
    POLL = "poll"


class PostVisibility(str, Enum):
    """Who can see a post."""
    PUBLIC = "public"
    CONNECTIONS = "connections"
    PRIVATE = "private"


class UserProfile(PortalModel):
    """Public profile fields of a user."""
    first_name: str = ""
    last_name: str = ""
    headline: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    bio: Optional[str] = None
    job_title: Optional[str] = None
    profile_image: Optional[str] = None
    experience: Optional[float] = None


class User(PortalModel):
    """A portal user as seen by other users."""
    id: str = Field(..., alias="_id")
    email: Optional[str] = None
    role: UserRole = UserRole.CANDIDATE
    profile: UserProfile = Field(default_factory=UserProfile)
    connection_count: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.profile.first_name} {self.profile.last_name}".strip()


class ConnectionRequest(PortalModel):
    """A directed connection request between two users."""
    id: str = Field(..., alias="_id")
    requester: User
    recipient: User
    status: ConnectionStatus = ConnectionStatus.PENDING
    message: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("requester", "recipient", mode="before")
    @classmethod
    def coerce_references(cls, v):
        return _coerce_reference(v)


class Connection(PortalModel):
    """An accepted connection, shaped from the viewer's side."""
    id: str = Field(..., alias="_id")
    user: User
    connection_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @field_validator("user", mode="before")
    @classmethod
    def coerce_references(cls, v):
        return _coerce_reference(v)


class PendingRequests(PortalModel):
    """Pending requests in both directions, as the backend groups them."""
    received: List[ConnectionRequest] = Field(default_factory=list)
    sent: List[ConnectionRequest] = Field(default_factory=list)


class ConnectionStatusInfo(PortalModel):
    """Server view of the relationship between the viewer and one user."""
    status: ConnectionStatus
    requester: str
    recipient: str
    connection_id: str


class SalaryRange(PortalModel):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "USD"


class Job(PortalModel):
    """A job posting."""
    id: str = Field(..., alias="_id")
    title: str = ""
    company: str = ""
    description: str = ""
    requirements: List[str] = Field(default_factory=list)
    location: str = ""
    salary_range: Optional[SalaryRange] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    skills: List[str] = Field(default_factory=list)
    is_active: bool = True
    applications_count: int = 0
    application_deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None


class Application(PortalModel):
    """A candidate's application to a job."""
    id: str = Field(..., alias="_id")
    job: Optional[Job] = Field(None, alias="jobId")
    candidate: Optional[User] = Field(None, alias="candidateId")
    cover_letter: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    notes: Optional[str] = None
    feedback: Optional[str] = None
    interview_date: Optional[datetime] = None
    applied_at: Optional[datetime] = None
    status_updated_at: Optional[datetime] = None
    resume_url: Optional[str] = None

    @field_validator("job", "candidate", mode="before")
    @classmethod
    def coerce_references(cls, v):
        return _coerce_reference(v)


class Comment(PortalModel):
    id: str = Field(..., alias="_id")
    user: Optional[User] = None
    content: str = ""
    created_at: Optional[datetime] = None

    @field_validator("user", mode="before")
    @classmethod
    def coerce_references(cls, v):
        return _coerce_reference(v)


class Post(PortalModel):
    """A social feed post."""
    id: str = Field(..., alias="_id")
    author: Optional[User] = None
    content: str = ""
    post_type: PostType = PostType.TEXT
    visibility: PostVisibility = PostVisibility.PUBLIC
    media_urls: List[Any] = Field(default_factory=list)
    likes: List[Any] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)
    shares: List[Any] = Field(default_factory=list)
    is_hidden: bool = False
    is_approved: bool = True
    created_at: Optional[datetime] = None

    @field_validator("author", mode="before")
    @classmethod
    def coerce_references(cls, v):
        return _coerce_reference(v)

    @property
    def like_count(self) -> int:
        return len(self.likes)


class Chat(PortalModel):
    id: str = Field(..., alias="_id")
    participants: List[User] = Field(default_factory=list)
    last_message: Union[Dict[str, Any], str, None] = None
    last_activity: Optional[datetime] = None

    @field_validator("participants", mode="before")
    @classmethod
    def coerce_participants(cls, v):
        return [_coerce_reference(p) for p in (v or [])]


class Message(PortalModel):
    id: str = Field(..., alias="_id")
    sender: Optional[User] = None
    content: str = ""
    message_type: str = "text"
    file_url: Optional[str] = None
    read_by: List[Any] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @field_validator("sender", mode="before")
    @classmethod
    def coerce_references(cls, v):
        return _coerce_reference(v)


class Notification(PortalModel):
    id: str = Field(..., alias="_id")
    type: str
    title: str = ""
    message: str = ""
    is_read: bool = False
    action_url: Optional[str] = None
    created_at: Optional[datetime] = None


class JobStats(PortalModel):
    """Dashboard statistics for a recruiter's jobs."""
    total_jobs: int = 0
    active_jobs: int = 0
    total_applications: int = 0
    application_stats: Union[Dict[str, Any], List[Any], None] = None
    job_type_stats: List[Dict[str, Any]] = Field(default_factory=list)
    recent_jobs: List[Dict[str, Any]] = Field(default_factory=list)


class Page(BaseModel, Generic[T]):
    """One page of a paginated listing."""
    items: List[T] = Field(default_factory=list)
    page: int = 1
    pages: int = 1
    total: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.pages


class AuthResult(PortalModel):
    """Body of a successful login or registration."""
    token: str
    user: User


__all__ = [
    'PortalModel',
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
    'PendingRequests',
    'SalaryRange',
    'Job',
    'Application',
    'Comment',
    'Post',
    'Chat',
    'Message',
    'Notification',
    'JobStats',
    'Page',
    'AuthResult'
]
