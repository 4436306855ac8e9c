"""
Normalization of network listings into uniform relation records.

The backend wraps the other party differently per listing: a connection
carries it under ``user``, a received request under ``requester``, a sent
request under ``recipient``, and suggestions and the user directory are
bare users. Every list is mapped to ``RelationRecord`` at fetch time so
filtering and rendering never branch on the listing's shape.
"""

from enum import Enum, IntEnum
from typing import Iterable, List, Optional

from pydantic import BaseModel

from jobportal.core.models import Connection, ConnectionRequest, User


class Tab(IntEnum):
    """Views of the network screen, in display order."""
    CONNECTIONS = 0
    REQUESTS = 1
    SUGGESTIONS = 2
    DISCOVER = 3


class RelationKind(str, Enum):
    CONNECTION = "connection"
    RECEIVED_REQUEST = "received_request"
    SENT_REQUEST = "sent_request"
    SUGGESTION = "suggestion"
    USER = "user"


class RelationRecord(BaseModel):
    """The other party of a relation plus the id that acts on it."""
    relation_id: Optional[str] = None
    user: User
    kind: RelationKind

    @property
    def user_id(self) -> str:
        return self.user.id


def from_connection(connection: Connection) -> RelationRecord:
    return RelationRecord(relation_id=connection.id, user=connection.user, kind=RelationKind.CONNECTION)


def from_received_request(request: ConnectionRequest) -> RelationRecord:
    return RelationRecord(relation_id=request.id, user=request.requester, kind=RelationKind.RECEIVED_REQUEST)


def from_sent_request(request: ConnectionRequest) -> RelationRecord:
    return RelationRecord(relation_id=request.id, user=request.recipient, kind=RelationKind.SENT_REQUEST)


def from_user(user: User, kind: RelationKind = RelationKind.USER) -> RelationRecord:
    return RelationRecord(user=user, kind=kind)


def normalize(tab: Tab, items: Iterable) -> List[RelationRecord]:
    """Map the raw items of ``tab`` to relation records."""
    if tab == Tab.CONNECTIONS:
        return [from_connection(item) for item in items]
    if tab == Tab.REQUESTS:
        return [from_received_request(item) for item in items]
    if tab == Tab.SUGGESTIONS:
        return [from_user(item, RelationKind.SUGGESTION) for item in items]
    return [from_user(item, RelationKind.USER) for item in items]
