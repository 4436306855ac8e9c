"""
Connection state reconciler.

Holds the four network listings (connections, received requests,
suggestions, user directory) plus the set of users the viewer already
sent a request to, and keeps one consistent relationship status per user
as the viewer acts, without waiting for a full refetch.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set

from jobportal.config.settings import PortalSettings, get_settings
from jobportal.core.exceptions import ApiError, SessionExpiredError
from jobportal.modules.connections.filtering import filter_records
from jobportal.core.models import PendingRequests
from jobportal.modules.connections.normalize import RelationRecord, Tab, from_sent_request, normalize
from jobportal.modules.social.client import SocialAPI

logger = logging.getLogger(__name__)

DUPLICATE_REQUEST = re.compile(r"already\s+(exists|connected|sent)", re.IGNORECASE)
DUPLICATE_NOTICE = "Connection request already sent or you are already connected"


def is_duplicate_request(error: ApiError) -> bool:
    """True when the backend refused a request because a relation exists."""
    return bool(DUPLICATE_REQUEST.search(error.message or ""))


class Relationship(str, Enum):
    NONE = "none"
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class Direction(str, Enum):
    SENT = "sent"
    RECEIVED = "received"


@dataclass(frozen=True)
class RelationshipState:
    """Derived status of one user relative to the viewer."""
    status: Relationship
    direction: Optional[Direction] = None


class ConnectionReconciler:
    """View model behind the network screen."""

    def __init__(self, social: SocialAPI, settings: Optional[PortalSettings] = None):
        self.social = social
        self.settings = settings or get_settings()

        self.active_tab = Tab.CONNECTIONS
        self.lists: Dict[Tab, List[RelationRecord]] = {tab: [] for tab in Tab}
        self.sent_requests: Set[str] = set()

        self.error: Optional[str] = None
        self.notice: Optional[str] = None
        self.loading = False

        # users the backend reported as already related when we tried to connect
        self._acknowledged: Set[str] = set()
        self._declined: Set[str] = set()

    @property
    def connections(self) -> List[RelationRecord]:
        return self.lists[Tab.CONNECTIONS]

    @property
    def requests(self) -> List[RelationRecord]:
        return self.lists[Tab.REQUESTS]

    @property
    def suggestions(self) -> List[RelationRecord]:
        return self.lists[Tab.SUGGESTIONS]

    @property
    def all_users(self) -> List[RelationRecord]:
        return self.lists[Tab.DISCOVER]

    # ----------------------------
    # Loading
    # ----------------------------
    def _fetch(self, tab: Tab) -> list:
        if tab == Tab.CONNECTIONS:
            return self.social.get_my_connections(page=1, limit=self.settings.connections_page_size).items
        if tab == Tab.SUGGESTIONS:
            return self.social.get_connection_suggestions(limit=self.settings.suggestions_limit)
        return self.social.get_all_users(page=1, limit=self.settings.users_page_size).items

    def load_tab(self, tab: Tab) -> List[RelationRecord]:
        """Fetch the list behind ``tab`` and refresh the sent-request set.

        A failed fetch keeps the previous list and reports into ``error``.
        """
        tab = Tab(tab)
        self.active_tab = tab
        self.loading = True
        pending = None
        try:
            try:
                if tab == Tab.REQUESTS:
                    # one pending-requests call serves both the list and the sent set
                    pending = self.social.get_pending_requests()
                    items = pending.received
                else:
                    items = self._fetch(tab)
                self.lists[tab] = normalize(tab, items)
                logger.debug(f"Loaded {len(self.lists[tab])} records for {tab.name}")
            except SessionExpiredError:
                raise
            except ApiError as e:
                logger.warning(f"Loading {tab.name} failed: {e}")
                self.error = e.message

            self._forget_listed_acknowledgements()
            self.refresh_sent_requests(pending)
        finally:
            self.loading = False
        return self.lists[tab]

    def _forget_listed_acknowledgements(self) -> None:
        """Drop acknowledged duplicates the server now lists as a connection or request."""
        listed = {r.user_id for r in self.connections} | {r.user_id for r in self.requests}
        self._acknowledged -= listed

    def refresh_sent_requests(self, pending: Optional[PendingRequests] = None) -> Set[str]:
        if pending is not None:
            sent = pending.sent
        else:
            try:
                sent = self.social.get_sent_requests()
            except SessionExpiredError:
                raise
            except ApiError as e:
                logger.warning(f"Loading sent requests failed: {e}")
                self.error = e.message
                return self.sent_requests
        self.sent_requests = {from_sent_request(request).user_id for request in sent} | self._acknowledged
        return self.sent_requests

    def refresh(self) -> List[RelationRecord]:
        return self.load_tab(self.active_tab)

    # ----------------------------
    # Actions
    # ----------------------------
    def send_request(self, target_user_id: str, message: str = "") -> bool:
        """Send a connection request; True when the target ends up marked as sent."""
        try:
            self.social.send_connection_request(target_user_id, message)
        except SessionExpiredError:
            raise
        except ApiError as e:
            if not is_duplicate_request(e):
                logger.warning(f"Connection request to {target_user_id} failed: {e}")
                self.error = e.message
                return False
            logger.info(f"Connection with {target_user_id} already exists; marking as sent")
            self.notice = DUPLICATE_NOTICE
            self._acknowledged.add(target_user_id)

        self._mark_sent(target_user_id)
        return True

    def _mark_sent(self, user_id: str) -> None:
        self.sent_requests.add(user_id)
        self._declined.discard(user_id)
        for tab in (Tab.SUGGESTIONS, Tab.DISCOVER):
            self.lists[tab] = [r for r in self.lists[tab] if r.user_id != user_id]

    def accept_request(self, request_id: str) -> bool:
        try:
            self.social.accept_connection_request(request_id)
        except SessionExpiredError:
            raise
        except ApiError as e:
            logger.warning(f"Accepting request {request_id} failed: {e}")
            self.error = e.message
            return False

        self._drop(Tab.REQUESTS, request_id)
        # the new connection's shape is the server's call, so refetch instead of synthesizing it
        if self.active_tab == Tab.CONNECTIONS:
            self.load_tab(Tab.CONNECTIONS)
        return True

    def decline_request(self, request_id: str) -> bool:
        try:
            self.social.decline_connection_request(request_id)
        except SessionExpiredError:
            raise
        except ApiError as e:
            logger.warning(f"Declining request {request_id} failed: {e}")
            self.error = e.message
            return False

        dropped = self._drop(Tab.REQUESTS, request_id)
        if dropped:
            self._declined.add(dropped.user_id)
        return True

    def remove_connection(self, connection_id: str) -> bool:
        try:
            self.social.remove_connection(connection_id)
        except SessionExpiredError:
            raise
        except ApiError as e:
            logger.warning(f"Removing connection {connection_id} failed: {e}")
            self.error = e.message
            return False

        dropped = self._drop(Tab.CONNECTIONS, connection_id)
        if dropped:
            self._acknowledged.discard(dropped.user_id)
            self.sent_requests.discard(dropped.user_id)
        return True

    def _drop(self, tab: Tab, relation_id: str) -> Optional[RelationRecord]:
        dropped = next((r for r in self.lists[tab] if r.relation_id == relation_id), None)
        self.lists[tab] = [r for r in self.lists[tab] if r.relation_id != relation_id]
        return dropped

    # ----------------------------
    # Derived views
    # ----------------------------
    def filtered_view(self, tab: Optional[Tab] = None, search_query: str = "") -> List[RelationRecord]:
        tab = self.active_tab if tab is None else Tab(tab)
        return filter_records(self.lists[tab], search_query)

    def status_of(self, user_id: str) -> RelationshipState:
        if any(r.user_id == user_id for r in self.connections):
            return RelationshipState(Relationship.ACCEPTED)
        if user_id in self.sent_requests:
            return RelationshipState(Relationship.PENDING, Direction.SENT)
        if any(r.user_id == user_id for r in self.requests):
            return RelationshipState(Relationship.PENDING, Direction.RECEIVED)
        if user_id in self._declined:
            return RelationshipState(Relationship.DECLINED)
        return RelationshipState(Relationship.NONE)

    def action_label(self, user_id: str) -> str:
        state = self.status_of(user_id)
        if state.status == Relationship.ACCEPTED:
            return "Connected"
        if state.status == Relationship.PENDING:
            return "Sent" if state.direction == Direction.SENT else "Respond"
        if state.status == Relationship.DECLINED:
            return "Declined"
        return "Connect"

    def counts(self) -> Dict[Tab, int]:
        return {tab: len(records) for tab, records in self.lists.items()}

    def clear_messages(self) -> None:
        self.error = None
        self.notice = None
