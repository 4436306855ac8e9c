import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jobportal.core.models import (
    Chat,
    Connection,
    ConnectionRequest,
    ConnectionStatusInfo,
    Message,
    Notification,
    Page,
    PendingRequests,
    Post,
    PostType,
    PostVisibility,
    User,
)
from jobportal.modules.api_client.client import ApiClient
from jobportal.modules.api_client.responses import parse_list, parse_page, unwrap

logger = logging.getLogger(__name__)

CONNECTION_RESPONSES = ("accepted", "declined")


class SocialAPI:
    """Facade over the network, feed, chat and notification endpoints.

    Each method issues one HTTP call and returns the ``data`` payload as a
    typed model. Errors propagate as ``ApiError`` from the underlying client.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    # ----------------------------
    # Connections
    # ----------------------------
    def send_connection_request(self, recipient_id: str, message: str = "") -> ConnectionRequest:
        body = self.client.post("/connections/send-request", json={"recipientId": recipient_id, "message": message})
        logger.info(f"Connection request sent to {recipient_id}")
        return ConnectionRequest.model_validate(unwrap(body))

    def respond_to_connection_request(self, request_id: str, response: str) -> ConnectionRequest:
        if response not in CONNECTION_RESPONSES:
            raise ValueError(f"Response must be one of {CONNECTION_RESPONSES}, got {response!r}")
        body = self.client.put(f"/connections/respond/{request_id}", json={"response": response})
        logger.info(f"Connection request {request_id} {response}")
        return ConnectionRequest.model_validate(unwrap(body))

    def accept_connection_request(self, request_id: str) -> ConnectionRequest:
        return self.respond_to_connection_request(request_id, "accepted")

    def decline_connection_request(self, request_id: str) -> ConnectionRequest:
        return self.respond_to_connection_request(request_id, "declined")

    def get_my_connections(self, page: int = 1, limit: int = 20) -> Page[Connection]:
        body = self.client.get("/connections/my-connections", page=page, limit=limit)
        return parse_page(body, Connection)

    def get_pending_requests(self) -> PendingRequests:
        body = self.client.get("/connections/pending-requests")
        return PendingRequests.model_validate(unwrap(body) or {})

    def get_received_requests(self) -> List[ConnectionRequest]:
        return self.get_pending_requests().received

    def get_sent_requests(self) -> List[ConnectionRequest]:
        """Requests where the viewer is the requester."""
        return self.get_pending_requests().sent

    def remove_connection(self, connection_id: str) -> None:
        self.client.delete(f"/connections/remove/{connection_id}")
        logger.info(f"Connection {connection_id} removed")

    def get_connection_suggestions(self, limit: int = 10) -> List[User]:
        body = self.client.get("/connections/suggestions", limit=limit)
        return parse_list(unwrap(body), User)

    def get_connection_status(self, user_id: str) -> Optional[ConnectionStatusInfo]:
        """Relationship with ``user_id``, or ``None`` when there is none."""
        data = unwrap(self.client.get(f"/connections/status/{user_id}"))
        return ConnectionStatusInfo.model_validate(data) if data else None

    # ----------------------------
    # Users
    # ----------------------------
    def get_user_profile(self, user_id: str) -> User:
        return User.model_validate(unwrap(self.client.get(f"/users/profile/{user_id}")))

    def get_all_users(self, page: int = 1, limit: int = 20) -> Page[User]:
        return parse_page(self.client.get("/users/all", page=page, limit=limit), User)

    def search_users(self, query: str, page: int = 1, limit: int = 20) -> Page[User]:
        query = (query or "").strip()
        if len(query) < 2:
            raise ValueError("Search query must be at least 2 characters long")
        return parse_page(self.client.get("/users/search", q=query, page=page, limit=limit), User)

    # ----------------------------
    # Posts
    # ----------------------------
    def create_post(self, content: str, post_type: PostType = PostType.TEXT,
                    visibility: PostVisibility = PostVisibility.PUBLIC,
                    job_id: Optional[str] = None,
                    media_base64: Optional[Sequence[str]] = None,
                    media_paths: Optional[Sequence[str]] = None) -> Post:
        """Create a post.

        Base64 images travel in a JSON body; files on disk are uploaded as
        multipart ``media`` parts.
        """
        fields = {
            "content": content,
            "postType": PostType(post_type).value,
            "visibility": PostVisibility(visibility).value,
        }
        if job_id:
            fields["jobId"] = job_id

        if media_paths:
            with ExitStack() as stack:
                parts = [(name, (None, value)) for name, value in fields.items()]
                parts += [
                    ("media", (Path(p).name, stack.enter_context(open(p, "rb"))))
                    for p in media_paths
                ]
                body = self.client.post("/posts", files=parts)
        else:
            if media_base64:
                fields["mediaBase64"] = list(media_base64)
            body = self.client.post("/posts", json=fields)
        return Post.model_validate(unwrap(body))

    def get_feed(self, page: int = 1, limit: int = 10) -> Page[Post]:
        return parse_page(self.client.get("/posts/feed", page=page, limit=limit), Post)

    def get_user_posts(self, user_id: str, page: int = 1, limit: int = 10) -> Page[Post]:
        return parse_page(self.client.get(f"/posts/user/{user_id}", page=page, limit=limit), Post)

    def get_post(self, post_id: str) -> Post:
        return Post.model_validate(unwrap(self.client.get(f"/posts/{post_id}")))

    def update_post(self, post_id: str, **updates: Any) -> Post:
        return Post.model_validate(unwrap(self.client.put(f"/posts/{post_id}", json=updates)))

    def delete_post(self, post_id: str) -> None:
        self.client.delete(f"/posts/{post_id}")

    def toggle_like(self, post_id: str) -> Dict[str, Any]:
        return unwrap(self.client.post(f"/posts/{post_id}/like")) or {}

    def add_comment(self, post_id: str, content: str) -> Dict[str, Any]:
        return unwrap(self.client.post(f"/posts/{post_id}/comment", json={"content": content})) or {}

    def delete_comment(self, post_id: str, comment_id: str) -> None:
        self.client.delete(f"/posts/{post_id}/comment/{comment_id}")

    def share_post(self, post_id: str, comment: str = "") -> Dict[str, Any]:
        return unwrap(self.client.post(f"/posts/{post_id}/share", json={"comment": comment})) or {}

    # ----------------------------
    # Recruiter moderation
    # ----------------------------
    def get_recruiter_posts(self, page: int = 1, limit: int = 10) -> Page[Post]:
        return parse_page(self.client.get("/posts/recruiter/all", page=page, limit=limit), Post)

    def hide_post(self, post_id: str) -> None:
        self.client.put(f"/posts/recruiter/{post_id}/hide")
        logger.info(f"Post {post_id} hidden")

    def approve_post(self, post_id: str) -> None:
        self.client.put(f"/posts/recruiter/{post_id}/approve")
        logger.info(f"Post {post_id} approved")

    def recruiter_delete_post(self, post_id: str) -> None:
        self.client.delete(f"/posts/recruiter/{post_id}")
        logger.info(f"Post {post_id} deleted by moderator")

    # ----------------------------
    # Chat
    # ----------------------------
    def get_conversations(self, page: int = 1, limit: int = 20) -> Page[Chat]:
        return parse_page(self.client.get("/chat/conversations", page=page, limit=limit), Chat)

    def start_conversation(self, participant_id: str) -> Chat:
        body = self.client.post("/chat/start", json={"participantId": participant_id})
        return Chat.model_validate(unwrap(body))

    def get_chat_messages(self, chat_id: str, page: int = 1, limit: int = 50) -> Page[Message]:
        return parse_page(self.client.get(f"/chat/{chat_id}/messages", page=page, limit=limit), Message)

    def send_message(self, chat_id: str, content: str, reply_to: Optional[str] = None,
                     file_path: Optional[str] = None) -> Message:
        # always multipart, the endpoint parses an optional "file" part
        parts = {"content": (None, content)}
        if reply_to:
            parts["replyTo"] = (None, reply_to)
        with ExitStack() as stack:
            if file_path:
                parts["file"] = (Path(file_path).name, stack.enter_context(open(file_path, "rb")))
            body = self.client.post(f"/chat/{chat_id}/messages", files=parts)
        return Message.model_validate(unwrap(body))

    def mark_message_as_read(self, message_id: str) -> None:
        self.client.put(f"/chat/messages/{message_id}/read")

    def mark_chat_as_read(self, chat_id: str) -> None:
        self.client.put(f"/chat/{chat_id}/mark-all-read")

    # ----------------------------
    # Notifications
    # ----------------------------
    def get_notifications(self, page: int = 1, limit: int = 20, unread_only: bool = False) -> Page[Notification]:
        body = self.client.get("/notifications", page=page, limit=limit,
                               unreadOnly="true" if unread_only else "false")
        return parse_page(body, Notification)

    def get_unread_count(self) -> int:
        data = unwrap(self.client.get("/notifications/unread-count")) or {}
        return int(data.get("unreadCount", 0))

    def mark_notification_as_read(self, notification_id: str) -> None:
        self.client.put(f"/notifications/{notification_id}/read")

    def mark_all_notifications_as_read(self) -> None:
        self.client.put("/notifications/mark-all-read")

    def delete_notification(self, notification_id: str) -> None:
        self.client.delete(f"/notifications/{notification_id}")

    def get_notification_settings(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/notifications/settings")) or {}

    def update_notification_settings(self, **settings: bool) -> Dict[str, Any]:
        return unwrap(self.client.put("/notifications/settings", json=settings)) or {}
