"""
Shared fixtures: a recording fake transport stands in for ``requests.Session``
so every test runs without a network.
"""

from types import SimpleNamespace

import pytest

from jobportal.config.settings import PortalSettings
from jobportal.core.models import User
from jobportal.modules.api_client import ApiClient, AuthSession
from jobportal.modules.social import SocialAPI

API_URL = "http://api.test/api"


class FakeResponse:
    def __init__(self, status_code=200, body=None, raw=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._body = body
        self._raw = raw

    def json(self):
        if self._raw is not None:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakeHttp:
    """Routes ``(method, path)`` to queued responses and records every call.

    The last queued response for a route is reused for further calls.
    """

    def __init__(self, base_url=API_URL):
        self.base_url = base_url
        self.routes = {}
        self.calls = []
        self.closed = False

    def add(self, method, path, body=None, status=200, raw=None):
        self.routes.setdefault((method, path), []).append(FakeResponse(status, body, raw))
        return self

    def set(self, method, path, body=None, status=200, raw=None):
        """Replace whatever is queued for a route."""
        self.routes[(method, path)] = [FakeResponse(status, body, raw)]
        return self

    def fail(self, method, path, exc):
        self.routes.setdefault((method, path), []).append(exc)
        return self

    def request(self, method, url, params=None, json=None, data=None, files=None, headers=None, timeout=None):
        path = url[len(self.base_url):]
        self.calls.append(SimpleNamespace(
            method=method, path=path, params=params, json=json,
            data=data, files=files, headers=headers or {}, timeout=timeout,
        ))
        queue = self.routes.get((method, path))
        if not queue:
            raise AssertionError(f"Unexpected request {method} {path}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return response

    def calls_to(self, method, path):
        return [c for c in self.calls if c.method == method and c.path == path]

    def close(self):
        self.closed = True


def user_doc(user_id, first="Test", last="User", company=None, headline=None, role="candidate"):
    profile = {"firstName": first, "lastName": last}
    if company:
        profile["company"] = company
    if headline:
        profile["headline"] = headline
    return {"_id": user_id, "email": f"{user_id}@example.com", "role": role, "profile": profile}


def ok(data=None, **extra):
    body = {"success": True, "data": data}
    body.update(extra)
    return body


def request_doc(request_id, requester, recipient, status="pending"):
    return {"_id": request_id, "requester": requester, "recipient": recipient, "status": status}


def connection_doc(connection_id, user):
    return {"_id": connection_id, "user": user, "connectionDate": "2024-05-01T10:00:00.000Z"}


def nested_pagination(total_key, total, page=1, pages=1):
    return {"currentPage": page, "totalPages": pages, total_key: total}


@pytest.fixture(autouse=True)
def clean_backend_env(monkeypatch):
    for name in ("REACT_APP_API_URL", "REACT_APP_SERVER_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path):
    return PortalSettings(
        api_base_url=API_URL,
        server_base_url="http://api.test",
        request_timeout_seconds=5,
        connections_page_size=20,
        suggestions_limit=10,
        users_page_size=20,
        session_file=str(tmp_path / "session.json"),
        log_level="DEBUG",
        log_file=None,
        enable_console_logging=False,
    )


@pytest.fixture
def viewer():
    return User.model_validate(user_doc("me", "Viewer", "One"))


@pytest.fixture
def session(viewer):
    return AuthSession(token="tok-123", user=viewer)


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def client(session, settings, http):
    return ApiClient(session=session, settings=settings, http=http)


@pytest.fixture
def social(client):
    return SocialAPI(client)
