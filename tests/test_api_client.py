import pytest
import requests

from jobportal.core.exceptions import ApiError, SessionExpiredError
from jobportal.core.models import User
from jobportal.modules.api_client import ApiClient, AuthSession, SessionStore
from jobportal.modules.api_client.responses import parse_page

from conftest import API_URL, FakeHttp, ok, user_doc


def test_bearer_token_and_json_headers(client, http):
    http.add("GET", "/auth/me", {"success": True, "user": user_doc("me")})

    client.get("/auth/me")

    call = http.calls[0]
    assert call.headers["Authorization"] == "Bearer tok-123"
    assert call.headers["Content-Type"] == "application/json"
    assert call.timeout == 5


def test_no_authorization_header_without_token(settings, http):
    http.add("GET", "/jobs", ok([]))
    client = ApiClient(session=AuthSession(), settings=settings, http=http)

    client.get("/jobs")

    assert "Authorization" not in http.calls[0].headers


def test_none_params_are_dropped(client, http):
    http.add("GET", "/applications/admin/all", ok([]))

    client.get("/applications/admin/all", page=1, status=None, jobId=None)

    assert http.calls[0].params == {"page": 1}


def test_multipart_requests_skip_json_content_type(client, http):
    http.add("POST", "/chat/c1/messages", ok({"_id": "m1"}))

    client.post("/chat/c1/messages", files={"content": (None, "hi")})

    assert "Content-Type" not in http.calls[0].headers


def test_error_uses_server_message(client, http):
    http.add("POST", "/connections/send-request", {"success": False, "message": "Recipient not found"}, status=404)

    with pytest.raises(ApiError) as excinfo:
        client.post("/connections/send-request", json={"recipientId": "x"})

    assert excinfo.value.message == "Recipient not found"
    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "Recipient not found (HTTP 404)"


def test_error_without_message_is_generic(client, http):
    http.add("GET", "/jobs", {"success": False}, status=500)

    with pytest.raises(ApiError) as excinfo:
        client.get("/jobs")

    assert excinfo.value.message == "Something went wrong"


def test_unparseable_error_body_is_network_error(client, http):
    http.add("GET", "/jobs", status=502, raw="<html>Bad gateway</html>")

    with pytest.raises(ApiError) as excinfo:
        client.get("/jobs")

    assert excinfo.value.message == "Network error"


def test_transport_failure_is_network_error(client, http):
    http.fail("GET", "/jobs", requests.ConnectionError("refused"))

    with pytest.raises(ApiError) as excinfo:
        client.get("/jobs")

    assert excinfo.value.message == "Network error"
    assert excinfo.value.status_code is None


def test_401_expires_session_and_notifies(settings, tmp_path):
    store = SessionStore(str(tmp_path / "session.json"))
    session = AuthSession(store=store)
    session.sign_in("tok", User.model_validate(user_doc("me")))
    assert store.path.exists()

    fired = []
    session.on_expired(lambda: fired.append(True))
    http = FakeHttp().add("GET", "/connections/my-connections", {"success": False, "message": "Token expired"}, status=401)
    client = ApiClient(session=session, settings=settings, http=http)

    with pytest.raises(SessionExpiredError) as excinfo:
        client.get("/connections/my-connections")

    assert excinfo.value.status_code == 401
    assert fired == [True]
    assert session.token is None
    assert not session.is_authenticated
    assert not store.path.exists()


def test_session_expired_is_an_api_error():
    assert issubclass(SessionExpiredError, ApiError)


def test_context_manager_closes_transport(settings, session):
    http = FakeHttp()
    with ApiClient(session=session, settings=settings, http=http):
        pass
    assert http.closed


def test_server_url(client):
    assert client.server_url("/uploads/resumes/cv.pdf") == "http://api.test/uploads/resumes/cv.pdf"
    assert client.server_url("https://cdn.example.com/a.png") == "https://cdn.example.com/a.png"


def test_parse_page_nested_pagination():
    body = ok([user_doc("u1"), user_doc("u2")],
              pagination={"currentPage": 2, "totalPages": 3, "totalUsers": 45})

    page = parse_page(body, User)

    assert [u.id for u in page.items] == ["u1", "u2"]
    assert (page.page, page.pages, page.total) == (2, 3, 45)
    assert page.has_next


def test_parse_page_has_more_flag():
    body = ok([user_doc("u1")], pagination={"currentPage": 1, "hasMore": True})

    page = parse_page(body, User)

    assert page.pages == 2
    assert page.has_next


def test_parse_page_flat_pagination():
    body = ok([user_doc("u1")], count=1, total=11, page=2, pages=2)

    page = parse_page(body, User)

    assert (page.page, page.pages, page.total) == (2, 2, 11)
    assert not page.has_next


def test_base_url_is_used(client, http):
    http.add("GET", "/jobs", ok([]))
    client.get("jobs")
    assert http.calls[0].path == "/jobs"
    assert client.base_url == API_URL
