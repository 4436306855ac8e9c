import pytest
from pydantic import ValidationError

from jobportal.core.models import ApplicationStatus, JobType
from jobportal.modules.boards import ApplicationsBoard, BoardScope, JobFilters, JobsBoard, status_options
from jobportal.modules.portal import ApplicationsAPI, JobsAPI

from conftest import ok, user_doc


def application_doc(application_id, status="pending", title="Backend Engineer", company="Acme Corp",
                    candidate=None):
    return {
        "_id": application_id,
        "jobId": {"_id": f"job-{application_id}", "title": title, "company": company},
        "candidateId": candidate or user_doc(f"cand-{application_id}", "Sam", "Seeker"),
        "status": status,
    }


@pytest.fixture
def jobs_board(client):
    return JobsBoard(JobsAPI(client))


@pytest.fixture
def applications_board(client):
    return ApplicationsBoard(ApplicationsAPI(client))


def test_job_filters_to_params():
    filters = JobFilters(search="python", job_type=JobType.CONTRACT, min_salary=50000, sort_by="salary-high")

    assert filters.to_params() == {
        "search": "python",
        "jobType": "contract",
        "minSalary": 50000,
        "sortBy": "salary-high",
        "page": 1,
        "limit": 10,
    }


def test_job_filters_reject_unknown_sort():
    with pytest.raises(ValidationError):
        JobFilters(sort_by="random")


def test_search_and_next_page(jobs_board, http):
    http.add("GET", "/jobs", ok([{"_id": "j1", "title": "A"}], count=1, total=2, page=1, pages=2))
    http.add("GET", "/jobs", ok([{"_id": "j2", "title": "B"}], count=1, total=2, page=2, pages=2))

    first = jobs_board.search(JobFilters(limit=1))
    second = jobs_board.next_page()
    third = jobs_board.next_page()

    assert [j.id for j in first.items] == ["j1"]
    assert [j.id for j in second.items] == ["j2"]
    assert third is second
    assert [c.params["page"] for c in http.calls] == [1, 2]


def test_delete_job_drops_it_from_current_page(jobs_board, http):
    http.add("GET", "/jobs", ok([{"_id": "j1"}, {"_id": "j2"}], count=2, total=2, page=1, pages=1))
    http.add("DELETE", "/jobs/j1", ok())
    jobs_board.search()

    jobs_board.delete("j1")

    assert [j.id for j in jobs_board.current.items] == ["j2"]


def test_status_options_in_pipeline_order():
    assert status_options() == ["pending", "reviewing", "interview", "accepted", "rejected"]


def test_load_scopes_hit_their_endpoints(applications_board, http):
    http.add("GET", "/applications/my-applications", ok([], count=0, total=0, page=1, pages=1))
    http.add("GET", "/applications/admin/all", ok([], count=0, total=0, page=1, pages=1))
    http.add("GET", "/applications/job/j1", ok([], count=0, total=0, page=1, pages=1))

    applications_board.load(BoardScope.MINE, status="all")
    applications_board.load(BoardScope.ALL, status="reviewing")
    applications_board.load(BoardScope.JOB, job_id="j1")

    assert [c.path for c in http.calls] == [
        "/applications/my-applications", "/applications/admin/all", "/applications/job/j1",
    ]
    assert "status" not in http.calls[0].params
    assert http.calls[1].params["status"] == "reviewing"


def test_job_scope_requires_job_id(applications_board):
    with pytest.raises(ValueError):
        applications_board.load(BoardScope.JOB)


def test_filter_and_counts(applications_board, http):
    http.add("GET", "/applications/admin/all", ok([
        application_doc("a1", "pending"),
        application_doc("a2", "interview", title="Data Scientist", company="Initech"),
        application_doc("a3", "pending", candidate=user_doc("c3", "Ada", "Lovelace")),
    ], count=3, total=3, page=1, pages=1))
    applications_board.load(BoardScope.ALL)

    assert [a.id for a in applications_board.filter(status="pending")] == ["a1", "a3"]
    assert [a.id for a in applications_board.filter("initech")] == ["a2"]
    assert [a.id for a in applications_board.filter("lovelace", "pending")] == ["a3"]

    counts = applications_board.status_counts()
    assert counts["pending"] == 2
    assert counts["interview"] == 1
    assert counts["rejected"] == 0
    assert counts["total"] == 3


def test_update_status_replaces_application(applications_board, http):
    http.add("GET", "/applications/admin/all", ok([application_doc("a1")], count=1, total=1, page=1, pages=1))
    http.add("PUT", "/applications/a1/status", ok(application_doc("a1", "reviewing")))
    applications_board.load(BoardScope.ALL)

    updated = applications_board.update_status("a1", "reviewing", notes="Looks good")

    assert updated.status == ApplicationStatus.REVIEWING
    assert applications_board.current.items[0].status == ApplicationStatus.REVIEWING
    assert http.calls[-1].json == {"status": "reviewing", "notes": "Looks good"}


def test_update_status_rejects_unknown_label(applications_board, http):
    with pytest.raises(ValueError):
        applications_board.update_status("a1", "hired")
    assert http.calls == []


def test_apply_and_withdraw(applications_board, http):
    http.add("POST", "/applications", ok(application_doc("a9")))
    http.add("DELETE", "/applications/a9", ok())

    applications_board.apply("job-a9", cover_letter="Hello")
    assert [a.id for a in applications_board.current.items] == ["a9"]

    applications_board.withdraw("a9")
    assert applications_board.current.items == []
