"""
Name: Client <-> API Integration Tests

Responsibilities:
  - BugTrackerClient over the real routes (TestClient as transport)
  - ApiError carries the server's error text and details
  - BugBoard end-to-end: load, create, status change, delete, filter
"""

import pytest

from bug_tracker.client import (
    ApiError,
    BugBoard,
    BugDraft,
    BugTrackerClient,
    ListView,
    list_view,
    visible_bugs,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def api(client):
    return BugTrackerClient("http://testserver/api", client=client)


def test_crud_through_client(api, make_bug_payload):
    created = api.create_bug(make_bug_payload(tags=["ui"]))

    assert api.get_bug(created["id"]) == created
    assert api.update_bug_status(created["id"], "closed")["status"] == "closed"
    assert api.get_bugs(status="closed")["pagination"]["total"] == 1
    assert api.delete_bug(created["id"]) == {"message": "Bug deleted successfully"}

    with pytest.raises(ApiError) as exc_info:
        api.get_bug(created["id"])
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Bug not found"


def test_validation_error_details(api):
    with pytest.raises(ApiError) as exc_info:
        api.create_bug({"title": "x"})

    assert exc_info.value.message == "Validation failed"
    assert exc_info.value.details == [
        "Description is required and must be a string",
        "Reporter is required and must be a string",
    ]


def test_required_arguments(api):
    with pytest.raises(ValueError, match="Bug ID is required"):
        api.get_bug("")
    with pytest.raises(ValueError, match="Status is required"):
        api.update_bug_status("507f1f77bcf86cd799439011", "")


def test_board_flow(api):
    board = BugBoard(api)
    board.load()
    assert list_view(board.state) is ListView.EMPTY

    draft = BugDraft(title="Crash", description="Editor crashes", reporter="dana")
    draft.add_tag("editor")
    assert draft.check() == {}
    first = board.create(draft.to_payload())
    second = board.create(
        BugDraft(title="Typo", description="Footer", reporter="lee").to_payload()
    )

    assert [b["id"] for b in board.state.bugs] == [second["id"], first["id"]]

    assert board.change_status(first["id"], "resolved") is True
    board.set_filter("status", "resolved")
    assert [b["id"] for b in visible_bugs(board.state)] == [first["id"]]

    assert board.delete(second["id"]) is True
    assert board.delete(second["id"]) is False

    board.clear_filters()
    board.load()
    assert [b["id"] for b in board.state.bugs] == [first["id"]]
    assert board.state.bugs[0]["status"] == "resolved"
