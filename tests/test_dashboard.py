from datetime import datetime, timedelta, timezone

import pytest

from pyrte.services.dashboard import DashboardService, format_relative, preview_text

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(minutes=5), "Just now"),
        (timedelta(minutes=59), "Just now"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(hours=5, minutes=30), "5 hours ago"),
        (timedelta(hours=23, minutes=59), "23 hours ago"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=6, hours=23), "6 days ago"),
        (timedelta(days=7), "2024-05-03"),
    ],
)
def test_format_relative(delta, expected):
    assert format_relative(NOW - delta, now=NOW) == expected


def test_format_relative_naive_is_utc():
    naive = datetime(2024, 5, 10, 9, 0)
    assert format_relative(naive, now=NOW) == "3 hours ago"


def test_preview_text():
    assert preview_text("") == "No content yet..."
    assert preview_text("<p></p>") == "No content yet..."
    assert preview_text("<h1>Title</h1><p>Fish &amp; chips</p>") == "Title Fish & chips"
    assert preview_text("<p>" + "x" * 150 + "</p>") == "x" * 100


@pytest.fixture()
def dashboard(repository, user):
    return DashboardService(repository, user)


def test_refresh_create_delete(dashboard):
    assert dashboard.refresh() == []

    first = dashboard.create()
    second = dashboard.create()
    assert first.title == "Untitled Document"
    assert [d.id for d in dashboard.documents] == [second.id, first.id]

    dashboard.delete(first.id)
    assert [d.id for d in dashboard.documents] == [second.id]
    assert [d.id for d in dashboard.refresh()] == [second.id]


def test_filter_is_case_insensitive(dashboard, repository, user):
    repository.create_document(user.id, title="Quarterly Report")
    repository.create_document(user.id, title="Shopping list")
    dashboard.refresh()

    assert [d.title for d in dashboard.filter("REPORT")] == ["Quarterly Report"]
    assert len(dashboard.filter("")) == 2
    assert dashboard.filter("zzz") == []


def test_replace_moves_record_to_top(dashboard):
    a = dashboard.create()
    b = dashboard.create()
    a.title = "Renamed"
    dashboard.replace(a)
    assert [d.id for d in dashboard.documents] == [a.id, b.id]
    assert dashboard.documents[0].title == "Renamed"


def test_documents_returns_a_copy(dashboard):
    dashboard.create()
    dashboard.documents.clear()
    assert len(dashboard.documents) == 1
