from aurora_tasks.models import TaskStatus, View
from aurora_tasks.views import filter_view

from .helpers import ids, make_task


def _collection():
    return [
        make_task("a1"),
        make_task("c1", status="completed"),
        make_task("a2"),
        make_task("c2", status="completed"),
        make_task("c3", status="completed"),
    ]


class TestFilterView:
    def test_completed_view(self):
        assert ids(filter_view(_collection(), View.COMPLETED)) == ["c1", "c2", "c3"]

    def test_active_view(self):
        assert ids(filter_view(_collection(), View.ACTIVE)) == ["a1", "a2"]

    def test_all_view(self):
        assert ids(filter_view(_collection(), View.ALL)) == ["a1", "c1", "a2", "c2", "c3"]

    def test_accepts_view_value_strings(self):
        assert len(filter_view(_collection(), "completed")) == 3

    def test_statuses_match_view(self):
        assert all(t.status is TaskStatus.ACTIVE for t in filter_view(_collection(), View.ACTIVE))

    def test_empty_collection(self):
        for view in View:
            assert filter_view([], view) == []
