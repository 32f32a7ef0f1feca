"""Tests for schedule aggregation."""

from datetime import date

import pytest

from planboard.core.models import (
    Event,
    Goal,
    ItemType,
    Project,
    Routine,
    RoutineInstance,
    ScheduleItem,
    Snapshot,
    Task,
)
from planboard.core.policy import ZoomLevel, policy_for
from planboard.core.schedule import (
    event_items,
    get_schedule_items,
    sort_schedule_items,
    task_items,
)


# Fixtures
@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def snapshot():
    """A snapshot with one of every kind of entity."""
    return Snapshot(
        tasks=[
            Task(id="t1", title="Write report", date="2025-01-15", start_time="10:00", duration=90,
                 area_id="work", description="Q4 numbers", is_focus=True),
            Task(id="t2", title="Call bank", date="2025-01-15"),
            Task(id="t3", title="Someday", date=None),
            Task(id="h1", title="Drink water", date="2025-01-15", kind="habit"),
        ],
        events=[
            Event(id="e1", title="Standup", date="2025-01-15", start_time="09:00", end_time="09:15"),
            Event(id="e2", title="Launch", date="2025-01-20", type="milestone"),
        ],
        routines=[Routine(id="r1", title="Stretch", frequency="daily", time="07:00", duration=10)],
        routine_instances=[],
        goals=[
            Goal(id="g1", title="Run a marathon", deadline="2025-01-17", status="active"),
            Goal(id="g2", title="Financial freedom", deadline="2025-12-31", type="strategic"),
            Goal(id="g3", title="Learn Spanish", deadline="2025-06-30", horizon="year", status="completed"),
        ],
        projects=[Project(id="p1", title="Website", deadline="2025-01-16", status="completed")],
    )


class TestPolicies:
    def test_unknown_zoom_raises(self):
        with pytest.raises(ValueError):
            policy_for("decade")

    def test_accepts_string_zoom(self):
        assert policy_for("week").zoom == ZoomLevel.WEEK


class TestTaskItems:
    def test_task_fields(self, snapshot, today):
        items = task_items(snapshot.tasks, today, today)
        first = items[0]

        assert first.id == "task-t1"
        assert first.type == ItemType.TASK
        assert first.entity_id == "t1"
        assert first.time == "10:00"
        assert first.duration == 90
        assert first.status == "pending"
        assert first.details == "Q4 numbers"
        assert first.is_focus is True
        assert first.area_id == "work"

    def test_only_dated_tasks_of_kind_task(self, snapshot, today):
        ids = [i.entity_id for i in task_items(snapshot.tasks, today, today)]
        assert ids == ["t1", "t2"]

    def test_malformed_date_skipped(self, today):
        tasks = [Task(id="bad", title="Bad", date="2025-13-45"), Task(id="ok", title="Ok", date="2025-01-15")]
        assert [i.entity_id for i in task_items(tasks, today, today)] == ["ok"]

    def test_malformed_time_skipped(self, today):
        tasks = [Task(id="bad", title="Bad", date="2025-01-15", start_time="25:99")]
        assert task_items(tasks, today, today) == []


class TestEventItems:
    def test_duration_from_end_time(self, today):
        [item] = event_items([Event(id="e", title="Lunch", date="2025-01-15", start_time="12:00", end_time="13:30")], today, today)
        assert item.duration == 90
        assert item.status == "future"
        assert item.color == "sky"

    def test_no_end_time_means_no_duration(self, today):
        [item] = event_items([Event(id="e", title="Lunch", date="2025-01-15", start_time="12:00")], today, today)
        assert item.duration is None

    def test_end_before_start_means_no_duration(self, today):
        [item] = event_items(
            [Event(id="e", title="Odd", date="2025-01-15", start_time="12:00", end_time="11:00")], today, today
        )
        assert item.duration is None

    def test_malformed_end_time_skipped(self, today):
        events = [Event(id="e", title="Odd", date="2025-01-15", start_time="12:00", end_time="noon")]
        assert event_items(events, today, today) == []

    def test_milestones_only(self):
        events = [
            Event(id="e1", title="Standup", date="2025-01-20", start_time="09:00"),
            Event(id="e2", title="Launch", date="2025-01-20", start_time="09:00", type="milestone"),
        ]
        [item] = event_items(events, date(2025, 1, 1), date(2025, 1, 31), milestones_only=True)
        assert item.title == "🚩 Launch"
        assert item.time is None
        assert item.color == "amber"


class TestDayZoom:
    def test_includes_tasks_events_routines(self, snapshot, today):
        items = get_schedule_items(snapshot, today, today, ZoomLevel.DAY)
        assert [i.id for i in items] == [
            "routine-proj-r1-2025-01-15",
            "event-e1",
            "task-t1",
            "task-t2",
        ]

    def test_no_deadlines(self, snapshot):
        items = get_schedule_items(snapshot, date(2025, 1, 1), date(2025, 12, 31), "day")
        assert all(i.type != ItemType.DEADLINE for i in items)
        assert "strat-goal-g2" not in [i.id for i in items]

    def test_routine_instance_suppresses_projection(self, snapshot, today):
        snapshot.routine_instances = [RoutineInstance(id="i1", from_routine_id="r1", date="2025-01-15")]
        items = get_schedule_items(snapshot, today, today, ZoomLevel.DAY)
        assert all(i.type != ItemType.ROUTINE for i in items)

    def test_materialized_task_suppresses_projection(self, snapshot, today):
        snapshot.tasks.append(
            Task(id="t9", title="Stretch", date="2025-01-15", start_time="07:00", from_routine_id="r1")
        )
        items = get_schedule_items(snapshot, today, today, ZoomLevel.DAY)
        ids = [i.id for i in items]
        assert "task-t9" in ids
        assert "routine-proj-r1-2025-01-15" not in ids


class TestWeekZoom:
    def test_adds_decorated_deadlines(self, snapshot):
        items = get_schedule_items(snapshot, date(2025, 1, 13), date(2025, 1, 19), ZoomLevel.WEEK)
        deadlines = {i.id: i for i in items if i.type == ItemType.DEADLINE}

        assert set(deadlines) == {"deadline-goal-g1", "deadline-project-p1"}
        assert deadlines["deadline-goal-g1"].title == "🎯 Run a marathon"
        assert deadlines["deadline-goal-g1"].status == "pending"
        assert deadlines["deadline-goal-g1"].color == "emerald"
        assert deadlines["deadline-project-p1"].title == "📁 Website"
        assert deadlines["deadline-project-p1"].status == "completed"
        assert deadlines["deadline-project-p1"].color == "blue"

    def test_keeps_operational_items(self, snapshot):
        items = get_schedule_items(snapshot, date(2025, 1, 13), date(2025, 1, 19), ZoomLevel.WEEK)
        types = {i.type for i in items}
        assert types == {ItemType.TASK, ItemType.EVENT, ItemType.ROUTINE, ItemType.DEADLINE}
        assert len([i for i in items if i.type == ItemType.ROUTINE]) == 7


class TestMonthZoom:
    def test_only_deadlines_and_milestones(self, snapshot):
        items = get_schedule_items(snapshot, date(2025, 1, 1), date(2025, 1, 31), ZoomLevel.MONTH)
        assert [i.id for i in items] == ["deadline-project-p1", "deadline-goal-g1", "event-e2"]
        assert items[-1].title == "🚩 Launch"

    def test_plain_task_never_appears(self, snapshot):
        items = get_schedule_items(snapshot, date(2025, 1, 1), date(2025, 1, 31), ZoomLevel.MONTH)
        assert all(i.type != ItemType.TASK for i in items)
        assert all(i.type != ItemType.ROUTINE for i in items)


class TestYearZoom:
    def test_only_strategic_goals(self, snapshot):
        items = get_schedule_items(snapshot, date(2025, 1, 1), date(2025, 12, 31), ZoomLevel.YEAR)

        assert [i.id for i in items] == ["strat-goal-g3", "strat-goal-g2"]
        assert items[0].title == "🔭 Learn Spanish"
        assert items[0].status == "completed"
        assert items[1].status == "pending"
        assert all(i.color == "purple" for i in items)

    def test_plain_task_never_appears(self, snapshot):
        items = get_schedule_items(snapshot, date(2025, 1, 1), date(2025, 12, 31), ZoomLevel.YEAR)
        assert all(i.type == ItemType.DEADLINE for i in items)

    def test_malformed_deadline_skipped(self):
        snap = Snapshot(goals=[Goal(id="g", title="Vague", deadline="someday", type="strategic")])
        assert get_schedule_items(snap, date(2025, 1, 1), date(2025, 12, 31), ZoomLevel.YEAR) == []


class TestTimestampDeadlines:
    """Deadlines exported by the planning app as full ISO timestamps."""

    @pytest.fixture
    def stamped(self):
        return Snapshot(
            tasks=[Task(id="t1", title="Draft", date="2025-01-16", start_time="09:00")],
            events=[Event(id="e1", title="Launch", date="2025-01-20", type="milestone")],
            goals=[
                Goal(id="g1", title="Marathon", deadline="2025-01-17T00:00:00.000Z", type="strategic"),
                Goal(id="g2", title="Garbled", deadline="2025-01-17Tlater", type="strategic"),
            ],
            projects=[Project(id="p1", title="Website", deadline="2025-01-16T00:00:00.000Z")],
        )

    def test_week(self, stamped):
        items = get_schedule_items(stamped, date(2025, 1, 13), date(2025, 1, 19), ZoomLevel.WEEK)
        deadlines = [(i.id, i.date) for i in items if i.type == ItemType.DEADLINE]

        assert deadlines == [("deadline-project-p1", "2025-01-16"), ("deadline-goal-g1", "2025-01-17")]

    def test_week_sorts_normalized_date_with_timed_items(self, stamped):
        items = get_schedule_items(stamped, date(2025, 1, 13), date(2025, 1, 19), ZoomLevel.WEEK)
        assert [i.id for i in items] == ["task-t1", "deadline-project-p1", "deadline-goal-g1"]

    def test_month(self, stamped):
        items = get_schedule_items(stamped, date(2025, 1, 1), date(2025, 1, 31), ZoomLevel.MONTH)
        assert [(i.id, i.date) for i in items] == [
            ("deadline-project-p1", "2025-01-16"),
            ("deadline-goal-g1", "2025-01-17"),
            ("event-e1", "2025-01-20"),
        ]

    def test_year(self, stamped):
        items = get_schedule_items(stamped, date(2025, 1, 1), date(2025, 12, 31), ZoomLevel.YEAR)
        assert [(i.id, i.date, i.title) for i in items] == [("strat-goal-g1", "2025-01-17", "🔭 Marathon")]

    def test_outside_window(self, stamped):
        items = get_schedule_items(stamped, date(2025, 2, 1), date(2025, 2, 28), ZoomLevel.MONTH)
        assert items == []


class TestOrdering:
    def _item(self, item_id: str, day: str, time: str | None = None) -> ScheduleItem:
        return ScheduleItem(id=item_id, type=ItemType.TASK, title=item_id, date=day, time=time,
                            entity_id=item_id, status="pending")

    def test_timed_before_all_day_before_next_day(self):
        items = [
            self._item("next-morning", "2024-01-11", "08:00"),
            self._item("all-day", "2024-01-10"),
            self._item("afternoon", "2024-01-10", "14:00"),
        ]
        assert [i.id for i in sort_schedule_items(items)] == ["afternoon", "all-day", "next-morning"]

    def test_stable_for_ties(self):
        items = [
            self._item("b", "2024-01-10"),
            self._item("a", "2024-01-10"),
            self._item("d", "2024-01-10", "09:00"),
            self._item("c", "2024-01-10", "09:00"),
        ]
        assert [i.id for i in sort_schedule_items(items)] == ["d", "c", "b", "a"]

    def test_end_to_end_ordering(self):
        snap = Snapshot(
            tasks=[
                Task(id="3", title="Next day", date="2024-01-11", start_time="08:00"),
                Task(id="2", title="Untimed", date="2024-01-10"),
                Task(id="1", title="Afternoon", date="2024-01-10", start_time="14:00"),
            ]
        )
        items = get_schedule_items(snap, date(2024, 1, 10), date(2024, 1, 11), ZoomLevel.DAY)
        assert [i.entity_id for i in items] == ["1", "2", "3"]


class TestAggregation:
    def test_idempotent(self, snapshot):
        first = get_schedule_items(snapshot, date(2025, 1, 13), date(2025, 1, 19), ZoomLevel.WEEK)
        second = get_schedule_items(snapshot, date(2025, 1, 13), date(2025, 1, 19), ZoomLevel.WEEK)
        assert first == second

    def test_does_not_mutate_snapshot(self, snapshot, today):
        before = repr(snapshot)
        get_schedule_items(snapshot, today, today, ZoomLevel.WEEK)
        assert repr(snapshot) == before

    def test_ids_unique(self, snapshot):
        snapshot.tasks.append(Task(id="t1", title="Duplicate", date="2025-01-15"))
        items = get_schedule_items(snapshot, date(2025, 1, 13), date(2025, 1, 19), ZoomLevel.WEEK)
        ids = [i.id for i in items]
        assert len(ids) == len(set(ids))
        assert next(i for i in items if i.id == "task-t1").title == "Write report"

    def test_empty_snapshot(self, today):
        assert get_schedule_items(Snapshot(), today, today, ZoomLevel.WEEK) == []

    def test_window_bounds_inclusive(self):
        snap = Snapshot(tasks=[
            Task(id="a", title="First", date="2025-01-13"),
            Task(id="b", title="Last", date="2025-01-19"),
            Task(id="c", title="Outside", date="2025-01-20"),
        ])
        items = get_schedule_items(snap, date(2025, 1, 13), date(2025, 1, 19), ZoomLevel.DAY)
        assert [i.entity_id for i in items] == ["a", "b"]
