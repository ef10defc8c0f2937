"""Unit tests for the point ledger, rankings, check-ins, resources and login."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from geckotrack.domain import (
    CheckInStatus,
    GeckoLevel,
    NotFoundError,
    ResourceType,
    Semester,
    UserRole,
    ValidationError,
)
from geckotrack.domain.reference_data import PointAward
from geckotrack.domain.services import TrackerService
from geckotrack.infrastructure.repositories import EntityStore

from tests.utils import add_students

pytestmark = pytest.mark.asyncio


class TestPointLedger:
    async def test_positive_adjustment(self, tracker: TrackerService) -> None:
        assert await tracker.adjust_points("student1", 3) == 15
        assert (await tracker.get_student("student1")).points == 15

    async def test_decrement_clamps_at_zero(
        self, empty_store: EntityStore
    ) -> None:
        await add_students(empty_store, ("dana", "Dana", 1))
        tracker = TrackerService(empty_store)

        assert await tracker.adjust_points("dana", -5) == 0
        assert (await tracker.get_student("dana")).points == 0

    async def test_repeated_penalties_never_go_negative(self, tracker: TrackerService) -> None:
        await asyncio.gather(
            *(tracker.award("student1", PointAward.LATE_PENALTY) for _ in range(10))
        )
        assert (await tracker.get_student("student1")).points == 0

    @pytest.mark.parametrize(
        ("award", "expected"),
        [
            (PointAward.CLASSWORK, 15),
            (PointAward.QUIZ, 14),
            (PointAward.TOP_PERFORMER, 22),
            (PointAward.LATE_PENALTY, 10),
            ("quiz", 14),
        ],
    )
    async def test_named_awards(self, tracker: TrackerService, award, expected: int) -> None:
        assert await tracker.award("student1", award) == expected

    async def test_unknown_award_name(self, tracker: TrackerService) -> None:
        with pytest.raises(ValidationError):
            await tracker.award("student1", "bonus")

    async def test_unknown_student(self, tracker: TrackerService) -> None:
        with pytest.raises(NotFoundError):
            await tracker.adjust_points("ghost", 5)


class TestLeaderboard:
    async def test_sorted_by_points_with_stable_ties(self, empty_store: EntityStore) -> None:
        await add_students(
            empty_store,
            ("alice", "Alice", 42),
            ("bob", "Bob", 42),
            ("charlie", "Charlie", 50),
        )
        tracker = TrackerService(empty_store)

        first = [s.username for s in await tracker.leaderboard()]
        second = [s.username for s in await tracker.leaderboard()]

        assert first == ["charlie", "alice", "bob"]
        assert second == first

    async def test_rank_of(self, tracker: TrackerService) -> None:
        assert await tracker.rank_of("student3") == 1
        assert await tracker.rank_of("student2") == 2
        assert await tracker.rank_of("student1") == 3
        assert await tracker.rank_of("admin") is None
        assert await tracker.rank_of("ghost") is None

    async def test_ranked_entries_carry_level(self, tracker: TrackerService) -> None:
        ranked = await tracker.ranked_leaderboard()
        assert [(e.rank, e.student.username, e.level) for e in ranked] == [
            (1, "student3", GeckoLevel.STALKER),
            (2, "student2", GeckoLevel.CLIMBER),
            (3, "student1", GeckoLevel.HATCHLING),
        ]

    async def test_rank_follows_point_changes(self, tracker: TrackerService) -> None:
        await tracker.adjust_points("student1", 40)
        assert await tracker.rank_of("student1") == 1


class TestCheckIns:
    async def test_schedule_overwrites_previous_date(self, tracker: TrackerService) -> None:
        await tracker.schedule_check_in("student2", "2099-03-01")
        updated = await tracker.schedule_check_in("student2", date(2099, 4, 1))

        assert updated.check_in_date == date(2099, 4, 1)
        assert (await tracker.get_student("student2")).check_in_date == date(2099, 4, 1)

    async def test_schedule_unknown_student(self, tracker: TrackerService) -> None:
        with pytest.raises(NotFoundError):
            await tracker.schedule_check_in("ghost", "2099-01-01")

    async def test_schedule_rejects_invalid_date(self, tracker: TrackerService) -> None:
        with pytest.raises(ValidationError):
            await tracker.schedule_check_in("student1", "soon")

    async def test_past_check_ins_stay_stored(self, tracker: TrackerService) -> None:
        scheduled = await tracker.scheduled_check_ins()
        assert [s.username for s in scheduled] == ["student2"]

        bob = scheduled[0]
        assert tracker.check_in_status(bob, "2024-01-01") is CheckInStatus.NONE
        assert bob.check_in_date == date(2023, 11, 20)

    async def test_status_relative_to_today(self, tracker: TrackerService) -> None:
        alice = await tracker.schedule_check_in("student1", "2024-01-01")
        assert tracker.check_in_status(alice, "2024-01-01") is CheckInStatus.SCHEDULED_TODAY
        assert tracker.check_in_status(alice, "2023-12-31") is CheckInStatus.SCHEDULED_FUTURE


class TestResources:
    async def test_publish_and_filter_by_semester(self, tracker: TrackerService) -> None:
        first = await tracker.publish_resource(
            title="Loops worksheet",
            resource_type="worksheet",
            semester="1.1",
            week=2,
            filename="loops.pdf",
        )
        await tracker.publish_resource(
            title="2022 paper",
            resource_type=ResourceType.PAST_PAPER,
            semester=Semester.S2_1,
            week=10,
            filename="2022.pdf",
            uploaded_by="Ms. Helper",
        )
        third = await tracker.publish_resource(
            title="Loops worksheet",
            resource_type="worksheet",
            semester="1.1",
            week=2,
            filename="loops.pdf",
        )

        assert first.uploaded_by == "Mr. Teacher"
        assert len(await tracker.list_resources()) == 3
        assert [r.id for r in await tracker.list_resources("1.1")] == [first.id, third.id]
        assert await tracker.list_resources(Semester.S2_2) == []

    async def test_grouped_by_semester(self, tracker: TrackerService) -> None:
        await tracker.publish_resource(
            title="Arrays",
            resource_type="worksheet",
            semester="1.2",
            week=1,
            filename="arrays.pdf",
        )
        grouped = await tracker.resources_by_semester()

        assert list(grouped) == [Semester.S1_1, Semester.S1_2, Semester.S2_1, Semester.S2_2]
        assert [r.title for r in grouped[Semester.S1_2]] == ["Arrays"]
        assert grouped[Semester.S1_1] == []

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": " "},
            {"filename": ""},
            {"resource_type": "video"},
            {"week": 12},
        ],
    )
    async def test_publish_validation(self, tracker: TrackerService, overrides: dict) -> None:
        fields = {
            "title": "Sets",
            "resource_type": "worksheet",
            "semester": "1.1",
            "week": 1,
            "filename": "sets.pdf",
        }
        fields.update(overrides)
        with pytest.raises(ValidationError):
            await tracker.publish_resource(**fields)
        assert await tracker.list_resources() == []


class TestLogin:
    async def test_teacher_sentinel(self, tracker: TrackerService) -> None:
        identity = await tracker.login("admin")
        assert identity.role is UserRole.TEACHER
        assert identity.name == "Mr. Teacher"

    async def test_student_login(self, tracker: TrackerService) -> None:
        identity = await tracker.login("student1")
        assert identity.username == "student1"
        assert identity.name == "Alice Smith"
        assert identity.role is UserRole.STUDENT

    async def test_unknown_user(self, tracker: TrackerService) -> None:
        with pytest.raises(NotFoundError):
            await tracker.login("nobody")

    async def test_empty_username(self, tracker: TrackerService) -> None:
        with pytest.raises(ValidationError):
            await tracker.login("")

    async def test_custom_teacher_username(self, store: EntityStore) -> None:
        tracker = TrackerService(store, teacher_username="mentor", teacher_name="Ms. Mentor")
        assert (await tracker.login("mentor")).name == "Ms. Mentor"
        with pytest.raises(NotFoundError):
            await tracker.login("admin")


class TestStudentOverview:
    async def test_overview(self, tracker: TrackerService) -> None:
        await tracker.submit_study(
            student_username="student2",
            semester="1.1",
            week=1,
            description="Revision",
        )
        overview = await tracker.student_overview("student2", "2024-01-01")

        assert overview.student.points == 33
        assert overview.level is GeckoLevel.STALKER
        assert overview.grade == "C"
        assert overview.progress.next == "Alpha Gecko"
        assert overview.rank == 2
        assert overview.check_in is CheckInStatus.NONE
        assert [b.badge.id for b in overview.badges if b.earned] == ["speed_gecko"]
        assert len(overview.badges) == 4
        assert [s.week for s in overview.submissions] == [1]

    async def test_overview_unknown_student(self, tracker: TrackerService) -> None:
        with pytest.raises(NotFoundError):
            await tracker.student_overview("ghost", "2024-01-01")
