"""
Tests for the Rating Ledger

Tests cover:
- Resume skill import (idempotence, case-insensitive identity)
- Project success / failure / cancellation rules and bounds
- Derived fields (overall rating, success rate, skill level, top skills)
- History clearing and deletion
- Persistence failures leave stored state untouched
"""

import pytest

from gigcampus.exceptions import PersistenceError
from gigcampus.schemas.rating import ProjectOutcome, RatingReason, UserRatingData
from gigcampus.services.rating_ledger import (
    RatingLedger,
    apply_project_success,
    calculate_overall_rating,
    calculate_skill_level,
    calculate_success_rate,
)
from gigcampus.services.rating_repository import InMemoryRatingRepository


class FlakyRepository(InMemoryRatingRepository):
    """In-memory repository whose writes can be switched off."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False

    async def put(self, user_id, data):
        if self.fail_writes:
            raise PersistenceError("store unavailable")
        await super().put(user_id, data)


class TestResumeImport:
    """Test importing resume skills."""

    @pytest.mark.asyncio
    async def test_import_is_idempotent_for_skills(self, ledger):
        await ledger.import_skills_from_resume("user-1", ["Python", "React"])
        data = await ledger.import_skills_from_resume("user-1", ["Python", "React"])

        assert [skill.skill for skill in data.skills] == ["Python", "React"]
        assert all(skill.rating == 0.0 for skill in data.skills)
        assert len(data.rating_history) == 2
        assert data.overall_rating == 0.0

    @pytest.mark.asyncio
    async def test_skill_identity_is_case_insensitive(self, ledger):
        data = await ledger.import_skills_from_resume("user-1", ["Python", "python"])

        assert [skill.skill for skill in data.skills] == ["Python"]

    @pytest.mark.asyncio
    async def test_import_history_entry(self, ledger):
        data = await ledger.import_skills_from_resume("user-1", ["Go", "Rust"])
        entry = data.rating_history[-1]

        assert entry.reason == RatingReason.RESUME_UPLOAD
        assert entry.change == 0.0
        assert entry.user_id == "user-1"
        assert entry.description == "Skills extracted from resume: Go, Rust"


class TestProjectOutcomes:
    """Test project lifecycle rules."""

    @pytest.mark.asyncio
    async def test_success_raises_known_skill(self, ledger):
        await ledger.import_skills_from_resume("user-1", ["React"])
        data = await ledger.record_project_success("user-1", ["react"])

        react = data.find_skill("React")
        assert react.rating == 0.5
        assert react.projects_completed == 1
        assert data.total_projects_completed == 1
        assert data.rating_history[-1].reason == RatingReason.PROJECT_COMPLETED

    @pytest.mark.asyncio
    async def test_success_is_monotonic_and_capped(self, ledger):
        await ledger.import_skills_from_resume("user-1", ["React"])

        previous = 0.0
        for _ in range(12):
            data = await ledger.record_project_success("user-1", ["React"])
            rating = data.find_skill("React").rating
            assert rating >= previous
            previous = rating

        assert previous == 5.0
        assert data.rating_history[-1].change == 0.0

    @pytest.mark.asyncio
    async def test_success_creates_unknown_skill(self, ledger):
        data = await ledger.record_project_success("user-1", ["Kotlin"])

        kotlin = data.find_skill("Kotlin")
        assert kotlin.rating == 1.0
        assert kotlin.projects_completed == 1
        assert data.rating_history[-1].change == 1.0

    @pytest.mark.asyncio
    async def test_failure_ignores_unknown_skill(self, ledger):
        data = await ledger.record_project_failure("user-1", ["Kotlin"])

        assert data.skills == []
        assert data.total_projects_failed == 1
        assert data.rating_history[-1].change == 0.0

    @pytest.mark.asyncio
    async def test_failure_floor_is_zero(self, ledger):
        await ledger.import_skills_from_resume("user-1", ["React"])
        data = await ledger.record_project_failure("user-1", ["React"])

        react = data.find_skill("React")
        assert react.rating == 0.0
        assert react.projects_failed == 1

    @pytest.mark.asyncio
    async def test_failure_decrease(self, ledger):
        await ledger.record_project_success("user-1", ["React"])
        data = await ledger.record_project_failure("user-1", ["React"])

        assert data.find_skill("React").rating == pytest.approx(0.7)
        assert data.rating_history[-1].change == pytest.approx(-0.3)
        assert data.rating_history[-1].reason == RatingReason.PROJECT_FAILED

    @pytest.mark.asyncio
    async def test_cancellation(self, ledger):
        await ledger.record_project_success("user-1", ["React"])
        data = await ledger.record_project_cancellation("user-1", ["React"])

        assert data.find_skill("React").rating == pytest.approx(0.8)
        assert data.total_projects_failed == 1
        assert data.rating_history[-1].reason == RatingReason.PROJECT_FAILED
        assert data.rating_history[-1].description.startswith("Project cancelled")

    @pytest.mark.asyncio
    async def test_outcome_dispatch(self, ledger):
        await ledger.record_project_outcome("user-1", ProjectOutcome.COMPLETED, ["React"])
        data = await ledger.record_project_outcome("user-1", ProjectOutcome.FAILED, ["React"])

        assert data.total_projects_completed == 1
        assert data.total_projects_failed == 1

    def test_pure_mutation_does_not_touch_input(self):
        original = UserRatingData()
        updated = apply_project_success(original, "user-1", ["React"])

        assert original.skills == []
        assert original.rating_history == []
        assert len(updated.skills) == 1


class TestDerivedValues:
    """Test overall rating, stats and rankings."""

    def test_overall_rating_rounds_half_up(self):
        data = apply_project_success(UserRatingData(), "u", ["A"])
        data.skills[0].rating = 1.0
        data = apply_project_success(data, "u", ["B"])
        data.skills[1].rating = 0.5

        assert calculate_overall_rating(data.skills) == 0.8

    def test_overall_rating_empty(self):
        assert calculate_overall_rating([]) == 0.0

    def test_success_rate(self):
        assert calculate_success_rate(3, 1) == 75.0
        assert calculate_success_rate(0, 0) == 0.0
        assert calculate_success_rate(1, 2) == 33.3

    def test_skill_level(self):
        assert calculate_skill_level(4.5, 0) == "Novice"
        assert calculate_skill_level(2.5, 3) == "Intermediate"
        assert calculate_skill_level(3.5, 10) == "Advanced"
        assert calculate_skill_level(4.5, 20) == "Expert"

    @pytest.mark.asyncio
    async def test_stats_after_mixed_outcomes(self, ledger):
        for _ in range(3):
            await ledger.record_project_success("user-1", ["React"])
        await ledger.record_project_failure("user-1", ["React"])

        stats = await ledger.get_stats("user-1")

        assert stats.success_rate == 75.0
        assert stats.total_projects_completed == 3
        assert stats.total_projects_failed == 1
        assert stats.total_skills == 1
        assert stats.top_skills[0].skill == "React"

    @pytest.mark.asyncio
    async def test_top_skills_stable_on_ties(self, ledger):
        await ledger.import_skills_from_resume("user-1", ["A", "B", "C"])
        await ledger.record_project_success("user-1", ["C"])

        top = await ledger.get_top_skills("user-1", limit=3)

        assert [skill.skill for skill in top] == ["C", "A", "B"]

    @pytest.mark.asyncio
    async def test_stats_for_unknown_user(self, ledger):
        stats = await ledger.get_stats("nobody")

        assert stats.overall_rating == 0.0
        assert stats.success_rate == 0.0
        assert stats.top_skills == []
        assert stats.skill_level == "Novice"


class TestHistoryAndDeletion:
    """Test clearing history and deleting ledgers."""

    @pytest.mark.asyncio
    async def test_reading_unknown_user_does_not_persist(self, ledger, repository):
        data = await ledger.get_rating_data("nobody")

        assert data.skills == []
        assert await repository.get("nobody") is None

    @pytest.mark.asyncio
    async def test_clear_history_keeps_stats(self, ledger):
        await ledger.record_project_success("user-1", ["React"])
        before = await ledger.get_stats("user-1")

        data = await ledger.clear_history("user-1")
        after = await ledger.get_stats("user-1")

        assert data.rating_history == []
        assert after.overall_rating == before.overall_rating
        assert after.total_projects_completed == before.total_projects_completed
        assert after.total_skills == before.total_skills

    @pytest.mark.asyncio
    async def test_delete_all(self, ledger, repository):
        await ledger.record_project_success("user-1", ["React"])
        await ledger.delete_all("user-1")

        assert await repository.get("user-1") is None
        data = await ledger.get_rating_data("user-1")
        assert data.skills == []
        assert data.total_projects_completed == 0


class TestPersistenceFailures:
    """Test that failed writes are surfaced and leave state unchanged."""

    @pytest.mark.asyncio
    async def test_failed_write_leaves_state(self):
        repository = FlakyRepository()
        ledger = RatingLedger(repository)
        await ledger.record_project_success("user-1", ["React"])

        repository.fail_writes = True
        with pytest.raises(PersistenceError):
            await ledger.record_project_success("user-1", ["React"])

        data = await ledger.get_rating_data("user-1")
        assert data.find_skill("React").rating == 1.0
        assert data.total_projects_completed == 1
        assert len(data.rating_history) == 1
