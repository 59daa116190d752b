"""
Unit tests for PlanDayRepository.
"""

import pytest
from pydantic import ValidationError

from mdb_typed.models import CreatePlanDayInput, UpdatePlanDayInput
from mdb_typed.repositories import PlanDayRepository


def plan_day(plan_id, day_of_week, sort_order, name="Day"):
    return {"plan_id": plan_id, "day_of_week": day_of_week, "name": name, "sort_order": sort_order}


@pytest.mark.unit
class TestPlanDayRepository:
    @pytest.mark.asyncio
    async def test_create_has_no_timestamps(self, fake_collection):
        repo = PlanDayRepository(fake_collection)

        day = await repo.create(
            CreatePlanDayInput(plan_id="p1", day_of_week=2, name="Legs", sort_order=1)
        )

        assert day.day_of_week == 2
        stored = next(iter(fake_collection.docs.values()))
        assert "created_at" not in stored

    def test_create_input_rejects_out_of_range_day(self):
        with pytest.raises(ValidationError):
            CreatePlanDayInput(plan_id="p1", day_of_week=7, name="Legs", sort_order=0)

    @pytest.mark.asyncio
    async def test_find_by_plan_id_skips_invalid_days(self, fake_collection):
        fake_collection.seed_raw(
            plan_day("p1", 1, 2, name="Wed"),
            plan_day("p1", 6.5, 0, name="bad fraction"),
            plan_day("p1", 7, 1, name="bad range"),
            plan_day("p1", "3", 3, name="bad string"),
            plan_day("p1", 0, 0, name="Mon"),
            plan_day("p2", 1, 0, name="other plan"),
        )
        repo = PlanDayRepository(fake_collection)

        days = await repo.find_by_plan_id("p1")

        assert [d.name for d in days] == ["Mon", "Wed"]

    @pytest.mark.asyncio
    async def test_find_all_orders_by_plan_then_sort_order(self, fake_collection):
        fake_collection.seed_raw(
            plan_day("p2", 1, 0, name="p2-a"),
            plan_day("p1", 1, 1, name="p1-b"),
            plan_day("p1", 1, 0, name="p1-a"),
        )
        repo = PlanDayRepository(fake_collection)

        days = await repo.find_all()

        assert [d.name for d in days] == ["p1-a", "p1-b", "p2-a"]
        assert fake_collection.find.call_args.args[0] == {}

    @pytest.mark.asyncio
    async def test_update_with_explicit_none_leaves_field_unchanged(self, fake_collection):
        repo = PlanDayRepository(fake_collection)
        day = await repo.create(
            CreatePlanDayInput(plan_id="p1", day_of_week=1, name="Push", sort_order=0)
        )

        updated = await repo.update(day.id, UpdatePlanDayInput(name=None, sort_order=2))

        assert updated.name == "Push"
        assert updated.sort_order == 2
        stored = next(iter(fake_collection.docs.values()))
        assert stored["name"] == "Push"
        assert [d.id for d in await repo.find_all()] == [day.id]

    @pytest.mark.asyncio
    async def test_update_with_only_none_writes_nothing(self, fake_collection):
        repo = PlanDayRepository(fake_collection)
        day = await repo.create(
            CreatePlanDayInput(plan_id="p1", day_of_week=1, name="Push", sort_order=0)
        )

        assert await repo.update(day.id, UpdatePlanDayInput(name=None)) == day
        fake_collection.update_one.assert_not_awaited()
