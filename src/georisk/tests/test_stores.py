"""
Tests for the in-memory stores and seed data loading.
"""

from pathlib import Path

import pytest

from georisk.stores import InMemoryEventStore, InMemoryProfileStore, load_seed_data

SEED_FILE = Path(__file__).parents[3] / "data" / "sample_seed.json"


class TestProfileStore:
    @pytest.mark.asyncio
    async def test_get_by_id(self, tech_profile):
        store = InMemoryProfileStore([tech_profile])

        assert await store.get_by_id("profile-tech") is tech_profile
        assert await store.get_by_id("missing") is None

    def test_requires_id(self):
        with pytest.raises(ValueError):
            InMemoryProfileStore().add({"industry": "technology"})


class TestEventStore:
    @pytest.mark.asyncio
    async def test_list_active(self, trade_event):
        store = InMemoryEventStore([trade_event])
        store.add({"id": "evt-old", "title": "Resolved", "status": "resolved"})

        active = await store.list_active()

        assert active == [trade_event]
        assert len(store) == 2


@pytest.mark.asyncio
async def test_load_seed_data():
    profiles, events = load_seed_data(SEED_FILE)

    assert len(profiles) == 1
    assert len(events) == 5
    assert (await profiles.get_by_id("demo-tech")).industry == "Technology"
    assert len(await events.list_active()) == 4
