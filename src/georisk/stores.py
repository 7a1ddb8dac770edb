"""
In-memory profile and event stores.

Stand-ins for the external profile and event databases. Records are
kept as frozen models, so handing them to the engine never exposes
anything mutable.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional, Union

from georisk.relevance.models import Event, Profile

logger = logging.getLogger(__name__)


class InMemoryProfileStore:
    """Profile lookup by identifier."""

    def __init__(self, profiles: Optional[Iterable[Profile]] = None):
        self._profiles: dict[str, Profile] = {}
        for profile in profiles or []:
            self.add(profile)

    def add(self, profile: Profile | Mapping[str, Any]) -> Profile:
        if not isinstance(profile, Profile):
            profile = Profile.from_dict(profile)
        if not profile.id:
            raise ValueError("Stored profiles need an id")
        self._profiles[profile.id] = profile
        return profile

    async def get_by_id(self, profile_id: str) -> Optional[Profile]:
        """Get profile by ID."""
        return self._profiles.get(profile_id)

    def __len__(self) -> int:
        return len(self._profiles)


class InMemoryEventStore:
    """Event storage with an active-status filter."""

    def __init__(self, events: Optional[Iterable[Event]] = None):
        self._events: list[Event] = []
        for event in events or []:
            self.add(event)

    def add(self, event: Event | Mapping[str, Any]) -> Event:
        if not isinstance(event, Event):
            event = Event.from_dict(event)
        self._events.append(event)
        return event

    async def list_active(self) -> list[Event]:
        """Events whose status is active, in insertion order."""
        return [event for event in self._events if event.is_active]

    def __len__(self) -> int:
        return len(self._events)


def load_seed_data(
    path: Union[str, Path],
) -> tuple[InMemoryProfileStore, InMemoryEventStore]:
    """
    Build stores from a JSON document of the form
    {"profiles": [...], "events": [...]}.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    profiles = InMemoryProfileStore()
    for record in data.get("profiles", []):
        profiles.add(record)

    events = InMemoryEventStore()
    for record in data.get("events", []):
        events.add(record)

    logger.info(f"Loaded seed data from {path}: {len(profiles)} profiles, {len(events)} events")
    return profiles, events
