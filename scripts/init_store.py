"""
Initialize the configured store (tables + bootstrap roster) and print the leaderboard.

Run with:
    python scripts/init_store.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Allow running from a checkout without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from geckotrack.core.config import get_settings
from geckotrack.core.logging import setup_logging
from geckotrack.domain.services import TrackerService
from geckotrack.infrastructure.repositories import EntityStore


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    store = EntityStore.from_settings(settings)
    try:
        await store.init()
        tracker = TrackerService(
            store,
            teacher_username=settings.teacher_username,
            teacher_name=settings.teacher_name,
        )
        print(f"Environment: {settings.environment}")
        print(f"Database: {settings.database_url}")
        for entry in await tracker.ranked_leaderboard():
            student = entry.student
            print(f"{entry.rank:>3}. {student.name:<20} {student.points:>4} pts  {entry.level.value}")
    finally:
        await store.dispose()


if __name__ == "__main__":
    asyncio.run(main())
