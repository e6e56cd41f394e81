"""Seed the database with synthetic ticket entries.

Usage:
    python -m scripts.seed_data [count]
"""

from __future__ import annotations

import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from boxoffice.core.config import Settings  # noqa: E402
from boxoffice.core.database import close_pool, open_pool  # noqa: E402
from boxoffice.core.errors import ConflictError  # noqa: E402
from boxoffice.repositories.entry_repository import EntryRepository  # noqa: E402
from tests.factories.data_factories import build_entry_batch  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def seed_entries(repo: EntryRepository, count: int) -> int:
    """Insert *count* synthetic entries. Returns how many were stored."""
    created = 0
    for payload in build_entry_batch(count):
        try:
            repo.create(data=payload)
        except ConflictError:
            logger.info("Skipping duplicate customer id")
            continue
        created += 1
    return created


def main() -> None:
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 25
    pool = open_pool(Settings())
    try:
        created = seed_entries(EntryRepository(pool=pool), count)
    finally:
        close_pool(pool)
    logger.info("Seeded %d entries", created)


if __name__ == "__main__":
    main()
