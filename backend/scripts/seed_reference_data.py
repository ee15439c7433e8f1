#!/usr/bin/env python
"""Seed roles, permissions and runtime configuration."""

import asyncio
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from marketplace_api.config import get_settings
from marketplace_api.services.seed_service import SeedService


async def seed_reference_data(seed_dir: Path | None = None) -> dict[str, int]:
    """Load the seed CSV files into the configured database."""
    settings = get_settings()
    engine = create_async_engine(settings.async_database_url, echo=False)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with session_maker() as session:
            results = await SeedService(session, seed_dir).seed_all()
    finally:
        await engine.dispose()

    for table, added in results.items():
        print(f"{table}: {added} added")
    return results


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed reference data")
    parser.add_argument(
        "--seed-dir",
        type=Path,
        help="Directory with seed CSV files (defaults to the packaged ones)",
    )
    args = parser.parse_args()

    asyncio.run(seed_reference_data(args.seed_dir))
