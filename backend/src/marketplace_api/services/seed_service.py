"""Reference data seeding service.

Loads roles, permissions, role-permission links, feature flags and
configuration parameters from the ``;``-separated CSV files shipped in
``marketplace_api/seed``. Seeding is idempotent: rows whose code or key
already exists are left untouched.
"""

import csv
import logging
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.repositories.config_repository import ConfigRepository
from marketplace_api.repositories.permission_repository import PermissionRepository
from marketplace_api.repositories.role_repository import RoleRepository

logger = logging.getLogger(__name__)

CSV_DELIMITER = ";"


def default_seed_dir() -> Traversable:
    """Directory of the packaged seed files."""
    return resources.files("marketplace_api") / "seed"


def read_seed_file(seed_dir: Traversable | Path, name: str) -> list[dict[str, str]]:
    """Read a seed CSV file into a list of rows keyed by header.

    Args:
        seed_dir: Directory containing the seed files
        name: File name, e.g. ``"roles.csv"``

    Returns:
        Rows with stripped values; empty values become empty strings
    """
    content = (seed_dir / name).read_text(encoding="utf-8")
    reader = csv.DictReader(content.splitlines(), delimiter=CSV_DELIMITER)
    return [
        {key.strip(): (value or "").strip() for key, value in row.items()}
        for row in reader
    ]


def parse_bool(value: str) -> bool:
    """Parse a CSV boolean (``true``/``false``)."""
    return value.strip().lower() in ("true", "1", "yes")


class SeedService:
    """Loads reference data into the database."""

    def __init__(self, session: AsyncSession, seed_dir: Traversable | Path | None = None) -> None:
        """Initialize the service.

        Args:
            session: Database session
            seed_dir: Directory of seed files (defaults to the packaged ones)
        """
        self.session = session
        self.seed_dir = seed_dir if seed_dir is not None else default_seed_dir()
        self.role_repo = RoleRepository(session)
        self.permission_repo = PermissionRepository(session)
        self.config_repo = ConfigRepository(session)

    async def seed_all(self) -> dict[str, int]:
        """Seed every reference table.

        Returns:
            Dict with the number of rows inserted per table
        """
        results = {
            "roles": await self.seed_roles(),
            "permissions": await self.seed_permissions(),
            "role_permissions": await self.seed_role_permissions(),
            "config_features": await self.seed_features(),
            "config_parameters": await self.seed_parameters(),
        }
        await self.session.commit()

        if any(results.values()):
            logger.info(f"Reference data seeded: {results}")
        else:
            logger.debug("Reference data seed: no changes needed")
        return results

    async def seed_roles(self) -> int:
        """Insert missing roles."""
        added = 0
        for row in read_seed_file(self.seed_dir, "roles.csv"):
            if await self.role_repo.get_by_code(row["code"]) is not None:
                continue
            await self.role_repo.create_role(
                code=row["code"],
                name=row["name"],
                level=int(row["level"]),
                description=row["description"] or None,
            )
            added += 1
        return added

    async def seed_permissions(self) -> int:
        """Insert missing permissions."""
        added = 0
        for row in read_seed_file(self.seed_dir, "permissions.csv"):
            if await self.permission_repo.get_by_code(row["code"]) is not None:
                continue
            await self.permission_repo.create_permission(
                code=row["code"], description=row["description"] or None
            )
            added += 1
        return added

    async def seed_role_permissions(self) -> int:
        """Insert missing role-permission links.

        Raises:
            ValueError: If a row references an unknown role or permission
        """
        added = 0
        existing: dict[str, set] = {}
        for row in read_seed_file(self.seed_dir, "role_permissions.csv"):
            role = await self.role_repo.get_by_code(row["role_code"])
            permission = await self.permission_repo.get_by_code(row["permission_code"])
            if role is None or permission is None:
                raise ValueError(
                    f"Unknown role or permission in seed link: "
                    f"{row['role_code']} -> {row['permission_code']}"
                )

            if role.code not in existing:
                existing[role.code] = await self.role_repo.get_permission_ids(role.id)
            if permission.id in existing[role.code]:
                continue

            await self.role_repo.add_permission(role.id, permission.id)
            existing[role.code].add(permission.id)
            added += 1
        return added

    async def seed_features(self) -> int:
        """Insert missing feature flags."""
        added = 0
        for row in read_seed_file(self.seed_dir, "config_features.csv"):
            if await self.config_repo.get_feature(row["code"]) is not None:
                continue
            await self.config_repo.add_feature(
                code=row["code"],
                name=row["name"],
                requires_auth=parse_bool(row["requires_auth"]),
                required_role=row["required_role"] or None,
                is_active=parse_bool(row["is_active"]),
            )
            added += 1
        return added

    async def seed_parameters(self) -> int:
        """Insert missing configuration parameters."""
        added = 0
        for row in read_seed_file(self.seed_dir, "config_parameters.csv"):
            if await self.config_repo.get_parameter(row["key"]) is not None:
                continue
            await self.config_repo.add_parameter(
                key=row["key"],
                value=row["value"],
                description=row["description"] or None,
                category=row["category"] or None,
            )
            added += 1
        return added
