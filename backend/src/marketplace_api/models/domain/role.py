"""Role domain model."""

from enum import StrEnum


class RoleCode(StrEnum):
    """Known role codes, in ascending hierarchy level."""

    VISITOR = "visitor"
    BUYER = "buyer"
    PRIVATE_SELLER = "private_seller"
    PROFESSIONAL_SELLER = "professional_seller"
    MODERATOR = "moderator"
    ADMINISTRATOR = "administrator"

    @classmethod
    def parse(cls, values: list[str]) -> list["RoleCode"]:
        """Convert raw role codes, dropping codes this service does not know."""
        known = {member.value for member in cls}
        return [cls(value) for value in values if value in known]
