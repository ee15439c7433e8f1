"""Tests for DTO and domain model configuration."""

from types import SimpleNamespace
from uuid import uuid4

from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.domain.role import RoleCode
from marketplace_api.models.dto.vehicle import EmissionResponse, ProviderInfo


class TestCamelModel:
    """Tests for camelCase wire names."""

    def test_accepts_both_spellings(self) -> None:
        camel = ProviderInfo.model_validate({"providerName": "ademe", "providerVersion": "1.0.0"})
        snake = ProviderInfo(provider_name="ademe", provider_version="1.0.0")

        assert camel == snake

    def test_dumps_camel_case(self) -> None:
        response = EmissionResponse(
            co2_g_km=128,
            euro_norm="Euro 6d",
            energy_class="B",
            fuel_type="essence",
            provider=ProviderInfo(provider_name="mock", provider_version="1.0.0"),
        )

        dumped = response.model_dump(by_alias=True)

        assert dumped["co2GKm"] == 128
        assert dumped["provider"] == {"providerName": "mock", "providerVersion": "1.0.0"}


class TestCallerContext:
    """Tests for the caller context."""

    def test_built_from_attributes(self) -> None:
        user_id = uuid4()
        user = SimpleNamespace(
            id=user_id, email="seller@example.com", roles=["buyer"], azure_ad_b2c_id="oid"
        )

        caller = CallerContext.model_validate(user)

        assert caller.id == user_id
        assert caller.has_role(RoleCode.BUYER)
