"""RappelConso (French government recall registry) provider."""

from typing import Any

import httpx

from marketplace_api.exceptions import DecodeFailure
from marketplace_api.models.dto.vehicle import RecallCampaign, RecallRequest, RecallResponse
from marketplace_api.providers.vehicle.base import HttpVehicleDataProvider, RecallProvider

RAPPELCONSO_BASE_URL = (
    "https://data.economie.gouv.fr/api/explore/v2.1/catalog/datasets/rappelconso0/records"
)

MAX_RECORDS = 50

SELECTED_FIELDS = ",".join(
    [
        "reference_fiche",
        "nom_de_la_marque_du_produit",
        "noms_des_modeles_ou_references",
        "motif_du_rappel",
        "risques_encourus_par_le_consommateur",
        "date_de_publication",
    ]
)

DEFAULT_TITLE = "Rappel véhicule"


def escape_literal(value: str) -> str:
    """Escape a value for use inside a double-quoted ODSQL string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_where_clause(request: RecallRequest) -> str:
    """Build the ODSQL filter for a make/model lookup."""
    clauses = [
        'sous_categorie_de_produit = "Automobiles"',
        f'nom_de_la_marque_du_produit like "{escape_literal(request.make)}"',
    ]
    if request.model:
        clauses.append(f'noms_des_modeles_ou_references like "*{escape_literal(request.model)}*"')
    return " AND ".join(clauses)


def classify_risk(risks: str | None) -> str:
    """Derive a coarse risk level from the free-text risk description."""
    if not risks:
        return "unknown"
    text = risks.lower()
    if "incendie" in text or "blessure grave" in text:
        return "high"
    if "blessure" in text or "accident" in text:
        return "medium"
    return "low"


def split_models(models: str | None) -> list[str]:
    """Split the comma-separated affected models field."""
    if not models:
        return []
    return [m.strip() for m in models.split(",") if m.strip()]


class RappelConsoRecallProvider(HttpVehicleDataProvider, RecallProvider):
    """RappelConso recall campaigns (automobiles only)."""

    provider_name = "rappelconso"
    provider_version = "1.0.0"

    def __init__(
        self, http_client: httpx.AsyncClient, base_url: str = RAPPELCONSO_BASE_URL
    ) -> None:
        super().__init__(http_client, base_url)

    def _to_campaign(self, record: dict[str, Any], request: RecallRequest) -> RecallCampaign:
        return RecallCampaign(
            id=record.get("reference_fiche") or "unknown",
            title=record.get("motif_du_rappel") or DEFAULT_TITLE,
            description=record.get("risques_encourus_par_le_consommateur") or "",
            published_date=record.get("date_de_publication") or "",
            risk_level=classify_risk(record.get("risques_encourus_par_le_consommateur")),
            manufacturer=record.get("nom_de_la_marque_du_produit") or request.make,
            affected_models=split_models(record.get("noms_des_modeles_ou_references")),
        )

    async def get_recalls(self, request: RecallRequest) -> RecallResponse:
        """Look up recall campaigns for a make and optional model.

        An empty result set is a valid answer, not a failure.

        Raises:
            FetchFailure: If the request fails
            DecodeFailure: If the payload has an unexpected shape
        """
        params = {
            "where": build_where_clause(request),
            "limit": str(MAX_RECORDS),
            "select": SELECTED_FIELDS,
            "order_by": "date_de_publication DESC",
        }
        data = await self._get_json(self.base_url, params)

        if not isinstance(data, dict):
            raise DecodeFailure(self.provider_name, "Unexpected RappelConso response shape")

        records = data.get("results") or []
        try:
            recalls = [self._to_campaign(record, request) for record in records]
        except (AttributeError, TypeError, ValueError) as e:
            raise DecodeFailure(self.provider_name, "Unexpected RappelConso record shape") from e

        return RecallResponse(
            recalls=recalls,
            total_count=data.get("total_count") or len(recalls),
            provider=self.provider_info,
        )
