from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
import typer

from cli.config import CLIConfig
from models.measurement import Weight

PLUGIN_ID = "shipment_weight"


def _weight_payload(weight: Optional[Weight]) -> Optional[Dict[str, str]]:
    if weight is None:
        return None
    return {"number": str(weight.number), "unit": weight.unit.value}


class ApiClient:
    """Minimal HTTP client for the conditions service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def list_conditions(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/conditions")

    def configure(
        self,
        operator: str,
        weight: Weight,
        max_weight: Optional[Weight] = None,
        plugin_id: str = PLUGIN_ID,
    ) -> Dict[str, Any]:
        body = {
            "operator": operator,
            "weight": _weight_payload(weight),
            "max_weight": _weight_payload(max_weight),
        }
        return self._request("POST", f"/conditions/{plugin_id}/configure", json=body)

    def evaluate(
        self,
        configuration: Dict[str, Any],
        subject: Optional[Weight],
        plugin_id: str = PLUGIN_ID,
    ) -> bool:
        body = {"configuration": configuration, "weight": _weight_payload(subject)}
        payload = self._request("POST", f"/conditions/{plugin_id}/evaluate", json=body)
        result = payload.get("result")
        if not isinstance(result, bool):
            raise typer.BadParameter("Unexpected response payload when evaluating condition.")
        return result

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
            if response.status_code == 404:
                raise typer.BadParameter(f"Resource {path} was not found.")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: Any = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except ValueError:
            detail = exc.response.text.strip()
        if isinstance(detail, dict) and "message" in detail:
            detail = f"{detail.get('field')}: {detail['message']}"
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
