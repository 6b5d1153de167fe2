"""Campus backend client for shuttle arrivals and dining data."""

from __future__ import annotations

from typing import Any

import requests

from shuttle_tracker.data.models import StopID

ARRIVALS_RESULT_FIELD = "GetArrivalsResult"
DINING_RESULT_FIELD = "GetDiningInfoResult"
ERROR_FIELD = "errorMessage"


class CampusClientError(Exception):
    """Base class for campus backend request failures."""


class NetworkError(CampusClientError):
    """Raised when the request could not be completed at the transport level."""


class ApplicationError(CampusClientError):
    """Raised when the backend answered but reported a logical failure."""


class CampusClient:
    """Single-attempt wrapper around the campus endpoints using requests."""

    def __init__(
        self,
        arrivals_url: str,
        dining_url: str | None = None,
        timeout_seconds: float = 10,
        arrivals_result_field: str = ARRIVALS_RESULT_FIELD,
    ) -> None:
        self._arrivals_url = arrivals_url
        self._dining_url = dining_url
        self._timeout_seconds = timeout_seconds
        self._arrivals_result_field = arrivals_result_field

    def get_arrivals(self, stop_id: StopID) -> list[dict[str, Any]]:
        """Fetch the raw arrivals payload for one stop."""
        response_json = self._get(self._arrivals_url, params={"stopId": stop_id})
        return self._result(response_json, self._arrivals_result_field)

    def get_dining(self) -> list[dict[str, Any]]:
        """Fetch the raw dining info payload."""
        if not self._dining_url:
            raise ApplicationError("Dining endpoint is not configured")
        response_json = self._get(self._dining_url)
        return self._result(response_json, DINING_RESULT_FIELD)

    def _get(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        headers = {"Cache-Control": "no-cache"}
        try:
            response = requests.get(url, headers=headers, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise NetworkError(f"Campus API request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise NetworkError(f"Campus API request failed: {detail}")

        try:
            data = response.json()
        except ValueError as exc:
            raise ApplicationError("Campus API response was not valid JSON") from exc

        if not isinstance(data, dict):
            raise ApplicationError("Campus API response was not a JSON object")
        return data

    @staticmethod
    def _result(data: dict[str, Any], field: str) -> list[dict[str, Any]]:
        error_message = data.get(ERROR_FIELD)
        if error_message:
            raise ApplicationError(str(error_message))
        result = data.get(field)
        if result is None:
            return []
        if not isinstance(result, list):
            raise ApplicationError(f"Campus API field '{field}' was not a list")
        return result


class ArrivalFetcher:
    """Fetches the arrivals for one stop per call; retries are the caller's job."""

    def __init__(self, client: CampusClient) -> None:
        self._client = client

    def fetch(self, stop_id: StopID) -> list[dict[str, Any]]:
        return self._client.get_arrivals(stop_id)


__all__ = [
    "ApplicationError",
    "ArrivalFetcher",
    "CampusClient",
    "CampusClientError",
    "NetworkError",
]
