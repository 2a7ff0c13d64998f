"""Event records read from a Supabase/PostgREST backend."""

from typing import Any

import requests
from pydantic import BaseModel, ValidationError

from .errors import StoreError
from .models import Expense, Participant, Payment


class RestStore:
    """
    Read-only store over the PostgREST API of a Supabase project.

    Reads the participants, expenses and payments tables filtered by
    event_id. Nothing is cached; each call is one GET.
    """

    def __init__(self, url: str, key: str, timeout: float = 10):
        """
        Initialize RestStore.

        Args:
            url: Project URL, e.g. https://xyz.supabase.co
            key: API key, sent as apikey and bearer token
            timeout: Per-request timeout in seconds
        """
        self.base_url = url.rstrip("/") + "/rest/v1"
        self.key = key
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            "Accept": "application/json",
        }

    def _select(self, table: str, event_id: str, order: str | None = None) -> list[dict[str, Any]]:
        """
        Fetch all rows of a table for one event.

        Raises:
            StoreError: If the request fails or the response isn't a JSON list
        """
        params = {"select": "*", "event_id": f"eq.{event_id}"}
        if order:
            params["order"] = order

        try:
            response = requests.get(
                f"{self.base_url}/{table}",
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            rows = response.json()
        except requests.RequestException as e:
            raise StoreError(f"Failed to fetch {table} for event {event_id}: {e}") from e
        except ValueError as e:
            raise StoreError(f"Invalid response for {table}: {e}") from e

        if not isinstance(rows, list):
            raise StoreError(f"Expected a list of {table} rows, got {type(rows).__name__}")
        return rows

    def _parse(self, model: type[BaseModel], table: str, rows: list[dict[str, Any]]) -> list[Any]:
        try:
            return [model.model_validate(row) for row in rows]
        except ValidationError as e:
            raise StoreError(f"Invalid {table} row: {e}") from e

    def list_participants(self, event_id: str) -> list[Participant]:
        rows = self._select("participants", event_id, order="created_at.asc")
        return self._parse(Participant, "participants", rows)

    def list_expenses(self, event_id: str) -> list[Expense]:
        rows = self._select("expenses", event_id, order="created_at.asc")
        return self._parse(Expense, "expenses", rows)

    def list_payments(self, event_id: str) -> list[Payment]:
        rows = self._select("payments", event_id, order="created_at.asc")
        return self._parse(Payment, "payments", rows)
