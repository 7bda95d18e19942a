import logging
from typing import Any

import httpx

from app.exceptions.custom import RateLimitError, SupabaseError
from app.schemas.auth import UserProfile

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = "id,role,hotel_id,email"
BOOKING_WITH_SERVICES = "*,booking_services(*)"


class SupabaseService:
    """PostgREST access with the service-role key (bypasses RLS)."""

    def __init__(self, client: httpx.AsyncClient, url: str, service_role_key: str):
        self._client = client
        self._rest_url = f"{url.rstrip('/')}/rest/v1"
        self._headers = {
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
            "Content-Type": "application/json",
        }

    def table_url(self, table: str) -> str:
        return f"{self._rest_url}/{table}"

    def _check(self, resp: httpx.Response) -> None:
        if resp.status_code == 429:
            raise RateLimitError("Supabase")
        if resp.status_code >= 400:
            raise SupabaseError(_error_message(resp), status_code=resp.status_code)

    async def _select(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        resp = await self._client.get(
            self.table_url(table), params=params, headers=self._headers
        )
        self._check(resp)
        return resp.json()

    async def get_profile(self, user_id: str) -> UserProfile | None:
        rows = await self._select(
            "profiles", {"select": PROFILE_COLUMNS, "id": f"eq.{user_id}"}
        )
        if not rows:
            logger.info("No profile for user %s", user_id)
            return None
        return UserProfile(**rows[0])

    async def insert_booking(self, data: dict[str, Any]) -> dict[str, Any]:
        resp = await self._client.post(
            self.table_url("bookings"),
            json=data,
            headers={**self._headers, "Prefer": "return=representation"},
        )
        self._check(resp)
        rows = resp.json()
        booking = rows[0] if isinstance(rows, list) else rows
        logger.info("Inserted booking %s", booking.get("id"))
        return booking

    async def insert_booking_services(self, rows: list[dict[str, Any]]) -> None:
        resp = await self._client.post(
            self.table_url("booking_services"),
            json=rows,
            headers={**self._headers, "Prefer": "return=minimal"},
        )
        self._check(resp)
        logger.info("Inserted %d booking_services rows", len(rows))

    async def delete_booking(self, booking_id: str) -> None:
        resp = await self._client.delete(
            self.table_url("bookings"),
            params={"id": f"eq.{booking_id}"},
            headers=self._headers,
        )
        self._check(resp)
        logger.info("Deleted booking %s", booking_id)

    async def list_hotel_bookings(self, hotel_id: str) -> list[dict[str, Any]]:
        return await self._select(
            "bookings",
            {
                "select": BOOKING_WITH_SERVICES,
                "hotel_id": f"eq.{hotel_id}",
                "order": "created_at.desc",
            },
        )

    async def get_hotel_booking(self, booking_id: str, hotel_id: str) -> dict[str, Any] | None:
        rows = await self._select(
            "bookings",
            {
                "select": "id,hotel_id",
                "id": f"eq.{booking_id}",
                "hotel_id": f"eq.{hotel_id}",
            },
        )
        return rows[0] if rows else None

    async def update_booking(self, booking_id: str, updates: dict[str, Any]) -> dict[str, Any] | None:
        resp = await self._client.patch(
            self.table_url("bookings"),
            params={"id": f"eq.{booking_id}"},
            json=updates,
            headers={**self._headers, "Prefer": "return=representation"},
        )
        self._check(resp)
        rows = resp.json()
        return rows[0] if rows else None


def _error_message(resp: httpx.Response) -> str:
    """PostgREST errors are JSON with a `message`; fall back to raw text."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict):
        return body.get("message") or body.get("msg") or resp.text
    return resp.text
