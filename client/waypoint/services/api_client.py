"""Booking backend client: personalization, tracking, and check-in endpoints.

Every endpoint authenticates with a ``token`` query parameter. Personalization
calls return raw payloads (the widget endpoint may answer with a directive
object, a JSON-encoded string, or a plain acknowledgement string); check-in
calls return validated schemas and raise on rejection.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from waypoint.config import settings
from waypoint.errors import APIError, BookingLookupError, SeatAssignmentError
from waypoint.schemas.checkin import (
    CheckinFindRequest,
    CheckinFindResponse,
    SelectSeatRequest,
    SelectSeatResponse,
)

logger = logging.getLogger(__name__)


def _error_detail(resp: httpx.Response) -> str:
    """FastAPI-style ``{"detail": ...}`` if present, else the raw body."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(data, dict) and data.get("detail"):
        detail = data["detail"]
        return detail if isinstance(detail, str) else str(detail)
    return resp.text or resp.reason_phrase


def _body(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


class BookingAPIClient:
    """Async adapter over the booking backend."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url or settings.api_base_url
        self._timeout = timeout if timeout is not None else settings.request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def _post(self, path: str, token: str, json: dict | None = None) -> httpx.Response:
        client = await self._get_client()
        try:
            resp = await client.post(path, params={"token": token}, json=json)
        except httpx.HTTPError as e:
            raise APIError(f"{path}: {e.__class__.__name__}: {e}") from e
        if resp.is_error:
            raise APIError(_error_detail(resp), status_code=resp.status_code)
        return resp

    # Personalization

    async def track_page_visit(self, page: str, token: str) -> Any:
        resp = await self._post(f"/tracking/page-visit/{page}", token)
        return _body(resp)

    async def get_widget(self, page: str, token: str) -> Any:
        """Raw directive payload for ``page``: dict, str, or None."""
        resp = await self._post(f"/ai/widget/{page}", token)
        return _body(resp)

    # Check-in

    async def checkin_find(self, pnr: str, email: str, token: str) -> CheckinFindResponse:
        req = CheckinFindRequest(pnr=pnr, email=email)
        try:
            resp = await self._post("/checkin/find", token, json=req.model_dump())
        except APIError as e:
            if e.status_code is None:
                raise
            raise BookingLookupError(e.detail, status_code=e.status_code) from e
        try:
            return CheckinFindResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise APIError(f"Malformed check-in response: {e}", status_code=resp.status_code) from e

    async def select_seat(self, pnr: str, flight_id: int, seat_id: str, token: str) -> SelectSeatResponse:
        req = SelectSeatRequest(pnr=pnr, flight_id=flight_id, seat_id=seat_id)
        try:
            resp = await self._post("/checkin/select-seat", token, json=req.model_dump())
        except APIError as e:
            raise SeatAssignmentError(e.detail, status_code=e.status_code) from e
        try:
            result = SelectSeatResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise SeatAssignmentError(f"Malformed seat assignment response: {e}", status_code=resp.status_code) from e
        if not result.success:
            raise SeatAssignmentError(result.message or "Seat assignment rejected", status_code=resp.status_code)
        return result

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BookingAPIClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()
