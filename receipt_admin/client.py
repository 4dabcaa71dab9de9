# receipt_admin/client.py
"""Thin wrapper around the receipts REST API."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests
from pydantic import ValidationError

from .config import (
    BACKEND_URL,
    EXPORT_PATH,
    RECEIPTS_PATH,
    REQUEST_TIMEOUT,
    STATS_PATH,
)
from .models import Receipt, ReceiptPage, StatsDocument

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Transport failure or non-success HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiParseError(ApiError):
    """Response body did not match the expected payload shape."""


class ReceiptApiClient:
    def __init__(
        self,
        base_url: str = BACKEND_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, url, kwargs.get("params"))
        try:
            res = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"Could not reach backend: {e}") from e

        if not 200 <= res.status_code < 300:
            raise ApiError(
                f"{method} {path} failed with HTTP {res.status_code}",
                status_code=res.status_code,
            )
        return res

    @staticmethod
    def _json(res: requests.Response) -> Any:
        try:
            return res.json()
        except ValueError as e:
            raise ApiParseError(f"Invalid JSON from backend: {e}") from e

    # ---------------------------------------------------------
    # READ
    # ---------------------------------------------------------
    def get_stats(self) -> StatsDocument:
        res = self._request("GET", STATS_PATH)
        try:
            return StatsDocument.model_validate(self._json(res))
        except ValidationError as e:
            raise ApiParseError(f"Unexpected stats payload: {e}") from e

    def list_receipts(self, params: Mapping[str, str]) -> ReceiptPage:
        res = self._request("GET", RECEIPTS_PATH, params=dict(params))
        body = self._json(res)
        if not isinstance(body, dict):
            raise ApiParseError("Unexpected receipts payload: not an object")
        # the API sends null for an empty page
        body = {
            "data": body.get("data") or [],
            "total": body.get("total") or 0,
        }
        try:
            return ReceiptPage.model_validate(body)
        except ValidationError as e:
            raise ApiParseError(f"Unexpected receipts payload: {e}") from e

    def export_excel(self, params: Optional[Mapping[str, str]] = None) -> bytes:
        res = self._request("GET", EXPORT_PATH, params=dict(params or {}))
        return res.content

    # ---------------------------------------------------------
    # WRITE
    # ---------------------------------------------------------
    def update_receipt(self, receipt: Receipt) -> None:
        payload: Dict[str, Any] = receipt.model_dump(mode="json")
        self._request("PUT", f"{RECEIPTS_PATH}/{receipt.id}", json=payload)

    def delete_receipt(self, receipt_id: int) -> None:
        self._request("DELETE", f"{RECEIPTS_PATH}/{receipt_id}")
