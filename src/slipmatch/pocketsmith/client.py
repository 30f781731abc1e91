#!/usr/bin/env python3
"""
PocketSmith API Client

Synchronous client for the handful of PocketSmith v2 endpoints the enrichment
run needs. Every failure (transport, auth, validation, bad payload) surfaces
as PocketsmithError.

Docs: https://developers.pocketsmith.com/reference
"""

import logging
from typing import Any

import httpx

from ..core.config import PocketsmithConfig
from ..core.errors import PocketsmithError
from .models import Attachment, CategoryRule, PocketsmithTransaction, PocketsmithUser, TransactionUpdate

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.pocketsmith.com/v2"
PAGE_SIZE = 100


class PocketsmithClient:
    """
    PocketSmith REST API client.

    Use as a context manager so the underlying connection pool is closed:

        with PocketsmithClient(token) as ps:
            user = ps.get_current_user()
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30,
        transport: httpx.BaseTransport | None = None,
    ):
        self._client = httpx.Client(
            base_url=base_url,
            headers={
                "X-Developer-Key": api_token,
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: PocketsmithConfig) -> "PocketsmithClient":
        if not config.api_token:
            raise PocketsmithError("PocketSmith API token not configured")
        return cls(config.api_token, base_url=config.base_url, timeout=config.timeout)

    def __enter__(self) -> "PocketsmithClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ==================== REQUEST HELPERS ====================

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise PocketsmithError(f"{method} {url} failed: {e}") from e

        if response.is_error:
            raise PocketsmithError(
                f"{method} {url} failed",
                status_code=response.status_code,
                response_text=response.text,
            )
        return response

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise PocketsmithError(
                f"Invalid JSON from {response.request.url}",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

    def _get_all(self, url: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """GET a list endpoint, following Link rel="next" pages."""
        items: list[dict[str, Any]] = []
        next_url: str | None = url
        next_params = params

        while next_url:
            response = self._request("GET", next_url, params=next_params)
            page = self._json(response)
            if not isinstance(page, list):
                raise PocketsmithError(f"Expected a list from {url}", status_code=response.status_code)
            items.extend(page)

            next_url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            next_params = None

        return items

    def _build(self, factory: Any, data: Any, what: str) -> Any:
        """Convert an API payload to a model, treating malformed payloads as API failures."""
        try:
            return factory(data)
        except (KeyError, TypeError, ValueError) as e:
            raise PocketsmithError(f"Unexpected {what} payload: {e}") from e

    # ==================== ENDPOINTS ====================

    def get_current_user(self) -> PocketsmithUser:
        """GET /me"""
        return self._build(PocketsmithUser.from_dict, self._json(self._request("GET", "/me")), "user")

    def list_category_rules(self, user_id: int) -> list[CategoryRule]:
        """GET /users/{id}/category_rules"""
        raw = self._get_all(f"/users/{user_id}/category_rules")
        return [self._build(CategoryRule.from_dict, r, "category rule") for r in raw]

    def search_transactions(
        self, account_id: int, start_date: str, end_date: str, search: str
    ) -> list[PocketsmithTransaction]:
        """
        GET /transaction_accounts/{id}/transactions

        Args:
            account_id: Transaction account id
            start_date: First day (YYYY-MM-DD, inclusive)
            end_date: Last day (YYYY-MM-DD, inclusive)
            search: Free-text search, here the amount string

        Returns:
            Transactions in the order the service returned them
        """
        params = {
            "start_date": start_date,
            "end_date": end_date,
            "search": search,
            "per_page": PAGE_SIZE,
        }
        raw = self._get_all(f"/transaction_accounts/{account_id}/transactions", params=params)
        logger.debug("Search %s on %s..%s returned %d transactions", search, start_date, end_date, len(raw))
        return [self._build(PocketsmithTransaction.from_dict, tx, "transaction") for tx in raw]

    def list_attachments(self, user_id: int, unassigned_only: bool = False) -> list[Attachment]:
        """GET /users/{id}/attachments"""
        params = {"unassigned": 1} if unassigned_only else None
        raw = self._get_all(f"/users/{user_id}/attachments", params=params)
        return [self._build(Attachment.from_dict, a, "attachment") for a in raw]

    def assign_attachment(self, transaction_id: int, attachment_id: int) -> None:
        """POST /transactions/{id}/attachments"""
        self._request(
            "POST",
            f"/transactions/{transaction_id}/attachments",
            json={"attachment_id": attachment_id},
        )

    def update_transaction(self, transaction_id: int, update: TransactionUpdate) -> PocketsmithTransaction:
        """PUT /transactions/{id}"""
        response = self._request("PUT", f"/transactions/{transaction_id}", json=update.to_dict())
        return self._build(PocketsmithTransaction.from_dict, self._json(response), "transaction")
