"""HTTP client for the catalog REST API."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .session import ClientSession

DEFAULT_PAGE_SIZE = 12


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


@dataclass
class CatalogApiClient:
    """HTTPX-backed client; attaches the session's bearer token."""

    base_url: str
    session: ClientSession
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls,
        base_url: str,
        session: Optional[ClientSession] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "CatalogApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            session=session or ClientSession(),
            http_client=httpx.AsyncClient(transport=transport, timeout=15),
        )

    async def register(self, email: str, password: str, name: str) -> Dict[str, Any]:
        data = await self._request(
            "POST", "/auth/register", json={"email": email, "password": password, "name": name}
        )
        self.session.authenticate(data["token"], data["user"])
        return data

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.session.authenticate(data["token"], data["user"])
        return data

    def logout(self) -> None:
        self.session.clear()

    async def get_current_user(self) -> Dict[str, Any]:
        data = await self._request("GET", "/auth/me")
        return data["user"]

    async def get_entries(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, search: str = "") -> Dict[str, Any]:
        """Fetch one page of entries; the payload carries ``hasMore``."""
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        return await self._request("GET", "/entries", params=params)

    async def create_entry(self, entry_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/entries", json=entry_data)

    async def update_entry(self, entry_id: int, entry_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/entries/{entry_id}", json=entry_data)

    async def delete_entry(self, entry_id: int) -> None:
        await self._request("DELETE", f"/entries/{entry_id}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        headers = {}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        response = await self.http_client.request(
            method, f"{self.base_url}{path}", headers=headers, **kwargs
        )
        if response.is_error:
            raise ApiError(response.status_code, self._error_message(response))
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return response.reason_phrase
