"""Client for the auth platform's admin API (GoTrue ``/auth/v1/admin``)."""

import logging
from dataclasses import dataclass
from os import getenv
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger("BuddyBe.auth")

SUPABASE_URL = getenv("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = getenv("SUPABASE_SERVICE_ROLE_KEY", "")

USERS_PER_PAGE = 50
REQUEST_TIMEOUT = 15.0


class AuthAdminError(Exception):
    """An admin API call failed (transport error or error status)."""


@dataclass
class AuthUser:
    """The parts of an auth user this service cares about."""
    id: str
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "AuthUser":
        # The API reports phones without the leading "+"
        phone = data.get("phone") or None
        if phone and not phone.startswith("+"):
            phone = f"+{phone}"
        return cls(id=str(data["id"]), email=data.get("email") or None, phone=phone)

    @property
    def label(self) -> str:
        return self.email or self.id


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


class AuthAdminClient:
    """
    Async admin client authenticated with the service-role key.

    Use as an async context manager; one HTTP connection pool per block.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        service_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url if base_url is not None else SUPABASE_URL).rstrip("/")
        self.service_key = service_key if service_key is not None else SUPABASE_SERVICE_ROLE_KEY
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "AuthAdminClient":
        if not self.base_url or not self.service_key:
            logger.error("Auth admin API not configured (SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY)")
            raise AuthAdminError("Auth admin API not configured")
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/auth/v1",
            headers={
                "apikey": self.service_key,
                "Authorization": f"Bearer {self.service_key}",
            },
            timeout=REQUEST_TIMEOUT,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("AuthAdminClient used outside of 'async with'")
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error(f"Auth admin {method} {url} failed: {e.response.status_code} {message}")
            raise AuthAdminError(message) from e
        except httpx.TimeoutException as e:
            logger.error(f"Auth admin {method} {url} timed out")
            raise AuthAdminError("Auth admin API timed out") from e
        except httpx.RequestError as e:
            logger.error(f"Auth admin {method} {url} request error: {e}")
            raise AuthAdminError(f"Failed to reach auth admin API: {e}") from e

    async def list_users(self) -> List[AuthUser]:
        """Every user, fetched page by page."""
        users: List[AuthUser] = []
        page = 1
        while True:
            response = await self._request(
                "GET", "/admin/users", params={"page": page, "per_page": USERS_PER_PAGE}
            )
            batch = response.json().get("users") or []
            users.extend(AuthUser.from_api(u) for u in batch)
            if len(batch) < USERS_PER_PAGE:
                break
            page += 1
        logger.debug(f"Listed {len(users)} auth users over {page} page(s)")
        return users

    async def delete_user(self, user_id: str) -> None:
        await self._request("DELETE", f"/admin/users/{user_id}")

    async def update_password(self, user_id: str, password: str) -> None:
        await self._request("PUT", f"/admin/users/{user_id}", json={"password": password})
