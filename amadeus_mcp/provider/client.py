"""
Amadeus Self-Service API client.

Amadeus uses the OAuth 2.0 client credentials flow:
1. POST client_id and client_secret to /v1/security/oauth2/token
2. Receive an access_token
3. Send it as a Bearer token on every API call

Tokens are not cached between tool calls; every orchestration handler asks
for one token and reuses it for its own sub-requests.

Retries are deliberately absent here. Each tool decides its own retry policy
(see tools/resilience.py).
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field

from ..config import BASE_URLS
from ..errors import AuthenticationError, ConfigurationError, RateLimitError, UpstreamError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"
MOCK_MESSAGE = "Mock data - Amadeus credentials not configured"


class AccessToken(BaseModel):
    value: str
    obtained_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_in: int = 1799
    token_type: str = "Bearer"

    @property
    def authorization(self) -> str:
        return f"Bearer {self.value}"


class AmadeusClient:
    """Authenticated HTTP access to the Amadeus API."""

    offline = False

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        environment: str = "test",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.environment = environment
        self.base_url = BASE_URLS.get(environment, BASE_URLS["test"])
        self.timeout = timeout
        # Tests inject an httpx.MockTransport here
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        )

    async def get_access_token(self) -> AccessToken:
        data = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        async with self._http() as client:
            response = await client.post(TOKEN_PATH, data=data)

        if not response.is_success:
            logger.error(f"Token request failed ({response.status_code}): {response.text[:500]}")
            raise AuthenticationError(
                f"Failed to get access token: {response.status_code} {response.reason_phrase}",
                status=response.status_code,
                body=response.text,
            )

        token_data = response.json()
        logger.info(f"Access token obtained, expires in {token_data.get('expires_in')}s")
        return AccessToken(
            value=token_data["access_token"],
            expires_in=token_data.get("expires_in", 1799),
            token_type=token_data.get("token_type", "Bearer"),
        )

    async def request(
        self,
        method: str,
        path: str,
        token: AccessToken,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Dict[str, Any]:
        """Perform one authenticated call and return the parsed JSON payload whole."""
        headers = {"Authorization": token.authorization}
        if params:
            params = {key: _query_value(value) for key, value in params.items() if value is not None}

        logger.info(f"{method} {path}")
        async with self._http() as client:
            response = await client.request(method, path, params=params, json=json, headers=headers)

        if not response.is_success:
            body = _error_body(response)
            error_cls = RateLimitError if response.status_code == 429 else UpstreamError
            logger.warning(f"{method} {path} failed with HTTP {response.status_code}")
            raise error_cls(
                f"{response.status_code} {response.reason_phrase} - {_describe(body)}",
                status=response.status_code,
                status_text=response.reason_phrase,
                body=body,
            )

        if not response.content:
            return {}
        return response.json()

    async def get(self, path: str, token: AccessToken, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("GET", path, token, params=params)

    async def post(self, path: str, token: AccessToken, json: Any = None) -> Dict[str, Any]:
        return await self.request("POST", path, token, json=json)


class MockAmadeusClient:
    """Offline stand-in used when no credentials are configured.

    Same interface as AmadeusClient; nothing leaves the process.
    """

    offline = True
    environment = "mock"

    async def get_access_token(self) -> AccessToken:
        return AccessToken(value="mock-token", expires_in=0)

    async def request(self, method, path, token, params=None, json=None) -> Dict[str, Any]:
        return {"data": [{"endpoint": f"{method} {path}", "message": MOCK_MESSAGE}], "meta": {"mock": True}}

    async def get(self, path, token, params=None):
        return await self.request("GET", path, token, params=params)

    async def post(self, path, token, json=None):
        return await self.request("POST", path, token, json=json)

    def mock_record(self, method: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return {"method": method, "message": MOCK_MESSAGE, "arguments": arguments}


def create_client(
    client_id: Optional[str],
    client_secret: Optional[str],
    environment: str = "test",
    allow_mock: bool = False,
    **kwargs,
):
    """Build the live client, or the mock one when credentials are missing and allowed."""
    if client_id and client_secret:
        return AmadeusClient(client_id, client_secret, environment=environment, **kwargs)
    if not allow_mock:
        raise ConfigurationError("AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET must be set")
    logger.warning("Amadeus credentials not set. Tools will return mock data.")
    return MockAmadeusClient()


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return value


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _describe(body: Any) -> str:
    # Amadeus error payloads: {"errors": [{"status", "code", "title", "detail"}]}
    if isinstance(body, dict) and body.get("errors"):
        parts = []
        for err in body["errors"]:
            title = err.get("title") or err.get("code") or "error"
            detail = err.get("detail")
            parts.append(f"{title}: {detail}" if detail else str(title))
        return "; ".join(parts)
    return str(body)[:500] if body else "no response body"
