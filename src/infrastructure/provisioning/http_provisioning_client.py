"""HTTP client for the external identity provider's provisioning API.

Endpoints (relative to the configured base URL):
    POST /users/{user_id}/provision -> {"success": bool, "errors": [str]}
    GET  /users/{user_id}           -> 200 when the user exists, 404 otherwise

Architecture:
    - Infrastructure adapter implementing UserProvisioningProtocol
    - Uses httpx for async HTTP
    - Transport failures become unsuccessful results (never raised), so one
      user's failure never aborts a batch
"""

from typing import Any
from urllib.parse import quote

import httpx

from src.domain.entities.migration import ProvisioningResult
from src.domain.protocols.logger_protocol import LoggerProtocol


class HttpProvisioningClient:
    """Provisioning collaborator over HTTP.

    Attributes:
        _base_url: API base URL (without trailing slash).
        _timeout: Request timeout in seconds.
        _client: Shared client, or None to open one per request.
    """

    def __init__(
        self,
        *,
        base_url: str,
        logger: LoggerProtocol,
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize provisioning client.

        Args:
            base_url: Provisioning API base URL.
            logger: Structured logger.
            timeout: HTTP request timeout in seconds.
            headers: Extra headers sent with every request.
            client: Optional shared AsyncClient (tests inject a mock transport).
        """
        self._base_url = base_url.rstrip("/")
        self._logger = logger
        self._timeout = timeout
        self._headers = headers or {}
        self._client = client

    def _url(self, user_id: str, suffix: str = "") -> str:
        return f"{self._base_url}/users/{quote(user_id, safe='')}{suffix}"

    async def _request(self, method: str, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(
                method, url, headers=self._headers, timeout=self._timeout
            )
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.request(method, url, headers=self._headers)

    async def provision_user(self, user_id: str) -> ProvisioningResult:
        """Provision one user.

        Returns:
            ProvisioningResult from the response body; an unsuccessful result
            for non-2xx statuses, unparseable bodies, or transport errors.
        """
        try:
            response = await self._request("POST", self._url(user_id, "/provision"))
        except httpx.TimeoutException:
            self._logger.warning("provisioning_api_timeout", user_id=user_id)
            return ProvisioningResult(
                success=False, errors=["provisioning API request timed out"]
            )
        except httpx.RequestError as e:
            self._logger.warning(
                "provisioning_api_connection_error", user_id=user_id, error=str(e)
            )
            return ProvisioningResult(
                success=False, errors=[f"provisioning API unreachable: {e}"]
            )

        body = self._json_body(response)
        errors = [str(item) for item in body.get("errors") or []]

        if not response.is_success:
            self._logger.warning(
                "provisioning_api_error_status",
                user_id=user_id,
                status_code=response.status_code,
            )
            return ProvisioningResult(
                success=False,
                errors=errors or [f"provisioning API returned HTTP {response.status_code}"],
            )

        success = body.get("success")
        if not isinstance(success, bool):
            return ProvisioningResult(
                success=False,
                errors=errors or ["provisioning API response has no success flag"],
            )
        return ProvisioningResult(success=success, errors=errors)

    async def is_provisioned(self, user_id: str) -> bool:
        """Check whether the user exists in the external provider.

        Returns:
            True on HTTP 200. False on 404, any other status, or transport error.
        """
        try:
            response = await self._request("GET", self._url(user_id))
        except httpx.RequestError as e:
            self._logger.warning(
                "provisioning_lookup_failed", user_id=user_id, error=str(e)
            )
            return False
        if response.status_code not in (200, 404):
            self._logger.warning(
                "provisioning_lookup_unexpected_status",
                user_id=user_id,
                status_code=response.status_code,
            )
        return response.status_code == 200

    @staticmethod
    def _json_body(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
