"""
GitHub and LinkedIn OAuth pass-through.

The SPA receives an authorization code from the provider redirect and
hands it to the backend, which holds the client secrets and performs the
token exchange and profile fetches.
"""

from typing import Any, Optional

import httpx

from app.core.config import Settings, settings
from app.core.logging import get_logger

logger = get_logger("oauth", "OAUTH")

GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_USER_URL = "https://api.github.com/user"
LINKEDIN_TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
LINKEDIN_USERINFO_URL = "https://api.linkedin.com/v2/userinfo"
LINKEDIN_ME_URL = (
    "https://api.linkedin.com/v2/me"
    "?projection=(id,firstName,lastName,profilePicture(displayImage~:playableStreams))"
)
LINKEDIN_POSITIONS_URL = "https://api.linkedin.com/v2/positions"


class UpstreamProviderError(Exception):
    """A provider answered with a non-OK status or could not be reached."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.message = message
        self.status_code = status_code


class OAuthClient:
    """Async client for the provider endpoints the SPA needs."""

    def __init__(self, config: Settings = settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.HTTP_TIMEOUT_SECONDS, transport=self.transport)

    async def _request(self, provider: str, method: str, url: str, **kwargs) -> Any:
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            message = f"{provider} API responded with status: {e.response.status_code}"
            if e.response.text:
                message = f"{message}, {e.response.text}"
            logger.error(message)
            raise UpstreamProviderError(provider, message, e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("%s request failed: %s", provider, e)
            raise UpstreamProviderError(provider, f"{provider} request failed: {e}") from e

    @staticmethod
    def _bearer(access_token: str) -> dict:
        return {"Authorization": f"Bearer {access_token}", "Accept": "application/json"}

    # ============== GitHub ==============

    async def github_access_token(self, code: str) -> dict:
        return await self._request(
            "GitHub",
            "POST",
            GITHUB_TOKEN_URL,
            headers={"Accept": "application/json"},
            json={
                "client_id": self.config.GITHUB_CLIENT_ID,
                "client_secret": self.config.GITHUB_CLIENT_SECRET,
                "code": code,
            },
        )

    async def github_user(self, access_token: str) -> dict:
        return await self._request("GitHub", "GET", GITHUB_USER_URL, headers=self._bearer(access_token))

    # ============== LinkedIn ==============

    async def linkedin_access_token(self, code: str) -> dict:
        return await self._request(
            "LinkedIn",
            "POST",
            LINKEDIN_TOKEN_URL,
            data={
                "grant_type": "authorization_code",
                "code": code,
                "client_id": self.config.LINKEDIN_CLIENT_ID,
                "client_secret": self.config.LINKEDIN_CLIENT_SECRET,
                "redirect_uri": self.config.LINKEDIN_REDIRECT_URI,
            },
        )

    async def linkedin_userinfo(self, access_token: str) -> dict:
        return await self._request("LinkedIn", "GET", LINKEDIN_USERINFO_URL, headers=self._bearer(access_token))

    async def linkedin_profile_details(self, access_token: str) -> dict:
        """
        Basic profile plus positions.

        Positions are best-effort: most apps lack the scope, so a failure
        there yields an empty list instead of an error.
        """
        profile = await self._request("LinkedIn", "GET", LINKEDIN_ME_URL, headers=self._bearer(access_token))

        positions: list = []
        try:
            data = await self._request(
                "LinkedIn",
                "GET",
                LINKEDIN_POSITIONS_URL,
                headers=self._bearer(access_token),
                params={"q": "memberPositions", "memberIdentity": f"(id:{profile.get('id')})"},
            )
            positions = data.get("elements") or []
        except UpstreamProviderError as e:
            logger.info("LinkedIn positions unavailable: %s", e.message)

        return {"profile": profile, "positions": positions}
