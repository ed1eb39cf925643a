"""
Google OAuth 2.0 client for the authorization-code flow.
"""
from typing import Optional
from urllib.parse import urlencode
import logging
import httpx
from pydantic import ValidationError
from app.core.config import settings
from app.schemas.user import GoogleProfile

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
GOOGLE_SCOPES = ("profile", "email")


class IdentityProviderError(Exception):
    """The provider rejected the assertion or could not be reached."""
    pass


class GoogleOAuthClient:
    """Builds the consent redirect and turns a callback code into a profile."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def authorization_url(self, state: str) -> str:
        """URL the browser is sent to for consent."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(GOOGLE_SCOPES),
            "state": state,
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> GoogleProfile:
        """
        Exchange an authorization code and return the verified profile.

        Raises:
            IdentityProviderError: on any HTTP failure, a missing access token
                or a userinfo payload without a subject.
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                token_res = await client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "code": code,
                        "grant_type": "authorization_code",
                        "redirect_uri": self.redirect_uri,
                    },
                    headers={"Accept": "application/json"},
                )
                token_res.raise_for_status()
                access_token = token_res.json().get("access_token")
                if not access_token:
                    raise IdentityProviderError("Token response carried no access_token")

                info_res = await client.get(
                    GOOGLE_USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                info_res.raise_for_status()
                payload = info_res.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"Google OAuth HTTP error: {e.response.status_code} - {e.response.text}")
                raise IdentityProviderError(f"Google OAuth HTTP error: {e.response.status_code}") from e
            except httpx.HTTPError as e:
                logger.error(f"Google OAuth network error: {e}")
                raise IdentityProviderError(f"Google OAuth network error: {e}") from e
            except ValueError as e:
                # Non-JSON body
                logger.error(f"Google OAuth returned an unreadable response: {e}")
                raise IdentityProviderError("Unreadable provider response") from e

        try:
            return GoogleProfile.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Google userinfo missing required fields: {e}")
            raise IdentityProviderError("Userinfo payload has no subject") from e


def get_identity_provider() -> GoogleOAuthClient:
    """Dependency returning the configured Google client."""
    return GoogleOAuthClient(
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        redirect_uri=settings.GOOGLE_CALLBACK_URL,
        timeout=settings.OAUTH_TIMEOUT_SECONDS,
    )
