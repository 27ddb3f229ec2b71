import requests
from loguru import logger
from dictionaries.constants import AUTH_SCHEME, TOKEN_URL
from services.config import Settings
from services.errors import AuthenticationError, response_body


def get_access_token(settings: Settings, session: requests.Session) -> str:
    """
    Trade the long-lived refresh token for a short-lived access token.

    Raises AuthenticationError (with upstream status and body) when the
    response has no usable access_token.
    """
    params = {
        "refresh_token": settings.refresh_token,
        "client_id": settings.client_id,
        "client_secret": settings.client_secret,
        "grant_type": "refresh_token",
    }
    resp = session.post(TOKEN_URL.format(dc=settings.dc), params=params)
    body = response_body(resp)

    token = body.get("access_token") if isinstance(body, dict) else None
    if not token:
        logger.warning(f"Token exchange failed with status {resp.status_code}")
        raise AuthenticationError(body, upstream_status=resp.status_code)

    logger.info("Access token refreshed")
    return token


def auth_header(token: str) -> dict:
    return {"Authorization": f"{AUTH_SCHEME} {token}"}
