# mixtape/services/spotify_token_service.py
import logging
from typing import Dict
import requests
from mixtape.config.settings import CLIENT_ID, CLIENT_SECRET, SPOTIFY_TOKEN_URL
from mixtape.services.token_store import (
    get_client_access_token,
    get_server_access_token,
    save_client_access_token,
    save_server_access_token,
)

logger = logging.getLogger(__name__)


class SpotifyAuthError(Exception):
    """Token exchange with accounts.spotify.com failed (rejected or unreachable)."""


class TokenNotConfiguredError(SpotifyAuthError):
    """No refresh token on record; it has to be seeded out-of-band."""


def _request_token(payload: Dict[str, str]) -> Dict:
    """
    POST a form-encoded grant to the Spotify token endpoint.
    requests builds the Basic header from (CLIENT_ID, CLIENT_SECRET).
    """
    if not CLIENT_ID or not CLIENT_SECRET:
        raise TokenNotConfiguredError("CLIENT_ID / CLIENT_SECRET are not configured")

    try:
        r = requests.post(SPOTIFY_TOKEN_URL, data=payload, auth=(CLIENT_ID, CLIENT_SECRET))
    except requests.exceptions.RequestException as e:
        raise SpotifyAuthError(f"Spotify token endpoint unreachable: {e}") from e

    if r.status_code != 200:
        raise SpotifyAuthError(f"Spotify token endpoint returned {r.status_code}: {r.text}")

    try:
        token_data = r.json()
    except ValueError as e:
        raise SpotifyAuthError("Spotify token endpoint returned a non-JSON body") from e

    if not token_data.get("access_token"):
        raise SpotifyAuthError(f"No access_token in Spotify response: {token_data}")

    return token_data


# --------- Client credentials (browser search) ---------
def obtain_client_token() -> str:
    """
    Client credentials exchange; store and return the new token.
    Nothing is written when the exchange fails.
    """
    try:
        token_data = _request_token({"grant_type": "client_credentials"})
    except SpotifyAuthError as e:
        logger.error(f"Failed to retrieve client access token: {e}")
        raise

    access_token = token_data["access_token"]
    save_client_access_token(access_token)
    return access_token


def get_client_token() -> str:
    """
    Return the stored client token; fetch one synchronously when nothing
    is stored yet. Concurrent first callers may both hit Spotify, the
    later write simply wins.
    """
    token = get_client_access_token()
    if token is not None:
        return token.accessToken

    logger.info("No client access token stored, requesting one now")
    return obtain_client_token()


# --------- Refresh token (playlist writes) ---------
def obtain_server_token() -> str:
    token = get_server_access_token()
    if token is None:
        logger.error("Server refresh token not found")
        raise TokenNotConfiguredError("Server refresh token not found")

    refresh_token = token.refreshToken

    try:
        token_data = _request_token({
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        })
    except SpotifyAuthError as e:
        logger.error(f"Failed to refresh server access token: {e}")
        raise

    # Spotify does not always rotate the refresh token; keep the old one
    new_refresh_token = token_data.get("refresh_token") or refresh_token

    access_token = token_data["access_token"]
    save_server_access_token(access_token, new_refresh_token)
    return access_token


def get_server_token() -> str:
    """Stored server access token. Never refreshes; that is the scheduler's job."""
    token = get_server_access_token()
    if token is None or not token.accessToken:
        raise TokenNotConfiguredError("Server access token not found")
    return token.accessToken
