# mixtape/services/token_store.py
from datetime import datetime, timezone
from typing import Optional
from mixtape.config.settings import TOKEN_COLLECTION
from mixtape.models.token_model import ClientAccessToken, ServerAccessToken
from mixtape.services.firestore_client import get_db

CLIENT_TOKEN_DOC = "clientAccessToken"
SERVER_TOKEN_DOC = "serverAccessToken"


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)

def _token_doc(name: str):
    return get_db().collection(TOKEN_COLLECTION).document(name)


def _updated_at(data: dict):
    # only the token fields matter; any other updatedAt shape is dropped
    value = data.get("updatedAt")
    return value if isinstance(value, (datetime, str)) else None


# --------- Client credentials token ---------
def get_client_access_token() -> Optional[ClientAccessToken]:
    doc = _token_doc(CLIENT_TOKEN_DOC).get()
    if not doc.exists:
        return None

    data = doc.to_dict() or {}
    if not data.get("accessToken"):
        return None
    return ClientAccessToken(accessToken=data["accessToken"], updatedAt=_updated_at(data))

def save_client_access_token(access_token: str) -> ClientAccessToken:
    """Overwrite the single client token document (last write wins)."""
    token = ClientAccessToken(accessToken=access_token, updatedAt=_now_utc())
    _token_doc(CLIENT_TOKEN_DOC).set(token.model_dump())
    return token


# --------- Server (refresh token) token ---------
def get_server_access_token() -> Optional[ServerAccessToken]:
    doc = _token_doc(SERVER_TOKEN_DOC).get()
    if not doc.exists:
        return None

    data = doc.to_dict() or {}
    if not data.get("refreshToken"):
        return None
    return ServerAccessToken(
        accessToken=data.get("accessToken") or None,
        refreshToken=data["refreshToken"],
        updatedAt=_updated_at(data),
    )

def save_server_access_token(access_token: str, refresh_token: str) -> ServerAccessToken:
    # pydantic rejects an empty refresh token before anything is written
    token = ServerAccessToken(
        accessToken=access_token,
        refreshToken=refresh_token,
        updatedAt=_now_utc(),
    )
    _token_doc(SERVER_TOKEN_DOC).set(token.model_dump())
    return token

def seed_server_refresh_token(refresh_token: str) -> ServerAccessToken:
    """
    Store a refresh token obtained out-of-band (manual authorization code flow).
    The access token stays empty until the next scheduled refresh.
    """
    token = ServerAccessToken(refreshToken=refresh_token, updatedAt=_now_utc())
    _token_doc(SERVER_TOKEN_DOC).set(token.model_dump())
    return token
