# mixtape/api/token_api.py
import logging
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from mixtape.models.token_model import AccessTokenResponse, ErrorResponse
from mixtape.services.spotify_token_service import get_client_token

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get(
    "/getAccessToken",
    summary="Client access token for browser-side Spotify search",
    response_model=AccessTokenResponse,
    responses={500: {"model": ErrorResponse}},
)
def get_access_token():
    try:
        access_token = get_client_token()
    except Exception as e:
        logger.error(f"getAccessToken failed: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to retrieve token"})

    return {"accessToken": access_token}
