# mixtape/services/token_jobs.py
import logging
from mixtape.services.spotify_token_service import obtain_client_token, obtain_server_token

logger = logging.getLogger(__name__)


# The jobs run on a fixed tick. A failed run is only logged; the next tick
# retries, and the current token is still valid for at least 45 minutes.

def refresh_client_access_token(event=None, context=None) -> bool:
    """Scheduled client-token refresh. Accepts (event, context) for Pub/Sub triggers."""
    try:
        obtain_client_token()
    except Exception as e:
        logger.error(f"Failed to refresh client access token: {e}")
        return False

    logger.info("Client access token refreshed successfully")
    return True


def refresh_server_access_token(event=None, context=None) -> bool:
    """Scheduled server-token refresh. Accepts (event, context) for Pub/Sub triggers."""
    try:
        obtain_server_token()
    except Exception as e:
        logger.error(f"Failed to refresh server access token: {e}")
        return False

    logger.info("Server access token refreshed successfully")
    return True
