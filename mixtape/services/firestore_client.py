# mixtape/services/firestore_client.py
import base64
import json
import logging
from google.cloud import firestore
from google.oauth2 import service_account
from mixtape.config.settings import GOOGLE_CLOUD_CREDENTIALS

logger = logging.getLogger(__name__)

_cached_client = None

def get_db():
    """
    Lazy-load Firestore client.

    If GOOGLE_CLOUD_CREDENTIALS (base64 service account JSON) is set, build the
    client from it; this is how the API runs outside GCP. Otherwise use the
    application default credentials of the runtime (Cloud Functions / Cloud Run).
    """

    global _cached_client

    # Already initialized → return cached client
    if _cached_client is not None:
        return _cached_client

    if not GOOGLE_CLOUD_CREDENTIALS:
        logger.info("GOOGLE_CLOUD_CREDENTIALS not set, using application default credentials")
        _cached_client = firestore.Client()
        return _cached_client

    # 1. Decode base64 → dict
    try:
        creds_json = json.loads(base64.b64decode(GOOGLE_CLOUD_CREDENTIALS))
    except Exception as e:
        raise RuntimeError(f"Failed to decode GOOGLE_CLOUD_CREDENTIALS: {e}") from e

    # 2. Build service account credentials
    try:
        creds = service_account.Credentials.from_service_account_info(creds_json)
    except Exception as e:
        raise RuntimeError(f"Failed to create service account credentials: {e}") from e

    # 3. Create Firestore client
    try:
        _cached_client = firestore.Client(credentials=creds, project=creds.project_id)
    except Exception as e:
        raise RuntimeError(f"Failed to create Firestore client: {e}") from e

    return _cached_client
