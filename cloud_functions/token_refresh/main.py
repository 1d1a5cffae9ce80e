# Cloud Scheduler → Pub/Sub → these functions, every 15 minutes.
# Deploy alongside the mixtape package when the API runs without its
# in-process scheduler (SCHEDULER_ENABLED=false).
from mixtape.config.logging_config import setup_logging
from mixtape.services.token_jobs import (
    refresh_client_access_token as _refresh_client,
    refresh_server_access_token as _refresh_server,
)

setup_logging()


def refresh_client_access_token(event, context):
    """Triggered by the Pub/Sub tick, refresh the client credentials token."""
    _refresh_client(event, context)


def refresh_server_access_token(event, context):
    """Triggered by the Pub/Sub tick, refresh the playlist-writing token."""
    _refresh_server(event, context)
