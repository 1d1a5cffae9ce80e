# scripts/seed_server_token.py
#
# One-time provisioning of the server refresh token.
# Run the authorization code flow for the playlist owner account by hand
# (scopes: playlist-modify-public playlist-modify-private playlist-read-private),
# then store the refresh token it returned:
#
#   python scripts/seed_server_token.py <refresh_token> [--refresh-now]
import argparse
import logging
import sys

from mixtape.config.logging_config import setup_logging
from mixtape.services.spotify_token_service import SpotifyAuthError, obtain_server_token
from mixtape.services.token_store import seed_server_refresh_token

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the Spotify server refresh token in Firestore")
    parser.add_argument("refresh_token", help="refresh token from a manual authorization code exchange")
    parser.add_argument("--refresh-now", action="store_true",
                        help="exchange it for an access token immediately")
    args = parser.parse_args(argv)

    setup_logging()

    refresh_token = args.refresh_token.strip()
    if not refresh_token:
        logger.error("Refresh token must not be empty")
        return 1

    seed_server_refresh_token(refresh_token)
    logger.info("Server refresh token stored")

    if args.refresh_now:
        try:
            obtain_server_token()
        except SpotifyAuthError as e:
            logger.error(f"Refresh with the seeded token failed: {e}")
            return 1
        logger.info("Server access token refreshed")

    return 0


if __name__ == "__main__":
    sys.exit(main())
