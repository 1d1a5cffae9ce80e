import os
from dotenv import load_dotenv

def load_env():
    if os.getenv("ENVIRONMENT") == "production":
        return

    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    env_path = os.path.join(base_dir, ".env")

    if os.path.exists(env_path):
        load_dotenv(env_path)

# Load env now
load_env()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Spotify
CLIENT_ID = os.getenv("CLIENT_ID")
CLIENT_SECRET = os.getenv("CLIENT_SECRET")
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

# CORS: only the form's own site may call the endpoints
ALLOWED_ORIGIN = os.getenv("ALLOWED_ORIGIN", "https://shirebeats.com")

# Playlist slots (ordered JSON list of playlist ids)
PLAYLIST_IDS_FILE = os.getenv("PLAYLIST_IDS_FILE", os.path.join(BASE_DIR, "playlist_ids.json"))

# Firestore
TOKEN_COLLECTION = os.getenv("TOKEN_COLLECTION", "spotify")
SUBMISSIONS_COLLECTION = os.getenv("SUBMISSIONS_COLLECTION", "submissions")

# Scheduler
TOKEN_REFRESH_MINUTES = int(os.getenv("TOKEN_REFRESH_MINUTES", "15"))
SCHEDULER_ENABLED = os.getenv("SCHEDULER_ENABLED", "true").lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# GCP Credentials (base64)
GOOGLE_CLOUD_CREDENTIALS = os.getenv("GOOGLE_CLOUD_CREDENTIALS")
