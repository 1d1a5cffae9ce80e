# mixtape/services/spotify_playlist_service.py
import logging
from typing import Dict, Iterable, List, Optional
import requests
from mixtape.config.settings import SPOTIFY_API_BASE

logger = logging.getLogger(__name__)

TRACK_URI_PREFIX = "spotify:track:"
MAX_URIS_PER_ADD = 100   # Spotify rejects larger add-items bodies


class SpotifyApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# --------- helpers ---------
def to_track_uri(track_id: str) -> str:
    track_id = track_id.strip()
    if track_id.startswith(TRACK_URI_PREFIX):
        return track_id
    return f"{TRACK_URI_PREFIX}{track_id}"

def to_track_uris(track_ids: Iterable[str]) -> List[str]:
    """Canonical URIs in submission order, duplicates dropped."""
    seen = set()
    uris = []
    for track_id in track_ids:
        if not track_id or not track_id.strip():
            continue
        uri = to_track_uri(track_id)
        if uri not in seen:
            seen.add(uri)
            uris.append(uri)
    return uris


# --------- Spotify API Wrapper ---------
def _spotify_request(method: str, access_token: str, url: str, params: Optional[Dict] = None,
                     json: Optional[Dict] = None) -> Dict:
    headers = {"Authorization": f"Bearer {access_token}"}

    try:
        r = requests.request(method, url, headers=headers, params=params, json=json)
    except requests.exceptions.RequestException as e:
        raise SpotifyApiError(f"Spotify unreachable: {e}") from e

    if r.status_code not in (200, 201):
        raise SpotifyApiError(f"Spotify error {r.status_code}: {r.text}", status_code=r.status_code)

    if not r.text:
        return {}

    try:
        return r.json()
    except ValueError as e:
        raise SpotifyApiError("Spotify returned a non-JSON body", status_code=r.status_code) from e


def get_playlist_track_uris(access_token: str, playlist_id: str) -> List[str]:
    """
    All track URIs currently in the playlist, following `next` pages.
    Items without a track (removed or local files) are ignored.
    """
    url = f"{SPOTIFY_API_BASE}/playlists/{playlist_id}/tracks"
    params = {"fields": "items(track(uri)),next"}
    uris = []

    while url:
        data = _spotify_request("GET", access_token, url, params=params)

        for item in data.get("items", []):
            track = item.get("track") or {}
            if track.get("uri"):
                uris.append(track["uri"])

        # `next` already carries the query string
        url = data.get("next")
        params = None

    return uris


def add_tracks_to_playlist(access_token: str, playlist_id: str, uris: List[str]) -> None:
    url = f"{SPOTIFY_API_BASE}/playlists/{playlist_id}/tracks"

    for start in range(0, len(uris), MAX_URIS_PER_ADD):
        batch = uris[start:start + MAX_URIS_PER_ADD]
        _spotify_request("POST", access_token, url, json={"uris": batch})

    logger.info(f"Tracks added to playlist {playlist_id}: {len(uris)}")
