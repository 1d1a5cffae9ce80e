# mixtape/services/submission_service.py
import logging
import re
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional
from mixtape.config.playlists import load_playlist_ids
from mixtape.config.settings import SUBMISSIONS_COLLECTION
from mixtape.models.submission_models import SlotOutcome, SubmissionRequest, SubmissionResult
from mixtape.services.firestore_client import get_db
from mixtape.services.spotify_playlist_service import (
    SpotifyApiError,
    add_tracks_to_playlist,
    get_playlist_track_uris,
    to_track_uris,
)
from mixtape.services.spotify_token_service import get_server_token

logger = logging.getLogger(__name__)

# Firestore document ids are capped at 1500 bytes
MAX_NAME_CHARS = 100


class SubmissionWriteError(Exception):
    """The submission record could not be stored."""


def build_submission_id(name: str, now_ms: Optional[int] = None) -> str:
    """`<epoch millis>_<name without whitespace>`; `/` is not allowed in Firestore ids."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    clean_name = re.sub(r"\s", "", name).replace("/", "")[:MAX_NAME_CHARS]
    return f"{now_ms}_{clean_name}"


def merge_slot(access_token: str, slot: int, playlist_id: str, track_ids: List[str]) -> SlotOutcome:
    """
    Append the submitted tracks that are not yet in the playlist.
    Errors are turned into an outcome, never raised.
    """
    submitted = to_track_uris(track_ids)
    if not submitted:
        logger.debug(f"No tracks submitted for slot {slot}")
        return SlotOutcome(slot=slot, playlist_id=playlist_id, status="skipped")

    # 1. Current playlist content
    try:
        current = set(get_playlist_track_uris(access_token, playlist_id))
    except SpotifyApiError as e:
        logger.error(f"Error getting tracks from playlist {playlist_id}: {e}")
        return SlotOutcome(slot=slot, playlist_id=playlist_id, status="fetch_failed", detail=str(e))

    # 2. Only tracks the playlist does not have yet
    new_uris = [uri for uri in submitted if uri not in current]
    if not new_uris:
        return SlotOutcome(slot=slot, playlist_id=playlist_id, status="unchanged")

    # 3. One batched append
    try:
        add_tracks_to_playlist(access_token, playlist_id, new_uris)
    except SpotifyApiError as e:
        logger.error(f"Error adding tracks to playlist {playlist_id}: {e}")
        return SlotOutcome(slot=slot, playlist_id=playlist_id, status="append_failed", detail=str(e))

    return SlotOutcome(slot=slot, playlist_id=playlist_id, status="appended", added=new_uris)


def merge_into_playlists(access_token: str, tracks: Dict[str, Optional[List[str]]],
                         playlist_ids: List[str]) -> List[SlotOutcome]:
    outcomes = []

    # slots in ascending order; keys outside the configured range are ignored
    for slot, playlist_id in enumerate(playlist_ids):
        track_ids = tracks.get(str(slot)) or []
        try:
            outcome = merge_slot(access_token, slot, playlist_id, track_ids)
        except Exception as e:
            logger.exception(f"Unexpected error merging slot {slot} into playlist {playlist_id}")
            outcome = SlotOutcome(slot=slot, playlist_id=playlist_id, status="error", detail=str(e))
        outcomes.append(outcome)

    return outcomes


def save_submission(submission_id: str, payload: SubmissionRequest) -> None:
    data = payload.model_dump()
    data["submittedAt"] = datetime.now(timezone.utc)

    try:
        db = get_db()
        db.collection(SUBMISSIONS_COLLECTION).document(submission_id).set(data)
    except Exception as e:
        raise SubmissionWriteError(f"Failed to write submission {submission_id}: {e}") from e


def submit(payload: SubmissionRequest, playlist_ids: Optional[List[str]] = None) -> SubmissionResult:
    """
    Merge a submission into the shared playlists and store it.

    Raises TokenNotConfiguredError before any Spotify call when no server
    token is stored. Per-playlist failures only show up in the outcomes;
    the record write is the only step whose failure propagates.
    """
    access_token = get_server_token()

    if playlist_ids is None:
        playlist_ids = load_playlist_ids()

    outcomes = merge_into_playlists(access_token, payload.tracks, playlist_ids)

    submission_id = build_submission_id(payload.name)
    save_submission(submission_id, payload)
    logger.info(f"{submission_id} successfully written!")

    return SubmissionResult(submission_id=submission_id, outcomes=outcomes)
