# mixtape/config/playlists.py
import json
from typing import List
from mixtape.config.settings import PLAYLIST_IDS_FILE


def load_playlist_ids(path: str = PLAYLIST_IDS_FILE) -> List[str]:
    """
    Read the ordered playlist id list. Index i is submission slot i,
    so the order in the file is significant.
    """
    with open(path, encoding="utf-8") as f:
        playlist_ids = json.load(f)

    if not isinstance(playlist_ids, list) or not all(isinstance(p, str) and p for p in playlist_ids):
        raise ValueError(f"{path} must contain a JSON list of playlist id strings")

    return playlist_ids
