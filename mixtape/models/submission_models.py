# mixtape/models/submission_models.py
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

# ======================================================
# Request body of POST /submitForm
# ======================================================

class SubmissionRequest(BaseModel):
    name: str
    feedback: str = ""                                       # 500 chars in the form, not enforced here
    tracks: Dict[str, Optional[List[str]]] = Field(default_factory=dict)   # slot index → track ids, null = empty
    playlists: List[str] = Field(default_factory=list)


# ======================================================
# Per-slot merge outcome (logged, never returned to the caller)
# ======================================================

class SlotOutcome(BaseModel):
    slot: int
    playlist_id: str
    status: str                  # skipped / unchanged / appended / fetch_failed / append_failed / error
    added: List[str] = Field(default_factory=list)
    detail: Optional[str] = None


class SubmissionResult(BaseModel):
    submission_id: str
    outcomes: List[SlotOutcome]
