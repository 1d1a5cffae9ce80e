# mixtape/api/submission_api.py
import logging
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from mixtape.models.submission_models import SubmissionRequest
from mixtape.services.spotify_token_service import TokenNotConfiguredError
from mixtape.services.submission_service import SubmissionWriteError, submit

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post(
    "/submitForm",
    summary="Submit a song collection",
    description=(
        "Merges the submitted tracks into the shared playlists (slot i → playlist i, "
        "only tracks not already present) and stores the submission."
    ),
    response_class=PlainTextResponse,
)
def submit_form(payload: SubmissionRequest):
    try:
        result = submit(payload)
    except TokenNotConfiguredError as e:
        logger.error(f"Submission rejected: {e}")
        return PlainTextResponse("Server access token not found", status_code=500)
    except SubmissionWriteError as e:
        logger.error(f"Error writing document: {e}")
        return PlainTextResponse("Error writing data", status_code=500)
    except Exception:
        logger.exception("Submission failed")
        return PlainTextResponse("Submission failed", status_code=500)

    logger.debug(f"{result.submission_id} outcomes: {[o.status for o in result.outcomes]}")
    return PlainTextResponse("Data received")


# Anything but POST is rejected before the body is read or Spotify is called
@router.api_route(
    "/submitForm",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
def submit_form_invalid_method():
    return PlainTextResponse("Invalid request method", status_code=400)
