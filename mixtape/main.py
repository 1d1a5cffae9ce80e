# mixtape/main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mixtape.config.logging_config import setup_logging
from mixtape.config.settings import ALLOWED_ORIGIN, SCHEDULER_ENABLED, TOKEN_REFRESH_MINUTES
from mixtape.scheduler import init_scheduler, shutdown_scheduler

# === Import Routers ===
from mixtape.api.token_api import router as token_router
from mixtape.api.submission_api import router as submission_router

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # token refresh jobs live as long as the API process
    init_scheduler(enabled=SCHEDULER_ENABLED, minutes=TOKEN_REFRESH_MINUTES)
    yield
    shutdown_scheduler()


app = FastAPI(
    title="Mixtape Submission Backend",
    description=(
        "Backend for: "
        "• Spotify client token for browser search "
        "• Scheduled Spotify token refresh "
        "• Song submissions merged into shared playlists"
    ),
    version="1.0.0",
    lifespan=lifespan,
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=[ALLOWED_ORIGIN],   # the form's site only
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

# === Spotify client token ===
app.include_router(token_router, tags=["Spotify Token"])

# === Form submission ===
app.include_router(submission_router, tags=["Submission"])

@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "Mixtape submission backend running with Firestore + scheduled token refresh"
    }
