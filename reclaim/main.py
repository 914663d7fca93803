import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from reclaim.db.db import create_db_and_tables  # noqa: E402
from reclaim.routers import admin, auth, claims, found_items, lost_items, profile  # noqa: E402
from reclaim.utils.errors import InternalError, ResolutionError  # noqa: E402
from reclaim.utils.logger import setup_logging  # noqa: E402

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up...")
    create_db_and_tables()
    logger.info("DB ready.")
    yield
    logger.info("Shutting down...")

app = FastAPI(lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ResolutionError)
async def handle_resolution_error(request: Request, err: ResolutionError):
    # Conflicts are the normal result of contention; only internal failures are errors
    if isinstance(err, InternalError):
        logger.error("%s %s failed: %s", request.method, request.url.path, err)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, err.status_code, err)

    return JSONResponse(status_code=err.status_code, content={"detail": err.message})


# Register routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(profile.router, prefix="/profile", tags=["Profile"])
app.include_router(found_items.router, prefix="/found-items", tags=["Found Items"])
app.include_router(lost_items.router, prefix="/lost-items", tags=["Lost Items"])
app.include_router(claims.router, prefix="/claims", tags=["Claims"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])


@app.get("/")
def root():
    return {"status": "ok"}
