import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import CORS_ORIGINS
from database import init_db
from errors import FitTrackerError
from responses import error_response, success_response
from routes.auth_routes import router as auth_router
from routes.steps_routes import router as steps_router
from routes.workout_routes import router as workout_router
from routes.user_routes import router as user_router
from routes.progress_routes import router as progress_router
from services.validation import DESCRIBED_ERRORS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="FitTracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error envelope ────────────────────────────────────────────────
@app.exception_handler(FitTrackerError)
async def fittracker_error_handler(request: Request, exc: FitTrackerError):
    return error_response(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Field failures carry their own message and the first one is reported;
    anything else (malformed JSON, wrong body shape) is reported together."""
    errors = exc.errors()
    described = [err["msg"] for err in errors if err.get("type") in DESCRIBED_ERRORS]
    if described:
        return error_response(described[0], 400)

    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return error_response(", ".join(messages) or "Invalid request", 400)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response("Internal server error. Please try again.", 500)


@app.get("/api/health-check")
async def health():
    return success_response({"status": "ok"}, "Backend is alive!")


app.include_router(auth_router)
app.include_router(steps_router)
app.include_router(workout_router)
app.include_router(user_router)
app.include_router(progress_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
