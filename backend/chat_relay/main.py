from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import httpx
import logging
import sys
from openai import AsyncOpenAI

from .config import get_settings
from .firebase import firestore_client, init_firebase_app, storage_bucket
from .routers import chat
from .services.blob_uploader import ImageUploader
from .services.conversation_store import ConversationStore
from .services.generation import GenerationService

# Configure root logging if not already configured by Uvicorn
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
if not logging.getLogger().handlers:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stdout)

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [
    "https://chat-cbd.vercel.app",
]
ALLOWED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.getLogger("chat_relay").setLevel(settings.log_level.upper())

    firebase_app = init_firebase_app(settings)
    http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    openai_client = AsyncOpenAI(api_key=settings.openai_api_key)

    app.state.generation_service = GenerationService(openai_client, chat_model=settings.openai_chat_model)
    app.state.image_uploader = ImageUploader(http_client, storage_bucket(firebase_app), settings.signed_url_expires_at)
    app.state.conversation_store = ConversationStore(firestore_client(firebase_app))
    logger.info("Server is running on port http://localhost:%s", settings.port)
    try:
        yield
    finally:
        await http_client.aclose()
        await openai_client.close()


app = FastAPI(title="Chat Relay Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=ALLOWED_METHODS,
    allow_headers=ALLOWED_HEADERS,
)


# Registered after CORSMiddleware so it wraps it and sees every request first
@app.middleware("http")
async def reject_disallowed_origins(request: Request, call_next):
    origin = request.headers.get("origin")
    if origin is not None and origin not in ALLOWED_ORIGINS:
        logger.warning("CORS: rejected %s %s from origin %s", request.method, request.url.path, origin)
        return JSONResponse(status_code=403, content={"error": "Not allowed by CORS"})
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.info("Rejected invalid request to %s: %s", request.url.path, problems)
    return JSONResponse(status_code=422, content={"error": f"Invalid request: {problems}"})


app.include_router(chat.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


def run():
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
