"""FastAPI dependency providers for the process-wide clients built at startup."""

from fastapi import Request

from .services.blob_uploader import ImageUploader
from .services.conversation_store import ConversationStore
from .services.generation import GenerationService


def get_generation_service(request: Request) -> GenerationService:
    return request.app.state.generation_service


def get_image_uploader(request: Request) -> ImageUploader:
    return request.app.state.image_uploader


def get_conversation_store(request: Request) -> ConversationStore:
    return request.app.state.conversation_store
