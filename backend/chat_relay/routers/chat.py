"""Chat relay router.

Single endpoint: POST /send-message

Flow (happy path):
1. Validate the body and trim history to role/content pairs
2. type == "image": generate one image, copy it to storage, reply with a signed URL
   otherwise: ask the chat model for a reply
3. Respond, then persist the conversation (history + reply) in the background
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse

from ..dependencies import get_conversation_store, get_generation_service, get_image_uploader
from ..errors import error_response_details
from ..schemas.chat import ChatMessage, Conversation, ErrorResponse, SendMessageRequest, SendMessageResponse
from ..services.blob_uploader import ImageUploader
from ..services.conversation_store import ConversationStore
from ..services.generation import GenerationService
from ..services.history import sanitize_history

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

BOT_ROLE = "system"


@router.post(
    "/send-message",
    response_model=SendMessageResponse,
    response_model_exclude_none=True,
    responses={
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse, "description": "Provider or upload failure; provider status codes are forwarded"},
    },
)
async def send_message(
    body: SendMessageRequest,
    background_tasks: BackgroundTasks,
    generation: GenerationService = Depends(get_generation_service),
    uploader: ImageUploader = Depends(get_image_uploader),
    store: ConversationStore = Depends(get_conversation_store),
):
    logger.info(
        "[send-message] user=%s conversation=%s type=%s messages=%d",
        body.user_id, body.active_conversation, body.type, len(body.messages),
    )
    try:
        history = sanitize_history(body.messages)

        if body.type == "image":
            prompt = body.messages[-1].content
            image_url = await generation.generate_image(prompt)
            uploaded_url = await uploader.upload(image_url)
            reply = ChatMessage(role=BOT_ROLE, content="", images=[uploaded_url], type="image")
            result = SendMessageResponse(bot="", type="image", images=[uploaded_url])
        else:
            bot_text = await generation.complete_chat(history)
            reply = ChatMessage(role=BOT_ROLE, content=bot_text, type="text")
            result = SendMessageResponse(bot=bot_text, type="text")
    except Exception as e:
        status_code, message = error_response_details(e)
        logger.exception("[send-message] Failed (status=%d): %s", status_code, e)
        return JSONResponse(status_code=status_code, content={"error": message})

    conversation = Conversation(id=body.active_conversation, messages=[*body.messages, reply])
    # Runs after the response has been sent; failures only reach the log
    background_tasks.add_task(store.save, conversation, body.user_id)
    return result
