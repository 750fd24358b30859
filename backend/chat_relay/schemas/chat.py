from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal

MessageRole = Literal['user', 'assistant', 'system']
MessageType = Literal['text', 'image']

IMAGE_PLACEHOLDER = "generated image"


class ChatMessage(BaseModel):
    # Unknown client fields (ids, timestamps) are kept so they round-trip to storage
    model_config = ConfigDict(extra='allow')

    role: MessageRole
    content: str = ''
    type: MessageType = 'text'
    images: Optional[List[str]] = None


class SendMessageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage] = Field(..., min_length=1)
    # Anything other than "image" is handled as a text request
    type: Optional[str] = 'text'
    active_conversation: str = Field(..., alias='activeConversation', min_length=1)
    user_id: str = Field(..., alias='userId', min_length=1)


class SendMessageResponse(BaseModel):
    bot: str
    type: MessageType
    images: Optional[List[str]] = None


class Conversation(BaseModel):
    id: str
    messages: List[ChatMessage]


class ErrorResponse(BaseModel):
    error: str
