"""Chat history trimming before it is sent to the completion API."""

from typing import Dict, List, Sequence

from ..schemas.chat import ChatMessage, IMAGE_PLACEHOLDER


def sanitize_history(messages: Sequence[ChatMessage]) -> List[Dict[str, str]]:
    """Reduce messages to ``{role, content}`` pairs.

    Image messages carry no usable text for the model, so their content is
    replaced with a fixed placeholder.
    """
    return [
        {
            "role": m.role,
            "content": IMAGE_PLACEHOLDER if m.type == "image" else m.content,
        }
        for m in messages
    ]
