"""Firestore persistence for conversations.

Documents live at ``users/{user_id}/conversations/{conversation_id}`` and are
replaced wholesale on every save. Saving is best-effort: errors are logged and
never raised to the caller.
"""

from __future__ import annotations

import logging

from ..schemas.chat import Conversation

logger = logging.getLogger(__name__)


def conversation_collection_path(user_id: str) -> str:
    return f"users/{user_id}/conversations"


class ConversationStore:
    def __init__(self, db):
        # Async Firestore client (firebase_admin.firestore_async)
        self.db = db

    async def save(self, conversation: Conversation, user_id: str) -> None:
        try:
            doc_ref = self.db.collection(conversation_collection_path(user_id)).document(conversation.id)
            await doc_ref.set(conversation.model_dump(exclude_unset=True))
            logger.info(
                "[firestore] Saved conversation %s for user %s (messages=%d)",
                conversation.id, user_id, len(conversation.messages),
            )
        except Exception:
            logger.exception("[firestore] Error saving conversation %s for user %s", conversation.id, user_id)
