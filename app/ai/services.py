"""
Auto-responder for AI-enabled conversations.

The dispatcher enqueues ``ai.tasks.generate_auto_reply`` after a TEXT
message lands in an AI-enabled conversation; the task calls
``AutoResponderService.respond`` on a Celery worker.

Related files:
    - providers/: Text-generation providers
    - tasks.py: Celery entry point
    - chat/services.py: MessageService.persist_and_publish

Configuration:
    AI_BOT_USERNAME: Sender of every reply (default "GeminiAI")
    AI_TYPING_DELAY_SECONDS: Pause before calling the provider (default 1.5)
    AI_DEFAULT_PROVIDER: Provider name for get_provider (default "gemini")
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from django.conf import settings

from ai.providers import get_provider
from chat.constants import MESSAGE_CONFIG
from chat.models import Conversation
from chat.payloads import TextPayload
from chat.services import MessageService
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from ai.providers.base import BaseProvider
    from chat.models import Message

APOLOGY_TEXT = "Sorry, I couldn't connect to my brain. Please try again."


class AutoResponderService(BaseService):
    """
    Generate and post the bot's reply to one user message.

    Every call that finds its conversation ends with exactly one bot
    message: the generated text, or APOLOGY_TEXT when generation fails
    or comes back blank.
    """

    @classmethod
    def respond(
        cls,
        conversation_id: int,
        user_text: str,
        provider: BaseProvider | None = None,
    ) -> ServiceResult[Message | None]:
        logger = cls.get_logger()

        if not Conversation.objects.filter(pk=conversation_id).exists():
            logger.warning(
                f"Conversation {conversation_id} is gone; auto-reply dropped"
            )
            return ServiceResult.success(None)

        delay = settings.AI_TYPING_DELAY_SECONDS
        if delay > 0:
            time.sleep(delay)

        reply = cls.generate_reply(conversation_id, user_text, provider=provider)

        result = MessageService.persist_and_publish(
            conversation_id,
            settings.AI_BOT_USERNAME,
            TextPayload(content=reply),
        )
        if not result:
            logger.error(
                f"Auto-reply for conversation {conversation_id} not stored: "
                f"{result.error}"
            )
            return result

        logger.info(
            f"Posted auto-reply {result.data.id} to conversation {conversation_id}"
        )
        return result

    @classmethod
    def generate_reply(
        cls,
        conversation_id: int,
        user_text: str,
        provider: BaseProvider | None = None,
    ) -> str:
        """
        Provider text, or APOLOGY_TEXT on any failure or a blank answer.

        Replies longer than a chat message allows are cut to the limit.
        """
        logger = cls.get_logger()
        try:
            provider = provider or get_provider()
            response = provider.complete(prompt=user_text)
            text = (response.get("content") or "").strip()
        except Exception:
            logger.exception(
                f"Text generation failed for conversation {conversation_id}"
            )
            return APOLOGY_TEXT

        if not text:
            logger.warning(
                f"Provider returned a blank reply for conversation {conversation_id}"
            )
            return APOLOGY_TEXT

        limit = MESSAGE_CONFIG.MAX_CONTENT_LENGTH
        if len(text) > limit:
            logger.warning(
                f"Reply for conversation {conversation_id} truncated "
                f"from {len(text)} to {limit} characters"
            )
            text = text[:limit].rstrip()
        return text
