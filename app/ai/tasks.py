"""
Celery tasks for the AI app.

Usage:
    from ai.tasks import generate_auto_reply

    generate_auto_reply.delay(conversation_id, "hello")
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True)
def generate_auto_reply(conversation_id: int, text: str) -> int | None:
    """
    Post the bot's reply to a user message.

    Returns:
        Id of the stored bot message, or None if nothing was stored
    """
    from .services import AutoResponderService

    result = AutoResponderService.respond(conversation_id, text)
    if not result or result.data is None:
        logger.info(f"No auto-reply stored for conversation {conversation_id}")
        return None
    return result.data.id
