"""
Constants for the chat module.

Import example:
    from chat.constants import MESSAGE_CONFIG, BROADCAST_CONFIG, WS_CLOSE_CODES
"""

from typing import Final


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Limits applied when an inbound payload is classified."""

    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters, TEXT only
    MAX_URL_LENGTH: Final[int] = 2048
    MAX_FILE_NAME_LENGTH: Final[int] = 255
    MAX_FILE_TYPE_LENGTH: Final[int] = 100
    MAX_MIME_TYPE_LENGTH: Final[int] = 100
    MAX_VOICE_BYTES: Final[int] = 5 * 1024 * 1024  # Decoded size


# =============================================================================
# Broadcast Configuration
# =============================================================================


class BROADCAST_CONFIG:
    """
    Naming for the per-conversation topic.

    The logical topic ``conversation/{id}`` maps onto the channel layer
    group ``conversation_{id}`` (group names cannot contain '/').
    """

    TOPIC_TEMPLATE: Final[str] = "conversation/{conversation_id}"
    GROUP_PREFIX: Final[str] = "conversation_"
    # Channel layer event type, dispatched to ChatConsumer.chat_message
    MESSAGE_EVENT: Final[str] = "chat.message"


# =============================================================================
# WebSocket Close Codes
# =============================================================================


class WS_CLOSE_CODES:
    """Application close codes (4000-4999 range) sent on rejected connects."""

    UNAUTHENTICATED: Final[int] = 4001
    NOT_PARTICIPANT: Final[int] = 4003
