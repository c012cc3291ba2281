"""
AI app: the auto-responder for conversations with the bot account.

Related apps:
    - chat: Dispatcher enqueues replies; MessageService stores and broadcasts them
    - authentication: The bot user

Provider Architecture:
    Uses protocol-based abstraction for text-generation providers.
    See providers/ for implementations.
"""
