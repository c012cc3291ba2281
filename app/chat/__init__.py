"""
Chat app for two-party real-time messaging.

This app handles:
- Conversations between exactly two users (directory + REST API)
- Message history, ordered by server timestamp
- The WebSocket path: authenticate, authorize, classify, store, broadcast
- Handing AI-enabled conversations to the ai app's auto-responder

Related apps:
    - authentication: User model and username resolution
    - ai: Auto-responder task
    - media: Attachment upload used before sending FILE_URL messages

Usage:
    from chat.services import ConversationService
    from chat.dispatcher import MessageDispatcher

    result = ConversationService.create(initiator=alice, name="Plans",
                                        counterpart_username="bob")
    MessageDispatcher().handle(result.data.id,
                               {"type": "TEXT", "sender": "alice", "content": "hi"},
                               identity="alice")
"""
