"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Conversation, Message model tests
- test_payloads.py: TEXT / VOICE / FILE_URL payload validation
- test_serializers.py: Wire message projection
- test_authorization.py: Membership checks
- test_services.py: ConversationService and MessageService tests
- test_dispatcher.py: Inbound message gates
- test_broadcast.py: Subscriber registry and channel-layer fan-out
- test_middleware.py: WebSocket JWT authentication
- test_consumers.py: WebSocket consumer tests
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_consumers.py
"""
