"""
ViewSets for the chat API.

URL Structure:
    /api/v1/chat/conversations/                 GET, POST
    /api/v1/chat/conversations/{id}/            GET, DELETE
    /api/v1/chat/conversations/{id}/messages/   GET

Design Decisions:
    - Business rules live in chat.services; views only translate
      ServiceResult error codes into HTTP status codes
    - Error bodies are {"error": ..., "error_code": ...}
    - Sending happens over the WebSocket only (chat.consumers)
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.models import Conversation
from chat.serializers import (
    ConversationCreateSerializer,
    ConversationSerializer,
    WireMessageSerializer,
)
from chat.services import ConversationService, MessageService

ERROR_STATUS = {
    "COUNTERPART_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONVERSATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SAME_USER": status.HTTP_400_BAD_REQUEST,
    "DUPLICATE_CONVERSATION": status.HTTP_400_BAD_REQUEST,
    "NOT_INITIATOR": status.HTTP_403_FORBIDDEN,
    "NOT_PARTICIPANT": status.HTTP_403_FORBIDDEN,
}


def error_response(result) -> Response:
    return Response(
        result.to_response(),
        status=ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST),
    )


@extend_schema_view(
    list=extend_schema(
        operation_id="list_conversations",
        summary="List conversations",
        description="Conversations where the caller is initiator or counterpart.",
        tags=["Chat - Conversations"],
    ),
    retrieve=extend_schema(
        operation_id="get_conversation",
        summary="Get conversation",
        tags=["Chat - Conversations"],
    ),
)
class ConversationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for conversation operations.

    list:
        All conversations of the current user, newest first.

    create:
        Start a conversation with another user by username.
        404 if the username is unknown, 400 for self-chat or duplicates.

    destroy:
        Delete a conversation and its messages. Initiator only (403 otherwise).

    messages:
        Message history in ascending timestamp order. Participants only.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = ConversationSerializer
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        if not self.request.user.is_authenticated:
            return Conversation.objects.none()
        return ConversationService.list_for(self.request.user)

    def get_serializer_class(self):
        if self.action == "create":
            return ConversationCreateSerializer
        return ConversationSerializer

    @extend_schema(
        operation_id="create_conversation",
        summary="Create conversation",
        request=ConversationCreateSerializer,
        responses={
            201: ConversationSerializer,
            400: OpenApiResponse(description="Self-chat, duplicate pair or invalid body"),
            404: OpenApiResponse(description="Counterpart username not found"),
        },
        tags=["Chat - Conversations"],
    )
    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ConversationService.create(
            initiator=request.user,
            name=serializer.validated_data["name"],
            counterpart_username=serializer.validated_data["counterpart_username"],
        )
        if not result:
            return error_response(result)

        return Response(
            ConversationSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="delete_conversation",
        summary="Delete conversation",
        responses={
            204: OpenApiResponse(description="Deleted with all messages"),
            403: OpenApiResponse(description="Caller is not the initiator"),
            404: OpenApiResponse(description="Conversation not found"),
        },
        tags=["Chat - Conversations"],
    )
    def destroy(self, request, pk=None):
        result = ConversationService.delete(conversation_id=pk, requester=request.user)
        if not result:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="list_conversation_messages",
        summary="Message history",
        responses={
            200: WireMessageSerializer(many=True),
            403: OpenApiResponse(description="Caller is not a participant"),
        },
        tags=["Chat - Messages"],
    )
    @action(detail=True, methods=["get"])
    def messages(self, request, pk=None):
        result = MessageService.history(user=request.user, conversation_id=pk)
        if not result:
            return error_response(result)
        return Response(WireMessageSerializer(result.data, many=True).data)
