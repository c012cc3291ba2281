"""
Django admin configuration for chat models.
"""

from django.contrib import admin

from chat.models import Conversation, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    fields = ["sender", "message_type", "content", "file_name", "created_at"]
    readonly_fields = fields
    can_delete = False
    show_change_link = True


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "name",
        "initiator",
        "counterpart",
        "is_ai_enabled",
        "created_at",
    ]
    list_filter = ["is_ai_enabled", "created_at"]
    search_fields = ["name", "initiator__username", "counterpart__username"]
    raw_id_fields = ["initiator", "counterpart"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [MessageInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Messages are immutable; the admin is read-only."""

    list_display = ["id", "conversation", "sender", "message_type", "created_at"]
    list_filter = ["message_type", "created_at"]
    search_fields = ["sender", "content"]
    readonly_fields = [
        "conversation",
        "sender",
        "message_type",
        "content",
        "audio_mime_type",
        "file_name",
        "file_type",
        "created_at",
    ]
    exclude = ["audio_data"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
