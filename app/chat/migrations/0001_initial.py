import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Conversation",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Display name chosen by the initiator",
                        max_length=255,
                    ),
                ),
                (
                    "counterpart_name",
                    models.CharField(
                        help_text="Counterpart username, denormalized for display",
                        max_length=150,
                    ),
                ),
                (
                    "is_ai_enabled",
                    models.BooleanField(
                        default=False,
                        help_text="Whether text messages trigger the AI auto-responder",
                    ),
                ),
                (
                    "counterpart",
                    models.ForeignKey(
                        help_text="The other participant",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="received_conversations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "initiator",
                    models.ForeignKey(
                        help_text="User who created the conversation",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="initiated_conversations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_conversation",
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("initiator", models.F("counterpart")), _negated=True
                        ),
                        name="chat_conversation_no_self_chat",
                    ),
                    models.UniqueConstraint(
                        fields=("initiator", "counterpart"),
                        name="chat_conversation_unique_pair",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "sender",
                    models.CharField(
                        db_index=True,
                        help_text="Username of the author",
                        max_length=150,
                    ),
                ),
                (
                    "message_type",
                    models.CharField(
                        choices=[
                            ("TEXT", "Text"),
                            ("VOICE", "Voice"),
                            ("FILE_URL", "File URL"),
                        ],
                        default="TEXT",
                        help_text="Type of message content",
                        max_length=10,
                    ),
                ),
                (
                    "content",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="Text content, or the file URL for FILE_URL messages",
                    ),
                ),
                (
                    "audio_data",
                    models.BinaryField(
                        blank=True,
                        help_text="Decoded audio bytes for VOICE messages",
                        null=True,
                    ),
                ),
                (
                    "audio_mime_type",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Audio MIME type for VOICE messages",
                        max_length=100,
                    ),
                ),
                (
                    "file_name",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Original file name for FILE_URL messages",
                        max_length=255,
                    ),
                ),
                (
                    "file_type",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="File MIME type for FILE_URL messages",
                        max_length=100,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Server timestamp; history is ordered by this field",
                    ),
                ),
                (
                    "conversation",
                    models.ForeignKey(
                        help_text="Conversation this message belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="chat.conversation",
                    ),
                ),
            ],
            options={
                "db_table": "chat_message",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["conversation", "created_at"],
                        name="chat_msg_conv_created_idx",
                    ),
                ],
            },
        ),
    ]
