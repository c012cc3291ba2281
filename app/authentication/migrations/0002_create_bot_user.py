from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.db import migrations


def create_bot_user(apps, schema_editor):
    User = apps.get_model("authentication", "User")
    User.objects.get_or_create(
        username=settings.AI_BOT_USERNAME,
        defaults={"password": make_password(None), "is_active": True},
    )


def delete_bot_user(apps, schema_editor):
    User = apps.get_model("authentication", "User")
    User.objects.filter(username=settings.AI_BOT_USERNAME).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("authentication", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(create_bot_user, delete_bot_user),
    ]
