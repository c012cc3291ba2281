"""
Custom user manager for username-based authentication.

Security:
    - Passwords are hashed via set_password()
    - Accounts without a password (the bot identity) get an unusable one
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Manager for the username-keyed User model.

    Usage:
        user = User.objects.create_user(username="alice", password="s3cret-pass")
        admin = User.objects.create_superuser(username="root", password="...")
    """

    def get_by_natural_key(self, username):
        return self.get(**{self.model.USERNAME_FIELD: username})

    def create_user(self, username, password=None, **extra_fields):
        """
        Create and save a regular user.

        Raises:
            ValueError: If username is not provided
        """
        if not username:
            raise ValueError("The Username field must be set")

        username = self.model.normalize_username(username.strip())

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(username=username, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(username, password, **extra_fields)
