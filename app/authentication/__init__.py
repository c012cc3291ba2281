"""
Authentication application.

Key components:
    - User model: username/password accounts (the user directory)
    - AuthService: registration, including the initial AI conversation
    - JWT login/refresh/logout views built on djangorestframework-simplejwt

Usage:
    from authentication.models import User
    from authentication.services import AuthService
"""
