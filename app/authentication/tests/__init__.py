"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User model, manager and username validator tests
- test_services.py: AuthService tests
- test_views.py: Register, login, refresh, logout, session and me endpoints

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_models.py
"""
