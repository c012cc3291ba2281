"""
Tests for AI app.

This package contains test modules for:
- test_providers.py: Gemini provider and registry tests
- test_services.py: AutoResponderService tests
- test_tasks.py: Celery task tests

Usage:
    pytest ai/tests/
    pytest ai/tests/test_services.py
"""
