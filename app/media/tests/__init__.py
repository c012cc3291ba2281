"""Tests for attachment uploads."""
