"""Tests for the developer domain package."""
