"""Tests for the GraphQL layer."""
