"""Singleton access pattern tests."""
