"""Data models for campus events."""
