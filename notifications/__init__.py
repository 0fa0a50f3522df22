"""Notification delivery and state management app."""
