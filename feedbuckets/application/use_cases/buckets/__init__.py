"""Bucketed unread view and range-scoped mark-as-read."""
