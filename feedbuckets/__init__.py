"""Date-bucketed unread entries for a personal feed reader."""

__version__ = "1.0.0"
