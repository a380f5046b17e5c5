"""Command line administration for BuddyPress sites."""

__version__ = "0.1.0"
