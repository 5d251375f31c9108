"""Shared utilities for gh-notification-triage."""
