"""Relay connection pagination service."""
