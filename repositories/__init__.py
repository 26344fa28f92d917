"""Persistence layer: row stores and entity repositories."""
