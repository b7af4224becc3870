"""Shared utilities: logging, events, threading and paths."""
