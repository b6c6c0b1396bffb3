"""Logging, timing and drawing helpers."""
