# gfilekit/utils/__init__.py
"""Shared infrastructure: logging, translations and exceptions."""
