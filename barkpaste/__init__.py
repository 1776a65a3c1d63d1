"""Хранилище вставок barkpaste."""

__version__ = "0.1.0"
