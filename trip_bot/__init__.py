"""Telegram bot that collects trip records and appends them to a spreadsheet."""

__version__ = "1.0.0"
