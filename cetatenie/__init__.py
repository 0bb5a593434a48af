"""Telegram bot that checks Romanian citizenship decree files and notifies subscribers."""

__version__ = "0.1.0"