"""Telegram and storage adapters that implement the core ports."""
