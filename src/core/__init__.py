"""Core domain package for textcast.

Core contains command parsing, the broadcast policy and the dispatch sequence
without any Telegram or storage-specific code, keeping the decision logic
portable and testable.
"""
