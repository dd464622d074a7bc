"""
Sergeant: extracts exercise punishments from assistant text and verifies them with pose-based rep counting.
"""

__version__ = "0.1.0"
