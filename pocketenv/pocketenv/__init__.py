"""Pocketenv - Environment setup and script generation for the Pocket stack.

Resolves deployment settings (reuse, prompt, generate, validate) and renders
the env file, reverse-proxy config and lifecycle scripts from them.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
