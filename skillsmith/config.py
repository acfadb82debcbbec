"""Limits and defaults shared by the pipeline.

A few values can be overridden through environment variables; they are read
once at import time.
"""

from os import getenv

PLATFORMS = ("claude", "openclaw")
DEFAULT_PLATFORM = getenv("SKILLSMITH_DEFAULT_PLATFORM", "claude")

# Generated skill limits
MAX_NAME_LENGTH = 30
MAX_DESCRIPTION_LENGTH = 200
MAX_SKILL_SIZE = 50000
MAX_SKILL_LINES = 500

# Accepted document input
MIN_DOCUMENT_LENGTH = 50
MAX_DOCUMENT_LENGTH = int(getenv("SKILLSMITH_MAX_DOCUMENT_LENGTH", "100000"))

# Security scanner
NEGATION_WINDOW = 50
MAX_SHELL_BLOCKS = 10

FALLBACK_NAME = "my-skill"
