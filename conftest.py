"""Global pytest configuration."""

import os

# Pin settings for tests before any imports
os.environ.setdefault("DOCSHELF_LOG_LEVEL", "WARNING")
os.environ.setdefault("DOCSHELF_ENFORCE_REQUIRED_TAGS", "true")
