"""
Application Configuration Module.

This module loads environment variables (optionally from a `.env` file) and
exposes the configuration constants used throughout the application for:
- Logging verbosity
- Dependency resolution (default root manifest)
- The HTTP API (CORS origins)
"""

import os
from dotenv import load_dotenv

load_dotenv()

# ==============================================================================
# LOGGING
# ==============================================================================
LOG_LEVEL = os.getenv("LICENSE_BUNDLE_LOG_LEVEL", "WARNING").upper()

# ==============================================================================
# DEPENDENCY RESOLUTION
# ==============================================================================

# Manifest used to discover the root package when none is given explicitly
DEFAULT_MANIFEST = os.getenv("LICENSE_BUNDLE_MANIFEST", "pyproject.toml")

# ==============================================================================
# HTTP API
# ==============================================================================
API_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "LICENSE_BUNDLE_ALLOWED_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]
