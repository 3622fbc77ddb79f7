# -*- coding: utf-8 -*-
"""
Core Constants
==============
Centralized configuration constants for the gtranslate core.
Values here are defaults; ``gtranslate.utils.config`` can override them.
"""

# ============================================================================
# TRANSLATION API
# ============================================================================

GOOGLE_TRANSLATE_HOST = "https://translation.googleapis.com"
GOOGLE_TRANSLATE_PATH = "language/translate/v2"
GOOGLE_TRANSLATE_ENDPOINT = f"{GOOGLE_TRANSLATE_HOST}/{GOOGLE_TRANSLATE_PATH}"

# Text mode: the API must not interpret HTML, islands are masked anyway
REQUEST_FORMAT = "text"

# The token changes on every call, it is never cached
TOKEN_COMMAND = ["gcloud", "auth", "application-default", "print-access-token"]
CREDENTIALS_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"

# ============================================================================
# ISLAND MASKING
# ============================================================================

# Passed through unchanged by the API
DEFAULT_MARKER = "||"
# printf conversions treated as format specifiers: %1$s %03c %d %e
DEFAULT_CONVERSIONS = "sdec"

# ============================================================================
# TIMEOUTS
# ============================================================================

REQUEST_TIMEOUT = 30  # seconds
TOKEN_COMMAND_TIMEOUT = 60  # seconds
