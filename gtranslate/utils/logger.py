# -*- coding: utf-8 -*-
"""
Sensitive Data Masking and Logging
==================================
Builds the application logger and masks access tokens and API keys before
anything reaches a handler.
"""

import logging
import re
import sys
from typing import Optional, TextIO

LOG_FORMAT = '[%(asctime)s][%(levelname)s][%(filename)s-%(funcName)s-%(lineno)d] %(message)s'

# Patterns to mask
MASKS = [
    (re.compile(r'(Bearer\s+)[A-Za-z0-9\-_.~+/]+=*'), r'\1***MASKED***'),  # Authorization header
    (re.compile(r'(ya29\.[0-9A-Za-z\-_.]{20,})'), r'ya29.***MASKED***'),  # Google OAuth access token
    (re.compile(r'(AIza[0-9A-Za-z\-_]{30,})'), r'AIza***MASKED***'),  # Google API key
]


def mask_sensitive(text: str) -> str:
    for pattern, replacement in MASKS:
        if pattern.search(text):
            text = pattern.sub(replacement, text)
    return text


class SensitiveDataFilter(logging.Filter):
    """Masks secrets in log records."""

    def filter(self, record):
        if not isinstance(record.msg, str):
            return True

        record.msg = mask_sensitive(record.msg)

        # Arguments too, e.g. log.debug("Header: %s", header)
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                mask_sensitive(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True


def setup_logger(name: str = "gtranslate", level=logging.INFO,
                 log_file: Optional[str] = None,
                 stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Logger for one process run. Messages go to stderr (never stdout, which
    carries the translation) and optionally to a UTF-8 log file.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Drop handlers from an earlier call
    if logger.handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SensitiveDataFilter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SensitiveDataFilter())
        logger.addHandler(file_handler)

    return logger
