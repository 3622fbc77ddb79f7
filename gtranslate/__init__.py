"""Command-line Google Translate client that keeps placeholders, format specifiers and HTML tags untranslated."""

from gtranslate.version import VERSION

__version__ = VERSION
