# -*- coding: utf-8 -*-
"""
gtranslate CLI Main Module
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gtranslate.core.constants import CREDENTIALS_ENV_VAR
from gtranslate.core.island_guard import IslandDetector, IslandError
from gtranslate.core.languages import format_language_table, is_known_language
from gtranslate.core.translation_pipeline import TranslationPipeline
from gtranslate.core.translator import (
    BaseTranslator,
    CommandTokenProvider,
    GoogleTranslator,
    TranslationError,
)
from gtranslate.utils.config import ConfigError, ConfigManager
from gtranslate.utils.encoding import read_text_safely
from gtranslate.utils.logger import setup_logger
from gtranslate.version import VERSION

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2

PROG = "gtranslate"

DESCRIPTION = (
    "Translates text from one language to another with the Google Translate API v2. "
    "Formatting tags (%1$s, %03c, %d, %e), substitution tags ({} and []), "
    "function name prefixes (class::method) and HTML tags are left untranslated."
)

MANUAL = """\
NAME
    {prog} - translate text with Google Translate API v2, keeping
    format specifiers, placeholders, function prefixes and HTML tags intact

SYNOPSIS
    $ {prog} -s en -t de -q 'Hello world, my name is Jeff, the god of biscuits.' 2>/dev/null
    Hallo Welt, ich heiße Jeff, der Gott der Kekse.

    Information and debug messages go to STDERR.

OPTIONS
  Mandatory
    -s, --source LANG    ISO 639-1 language to translate from, see below
    -t, --target LANG    ISO 639-1 language to translate to, see below
    -q, --query TEXT     String to translate, in quotes
        --query-file F   Read the string to translate from file F instead

  Optional
    -c, --config FILE    JSON configuration file
    -d, --debug          Debug mode, lots of messages on STDERR
    -m, --man            Show this manual page
        --write-config F Write the effective configuration (file + environment)
                         to F as JSON and exit
    -h, --help           Show short usage help

SETTING UP GOOGLE CLOUD
    See https://cloud.google.com/translate/.

    You need a Google Cloud Platform project with the Translation API
    enabled and the Cloud SDK (gcloud) installed. Download the private key
    of a service account as a JSON file, keep it somewhere safe and point
    {env} at it:

      $ export {env}="${{HOME}}/.gcp/[projectname]-[id].json"

    Check that a token can be issued:

      $ gcloud auth application-default print-access-token

    It should print a long key string. The token changes on every call,
    {prog} asks for a fresh one each run.

ENVIRONMENT
    {env}         service account key used by gcloud
    GTRANSLATE_ENDPOINT, GTRANSLATE_TOKEN_COMMAND, GTRANSLATE_MARKER,
    GTRANSLATE_CONVERSIONS, GTRANSLATE_TIMEOUT, GTRANSLATE_LOG_FILE
                                           override the configuration file

EXIT STATUS
    0 success, 1 usage or configuration error, 2 translation failure

SUPPORTED LANGUAGES
{languages}
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description=DESCRIPTION)
    parser.add_argument('-s', '--source', help='Language to translate from (e.g. en)')
    parser.add_argument('-t', '--target', help='Language to translate to (e.g. de)')
    query = parser.add_mutually_exclusive_group()
    query.add_argument('-q', '--query', help='Text to translate, in quotes')
    query.add_argument('--query-file', help='Read the text to translate from a file')
    parser.add_argument('-c', '--config', help='JSON configuration file')
    parser.add_argument('-d', '--debug', action='store_true', help='Debug messages on stderr')
    parser.add_argument('-m', '--man', action='store_true', help='Show the full manual page')
    parser.add_argument('--write-config', metavar='FILE',
                        help='Write the effective configuration to FILE and exit')
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')
    return parser


def render_manual() -> str:
    languages = "\n".join(f"    {line}" for line in format_language_table(74))
    return MANUAL.format(prog=PROG, env=CREDENTIALS_ENV_VAR, languages=languages)


def read_query(args, logger: logging.Logger) -> Optional[str]:
    if args.query is not None:
        return args.query
    if args.query_file is None:
        return None
    text = read_text_safely(Path(args.query_file))
    if text is None:
        logger.error(f"Cannot read query file: {args.query_file}")
        return None
    return text.rstrip("\r\n")


def ensure_utf8_streams():
    """Switch stdout/stderr to UTF-8 where the stream supports it."""
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            try:
                stream.reconfigure(encoding="utf-8", errors="replace")
            except (OSError, ValueError):
                continue


def main(argv: Optional[List[str]] = None, translator: Optional[BaseTranslator] = None) -> int:
    ensure_utf8_streams()
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO
    logger = setup_logger(PROG, level=level)

    if args.man:
        print(render_manual())
        return EXIT_USAGE

    try:
        config = ConfigManager(args.config)
    except ConfigError as e:
        logger.error(str(e))
        return EXIT_USAGE
    if config.log_settings.log_file:
        logger = setup_logger(PROG, level=level, log_file=config.log_settings.log_file)

    if args.write_config:
        try:
            config.save_config(args.write_config)
        except OSError as e:
            logger.error(f"Cannot write configuration to {args.write_config}: {e}")
            return EXIT_USAGE
        return EXIT_OK

    query = read_query(args, logger)
    if not args.source or not args.target or query is None:
        logger.error("Missing parameters")
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    for code in (args.source, args.target):
        if not is_known_language(code):
            logger.warning(f"Language code '{code}' is not in the supported list, sending it anyway")

    ts = config.translation_settings
    if translator is None:
        translator = GoogleTranslator(
            token_provider=CommandTokenProvider(ts.token_command, logger=logger),
            endpoint=ts.endpoint,
            timeout=ts.timeout,
            logger=logger,
        )

    with translator:
        try:
            pipeline = TranslationPipeline(
                translator,
                detector=IslandDetector(ts.conversions),
                marker=ts.marker,
                logger=logger,
            )
            result = pipeline.run(query, args.source, args.target)
        except IslandError as e:
            logger.error(str(e))
            return EXIT_USAGE
        except TranslationError as e:
            logger.error(str(e))
            return EXIT_FAILURE

    sys.stdout.write(result.translated_text + "\n")
    sys.stdout.flush()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
