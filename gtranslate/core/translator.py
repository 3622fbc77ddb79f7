"""Google Cloud Translation v2 client (bearer token from an external command)."""

from __future__ import annotations

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import requests

from gtranslate.core.constants import (
    CREDENTIALS_ENV_VAR,
    GOOGLE_TRANSLATE_ENDPOINT,
    REQUEST_FORMAT,
    REQUEST_TIMEOUT,
    TOKEN_COMMAND,
    TOKEN_COMMAND_TIMEOUT,
)

TokenProvider = Callable[[], str]


class TranslationError(Exception):
    """Base class for every failure of a translation call."""


class CredentialError(TranslationError):
    """The bearer token could not be obtained."""


class TransportError(TranslationError):
    """The service could not be reached or answered garbage."""


class RemoteError(TranslationError):
    """The service answered with a non-success status."""

    def __init__(self, code, message: str):
        super().__init__(f"[{code}] Translate did not work: {message}")
        self.code = code
        self.message = message


@dataclass
class TranslationRequest:
    text: str
    source_lang: str
    target_lang: str


@dataclass
class TranslationResult:
    original_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    detected_source_lang: Optional[str] = None


class CommandTokenProvider:
    """
    Runs an external command (``gcloud auth application-default
    print-access-token`` by default) and returns its output as the token.

    The command reads the service account file named by
    GOOGLE_APPLICATION_CREDENTIALS; this class never touches it.
    """

    def __init__(self, command: Optional[Sequence[str]] = None,
                 timeout: float = TOKEN_COMMAND_TIMEOUT,
                 logger: Optional[logging.Logger] = None):
        self.command = list(command) if command else list(TOKEN_COMMAND)
        self.timeout = timeout
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def __call__(self) -> str:
        if not os.environ.get(CREDENTIALS_ENV_VAR):
            self.logger.warning("%s is not set, the token command may fail", CREDENTIALS_ENV_VAR)
        self.logger.debug("Requesting access token: %s", " ".join(self.command))
        try:
            proc = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CredentialError(f"Failed to get Google Translate key: {self.command[0]} not found") from e
        except subprocess.TimeoutExpired as e:
            raise CredentialError(f"Failed to get Google Translate key: token command timed out after {self.timeout}s") from e
        except OSError as e:
            raise CredentialError(f"Failed to get Google Translate key: {e}") from e

        if proc.returncode != 0:
            detail = (proc.stderr or "").strip() or f"exit code {proc.returncode}"
            raise CredentialError(f"Failed to get Google Translate key: {detail}")
        token = (proc.stdout or "").strip()
        if not token:
            raise CredentialError("Failed to get Google Translate key: token command printed nothing")
        return token


class BaseTranslator(ABC):
    def __init__(self, token_provider: Optional[TokenProvider] = None,
                 logger: Optional[logging.Logger] = None):
        self.token_provider = token_provider or CommandTokenProvider(logger=logger)
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def close(self):
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @abstractmethod
    def translate_single(self, request: TranslationRequest) -> TranslationResult: ...

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        return self.translate_single(TranslationRequest(text, source_lang, target_lang)).translated_text


class GoogleTranslator(BaseTranslator):
    """Google Cloud Translation API v2, one request per call, no retries."""

    def __init__(self, token_provider: Optional[TokenProvider] = None,
                 endpoint: str = GOOGLE_TRANSLATE_ENDPOINT,
                 timeout: float = REQUEST_TIMEOUT,
                 logger: Optional[logging.Logger] = None):
        super().__init__(token_provider=token_provider, logger=logger)
        self.endpoint = endpoint
        self.timeout = timeout

    @staticmethod
    def build_payload(request: TranslationRequest) -> Dict[str, str]:
        return {
            'q': request.text,
            'source': request.source_lang,
            'target': request.target_lang,
            'format': REQUEST_FORMAT,
        }

    def translate_single(self, request: TranslationRequest) -> TranslationResult:
        token = self.token_provider()
        headers = {
            'Content-Type': 'application/json; charset=utf-8',
            'Authorization': f"Bearer {token}",
        }
        self.logger.debug("POST %s (%s -> %s)", self.endpoint, request.source_lang, request.target_lang)
        try:
            resp = self._get_session().post(
                self.endpoint,
                json=self.build_payload(request),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Could not reach {self.endpoint}: {e}") from e

        if resp.status_code != 200:
            code, message = self._parse_error(resp)
            raise RemoteError(code, message)

        try:
            translation = resp.json()['data']['translations'][0]
            text = translation['translatedText']
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TransportError(f"Unexpected response from translation service: {resp.text[:200]!r}") from e

        return TranslationResult(
            original_text=request.text,
            translated_text=text,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
            detected_source_lang=translation.get('detectedSourceLanguage'),
        )

    @staticmethod
    def _parse_error(resp: requests.Response):
        """(code, message) from a Google error body, HTTP status and text otherwise."""
        try:
            error = resp.json()['error']
            code = error.get('code', resp.status_code)
            errors: List[Dict] = error.get('errors') or []
            message = errors[0].get('message') if errors else None
            return code, message or error.get('message') or resp.reason or ""
        except (ValueError, KeyError, TypeError, AttributeError):
            return resp.status_code, (resp.text or resp.reason or "").strip()
