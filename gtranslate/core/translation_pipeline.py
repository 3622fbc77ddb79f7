# -*- coding: utf-8 -*-
"""
Translation Pipeline
====================

mask -> translate -> restore for a single query.

1. Islands (format specifiers, placeholders, HTML tags, function prefixes)
   are detected and replaced by the marker token.
2. The masked text goes to the translator.
3. Quote escaping is undone and islands are put back in order.

Translator errors are not caught here; the caller decides how to die.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from gtranslate.core.constants import DEFAULT_MARKER
from gtranslate.core.island_guard import (
    IslandDetector,
    protect_text,
    restore_islands,
    unescape_quotes,
)
from gtranslate.core.translator import BaseTranslator, TranslationRequest


class PipelineStage(Enum):
    MASKING = "masking"
    TRANSLATING = "translating"
    RESTORING = "restoring"
    COMPLETED = "completed"


@dataclass
class PipelineResult:
    original_text: str
    masked_text: str
    translated_text: str
    islands: List[str] = field(default_factory=list)
    has_islands: bool = False


class TranslationPipeline:
    def __init__(self, translator: BaseTranslator,
                 detector: Optional[IslandDetector] = None,
                 marker: str = DEFAULT_MARKER,
                 logger: Optional[logging.Logger] = None):
        self.translator = translator
        self.detector = detector or IslandDetector()
        self.marker = marker
        self.logger = logger or logging.getLogger(__name__)

    def _stage(self, stage: PipelineStage, message: str, *args):
        self.logger.debug(f"[{stage.value}] {message}", *args)

    def run(self, query: str, source_lang: str, target_lang: str) -> PipelineResult:
        self._stage(PipelineStage.MASKING, "Query >>%s<<", query)
        masked = protect_text(query, self.marker, self.detector, log=self.logger)
        self._stage(PipelineStage.MASKING, "Translating >>%s<<", masked.text)

        self._stage(PipelineStage.TRANSLATING, "%s -> %s", source_lang, target_lang)
        result = self.translator.translate_single(
            TranslationRequest(masked.text, source_lang, target_lang)
        )
        self._stage(PipelineStage.TRANSLATING, "Received >>%s<<", result.translated_text)
        if result.detected_source_lang:
            self._stage(PipelineStage.TRANSLATING, "Detected source language: %s", result.detected_source_lang)

        translated = unescape_quotes(result.translated_text)
        if masked.has_islands:
            self._stage(PipelineStage.RESTORING, "Restoring %d islands", len(masked.islands))
        translated = restore_islands(
            translated, masked.islands, self.marker,
            has_islands=masked.has_islands, log=self.logger,
        )
        self._stage(PipelineStage.COMPLETED, "Result >>%s<<", translated)

        return PipelineResult(
            original_text=query,
            masked_text=masked.text,
            translated_text=translated,
            islands=masked.islands,
            has_islands=masked.has_islands,
        )

    def translate(self, query: str, source_lang: str, target_lang: str) -> str:
        return self.run(query, source_lang, target_lang).translated_text
