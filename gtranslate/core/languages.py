# -*- coding: utf-8 -*-
"""
Supported Languages
===================

Languages supported by Google Translate v2 with the ISO 639-1 code to use
(ISO 639-2 where no 639-1 code exists: ceb, haw, hmn).

The table only feeds the manual page and a warning for unknown codes; the
API stays the authority on what it accepts.
"""

from typing import Dict, List

SUPPORTED_LANGUAGES: Dict[str, str] = {
    "af": "Afrikaans", "sq": "Albanian", "am": "Amharic", "ar": "Arabic",
    "hy": "Armenian", "az": "Azerbaijani", "eu": "Basque", "be": "Belarusian",
    "bn": "Bengali", "bs": "Bosnian", "bg": "Bulgarian", "ca": "Catalan",
    "ceb": "Cebuano", "zh-CN": "Chinese (Simplified)", "zh-TW": "Chinese (Traditional)",
    "co": "Corsican", "hr": "Croatian", "cs": "Czech", "da": "Danish",
    "nl": "Dutch", "en": "English", "eo": "Esperanto", "et": "Estonian",
    "fi": "Finnish", "fr": "French", "fy": "Frisian", "gl": "Galician",
    "ka": "Georgian", "de": "German", "el": "Greek", "gu": "Gujarati",
    "ht": "Haitian Creole", "ha": "Hausa", "haw": "Hawaiian", "he": "Hebrew",
    "hi": "Hindi", "hmn": "Hmong", "hu": "Hungarian", "is": "Icelandic",
    "ig": "Igbo", "id": "Indonesian", "ga": "Irish", "it": "Italian",
    "ja": "Japanese", "jw": "Javanese", "kn": "Kannada", "kk": "Kazakh",
    "km": "Khmer", "ko": "Korean", "ku": "Kurdish", "ky": "Kyrgyz",
    "lo": "Lao", "la": "Latin", "lv": "Latvian", "lt": "Lithuanian",
    "lb": "Luxembourgish", "mk": "Macedonian", "mg": "Malagasy", "ms": "Malay",
    "ml": "Malayalam", "mt": "Maltese", "mi": "Maori", "mr": "Marathi",
    "mn": "Mongolian", "my": "Myanmar (Burmese)", "ne": "Nepali", "no": "Norwegian",
    "ny": "Nyanja (Chichewa)", "ps": "Pashto", "fa": "Persian", "pl": "Polish",
    "pt": "Portuguese", "pa": "Punjabi", "ro": "Romanian", "ru": "Russian",
    "sm": "Samoan", "gd": "Scots Gaelic", "sr": "Serbian", "st": "Sesotho",
    "sn": "Shona", "sd": "Sindhi", "si": "Sinhala", "sk": "Slovak",
    "sl": "Slovenian", "so": "Somali", "es": "Spanish", "su": "Sundanese",
    "sw": "Swahili", "sv": "Swedish", "tl": "Tagalog", "tg": "Tajik",
    "ta": "Tamil", "te": "Telugu", "th": "Thai", "tr": "Turkish",
    "uk": "Ukrainian", "ur": "Urdu", "uz": "Uzbek", "vi": "Vietnamese",
    "cy": "Welsh", "xh": "Xhosa", "yi": "Yiddish", "yo": "Yoruba", "zu": "Zulu",
}

# Google still answers to the pre-2019 code
LANGUAGE_ALIASES: Dict[str, str] = {"iw": "he"}


def is_known_language(code: str) -> bool:
    """Case-insensitive lookup, aliases included."""
    normalized = (code or "").strip()
    if normalized in LANGUAGE_ALIASES:
        return True
    lowered = normalized.lower()
    return any(lowered == known.lower() for known in SUPPORTED_LANGUAGES)


def format_language_table(width: int = 78) -> List[str]:
    """'Name code' entries sorted by name, wrapped into lines of ``width``."""
    entries = [f"{name} {code}" for code, name in sorted(SUPPORTED_LANGUAGES.items(), key=lambda kv: kv[1])]
    lines: List[str] = []
    current = ""
    for entry in entries:
        candidate = f"{current}, {entry}" if current else entry
        if len(candidate) > width and current:
            lines.append(current + ",")
            current = entry
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
