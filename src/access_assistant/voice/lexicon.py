"""Static phrase tables used to interpret spoken settings commands."""

from __future__ import annotations

# Order matters: the first phrase contained in an utterance wins.
KEYWORD_MAP: tuple[tuple[str, str], ...] = (
    ("high contrast", "highContrast"),
    ("contrast", "highContrast"),
    ("reduced motion", "reducedMotion"),
    ("motion", "reducedMotion"),
    ("text spacing", "textSpacing"),
    ("spacing", "textSpacing"),
    ("readable font", "readableFont"),
    ("font", "readableFont"),
    ("link highlight", "linkHighlight"),
    ("links", "linkHighlight"),
    ("large text", "largeTextMode"),
    ("large button mode", "largeButtonMode"),
    ("reading mode", "readingMode"),
    ("audio assistance", "audioAssistance"),
    ("pictorial menu", "pictorialMenu"),
    ("color blind", "colorBlindMode"),
)

AFFIRMATIVE_WORDS: tuple[str, ...] = (
    "toggle",
    "switch",
    "yes",
    "yeah",
    "yep",
    "sure",
    "ok",
    "correct",
    "turn on",
    "turn off",
    "enable",
    "disable",
)


def normalize(text: str) -> str:
    """Lowercase, trim and collapse whitespace."""
    return " ".join(text.lower().split())


def find_setting(text: str) -> str | None:
    """Return the setting key of the first lexicon phrase contained in ``text``."""
    normalized = normalize(text)
    for phrase, key in KEYWORD_MAP:
        if phrase in normalized:
            return key
    return None


def is_affirmative(text: str) -> bool:
    normalized = normalize(text)
    return any(word in normalized for word in AFFIRMATIVE_WORDS)


def find_value(text: str, values: tuple[str, ...]) -> str | None:
    """Return the first allowed value named in ``text`` (hyphens may be spoken as spaces)."""
    normalized = normalize(text)
    for value in values:
        if value in normalized or value.replace("-", " ") in normalized:
            return value
    return None
