"""Strip transport artifacts from agent text before extraction."""

import re

_INDEX_PREFIX_RE = re.compile(r"^\d+:\s*", re.MULTILINE)
_DATA_PREFIX_RE = re.compile(r"^data:\s*", re.MULTILINE)
_WHITESPACE_RE = re.compile(r"\s+")


def _clean_once(text: str) -> str:
    text = _INDEX_PREFIX_RE.sub("", text)
    text = _DATA_PREFIX_RE.sub("", text)
    text = text.replace("\\n", "\n").replace('\\"', '"')
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean(text: str) -> str:
    """Remove frame prefixes and escapes, and collapse whitespace.

    Applied until the text stops changing, so ``clean(clean(x)) == clean(x)``.
    """
    if not text:
        return ""
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned
