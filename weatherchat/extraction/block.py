"""Locate a brace-delimited structured block inside free text."""


def extract_block(text: str) -> str | None:
    """Return the first balanced ``{...}`` substring, or None.

    Only the earliest block is considered; later blocks are ignored even if
    the first never closes.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        if depth == 0:
            return text[start:i + 1]
    return None
