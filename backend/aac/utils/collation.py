from __future__ import annotations

import unicodedata


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(text: str) -> tuple[str, str, str]:
    """Sort key approximating a locale-aware string comparison.

    Compares base letters first (accents and case ignored), then accents, then
    case with lowercase ahead of uppercase, so "apple" < "Apple" < "Äpple" <
    "banana" regardless of the process locale.
    """
    folded = unicodedata.normalize("NFKC", text).casefold()
    return (
        _strip_accents(folded),
        folded,
        unicodedata.normalize("NFKD", text).swapcase(),
    )
