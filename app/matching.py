# app/matching.py
import re
import unicodedata

# Combining diacritical marks left over after NFD decomposition
_COMBINING_MARKS = re.compile("[\u0300-\u036f]")


def strip_accents(text: str) -> str:
    """
    Remove diacritics ("ração" -> "racao"). Case is left untouched.
    """
    return _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", text))


def _clean(text: str) -> str:
    return strip_accents(text.lower())


def contains(candidate: str, term: str) -> bool:
    """
    Inclusion test for a product name.

    Matches when the whole term is a substring of the candidate, or when any
    word of the term longer than 2 characters is. Comparison ignores case and
    accents.
    """
    text = _clean(candidate)
    query = _clean(term)

    if query in text:
        return True

    return any(len(word) > 2 and word in text for word in query.split(" "))


def similarity(a: str, b: str) -> float:
    """
    Ranking score in [0, 1]. Callers lower-case both sides.
    """
    if a == b:
        return 1.0
    if a in b or b in a:
        return 0.8

    words_a = a.split(" ")
    words_b = b.split(" ")

    matches = 0
    for wa in words_a:
        if any(wa in wb or wb in wa for wb in words_b):
            matches += 1

    return matches / max(len(words_a), len(words_b))
