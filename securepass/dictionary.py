"""
Common-word dictionary used to penalize guessable passwords.

The evaluator only depends on the DictionaryProvider protocol. The bundled
word list ships as package data and is read once per process through
default_dictionary().
"""

from __future__ import annotations

import logging
import os
from importlib import resources
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from .errors import DictionaryLoadError

logger = logging.getLogger(__name__)

# Point the default dictionary at another word list (one word per line).
DICTIONARY_ENV_VAR = "SECUREPASS_DICTIONARY"

BUNDLED_WORDLIST = "dictionary.txt"

# Process-wide provider, or the error that stopped it from loading.
_default_provider: WordListDictionary | None = None
_default_error: DictionaryLoadError | None = None


class DictionaryProvider(Protocol):
    def words(self) -> Sequence[str]:
        ...


class StaticDictionary:
    """In-memory provider, mostly for tests and embedding."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words = tuple(w for w in words if w)

    def words(self) -> Sequence[str]:
        return self._words

    def __repr__(self) -> str:
        return f"StaticDictionary({len(self._words)} words)"


class WordListDictionary:
    """
    Provider backed by a word-list file, read eagerly on construction.

    Without a path the bundled list is used.
    """

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._words = tuple(load_dictionary(self.path))

    def words(self) -> Sequence[str]:
        return self._words

    def __repr__(self) -> str:
        source = self.path if self.path is not None else "<bundled>"
        return f"WordListDictionary({source}, {len(self._words)} words)"


def _read_wordlist(path: Path | None) -> str:
    if path is None:
        resource = resources.files("securepass") / "data" / BUNDLED_WORDLIST
        return resource.read_text(encoding="utf-8")
    return path.read_text(encoding="utf-8")


def load_dictionary(path: str | os.PathLike | None = None) -> list[str]:
    """
    Return one word per non-blank line of the word list.

    Raises DictionaryLoadError when the file is missing or unreadable.
    """
    source = Path(path) if path is not None else None
    try:
        text = _read_wordlist(source)
    except (OSError, UnicodeDecodeError) as exc:
        raise DictionaryLoadError(
            f"Can not read word list {source or BUNDLED_WORDLIST}: {exc}"
        ) from exc

    words = [line.strip() for line in text.splitlines()]
    words = [w for w in words if w]
    logger.info(
        "Loaded %d dictionary words from %s", len(words), source or BUNDLED_WORDLIST
    )
    return words


def default_dictionary() -> WordListDictionary:
    """
    Process-wide provider: the SECUREPASS_DICTIONARY file if set, otherwise
    the bundled list.

    The list is read on the first call only. If that read fails, the same
    DictionaryLoadError is raised again on every later call without touching
    the filesystem.
    """
    global _default_provider, _default_error

    if _default_error is not None:
        raise _default_error
    if _default_provider is None:
        override = os.getenv(DICTIONARY_ENV_VAR)
        try:
            _default_provider = WordListDictionary(override or None)
        except DictionaryLoadError as exc:
            logger.error("Default dictionary unavailable: %s", exc)
            _default_error = exc
            raise
    return _default_provider


def reset_default_dictionary() -> None:
    """Forget the process-wide provider and any load failure."""
    global _default_provider, _default_error
    _default_provider = None
    _default_error = None
