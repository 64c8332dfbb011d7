"""Buffer snapshot — extracts the in-progress Latin word around the cursor."""
import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

_TRAILING_LATIN = re.compile(r'[a-zA-Z]+$')
_LATIN_RUN = re.compile(r'[a-zA-Z]+')


@dataclass(frozen=True)
class BufferSnapshot:
    """Read-only view of the editor text and selection.

    Selection ends of -1 mean the host has no selection info.
    """
    full_text: str
    composing_text: str = ""
    selection_start: int = -1
    selection_end: int = -1

    @property
    def has_valid_selection(self) -> bool:
        return 0 <= self.selection_start <= self.selection_end

    @property
    def is_caret(self) -> bool:
        return self.has_valid_selection and self.selection_start == self.selection_end


@dataclass(frozen=True)
class ExtractedWord:
    word: str            # Latin letters only
    preceding_text: str  # text before the word


def text_before_caret(text: str, caret: int) -> str:
    """Return ``text[:caret]`` with the caret clamped into the text."""
    if caret <= 0:
        return ""
    if caret > len(text):
        return text
    return text[:caret]


def last_latin_run(text: str) -> Optional[str]:
    """Return the last maximal run of ASCII letters in text, or None."""
    runs = _LATIN_RUN.findall(text)
    if runs:
        return runs[-1]
    return None


def extract_word(buffer: BufferSnapshot) -> Optional[ExtractedWord]:
    """Find the romanized word being typed.

    The composing text is the first guess. With a simple caret, the Latin
    run ending at the caret wins over it. Mixed Khmer/Latin input keeps
    only its last Latin run.
    """
    word = (buffer.composing_text or "").strip()
    full_text = buffer.full_text or ""

    preceding = full_text
    if buffer.is_caret:
        prefix = text_before_caret(full_text, buffer.selection_start)
        match = _TRAILING_LATIN.search(prefix)
        if match:
            word = match.group()
            preceding = prefix[:match.start()]
            logger.debug("Latin word at caret %d: %r", buffer.selection_start, word)
        else:
            preceding = prefix

    if not word:
        return None

    latin = last_latin_run(word)
    if latin is None:
        logger.debug("No Latin letters in %r", word)
        return None
    if latin != word:
        logger.debug("Narrowed mixed input %r to %r", word, latin)

    return ExtractedWord(word=latin, preceding_text=preceding)
