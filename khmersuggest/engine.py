"""Local transliteration engine — romanized Latin → Khmer lexicon lookup.

Lookup runs in three layers, stopping once enough suggestions are found:
1. Exact match of the romanization
2. Prefix match (romanizations that start with the input, shorter first)
3. Fuzzy match (edit distance <= 2 via pyspellchecker)

Within a romanization, spellings are ordered by lexicon frequency plus
weighted user choices from the FrequencyStore.
"""
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

from spellchecker import SpellChecker

from khmersuggest.frequency import FrequencyStore

logger = logging.getLogger(__name__)

DEFAULT_LEXICON = Path(__file__).parent / "resources" / "lexicon.tsv"
SUGGESTION_LIMIT = 3
LEARNED_WEIGHT = 10  # one accepted choice outweighs ten corpus hits


class EngineError(Exception):
    """The transliteration engine could not produce suggestions."""


def read_lexicon(path: Path) -> Dict[str, Dict[str, int]]:
    """Parse ``roman<TAB>khmer[<TAB>freq]`` lines; '#' starts a comment."""
    lexicon: Dict[str, Dict[str, int]] = {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                parts = line.split("\t")
                if len(parts) < 2 or not parts[0].strip() or not parts[1].strip():
                    logger.debug("Skipping malformed lexicon line %d", lineno)
                    continue
                try:
                    freq = int(parts[2]) if len(parts) > 2 else 1
                except ValueError:
                    freq = 1
                roman = parts[0].strip().lower()
                text = parts[1].strip()
                choices = lexicon.setdefault(roman, {})
                choices[text] = max(choices.get(text, 0), freq)
    except IOError as e:
        raise EngineError(f"cannot read lexicon {path}: {e}") from e
    return lexicon


class LocalTransliterator:
    """Lexicon-backed engine with frequency learning."""

    def __init__(self, lexicon_path=None, store: Optional[FrequencyStore] = None):
        self.lexicon_path = Path(lexicon_path) if lexicon_path else DEFAULT_LEXICON
        self.store = store if store is not None else FrequencyStore()
        self._lexicon: Dict[str, Dict[str, int]] = {}
        self._keys: List[str] = []
        self._spell: Optional[SpellChecker] = None
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self):
        """Read the lexicon and build the fuzzy index (once)."""
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            lexicon = read_lexicon(self.lexicon_path)
            spell = SpellChecker(language=None, distance=2)
            spell.word_frequency.load_words(list(lexicon))
            self._lexicon = lexicon
            self._keys = sorted(lexicon, key=lambda k: (len(k), k))
            self._spell = spell
            self._loaded = True
            logger.info("Loaded %d romanizations from %s", len(lexicon), self.lexicon_path)

    def suggest_top3(self, word: str) -> List[str]:
        return self.suggest(word, SUGGESTION_LIMIT)

    def suggest(self, word: str, limit: int = SUGGESTION_LIMIT) -> List[str]:
        self.load()
        key = word.strip().lower()
        if not key or limit <= 0:
            return []

        results: List[str] = []
        self._extend(results, self._ranked(key), limit)

        if len(results) < limit:
            for roman in self._keys:
                if roman != key and roman.startswith(key):
                    self._extend(results, self._ranked(roman), limit)
                    if len(results) >= limit:
                        break

        if len(results) < limit:
            for roman in self._fuzzy(key):
                self._extend(results, self._ranked(roman), limit)
                if len(results) >= limit:
                    break

        logger.debug("Suggestions for %r: %s", key, results)
        return results

    def increment_frequency(self, romanization: str, chosen_text: str):
        if not romanization or not romanization.strip() or not chosen_text:
            return
        count = self.store.increment(romanization, chosen_text)
        logger.debug("Learned %r → %r (count=%d)", romanization, chosen_text, count)

    def _ranked(self, roman: str) -> List[str]:
        scores = dict(self._lexicon.get(roman, {}))
        for text, n in self.store.learned(roman).items():
            scores[text] = scores.get(text, 0) + n * LEARNED_WEIGHT
        return [text for text, _ in sorted(scores.items(), key=lambda kv: -kv[1])]

    def _fuzzy(self, key: str) -> List[str]:
        found = self._spell.candidates(key) if self._spell else None
        if not found:
            return []
        near = [w for w in found if w != key and w in self._lexicon and not w.startswith(key)]
        near.sort(key=lambda w: (abs(len(w) - len(key)), w))
        return near

    @staticmethod
    def _extend(results: List[str], texts: List[str], limit: int):
        for text in texts:
            if len(results) >= limit:
                return
            if text not in results:
                results.append(text)
