"""Suggestion cache — bounded word → candidates map shared by requests."""
import logging
import threading
from itertools import islice
from typing import Dict, Optional, Sequence, Tuple

from khmersuggest.candidates import Candidate

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
DEFAULT_EVICT_BATCH = 20


class SuggestionCache:
    """Caches ranked candidates per romanized word.

    Bounded by flushing a batch of the oldest insertions once full. This is
    a coarse bound, not LRU: hits do not refresh an entry's position.

    Every invalidate() and clear() bumps a generation. A writer that read
    the generation before calling the engine stores its result through
    put_if_generation(), which refuses if the word was invalidated meanwhile.

    The lock only guards the dict operation itself and is never held while
    the engine runs.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY,
                 evict_batch: int = DEFAULT_EVICT_BATCH):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.evict_batch = max(1, evict_batch)
        self._entries: Dict[str, Tuple[Candidate, ...]] = {}
        self._epoch = 0  # bumped by clear()
        self._key_generations: Dict[str, int] = {}  # bumped by invalidate()
        self._lock = threading.Lock()

    def get(self, word: str) -> Optional[Tuple[Candidate, ...]]:
        with self._lock:
            return self._entries.get(word)

    def put(self, word: str, candidates: Sequence[Candidate]):
        entry = tuple(candidates)
        with self._lock:
            self._put_locked(word, entry)

    def generation(self, word: str) -> Tuple[int, int]:
        with self._lock:
            return self._epoch, self._key_generations.get(word, 0)

    def put_if_generation(self, word: str, generation: Tuple[int, int],
                          candidates: Sequence[Candidate]) -> bool:
        """Store candidates unless word was invalidated since generation."""
        entry = tuple(candidates)
        with self._lock:
            if (self._epoch, self._key_generations.get(word, 0)) != generation:
                return False
            self._put_locked(word, entry)
            return True

    def invalidate(self, word: str) -> bool:
        """Drop the entry for word. Returns True if one was present."""
        with self._lock:
            self._key_generations[word] = self._key_generations.get(word, 0) + 1
            return self._entries.pop(word, None) is not None

    def clear(self):
        with self._lock:
            self._entries.clear()
            self._key_generations.clear()
            self._epoch += 1

    def _put_locked(self, word: str, entry: Tuple[Candidate, ...]):
        if word not in self._entries and len(self._entries) >= self.capacity:
            self._evict_locked()
        self._entries[word] = entry

    def _evict_locked(self):
        # dicts iterate in insertion order, so this drops the oldest keys
        victims = list(islice(self._entries, self.evict_batch))
        for key in victims:
            del self._entries[key]
        logger.debug("Cache full, evicted %d entries", len(victims))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, word) -> bool:
        with self._lock:
            return word in self._entries
