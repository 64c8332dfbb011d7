"""Khmer suggestion provider — ties together extraction, engine, ranking, cache."""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import List, Optional

from khmersuggest.buffer import BufferSnapshot, extract_word
from khmersuggest.cache import SuggestionCache
from khmersuggest.candidates import ENGINE_RESULT_LIMIT, Candidate, rank_candidates
from khmersuggest.config import Config

logger = logging.getLogger(__name__)

PROVIDER_ID = "khmer_transliterator"


class SuggestionProvider:
    """Serves Roman → Khmer suggestions for the word at the cursor.

    Each provider owns its cache and engine handle; nothing is shared
    between instances. Requests hold no state besides the cache, so any
    number may run at once. Ordering between superseded requests is up to
    the caller.

    The cache is keyed by romanization only. Cached candidates are handed
    back with the preceding text of the current buffer, not of the buffer
    that first filled the entry.
    """

    provider_id = PROVIDER_ID

    def __init__(self, engine, config: Optional[Config] = None):
        self.engine = engine
        self.config = config if config is not None else Config()
        self._cache = SuggestionCache(
            capacity=self.config.cache_capacity,
            evict_batch=self.config.cache_evict_batch,
        )
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @property
    def cache(self) -> SuggestionCache:
        return self._cache

    # ── lifecycle ────────────────────────────────────────────────────────

    def create(self):
        logger.debug("%s created", self.provider_id)

    def preload(self, locale_tag: str):
        logger.debug("Preload requested for %s", locale_tag)
        load = getattr(self.engine, "load", None)
        if callable(load):
            load()

    def destroy(self):
        self._cache.clear()
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False)
        logger.debug("%s destroyed, cache cleared", self.provider_id)

    def supports_locale(self, locale_tag: str) -> bool:
        """Check the configured locale policy; no list means any locale."""
        accepted = self.config.accepted_locales
        if not accepted:
            return True
        tag = (locale_tag or "").lower().replace("_", "-")
        return tag in accepted or tag.split("-")[0] in accepted

    # ── suggestions ──────────────────────────────────────────────────────

    def suggest(self, buffer: BufferSnapshot, max_count: int) -> List[Candidate]:
        """Return up to max_count candidates for the word at the cursor.

        Engine errors propagate and leave the cache untouched.
        """
        extracted = extract_word(buffer)
        if extracted is None:
            logger.debug("No word to transliterate")
            return []
        word = extracted.word

        generation = self._cache.generation(word)
        cached = self._cache.get(word)
        if cached is not None:
            logger.debug("Cache hit for %r", word)
            return [replace(c, preceding_text=extracted.preceding_text)
                    for c in cached[:max(max_count, 0)]]

        try:
            results = list(self.engine.suggest_top3(word))[:ENGINE_RESULT_LIMIT]
        except Exception:
            logger.warning("Engine failed for %r", word, exc_info=True)
            raise

        candidates = rank_candidates(word, extracted.preceding_text, results, len(results))
        if not self._cache.put_if_generation(word, generation, candidates):
            logger.debug("Dropped stale result for %r, invalidated during lookup", word)
        logger.debug("Returning %d suggestions for %r", len(candidates), word)
        return candidates[:max(max_count, 0)]

    def suggest_async(self, buffer: BufferSnapshot, max_count: int) -> Future:
        """Run suggest() on the provider's worker pool."""
        return self._get_executor().submit(self.suggest, buffer, max_count)

    def notify_suggestion_accepted(self, candidate: Candidate):
        romanization = candidate.romanization
        if not romanization or not romanization.strip():
            return
        self.engine.increment_frequency(romanization, candidate.display_text)
        self._cache.invalidate(romanization)
        logger.debug("Accepted %r → %r", romanization, candidate.display_text)

    def notify_suggestion_reverted(self, candidate: Candidate):
        # No negative learning; just drop the cached ranking.
        romanization = candidate.romanization
        if romanization and romanization.strip():
            self._cache.invalidate(romanization)
            logger.debug("Reverted %r, cache entry dropped", romanization)

    def remove_suggestion(self, candidate: Candidate) -> bool:
        return False

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.config.worker_threads,
                    thread_name_prefix="khmersuggest",
                )
            return self._executor


def build_engine(config: Config, kind: Optional[str] = None):
    """Create the engine named by kind, or the one selected by config."""
    if (kind or config.engine) == "api":
        from khmersuggest.api_client import APIEngine
        return APIEngine(url=config.api_url, timeout_ms=config.api_timeout_ms)

    from khmersuggest.engine import LocalTransliterator
    return LocalTransliterator(lexicon_path=config.lexicon_path or None)
