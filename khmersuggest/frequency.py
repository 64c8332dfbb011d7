"""Persistent store of learned romanization → Khmer choices."""
import json
import logging
import threading
from pathlib import Path
from typing import Dict

from khmersuggest.config import FREQUENCY_FILE

logger = logging.getLogger(__name__)


class FrequencyStore:
    def __init__(self, path=None):
        self.path = Path(path) if path else FREQUENCY_FILE
        self._counts: Dict[str, Dict[str, int]] = {}  # roman → {khmer: count}
        self._lock = threading.Lock()
        self.load()

    def load(self):
        if self.path.exists():
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                self._counts = {
                    roman: {text: int(n) for text, n in choices.items()}
                    for roman, choices in data.items()
                    if isinstance(choices, dict)
                }
            except (IOError, ValueError, TypeError, AttributeError) as e:
                self._counts = {}
                logger.warning("Ignoring unreadable frequency store %s: %s", self.path, e)

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._counts, f, indent=2, ensure_ascii=False)

    def increment(self, roman: str, text: str) -> int:
        """Record one more choice of text for roman. Returns the new count."""
        key = roman.strip().lower()
        with self._lock:
            choices = self._counts.setdefault(key, {})
            choices[text] = choices.get(text, 0) + 1
            self.save()
            return choices[text]

    def count(self, roman: str, text: str) -> int:
        with self._lock:
            return self._counts.get(roman.strip().lower(), {}).get(text, 0)

    def learned(self, roman: str) -> Dict[str, int]:
        """All learned choices for roman."""
        with self._lock:
            return dict(self._counts.get(roman.strip().lower(), {}))

    def clear(self):
        with self._lock:
            self._counts.clear()
            self.save()
