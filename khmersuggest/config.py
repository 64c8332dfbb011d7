"""Configuration management — JSON-based, stored in ~/.config/khmersuggest/."""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "engine": "local",  # "local" or "api"
    "api_url": "http://localhost:8080/v1/suggest",
    "api_timeout_ms": 500,
    "lexicon_path": "",  # empty → bundled resources/lexicon.tsv
    "cache_capacity": 100,
    "cache_evict_batch": 20,
    "max_candidates": 3,
    "accepted_locales": [],  # empty → every locale is accepted
    "worker_threads": 2,
    "debug_logging": False,
}

CONFIG_DIR = Path.home() / ".config" / "khmersuggest"
CONFIG_FILE = CONFIG_DIR / "config.json"
FREQUENCY_FILE = CONFIG_DIR / "frequencies.json"


class Config:
    def __init__(self, path=None):
        self.path = Path(path) if path else CONFIG_FILE
        self._data = dict(DEFAULT_CONFIG)
        self.load()

    def load(self):
        if self.path.exists():
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    stored = json.load(f)
                if not isinstance(stored, dict):
                    raise ValueError(f"expected a JSON object, got {type(stored).__name__}")
                self._data.update(stored)
            except (IOError, ValueError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self.path, e)

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self.save()

    @property
    def engine(self):
        return self._data["engine"]

    @engine.setter
    def engine(self, val):
        self._data["engine"] = val
        self.save()

    @property
    def api_url(self):
        return self._data["api_url"]

    @property
    def api_timeout_ms(self):
        return self._data["api_timeout_ms"]

    @property
    def lexicon_path(self):
        return self._data.get("lexicon_path", "")

    @property
    def cache_capacity(self):
        return int(self._data["cache_capacity"])

    @property
    def cache_evict_batch(self):
        return int(self._data["cache_evict_batch"])

    @property
    def max_candidates(self):
        return int(self._data.get("max_candidates", 3))

    @property
    def accepted_locales(self):
        return [tag.lower().replace("_", "-") for tag in self._data.get("accepted_locales") or []]

    @accepted_locales.setter
    def accepted_locales(self, val):
        self._data["accepted_locales"] = list(val)
        self.save()

    @property
    def worker_threads(self):
        return max(1, int(self._data.get("worker_threads", 2)))

    @property
    def debug_logging(self):
        return self._data["debug_logging"]
