"""API engine — asks a local HTTP transliteration service for suggestions."""
import logging
from typing import List

import requests

from khmersuggest.engine import EngineError, SUGGESTION_LIMIT

logger = logging.getLogger(__name__)


class APIEngine:
    """Engine backed by an HTTP endpoint.

    Expected API:
        POST {base}/v1/suggest  {"text": "suo", "limit": 3}
        POST {base}/v1/learn    {"romanization": "suo", "text": "ស"}

    Every transport or format failure is raised as EngineError.
    """

    def __init__(self, url: str, timeout_ms: int = 500):
        self.url = url
        self.timeout_sec = timeout_ms / 1000.0

    @property
    def base_url(self) -> str:
        """Derive the API base URL from the configured endpoint URL.

        e.g. http://localhost:8080/v1/suggest → http://localhost:8080
        """
        url = self.url.rstrip('/')
        for suffix in ('/v1/suggest', '/suggest', '/v1/learn', '/learn'):
            if url.endswith(suffix):
                return url[:-len(suffix)]
        return url

    def suggest_top3(self, word: str) -> List[str]:
        data = self._post("/v1/suggest", {"text": word, "limit": SUGGESTION_LIMIT})
        results = self._extract_suggestions(data)
        logger.debug("API returned %d suggestions for %r", len(results), word)
        return results[:SUGGESTION_LIMIT]

    def increment_frequency(self, romanization: str, chosen_text: str):
        self._post("/v1/learn", {"romanization": romanization, "text": chosen_text})

    def _post(self, path: str, payload: dict):
        endpoint = self.base_url + path
        try:
            resp = requests.post(endpoint, json=payload, timeout=self.timeout_sec)
            resp.raise_for_status()
            return resp.json()
        except requests.Timeout as e:
            logger.warning("API timeout at %s", endpoint)
            raise EngineError(f"timeout calling {endpoint}") from e
        except requests.ConnectionError as e:
            logger.warning("API connection error — is the server running? URL: %s", endpoint)
            raise EngineError(f"cannot connect to {endpoint}") from e
        except requests.RequestException as e:
            logger.warning("API error at %s: %s", endpoint, e)
            raise EngineError(str(e)) from e
        except ValueError as e:
            logger.warning("API returned a non-JSON body at %s", endpoint)
            raise EngineError(f"invalid JSON from {endpoint}") from e

    @staticmethod
    def _extract_suggestions(data) -> List[str]:
        """Extract suggestion strings from the API response.

        Supports multiple response formats:
        - ["...", ...]
        - {"suggestions": [...]}, {"results": [...]}, {"candidates": [...]}
        where items are strings or objects with a "text" key.
        """
        items = None
        if isinstance(data, list):
            items = data
        elif isinstance(data, dict):
            for key in ("suggestions", "results", "candidates"):
                if isinstance(data.get(key), list):
                    items = data[key]
                    break
        if items is None:
            raise EngineError(f"unexpected response format: {type(data).__name__}")

        results = []
        for item in items:
            if isinstance(item, dict):
                item = item.get("text")
            if isinstance(item, str) and item.strip() and item not in results:
                results.append(item)
        return results
