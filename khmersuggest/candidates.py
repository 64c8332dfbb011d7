"""Suggestion candidates and the rank-to-confidence policy."""
from dataclasses import dataclass
from typing import List, Sequence

# Engine results arrive best-first; confidence steps down by position.
CONFIDENCE_STEPS = (0.9, 0.7, 0.5)
FALLBACK_CONFIDENCE = 0.3
AUTO_COMMIT_THRESHOLD = 0.8
ENGINE_RESULT_LIMIT = 3  # engines answer with their top three


@dataclass(frozen=True)
class Candidate:
    display_text: str         # Khmer text shown and committed
    romanization: str         # Latin input it came from
    confidence: float = 0.0
    auto_commit_eligible: bool = False
    user_removable: bool = False
    replaces_text: str = ""   # Latin text the commit replaces
    preceding_text: str = ""  # text before the Latin word

    @property
    def secondary_text(self) -> str:
        return self.romanization


def confidence_for_index(index: int) -> float:
    if 0 <= index < len(CONFIDENCE_STEPS):
        return CONFIDENCE_STEPS[index]
    return FALLBACK_CONFIDENCE


def rank_candidates(word: str, preceding_text: str, results: Sequence[str],
                    max_count: int) -> List[Candidate]:
    """Turn ordered engine output into candidates, at most ``max_count``."""
    if max_count <= 0:
        return []

    candidates = []
    for index, text in enumerate(results[:max_count]):
        confidence = confidence_for_index(index)
        candidates.append(Candidate(
            display_text=text,
            romanization=word,
            confidence=confidence,
            auto_commit_eligible=index == 0 and confidence > AUTO_COMMIT_THRESHOLD,
            user_removable=False,  # rule-based, nothing to delete
            replaces_text=word,
            preceding_text=preceding_text,
        ))
    return candidates
