from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ipredirect.common.logging_ctx import request_logger
from .models import Candidate, FallbackPolicy, ScoredCandidate


def lookup_by_identifier(candidates: Iterable[Candidate], identifier: str) -> Optional[Candidate]:
    for candidate in candidates:
        if candidate.identifier == identifier:
            return candidate
    return None


def best_scored(scored: Iterable[ScoredCandidate]) -> Optional[ScoredCandidate]:
    """Highest score wins; on ties the earlier candidate is kept."""
    best: Optional[ScoredCandidate] = None
    for entry in scored:
        if best is None or entry.score > best.score:
            best = entry
    return best


def needs_fallback(best: Optional[ScoredCandidate], fallback: FallbackPolicy) -> bool:
    return best is None or best.score < fallback.minimum_acceptable_score


def select_best(
    candidates: Sequence[Candidate],
    scored: Sequence[ScoredCandidate],
    fallback: FallbackPolicy,
) -> Optional[Candidate]:
    """
    Pick the best fitting candidate, replacing it with the configured
    fallback candidate when nothing reaches the minimum score.

    The fallback is resolved purely by identifier; its own score is not
    considered. If the identifier is unknown the scanned best is returned
    even when it is below the threshold.
    """
    log = request_logger()
    best = best_scored(scored)

    if needs_fallback(best, fallback):
        replacement = lookup_by_identifier(candidates, fallback.candidate_identifier)
        if replacement is not None:
            log.info(
                "Best score {} below {}; using fallback '{}'",
                None if best is None else best.score,
                fallback.minimum_acceptable_score,
                replacement.identifier,
            )
            return replacement
        log.warning(
            "Fallback candidate '{}' not found; keeping {}",
            fallback.candidate_identifier,
            None if best is None else best.candidate.identifier,
        )

    if best is None:
        return None
    log.debug("Selected '{}' with score {}", best.candidate.identifier, best.score)
    return best.candidate
