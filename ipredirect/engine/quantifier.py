from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from ipredirect.common.logging_ctx import request_logger
from .models import (
    DIMENSION_BROWSER_LANGUAGE,
    DIMENSION_COUNTRY,
    DIMENSION_DOMAIN,
    WILDCARD,
    Candidate,
    RequestSignals,
    ScoredCandidate,
    WeightPolicy,
)


def dimension_score(
    policy: WeightPolicy,
    dimension: str,
    accepted_values: Iterable[str],
    observed_value: str,
) -> int:
    """
    Multiply the weight of every accepted value that matches the observed one.

    Each entry contributes on its own, so a list holding both the exact value
    and "*" compounds both weights. Non-positive weights are skipped.
    """
    weights = policy.weight_for(dimension)
    multiplier = 1
    for value in accepted_values:
        factor = 1
        if value == observed_value:
            factor = weights.exact_match_weight
        elif value == WILDCARD:
            factor = weights.wildcard_match_weight
        if factor > 0:
            multiplier *= factor
    return multiplier


def language_score(
    policy: WeightPolicy,
    candidate: Candidate,
    observed_browser_language: str,
    current_language: int,
) -> int:
    """
    Browser language score, with a shortcut for the page already being viewed.

    When the override weight is set and the candidate serves the current
    language, any configured language containing the observed one (e.g.
    "en-gb" for "en") returns the override weight directly.
    """
    if policy.override_enabled and candidate.language_parameter == current_language:
        if any(observed_browser_language in configured for configured in candidate.accepted_browser_languages):
            return policy.same_language_override_weight

    return dimension_score(
        policy,
        DIMENSION_BROWSER_LANGUAGE,
        candidate.accepted_browser_languages,
        observed_browser_language,
    )


def score_candidate(policy: WeightPolicy, candidate: Candidate, signals: RequestSignals) -> int:
    browser = language_score(policy, candidate, signals.browser_language, signals.current_language)
    country = dimension_score(policy, DIMENSION_COUNTRY, candidate.accepted_countries, signals.country_code)
    domain = dimension_score(policy, DIMENSION_DOMAIN, candidate.accepted_domains, signals.domain)
    return browser * country * domain


def score_all(
    policy: WeightPolicy,
    candidates: Sequence[Candidate],
    signals: RequestSignals,
) -> Tuple[ScoredCandidate, ...]:
    scored = tuple(ScoredCandidate(candidate=c, score=score_candidate(policy, c, signals)) for c in candidates)
    request_logger().debug(
        "Scored {} candidates for language={!r} country={!r} domain={!r} current={}",
        len(scored),
        signals.browser_language,
        signals.country_code,
        signals.domain,
        signals.current_language,
    )
    return scored
