from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ValidationError

from .config_models import NoMatchingConfig, QuantifierConfig, RuleBodyConfig
from .errors import ConfigurationError
from .models import (
    DIMENSION_BROWSER_LANGUAGE,
    DIMENSION_COUNTRY,
    DIMENSION_DOMAIN,
    Candidate,
    DimensionWeight,
    FallbackPolicy,
    RedirectDecision,
    RequestSignals,
    ScoredCandidate,
    WeightPolicy,
)
from .quantifier import score_all
from .selection import best_scored, lookup_by_identifier, needs_fallback, select_best

SECTION_QUANTIFIER = "quantifier"
SECTION_NO_MATCHING = "noMatchingConfiguration"
SECTION_REDIRECT = "redirectConfiguration"

REQUIRED_SECTIONS = (SECTION_QUANTIFIER, SECTION_NO_MATCHING, SECTION_REDIRECT)


def build_identifier(page_identifier: Any, language_parameter: int) -> str:
    return f"{page_identifier}_{language_parameter}"


def _validate(model: type[BaseModel], payload: Any, section: str) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid '{section}' configuration: {exc.error_count()} error(s)",
            section=section,
            data={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc


def _as_language_parameter(raw: Any, page_identifier: Any) -> int:
    if isinstance(raw, bool):
        raise ConfigurationError(
            f"Language parameter for page '{page_identifier}' must be an integer, got {raw!r}",
            section=SECTION_REDIRECT,
        )
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise ConfigurationError(
        f"Language parameter for page '{page_identifier}' must be an integer, got {raw!r}",
        section=SECTION_REDIRECT,
    )


def weight_policy_from_config(quantifier: QuantifierConfig, no_matching: NoMatchingConfig) -> WeightPolicy:
    override = quantifier.browser_language.partial_or_full_match_on_same_language_uid
    dimensions = {
        DIMENSION_BROWSER_LANGUAGE: quantifier.browser_language,
        DIMENSION_COUNTRY: quantifier.country_based_on_ip,
        DIMENSION_DOMAIN: quantifier.domain,
    }
    return WeightPolicy(
        dimension_weights={
            name: DimensionWeight(
                exact_match_weight=cfg.total_match,
                wildcard_match_weight=cfg.wild_card_match,
            )
            for name, cfg in dimensions.items()
        },
        same_language_override_weight=override or 0,
        fallback=FallbackPolicy(
            candidate_identifier=no_matching.identifier_usage,
            minimum_acceptable_score=no_matching.match_min_quantifier,
        ),
    )


def candidates_from_rule_tree(tree: Mapping[Any, Any]) -> List[Candidate]:
    """
    Flatten ``page -> languageParameter -> rule body`` into candidates,
    keeping the traversal order of the mapping.
    """
    if not isinstance(tree, Mapping):
        raise ConfigurationError(
            f"'{SECTION_REDIRECT}' must be a mapping of page identifiers",
            section=SECTION_REDIRECT,
        )

    candidates: List[Candidate] = []
    for page_identifier, languages in tree.items():
        if not isinstance(languages, Mapping):
            raise ConfigurationError(
                f"Rules for page '{page_identifier}' must be a mapping of language parameters",
                section=SECTION_REDIRECT,
            )
        for raw_language, body in languages.items():
            language_parameter = _as_language_parameter(raw_language, page_identifier)
            rule: RuleBodyConfig = _validate(RuleBodyConfig, body or {}, SECTION_REDIRECT)
            candidates.append(
                Candidate(
                    identifier=build_identifier(page_identifier, language_parameter),
                    page_identifier=str(page_identifier),
                    language_parameter=language_parameter,
                    accepted_browser_languages=tuple(rule.browser_languages),
                    accepted_countries=tuple(rule.countries),
                    accepted_domains=tuple(rule.domains),
                )
            )
    return candidates


class CandidateSet:
    """Ordered redirect candidates plus the policy used to rank them."""

    def __init__(self, candidates: Iterable[Candidate], policy: WeightPolicy) -> None:
        self.candidates: Tuple[Candidate, ...] = tuple(candidates)
        self.policy = policy

        duplicates = [key for key, count in Counter(c.identifier for c in self.candidates).items() if count > 1]
        if duplicates:
            logger.warning("Duplicate candidate identifiers {}; lookups return the first", sorted(duplicates))

    @classmethod
    def from_config(cls, raw: Mapping[str, Any]) -> "CandidateSet":
        if not isinstance(raw, Mapping):
            raise ConfigurationError("Redirect configuration must be a mapping")
        for section in REQUIRED_SECTIONS:
            if raw.get(section) is None:
                raise ConfigurationError(f"Missing configuration section '{section}'", section=section)

        quantifier = _validate(QuantifierConfig, raw[SECTION_QUANTIFIER], SECTION_QUANTIFIER)
        no_matching = _validate(NoMatchingConfig, raw[SECTION_NO_MATCHING], SECTION_NO_MATCHING)
        candidates = candidates_from_rule_tree(raw[SECTION_REDIRECT])

        policy = weight_policy_from_config(quantifier, no_matching)
        logger.debug(
            "Loaded {} redirect candidates (override weight {}, fallback '{}' below {})",
            len(candidates),
            policy.same_language_override_weight,
            policy.fallback.candidate_identifier,
            policy.fallback.minimum_acceptable_score,
        )
        return cls(candidates, policy)

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self):
        return iter(self.candidates)

    def lookup_by_identifier(self, identifier: str) -> Optional[Candidate]:
        return lookup_by_identifier(self.candidates, identifier)

    def score_all(self, signals: Optional[RequestSignals] = None) -> Tuple[ScoredCandidate, ...]:
        return score_all(self.policy, self.candidates, signals or RequestSignals())

    def select_best(self, scored: Iterable[ScoredCandidate]) -> Optional[Candidate]:
        return select_best(self.candidates, tuple(scored), self.policy.fallback)

    def evaluate(self, signals: Optional[RequestSignals] = None) -> RedirectDecision:
        """Score every candidate for one request and pick the redirect target."""
        scored = self.score_all(signals)
        chosen = self.select_best(scored)

        best = best_scored(scored)
        used_fallback = (
            needs_fallback(best, self.policy.fallback)
            and self.lookup_by_identifier(self.policy.fallback.candidate_identifier) is not None
        )
        score = next((entry.score for entry in scored if entry.candidate is chosen), None)
        return RedirectDecision(candidate=chosen, score=score, used_fallback=used_fallback, scores=scored)
