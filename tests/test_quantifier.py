from __future__ import annotations

import pytest

from ipredirect.engine import (
    Candidate,
    DimensionWeight,
    RequestSignals,
    WeightPolicy,
    dimension_score,
    language_score,
    score_all,
)


def _policy(exact: int = 10, wildcard: int = 2, override: int = 0) -> WeightPolicy:
    weight = DimensionWeight(exact_match_weight=exact, wildcard_match_weight=wildcard)
    return WeightPolicy(
        dimension_weights={"browserLanguage": weight, "countryBasedOnIp": weight, "domain": weight},
        same_language_override_weight=override,
    )


def test_no_accepted_values_is_identity():
    assert dimension_score(_policy(), "countryBasedOnIp", [], "DE") == 1


def test_exact_and_wildcard_weights():
    policy = _policy(exact=10, wildcard=2)
    assert dimension_score(policy, "domain", ["example.com"], "example.com") == 10
    assert dimension_score(policy, "domain", ["*"], "anything.org") == 2
    assert dimension_score(policy, "domain", ["other.com"], "example.com") == 1


def test_exact_and_wildcard_compound():
    policy = _policy(exact=10, wildcard=3)
    assert dimension_score(policy, "browserLanguage", ["de", "*"], "de") == 30
    assert dimension_score(policy, "browserLanguage", ["de", "de"], "de") == 100


def test_non_positive_weight_is_skipped():
    policy = _policy(exact=0, wildcard=0)
    assert dimension_score(policy, "domain", ["example.com", "*"], "example.com") == 1


def test_unknown_dimension_is_neutral():
    policy = WeightPolicy()
    assert dimension_score(policy, "browserLanguage", ["de", "*"], "de") == 1


def test_same_language_override_on_partial_match():
    policy = _policy(override=5)
    candidate = Candidate(identifier="1_2", language_parameter=2, accepted_browser_languages=["en-gb"])
    assert language_score(policy, candidate, "en", 2) == 5


def test_same_language_override_on_full_match():
    policy = _policy(override=5)
    candidate = Candidate(identifier="1_2", language_parameter=2, accepted_browser_languages=["en"])
    assert language_score(policy, candidate, "en", 2) == 5


def test_override_needs_configured_value_to_contain_observed():
    policy = _policy(exact=10, wildcard=2, override=5)
    candidate = Candidate(identifier="1_2", language_parameter=2, accepted_browser_languages=["en"])
    assert language_score(policy, candidate, "en-GB", 2) == 1


def test_override_ignored_on_other_language():
    policy = _policy(exact=10, override=5)
    candidate = Candidate(identifier="1_2", language_parameter=2, accepted_browser_languages=["en"])
    assert language_score(policy, candidate, "en", 1) == 10


def test_override_disabled_uses_weight_table():
    policy = _policy(exact=10, override=0)
    candidate = Candidate(identifier="1_2", language_parameter=2, accepted_browser_languages=["en"])
    assert language_score(policy, candidate, "en", 2) == 10


def test_score_all_multiplies_dimensions_and_keeps_order():
    policy = _policy(exact=10, wildcard=2)
    first = Candidate(
        identifier="a",
        language_parameter=1,
        accepted_browser_languages=["de"],
        accepted_countries=["DE"],
        accepted_domains=["*"],
    )
    second = Candidate(identifier="b", language_parameter=0, accepted_browser_languages=["*"])
    signals = RequestSignals(browser_language="de", country_code="DE", domain="example.de")

    scored = score_all(policy, [first, second], signals)

    assert [entry.candidate.identifier for entry in scored] == ["a", "b"]
    assert [entry.score for entry in scored] == [10 * 10 * 2, 2]


def test_score_all_is_idempotent():
    policy = _policy()
    candidates = [
        Candidate(identifier="a", language_parameter=1, accepted_browser_languages=["de", "*"]),
        Candidate(identifier="b", language_parameter=2, accepted_countries=["*"]),
    ]
    signals = RequestSignals(browser_language="de", country_code="AT", domain="example.at")
    assert score_all(policy, candidates, signals) == score_all(policy, candidates, signals)


def test_negative_override_weight_disables_override():
    policy = WeightPolicy(same_language_override_weight=-3)
    assert policy.same_language_override_weight == 0
    assert policy.override_enabled is False


def test_policy_weights_are_read_only():
    weights = {"domain": DimensionWeight(exact_match_weight=4)}
    policy = WeightPolicy(dimension_weights=weights)
    weights["domain"] = DimensionWeight(exact_match_weight=9)

    assert policy.weight_for("domain").exact_match_weight == 4
    with pytest.raises(TypeError):
        policy.dimension_weights["domain"] = DimensionWeight()  # type: ignore[index]
