from __future__ import annotations

from typing import Any, Dict

import pytest


def make_raw_config(**overrides: Any) -> Dict[str, Any]:
    weights = {"totalMatch": 10, "wildCardMatch": 1}
    raw: Dict[str, Any] = {
        "quantifier": {
            "browserLanguage": dict(weights),
            "countryBasedOnIp": dict(weights),
            "domain": dict(weights),
        },
        "noMatchingConfiguration": {"identifierUsage": "1_0", "matchMinQuantifier": 5},
        "redirectConfiguration": {
            "1": {
                "0": {"browserLanguages": ["*"], "countries": ["*"], "domains": ["*"]},
                "1": {"browserLanguages": ["de"], "countries": ["*"], "domains": ["*"]},
                "2": {"browserLanguages": ["en", "en-gb"], "countries": ["GB", "US"], "domains": ["*"]},
            },
        },
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def raw_config() -> Dict[str, Any]:
    return make_raw_config()
