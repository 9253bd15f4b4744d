from __future__ import annotations

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from loguru import logger

from ipredirect.common.logging_ctx import request_ctx_scope
from ipredirect.config.settings import settings
from ipredirect.engine import CandidateSet, ConfigurationError, RedirectDecision, RequestSignals


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def load_rules(path: Path) -> Dict[str, Any]:
    """Read an already-structured rules document from a JSON file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Rules file not found: {path}", data={"path": str(path)}) from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Rules file is not valid JSON: {path}", data={"path": str(path)}) from exc
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"Rules file is not UTF-8 encoded: {path}", data={"path": str(path)}) from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read rules file {path}: {exc}", data={"path": str(path)}) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Rules file must contain an object: {path}", data={"path": str(path)})
    return data


def decision_to_dict(decision: RedirectDecision) -> Dict[str, Any]:
    candidate = decision.candidate
    return {
        "identifier": candidate.identifier if candidate else None,
        "page_identifier": candidate.page_identifier if candidate else None,
        "language_parameter": candidate.language_parameter if candidate else None,
        "score": decision.score,
        "used_fallback": decision.used_fallback,
        "scores": {entry.candidate.identifier: entry.score for entry in decision.scores},
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pick the localized redirect target for a visitor")
    parser.add_argument("--config", type=Path, default=settings.rules_file, help="JSON rules document.")
    parser.add_argument("--browser-language", default="", help="Browser language of the visitor, e.g. 'de'.")
    parser.add_argument("--country", default="", help="IP-derived country code, e.g. 'DE'.")
    parser.add_argument("--domain", default="", help="Domain the visitor used.")
    parser.add_argument(
        "--current-language",
        type=int,
        default=settings.no_current_language,
        help="Language parameter of the page currently viewed.",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level.upper())

    try:
        candidate_set = CandidateSet.from_config(load_rules(args.config))
    except ConfigurationError as exc:
        logger.error("Cannot load redirect rules ({}): {}", exc.section, exc)
        return 2

    signals = RequestSignals(
        browser_language=args.browser_language,
        country_code=args.country,
        domain=args.domain,
        current_language=args.current_language,
    )
    with request_ctx_scope(request_id=uuid.uuid4().hex, domain=args.domain) as log:
        decision = candidate_set.evaluate(signals)
        log.info(
            "Redirect target {} (score {}, fallback {})",
            decision.candidate.identifier if decision.candidate else None,
            decision.score,
            decision.used_fallback,
        )

    print(json.dumps(decision_to_dict(decision), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
