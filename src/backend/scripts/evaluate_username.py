from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from policy_engine import (
    FileConfigurationStore,
    InMemoryConfigurationStore,
    PolicyEngineError,
    PolicyEvaluator,
    Subject,
)
from policy_engine.settings import get_engine_settings
from policy_engine.store import ConfigurationStore

logger = logging.getLogger("evaluate_username")

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def build_store(config_path: Optional[Path]) -> ConfigurationStore:
    if config_path is None:
        logger.info("No policy config file given; using built-in defaults.")
        return InMemoryConfigurationStore.default()
    return FileConfigurationStore(config_path)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate one or more usernames against the configured policies."
    )
    parser.add_argument("values", nargs="+", help="Username(s) to validate.")
    parser.add_argument(
        "--config",
        default=None,
        help="JSON/YAML policy config file (overrides POLICY_CONFIG_PATH).",
    )
    parser.add_argument(
        "--unconfigured-rules",
        choices=("skip", "error"),
        default=None,
        help="How to treat rules with no config entry (overrides POLICY_UNCONFIGURED_RULES).",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print a JSON report per value instead of valid/invalid lines.",
    )
    args = parser.parse_args(argv)

    try:
        settings = get_engine_settings()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    config_path = Path(args.config) if args.config else settings.config_path
    evaluator = PolicyEvaluator.from_registry(
        build_store(config_path),
        unconfigured_rules=args.unconfigured_rules or settings.unconfigured_rules,
    )

    all_valid = True
    try:
        for value in args.values:
            subject = Subject(value)
            if args.report:
                report = evaluator.run(subject)
                passed = report.passed
                print(json.dumps(report.model_dump(mode="json"), indent=2))
            else:
                passed = evaluator.evaluate(subject)
                print(f"{value}\t{'valid' if passed else 'invalid'}")
            all_valid = all_valid and passed
    except PolicyEngineError as exc:
        logger.error("Validation could not run: %s", exc)
        return EXIT_ERROR

    return EXIT_VALID if all_valid else EXIT_INVALID


if __name__ == "__main__":
    raise SystemExit(main())
