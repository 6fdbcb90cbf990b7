"""
Command-line interface for validating JSON records against YAML rules.

Usage:
    formrules --rules <rules.yaml> --input <data.json> [options]
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from formrules.core.rules import RuleConfigLoader, RuleEngine, load_message_templates
from formrules.observability.logger import get_logger, setup_logger

logger = get_logger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def load_records(input_path: Path) -> tuple[list[dict[str, Any]], bool]:
    """
    Load records from a JSON file.

    Args:
        input_path: File holding one JSON object or a list of objects

    Returns:
        Tuple of (records, whether the file held a list)

    Raises:
        ValueError: If the file is not an object or a list of objects
    """
    with open(input_path) as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        return [payload], False

    if isinstance(payload, list) and all(isinstance(item, dict) for item in payload):
        return payload, True

    raise ValueError("Input must be a JSON object or a list of JSON objects")


def validate_command(args) -> int:
    """
    Execute the validate command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit status
    """
    try:
        templates = load_message_templates(args.messages) if args.messages else None
        rules = RuleConfigLoader(args.rules).load_rules()
        engine = RuleEngine(rules, templates=templates)
        records, is_list = load_records(Path(args.input))
    except (OSError, ValueError) as e:
        logger.error(f"Cannot run validation: {e}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    validators = engine.validate_batch(records)

    if args.format == "json":
        report = [
            {
                "record": index,
                "valid": not validator.get_errors(),
                "errors": [error.to_dict(templates) for error in validator.get_errors()],
            }
            for index, validator in enumerate(validators)
        ]
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        for index, validator in enumerate(validators):
            for message in validator.messages():
                print(f"[{index}] {message}" if is_list else message)

    invalid = sum(1 for validator in validators if validator.get_errors())
    logger.info(
        f"Validated {len(validators)} record(s), {invalid} invalid",
        extra={"total_records": len(validators), "invalid_records": invalid},
    )
    return EXIT_INVALID if invalid else EXIT_VALID


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="formrules",
        description="Validate JSON records against field rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate one record
  formrules --rules config/rules.yaml --input data/user.json

  # Validate a list of records and print a JSON report
  formrules --rules config/rules.yaml --input data/users.json --format json

  # Use custom messages
  formrules --rules config/rules.yaml --input data/user.json \\
      --messages config/messages.yaml
        """
    )
    parser.add_argument("--rules", required=True, help="YAML rule configuration file")
    parser.add_argument("--input", required=True, help="JSON file with one record or a list of records")
    parser.add_argument("--messages", help="YAML file overriding message templates")
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL environment variable or INFO)",
    )

    args = parser.parse_args(argv)

    if args.log_level:
        setup_logger("formrules", level=args.log_level)

    return validate_command(args)


if __name__ == "__main__":
    sys.exit(main())
