"""
Command-line interface for validating records and managing rule documents.

Usage:
    datavalidation validate --rules <rule_set> --input <record.json|record.yml> [options]
    datavalidation rules [--location <location>] list
    datavalidation rules [--location <location>] show <name>
    datavalidation rules [--location <location>] save <name> --file <path>
    datavalidation rules [--location <location>] delete <name>
"""

import argparse
import json
import sys
from pathlib import Path

import yaml

from datavalidation.config import ValidationSettings
from datavalidation.core.engine import build_engine
from datavalidation.core.errors import DataValidationError
from datavalidation.core.rules import RuleDocumentParser
from datavalidation.observability.logger import get_logger, log_operation, setup_logger
from datavalidation.repository import RuleRepository
from datavalidation.utils.validation import InvalidRuleNameError

logger = get_logger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def load_records(input_path: Path) -> list:
    """
    Read records from a JSON or YAML file.

    A top-level list is treated as a batch of records; anything else is one record.
    """
    text = input_path.read_text(encoding="utf-8")
    if input_path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    return data if isinstance(data, list) else [data]


def validate_command(args) -> int:
    """
    Validate the records of an input file against a rule set.

    Args:
        args: Command-line arguments

    Returns:
        Exit code: 0 if every record is valid, 1 otherwise, 2 on unreadable input
    """
    input_path = Path(args.input)
    try:
        records = load_records(input_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Cannot read input file {args.input}: {e}")
        print(f"Error: cannot read input file {args.input}: {e}", file=sys.stderr)
        return EXIT_USAGE

    settings = ValidationSettings.from_env(rules_location=args.location)
    engine = build_engine(settings)

    with log_operation(
        "Validating records",
        logger=logger,
        rule_set=args.rules,
        record_count=len(records),
    ):
        results = engine.validate_many(records, args.rules)

    payload = [result.model_dump(mode="json") for result in results]
    print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))

    return EXIT_VALID if all(result.valid for result in results) else EXIT_INVALID


def rules_command(args) -> int:
    """
    Manage rule documents in the configured repository.

    Args:
        args: Command-line arguments
    """
    settings = ValidationSettings.from_env(rules_location=args.location)

    with RuleRepository(settings) as repository:
        try:
            if args.rules_command == "list":
                for name in repository.list_rule_names():
                    print(name)

            elif args.rules_command == "show":
                print(repository.load_rule(args.name), end="")

            elif args.rules_command == "save":
                content = Path(args.file).read_text(encoding="utf-8")
                # Refuse documents the loader could not parse
                RuleDocumentParser().parse(content, args.name, args.file)
                path = repository.save_rule(args.name, content)
                print(f"Saved {args.name} to {path}")

            elif args.rules_command == "delete":
                if repository.delete_rule(args.name):
                    print(f"Deleted {args.name}")
                else:
                    print(f"No rule document named {args.name}")

        except (FileNotFoundError, InvalidRuleNameError, DataValidationError) as e:
            logger.error(f"Rule command '{args.rules_command}' failed: {e}")
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_INVALID

    return EXIT_VALID


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="datavalidation",
        description="Validate records against declarative rule documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a record with a bundled rule set
  datavalidation validate --rules user-validation.yml --input user.json

  # Use rule documents from a directory
  datavalidation validate --rules user.yml --input users.yml --location file:/etc/rules/

  # Store a rule document
  datavalidation rules --location file:/etc/rules/ save user.yml --file ./user.yml
        """,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "text"],
        help="Log format (default: LOG_FORMAT or json)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate records from a file")
    validate_parser.add_argument(
        "--rules",
        required=True,
        help="Rule-set identifier (file name, or path)",
    )
    validate_parser.add_argument(
        "--input",
        required=True,
        help="JSON or YAML file holding one record or a list of records",
    )
    validate_parser.add_argument(
        "--location",
        default=None,
        help="Rules location (file:<dir>, resource:<dir> or a directory)",
    )

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="Manage rule documents")
    rules_parser.add_argument(
        "--location",
        default=None,
        help="Rules location (file:<dir>, resource:<dir> or a directory)",
    )
    rules_sub = rules_parser.add_subparsers(dest="rules_command", help="Rule document commands")

    rules_sub.add_parser("list", help="List rule documents")

    show_parser = rules_sub.add_parser("show", help="Print a rule document")
    show_parser.add_argument("name", help="Rule document name")

    save_parser = rules_sub.add_parser("save", help="Store a rule document")
    save_parser.add_argument("name", help="Rule document name")
    save_parser.add_argument("--file", required=True, help="Path to the document to store")

    delete_parser = rules_sub.add_parser("delete", help="Delete a rule document")
    delete_parser.add_argument("name", help="Rule document name")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = ValidationSettings.from_env(log_level=args.log_level, log_format=args.log_format)
    setup_logger(level=settings.log_level, format_type=settings.log_format)

    if args.command == "validate":
        return validate_command(args)
    if args.command == "rules" and args.rules_command:
        return rules_command(args)

    parser.print_help()
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
