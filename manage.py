import argparse
import json
import sys

from formrules.core_services.ErrorHandler import ErrorHandler
from formrules.core_services.Sqlite3Database import Sqlite3Database
from formrules.core_services.Validator import Validator
from formrules.core_services.validators import ConfigurationError, RuleRegistry


def load_json(path: str | None) -> dict:
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as file:
        return json.load(file)


def build_registry(database_path: str | None = None) -> RuleRegistry:
    database = Sqlite3Database(database_path) if database_path else None
    return RuleRegistry(database=database)


def list_rules(database_path: str | None = None):
    for name in build_registry(database_path).list_names():
        print(name)
    return 0


def check(rules_path: str, data_path: str, messages_path: str | None = None,
          database_path: str | None = None, strict: bool = False) -> int:
    validator = Validator(build_registry(database_path), strict=strict)
    outcome = validator.validate(load_json(data_path), load_json(rules_path), load_json(messages_path))
    print(json.dumps({"validated": outcome.validated, "errors": outcome.errors}, indent=2, default=str))
    return 1 if outcome.failed else 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Form rule validation tool")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    rules_parser = subparsers.add_parser("rules", help="List available validation rules")
    rules_parser.add_argument("--database", help="SQLite database used by the unique rule")

    check_parser = subparsers.add_parser("check", help="Validate a JSON document against a rules map")
    check_parser.add_argument("--rules", required=True, help="JSON file mapping field -> list of rule specs")
    check_parser.add_argument("--data", required=True, help="JSON file with the posted data")
    check_parser.add_argument("--messages", help="JSON file mapping 'field.rule' -> custom message")
    check_parser.add_argument("--database", help="SQLite database used by the unique rule")
    check_parser.add_argument("--strict", action="store_true", help="Fail on unknown rule names")

    args = parser.parse_args(argv)
    error_handler = ErrorHandler(name="formrules.manage")
    exit_code = 2

    def on_error(message, error):
        print(f"Error: {message} ({error})", file=sys.stderr)

    with error_handler.handle_errors({
        ConfigurationError: "Invalid rule configuration",
        FileNotFoundError: "Input file not found",
        json.JSONDecodeError: "Input file is not valid JSON",
    }, fallback=on_error):
        if args.command == "rules":
            exit_code = list_rules(args.database)
        elif args.command == "check":
            exit_code = check(args.rules, args.data, args.messages, args.database, args.strict)
        else:
            parser.print_help()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
