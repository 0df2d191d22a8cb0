import logging
import os
from dataclasses import dataclass, field
from typing import Any

from formrules.core_services.RuleSpec import parse_rule_spec
from formrules.core_services.validators import ConfigurationError, RuleRegistry


@dataclass
class ValidationOutcome:
    validated: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return bool(self.errors)


class Validator:
    """Runs a field -> rule list map against posted data.

    Rules for a field run in order. A passing rule records the posted value in
    ``validated`` and evaluation moves on; the first failing rule records its
    message in ``errors`` and the remaining rules for that field are skipped.
    A field can therefore end up in both maps when an earlier rule passed.

    Unknown rule names are skipped unless ``strict`` is set, in which case
    they raise ``ConfigurationError``.
    """

    def __init__(self, registry: RuleRegistry = None, strict: bool = None):
        self.registry = registry or RuleRegistry()
        if strict is None:
            strict = os.getenv("FORMRULES_STRICT_RULES", "false").lower() == "true"
        self.strict = strict
        self.logger = logging.getLogger("formrules.validator")

    def validate(self, posted, rules: dict[str, list[str]], messages: dict[str, str] = None) -> ValidationOutcome:
        messages = messages or {}
        outcome = ValidationOutcome()

        for field_name, specs in rules.items():
            value = posted.get(field_name)

            for spec in specs:
                rule_name, rule_param = parse_rule_spec(spec)

                if not self.registry.exists(rule_name):
                    if self.strict:
                        raise ConfigurationError(f"Validator does not have {rule_name}")
                    self.logger.debug(f"Skipping unknown rule '{rule_name}' for field '{field_name}'")
                    continue

                handler = self.registry.handler(rule_name)
                if handler(value, rule_param):
                    outcome.validated[field_name] = value
                    continue

                message = messages.get(f"{field_name}.{rule_name}", "")
                outcome.errors[field_name] = self.registry.render_error(field_name, rule_name, rule_param, message)
                break

        if outcome.failed:
            self.logger.debug(f"Validation failed for fields: {', '.join(outcome.errors)}")
        return outcome
