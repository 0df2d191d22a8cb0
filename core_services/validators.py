import re
from dataclasses import dataclass, field, replace
from functools import partial
from typing import Callable, Optional

from formrules.core_services.Database import Database
from formrules.core_services.MessageFormatter import format_message

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
EMAIL = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.\w+$")
LEADING_INT = re.compile(r"\s*[+-]?\d+")


class ConfigurationError(Exception):
    """Raised when a rule is referenced but cannot be run as configured."""


@dataclass(frozen=True)
class ParamSchema:
    separator: str = " "
    names: tuple = ()


@dataclass(frozen=True)
class RuleDefinition:
    name: str
    handler: Optional[Callable]
    error: str
    params: ParamSchema = field(default_factory=ParamSchema)
    requires: tuple = ()


RULES: dict[str, RuleDefinition] = {}


def register_rule(name, error, separator=" ", names=(), requires=()):
    def wrapper(fn):
        RULES[name] = RuleDefinition(
            name=name,
            handler=fn,
            error=error,
            params=ParamSchema(separator=separator, names=tuple(names)),
            requires=tuple(requires),
        )
        return fn

    return wrapper


def is_empty(value) -> bool:
    if isinstance(value, str):
        return value in ("", "0")
    return not value


def _length(value) -> int:
    if value is None:
        return 0
    return len(str(value))


def _int_param(param: str) -> int:
    """Leading integer of the parameter, or 0 when there is none."""
    match = LEADING_INT.match(param or "")
    return int(match.group(0)) if match else 0


@register_rule("required", error="Field ':field:' is required")
def required_rule(value, param=""):
    return not is_empty(value)


@register_rule("min", error="Value for ':field:' is must be at least :min: symbols", names=["min"])
def min_rule(value, param=""):
    return _length(value) >= _int_param(param)


@register_rule("max", error="Value for ':field:' must be at most :max: symbols", names=["max"])
def max_rule(value, param=""):
    return _length(value) <= _int_param(param)


@register_rule("numeric", error="Field ':field:' must be numeric")
def numeric_rule(value, param=""):
    if value in (None, ""):
        return True
    try:
        float(value)
    except (ValueError, TypeError):
        return False
    return True


@register_rule("email", error="Field ':field:' must be a valid email address")
def email_rule(value, param=""):
    if value in (None, ""):
        return True
    return bool(EMAIL.match(str(value)))


@register_rule(
    "unique",
    error="Value is already exists in table ':table:' for field ':field:'",
    separator=".",
    names=["table", "field"],
    requires=["database"],
)
def unique_rule(value, param="", database: Database = None):
    table, _, column = param.partition(".")
    if not IDENTIFIER.match(table) or not IDENTIFIER.match(column):
        raise ConfigurationError(f"Rule 'unique' expects 'table.field', got '{param}'")

    rows = database.query(f'SELECT 1 FROM "{table}" WHERE "{column}" = ?', (value,))
    return len(rows) == 0


class RuleRegistry:
    """Named validation rules with their handlers, error templates and parameter schemas.

    Services such as ``database`` are handed in at construction and bound into
    every handler whose definition lists them in ``requires``. A definition whose
    services are missing is still registered, without a handler, so that
    ``exists`` stays true and ``handler`` reports the misconfiguration.

    Example:
        registry = RuleRegistry(database=Sqlite3Database("app.db"))
        registry.render_error("email", "unique", "users.email")
        # "Value is already exists in table 'users' for field 'email'"
    """

    def __init__(self, definitions=None, **services):
        self._services = services
        self._rules: dict[str, RuleDefinition] = {}
        for definition in (RULES.values() if definitions is None else definitions):
            self.register(definition)

    def register(self, definition: RuleDefinition) -> None:
        """Register or replace a rule, binding any services it requires."""
        self._rules[definition.name] = self._bind(definition)

    def add(self, name: str, handler: Callable, error: str, separator: str = " ", names=()) -> None:
        self.register(RuleDefinition(
            name=name,
            handler=handler,
            error=error,
            params=ParamSchema(separator=separator, names=tuple(names)),
        ))

    def _bind(self, definition: RuleDefinition) -> RuleDefinition:
        if not definition.requires or definition.handler is None:
            return definition

        missing = [name for name in definition.requires if self._services.get(name) is None]
        if missing:
            return replace(definition, handler=None)

        bound = {name: self._services[name] for name in definition.requires}
        return replace(definition, handler=partial(definition.handler, **bound))

    def exists(self, name: str) -> bool:
        return name in self._rules

    def handler(self, name: str) -> Callable:
        if name not in self._rules:
            raise ConfigurationError(f"Validator does not have {name}")

        handler = self._rules[name].handler
        if handler is None or not callable(handler):
            raise ConfigurationError(f"Handler for {name} is not set")
        return handler

    def definition(self, name: str) -> RuleDefinition:
        if name not in self._rules:
            raise ConfigurationError(f"Validator does not have {name}")
        return self._rules[name]

    def list_names(self) -> list[str]:
        return list(self._rules.keys())

    def render_error(self, field: str, rule_name: str, rule_param: str, message: str = "") -> str:
        """
        Build the error message for a failed rule.

        :param field: form field that failed
        :param rule_name: name of the failing rule
        :param rule_param: raw parameter from the rule spec (i.e. length, table.field)
        :param message: custom message used instead of the rule's template when non-empty
        """
        definition = self.definition(rule_name)
        template = message or definition.error
        values = rule_param.split(definition.params.separator) if definition.params.names else []
        return format_message(template, field, definition.params.names, values)
