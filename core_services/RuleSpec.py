from typing import NamedTuple


class RuleSpec(NamedTuple):
    rule_name: str
    raw_param: str = ""


def parse_rule_spec(spec: str) -> RuleSpec:
    """Split ``"name"`` or ``"name:param"`` on the first colon."""
    rule_name, _, raw_param = spec.partition(":")
    return RuleSpec(rule_name, raw_param)
