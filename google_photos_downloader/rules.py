"""Client-side filtering of API entries by field rules."""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Pattern

from google_photos_downloader.models import Entry, RuleFormatError

RULE_PATTERN = re.compile(r"^(\w+)(=~?)(.*)$", re.DOTALL)


@dataclass(frozen=True)
class Rule:
    """A single field constraint, literal or regular expression."""
    field: str
    value: str
    pattern: Optional[Pattern] = None

    def test(self, value: Optional[str]) -> bool:
        """Check a field value against this rule."""
        if value is None:
            return False
        if self.pattern is not None:
            return self.pattern.search(value) is not None
        return value == self.value


def parse_rule(raw: str, category: str) -> Rule:
    """Parse one ``field=value`` or ``field=~pattern`` expression.

    Raises:
        RuleFormatError: If the expression or its pattern is malformed
    """
    match = RULE_PATTERN.match(raw)
    if not match:
        raise RuleFormatError(raw, category)

    field_name, operator, value = match.groups()
    if operator == "=~":
        try:
            return Rule(field_name, value, re.compile(value))
        except re.error as e:
            raise RuleFormatError(raw, category, f"bad pattern: {e}") from e
    return Rule(field_name, value)


def compile_rules(raw_rules: Iterable[str], category: str) -> Dict[str, Rule]:
    """Compile rule expressions into a mapping keyed by field name.

    A later rule for the same field replaces the earlier one.

    Args:
        raw_rules: Expressions as given on the command line
        category: "album", "photo", etc., used in error messages

    Returns:
        Mapping of field name to rule
    """
    rules: Dict[str, Rule] = {}
    for raw in raw_rules or ():
        rule = parse_rule(raw, category)
        rules[rule.field] = rule
    return rules


def matches(entry: Entry, rules: Dict[str, Rule]) -> bool:
    """Check whether an entry satisfies every rule."""
    return all(rule.test(entry.field_value(name)) for name, rule in rules.items())
