"""
Declarative field rules and their evaluator.

A rule set maps each field name to an ordered tuple of constraints. The
evaluator walks the fields in declaration order, stops at the first failing
constraint of a field and reports ``"<label> <message>"`` in the requested
language. Rule sets are immutable and evaluation keeps no state between
calls, so a module-level rule set can be shared by every request.

Example::

    CUSTOMER_RULES = rules(
        full_name=field("Full Name", "الاسم الكامل").required().min_length(3),
        email=field("Email", "البريد الإلكتروني").optional().email(),
    )
    outcome = validate_fields(payload, CUSTOMER_RULES, "en")
"""
import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from collections.abc import Mapping
from typing import Any, Tuple

from localization import get_message

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s.]+(\.[^@\s.]+)+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9][0-9 \-]*[0-9]$")
MIN_PHONE_DIGITS = 6
# Upper bound of the integer id columns.
MAX_ID = 2 ** 31 - 1


class ValueKind(str, Enum):
    NUMBER = "number"
    INTEGER = "integer"
    DECIMAL = "decimal"
    EMAIL = "email"
    PHONE = "phone"


@dataclass(frozen=True)
class Label:
    en: str
    ar: str

    def get(self, lang):
        return self.ar if lang == "ar" else self.en


@dataclass(frozen=True)
class Required:
    label: Label


@dataclass(frozen=True)
class Optional:
    label: Label


@dataclass(frozen=True)
class TypeIs:
    kind: ValueKind
    label: Label


@dataclass(frozen=True)
class MinLength:
    n: int
    label: Label


@dataclass(frozen=True)
class MaxLength:
    n: int
    label: Label


@dataclass(frozen=True)
class ValidationOutcome:
    valid: bool
    errors: Tuple[str, ...]


class FieldBuilder:
    """Fluent builder producing the constraint tuple for one field."""

    def __init__(self, label, constraints=()):
        self.label = label
        self.constraints = tuple(constraints)

    def _with(self, constraint):
        return FieldBuilder(self.label, self.constraints + (constraint,))

    def required(self):
        return self._with(Required(self.label))

    def optional(self):
        return self._with(Optional(self.label))

    def of_type(self, kind):
        return self._with(TypeIs(ValueKind(kind), self.label))

    def number(self):
        return self.of_type(ValueKind.NUMBER)

    def integer(self):
        return self.of_type(ValueKind.INTEGER)

    def decimal(self):
        return self.of_type(ValueKind.DECIMAL)

    def email(self):
        return self.of_type(ValueKind.EMAIL)

    def phone(self):
        return self.of_type(ValueKind.PHONE)

    def min_length(self, n):
        return self._with(MinLength(n, self.label))

    def max_length(self, n):
        return self._with(MaxLength(n, self.label))

    def build(self):
        return self.constraints


def field(label_en, label_ar):
    return FieldBuilder(Label(label_en, label_ar))


def rules(**fields):
    """Build an ordered, read-only rule set from keyword field builders."""
    return RuleSet(
        (name, definition.build() if isinstance(definition, FieldBuilder) else tuple(definition))
        for name, definition in fields.items()
    )


class RuleSet(Mapping):
    def __init__(self, items=()):
        self._fields = dict(items)

    def __getitem__(self, name):
        return self._fields[name]

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def merged(self, **fields):
        """Return a new rule set with extra or replaced fields appended."""
        extra = rules(**fields)
        combined = dict(self._fields)
        combined.update(extra)
        return RuleSet(combined.items())


def is_absent(value):
    return value is None or (isinstance(value, str) and value == "")


def as_id(value):
    """Exact integer id of ``value``, or ``None``.

    Accepts ints, integral floats and numeric strings such as ``"3"`` or
    ``"3.0"``. Parsing never goes through ``float`` for ints or strings, so
    large ids are not rounded. Ids outside ``0..MAX_ID`` are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, (str, Decimal)):
        try:
            exact = Decimal(value.strip()) if isinstance(value, str) else value
        except InvalidOperation:
            return None
        if not exact.is_finite() or not 0 <= exact <= MAX_ID or exact % 1 != 0:
            return None
        number = int(exact)
    else:
        return None
    return number if 0 <= number <= MAX_ID else None


def _as_number(value):
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float, Decimal)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip()) if value.strip() else None
        else:
            return None
    except (ValueError, OverflowError):
        return None
    if number is None or not math.isfinite(number):
        return None
    return number


def _matches_kind(kind, value):
    if kind in (ValueKind.NUMBER, ValueKind.DECIMAL):
        return _as_number(value) is not None
    if kind == ValueKind.INTEGER:
        return as_id(value) is not None
    if not isinstance(value, str):
        return False
    if kind == ValueKind.EMAIL:
        return bool(EMAIL_PATTERN.match(value))
    if kind == ValueKind.PHONE:
        digits = sum(ch.isdigit() for ch in value)
        return bool(PHONE_PATTERN.match(value)) and digits >= MIN_PHONE_DIGITS
    return False


def _failure(constraint, value, present):
    """Message key (plus params) of a failing constraint, ``None`` if it holds.

    The string ``"skip"`` signals the optional-field short-circuit.
    """
    if isinstance(constraint, Required):
        return None if present else ("rule_required", {})
    if isinstance(constraint, Optional):
        return None if present else "skip"
    if isinstance(constraint, TypeIs):
        if _matches_kind(constraint.kind, value):
            return None
        return ("rule_" + constraint.kind.value, {})
    if isinstance(constraint, MinLength):
        if isinstance(value, str) and len(value) < constraint.n:
            return ("rule_min_length", {"n": constraint.n})
        return None
    if isinstance(constraint, MaxLength):
        if isinstance(value, str) and len(value) > constraint.n:
            return ("rule_max_length", {"n": constraint.n})
        return None
    raise TypeError(f"Unknown constraint {constraint!r}")


def validate_fields(payload: Mapping[str, Any], field_rules: Mapping, lang: str = "en") -> ValidationOutcome:
    errors = []
    for name, constraints in field_rules.items():
        value = payload.get(name)
        present = not is_absent(value)
        for constraint in constraints:
            failure = _failure(constraint, value, present)
            if failure is None:
                continue
            if failure == "skip":
                break
            key, params = failure
            errors.append(f"{constraint.label.get(lang)} {get_message(key, lang, **params)}")
            break
    return ValidationOutcome(valid=not errors, errors=tuple(errors))
