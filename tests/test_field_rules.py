from decimal import Decimal

import pytest

from validation import (
    Label, Required, Optional, TypeIs, MinLength, MaxLength, ValueKind,
    as_id, field, rules, validate_fields,
)
from validation.field_rules import MAX_ID

EMAIL_RULES = rules(
    email=field("Email", "البريد الإلكتروني").required().email(),
)


def test_required_missing_none_and_empty_fail_with_label():
    for payload in ({}, {"email": None}, {"email": ""}):
        outcome = validate_fields(payload, EMAIL_RULES, "en")
        assert outcome.valid is False
        assert outcome.errors == ("Email is required.",)


def test_required_whitespace_is_present():
    outcome = validate_fields({"name": "   "}, rules(name=field("Name", "الاسم").required()), "en")
    assert outcome.valid is True


def test_optional_absent_field_skips_remaining_constraints():
    rule_set = rules(
        phone=field("Phone", "الهاتف").optional().phone().min_length(50),
    )
    for payload in ({}, {"phone": None}, {"phone": ""}):
        assert validate_fields(payload, rule_set).valid is True


def test_optional_present_field_is_still_checked():
    rule_set = rules(phone=field("Phone", "الهاتف").optional().phone())
    outcome = validate_fields({"phone": "abc"}, rule_set)
    assert outcome.errors == ("Phone must be a valid phone number.",)


def test_only_first_failure_per_field_is_reported():
    rule_set = rules(
        name=field("Name", "الاسم").required().min_length(3).max_length(1),
    )
    outcome = validate_fields({"name": "ab"}, rule_set)
    assert outcome.errors == ("Name must be at least 3 characters.",)


def test_errors_follow_field_declaration_order():
    rule_set = rules(
        b=field("B", "ب").required(),
        a=field("A", "أ").required(),
    )
    outcome = validate_fields({}, rule_set)
    assert outcome.errors == ("B is required.", "A is required.")


def test_single_failing_field_yields_single_error():
    rule_set = rules(
        full_name=field("Full Name", "الاسم الكامل").required().min_length(3),
        email=field("Email", "البريد الإلكتروني").required().email(),
        tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    )
    outcome = validate_fields({"full_name": "Jane Doe", "email": "bad", "tenant_id": 1}, rule_set)
    assert outcome.valid is False
    assert len(outcome.errors) == 1


@pytest.mark.parametrize("value", [1, 2.5, "12.5", "-3", 0])
def test_number_accepts_numeric_values(value):
    rule_set = rules(price=field("Price", "السعر").required().number())
    assert validate_fields({"price": value}, rule_set).valid is True


@pytest.mark.parametrize("value", ["abc", True, float("nan"), float("inf"), [1]])
def test_number_rejects_non_numeric_values(value):
    rule_set = rules(price=field("Price", "السعر").required().number())
    outcome = validate_fields({"price": value}, rule_set)
    assert outcome.errors == ("Price must be a number.",)


def test_integer_kind():
    rule_set = rules(tenant_id=field("Tenant ID", "معرف المنظمة").required().integer())
    assert validate_fields({"tenant_id": 3}, rule_set).valid
    assert validate_fields({"tenant_id": "3"}, rule_set).valid
    assert validate_fields({"tenant_id": 3.0}, rule_set).valid
    assert not validate_fields({"tenant_id": 3.5}, rule_set).valid
    assert not validate_fields({"tenant_id": "x"}, rule_set).valid


def test_decimal_kind_accepts_coordinates():
    rule_set = rules(latitude=field("Latitude", "خط العرض").optional().decimal())
    assert validate_fields({"latitude": "24.7136"}, rule_set).valid
    assert not validate_fields({"latitude": "north"}, rule_set).valid


@pytest.mark.parametrize("value,ok", [
    ("a@b.co", True),
    ("first.last@mail.example.com", True),
    ("no-at-sign", False),
    ("a@b", False),
    ("a b@c.com", False),
    ("a@b..com", False),
    ("@b.com", False),
])
def test_email_kind(value, ok):
    assert validate_fields({"email": value}, EMAIL_RULES).valid is ok


@pytest.mark.parametrize("value,ok", [
    ("+966 50 123 4567", True),
    ("050-123-4567", True),
    ("123456", True),
    ("12345", False),
    ("phone", False),
    (966501234567, False),
])
def test_phone_kind(value, ok):
    rule_set = rules(phone=field("Phone", "الهاتف").required().phone())
    assert validate_fields({"phone": value}, rule_set).valid is ok


def test_length_constraints_ignore_non_strings():
    rule_set = rules(code=field("Code", "الرمز").required().min_length(5).max_length(6))
    assert validate_fields({"code": 12}, rule_set).valid is True
    assert validate_fields({"code": "1234567"}, rule_set).errors == ("Code must be at most 6 characters.",)


def test_arabic_messages_use_arabic_label():
    outcome = validate_fields({}, EMAIL_RULES, "ar")
    assert outcome.errors == ("البريد الإلكتروني مطلوب.",)


def test_validation_is_idempotent():
    payload = {"email": "nope"}
    assert validate_fields(payload, EMAIL_RULES) == validate_fields(payload, EMAIL_RULES)


def test_builder_produces_tagged_constraints():
    label = Label("Name", "الاسم")
    built = field("Name", "الاسم").optional().of_type("number").min_length(1).max_length(9).build()
    assert built == (
        Optional(label), TypeIs(ValueKind.NUMBER, label), MinLength(1, label), MaxLength(9, label),
    )
    assert field("Name", "الاسم").required().build() == (Required(label),)


def test_rule_set_is_ordered_and_merge_returns_new_set():
    base = rules(a=field("A", "أ").required())
    extended = base.merged(b=field("B", "ب").optional())
    assert list(base) == ["a"]
    assert list(extended) == ["a", "b"]


def test_integer_kind_accepts_integral_notation_within_id_range():
    rule_set = rules(tenant_id=field("Tenant ID", "معرف المنظمة").required().integer())
    for value in ("3.0", " 7 ", MAX_ID, str(MAX_ID)):
        assert validate_fields({"tenant_id": value}, rule_set).valid
    for value in (-1, MAX_ID + 1, 2 ** 53 + 1, str(2 ** 53 + 1), 10 ** 400, "1e999999999", "3.5"):
        outcome = validate_fields({"tenant_id": value}, rule_set)
        assert outcome.errors == ("Tenant ID must be a whole number.",)


def test_number_kind_rejects_ints_too_large_for_a_float():
    rule_set = rules(price=field("Price", "السعر").required().number())
    outcome = validate_fields({"price": 10 ** 400}, rule_set)
    assert outcome.errors == ("Price must be a number.",)


def test_as_id_is_exact():
    assert as_id(MAX_ID) == MAX_ID
    assert as_id(str(MAX_ID)) == MAX_ID
    assert as_id(f"{MAX_ID}.0") == MAX_ID
    assert as_id(Decimal("12.000")) == 12
    assert as_id(4.0) == 4
    for value in (None, "", True, 4.5, "4.5", "nan", "inf", [1], str(2 ** 53 + 1)):
        assert as_id(value) is None
