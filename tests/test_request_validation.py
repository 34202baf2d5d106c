import pytest

from src.errors import BadRequest
from validation import parse_id_list


def parse(payload):
    return parse_id_list(payload, "product_ids", "missing_product_ids", "invalid_product_ids")


def test_ids_are_normalized():
    assert parse({"tenant_id": "3", "product_ids": [5, "6", 6.0, "x", None, True]}) == (3, [5, 6])


@pytest.mark.parametrize("payload,key", [
    ({"product_ids": [1]}, "tenant_required"),
    ({"tenant_id": "", "product_ids": [1]}, "tenant_required"),
    ({"tenant_id": 1}, "missing_product_ids"),
    ({"tenant_id": 1, "product_ids": []}, "missing_product_ids"),
    ({"tenant_id": 1, "product_ids": "1,2"}, "missing_product_ids"),
    ({"tenant_id": 1, "product_ids": ["a", {}]}, "invalid_product_ids"),
])
def test_rejected_payloads(payload, key):
    with pytest.raises(BadRequest) as excinfo:
        parse(payload)
    assert excinfo.value.message_key == key
    assert excinfo.value.status_code == 400


def test_tenant_and_ids_use_exact_integer_parsing():
    assert parse({"tenant_id": "3.0", "product_ids": ["4.0", 2 ** 53 + 1, "9"]}) == (3, [4, 9])
    with pytest.raises(BadRequest) as excinfo:
        parse({"tenant_id": str(2 ** 53 + 1), "product_ids": [1]})
    assert excinfo.value.message_key == "tenant_required"
