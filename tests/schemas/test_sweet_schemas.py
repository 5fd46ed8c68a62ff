"""Sweet and auth schemas — boundary validation."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from sweetshop.schemas.auth import RegisterRequest
from sweetshop.schemas.sweet import AdjustmentRequest, SweetCreate


def _payload(**overrides):
    data = {
        "name": "Chocolate Cake", "category": "Cakes",
        "price": 15.99, "quantity": 10,
        "description": "Delicious chocolate cake",
    }
    data.update(overrides)
    return data


def test_price_parsed_as_decimal():
    sweet = SweetCreate(**_payload())
    assert sweet.price == Decimal("15.99")
    assert isinstance(sweet.price, Decimal)


def test_name_and_category_stripped():
    sweet = SweetCreate(**_payload(name="  Fudge ", category=" Candy "))
    assert sweet.name == "Fudge"
    assert sweet.category == "Candy"


@pytest.mark.parametrize("field", ["name", "category"])
def test_blank_required_text_rejected(field):
    with pytest.raises(ValidationError):
        SweetCreate(**_payload(**{field: "   "}))


def test_negative_price_rejected():
    with pytest.raises(ValidationError):
        SweetCreate(**_payload(price=-1))


def test_price_with_three_decimals_rejected():
    with pytest.raises(ValidationError):
        SweetCreate(**_payload(price="1.999"))


def test_negative_quantity_rejected():
    with pytest.raises(ValidationError):
        SweetCreate(**_payload(quantity=-1))


def test_description_optional():
    payload = _payload()
    del payload["description"]
    assert SweetCreate(**payload).description is None


def test_adjustment_request_leaves_range_check_to_core():
    assert AdjustmentRequest(quantity=-3).quantity == -3


def test_register_email_optional_and_lowercased():
    assert RegisterRequest(username="bob", password="secret1").email is None
    req = RegisterRequest(username="bob", password="secret1", email="Bob@Example.com")
    assert req.email == "bob@example.com"


def test_register_rejects_short_password():
    with pytest.raises(ValidationError):
        RegisterRequest(username="bob", password="123")


def test_register_rejects_bad_email():
    with pytest.raises(ValidationError):
        RegisterRequest(username="bob", password="secret1", email="not-an-email")
