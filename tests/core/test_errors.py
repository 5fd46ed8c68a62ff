"""Error hierarchy — codes, statuses and response envelope."""

from dataclasses import fields

from sweetshop.core.errors import (
    AuthenticationError,
    ConcurrencyError,
    DatabaseError,
    DuplicateResourceError,
    ErrorContext,
    ErrorSeverity,
    InsufficientStockError,
    InvalidInputError,
    PermissionDeniedError,
    ResourceNotFoundError,
)


def test_not_found_is_404_with_resource_in_message():
    err = ResourceNotFoundError("Sweet", "abc")
    assert err.http_status == 404
    assert err.code == "RESOURCE_NOT_FOUND"
    assert "Sweet 'abc' not found" == err.message


def test_insufficient_stock_response_carries_counts():
    body = InsufficientStockError(available=3, requested=5).to_response()
    assert body["success"] is False
    assert body["error"]["code"] == "INSUFFICIENT_STOCK"
    assert body["error"]["details"] == {"available": 3, "requested": 5}
    assert body["error"]["severity"] == ErrorSeverity.WARNING.value


def test_invalid_input_details_name_the_field():
    body = InvalidInputError("bad", "quantity").to_response()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["details"]["field"] == "quantity"


def test_status_codes_per_error_type():
    assert AuthenticationError().http_status == 401
    assert PermissionDeniedError("ADMIN").http_status == 403
    assert ConcurrencyError("conflict").http_status == 409
    assert DuplicateResourceError("username").http_status == 400
    assert DatabaseError("down", "execute").http_status == 503


def test_duplicate_message_names_field():
    assert DuplicateResourceError("email").message == "Email already exists"


def test_response_timestamp_is_iso_format():
    body = ResourceNotFoundError("Sweet", "1").to_response()
    assert "T" in body["error"]["timestamp"]


def test_error_context_carries_only_populated_fields():
    assert [f.name for f in fields(ErrorContext)] == [
        "timestamp", "sweet_id", "details",
    ]
