"""Tests for the example workflows built on Result."""

from __future__ import annotations

import logging

import pytest

from fallible import Result, failure, is_failure, is_success, success
from fallible.examples import (
    BatchProcessor,
    DataItem,
    FieldError,
    Order,
    OrderItem,
    OrderService,
    PaymentService,
    ProcessingError,
    RegistrationForm,
    check_username_availability,
    dump_config,
    parse_config,
    plan_retry,
    split_retryable,
    validate_age,
    validate_email,
    validate_form,
    validate_username,
)


# ═════════════════════════════════════════════════════════════════════════════
# Form Validation
# ═════════════════════════════════════════════════════════════════════════════


def test_short_username_fails_and_skips_later_checks() -> None:
    """Test a failing validator short-circuits checks chained with ok."""
    form = {"username": "ab", "email": "x@y.com", "age": 20}
    later_checks: list[str] = []

    result = (
        validate_username(form["username"])
        .ok(lambda _: later_checks.append("email") or validate_email(form["email"]))
        .ok(lambda _: later_checks.append("age") or validate_age(form["age"]))
    )

    assert is_failure(result)
    assert result.failure_value == FieldError(
        field="username", message="Username must be at least 3 characters", code="min_length",
    )
    assert later_checks == []


def test_custom_validator_failure_is_returned_unchanged() -> None:
    """Test the exact failure from a validator survives an ok chain."""
    def check(form: dict) -> Result[dict, dict]:
        if len(form["username"]) < 3:
            return failure({"field": "username", "message": "too short"})
        return success(form)

    evaluated: list[str] = []
    result = check({"username": "ab", "email": "x@y.com", "age": 20}).ok(evaluated.append)

    assert result.failure_value == {"field": "username", "message": "too short"}
    assert evaluated == []


@pytest.mark.parametrize(
    ("username", "code"),
    [("", "required"), ("a" * 21, "max_length"), ("bad name", "invalid_format")],
)
def test_validate_username_codes(username: str, code: str) -> None:
    """Test each username rule reports its own code."""
    assert validate_username(username).failure_value.code == code


def test_validate_email_and_age() -> None:
    """Test from_-based validators."""
    assert validate_email("x@y.com").value() == "x@y.com"
    assert validate_email("not-an-email").failure_value.field == "email"
    assert validate_age(20).value() == 20
    assert validate_age(15).failure_value.code == "min_value"


@pytest.mark.asyncio
async def test_username_availability() -> None:
    """Test taken usernames become failures, not exceptions."""
    assert (await check_username_availability("john_doe")).value() == "john_doe"

    taken = await check_username_availability("admin")
    assert taken.failure_value.code == "already_exists"


@pytest.mark.asyncio
async def test_validate_form_valid() -> None:
    """Test a valid form passes through unchanged."""
    form = RegistrationForm(
        username="john_doe", email="john@example.com",
        password="Secret123!", confirm_password="Secret123!", age=25,
    )
    result = await validate_form(form)

    assert is_success(result)
    assert result.success_value == form


@pytest.mark.asyncio
async def test_validate_form_collects_all_errors() -> None:
    """Test an invalid form reports every failing field."""
    form = RegistrationForm(
        username="a", email="not-an-email", password="123", confirm_password="1234", age=15,
    )
    result = await validate_form(form)

    assert is_failure(result)
    assert [e.field for e in result.failure_value] == ["username", "email", "age", "confirm_password"]


# ═════════════════════════════════════════════════════════════════════════════
# Batch Processing
# ═════════════════════════════════════════════════════════════════════════════


ITEMS = [
    DataItem(id="item-1", value=50),
    DataItem(id="invalid-2", value=30),
    DataItem(id="item-3", value=-10),
    DataItem(id="item-4", value=2000),
]


def test_split_retryable() -> None:
    """Test failures are partitioned on the retryable flag."""
    errors = [
        ProcessingError(item_id="a", reason="temp", retryable=True),
        ProcessingError(item_id="b", reason="bad", retryable=False),
        ProcessingError(item_id="c", reason="temp", retryable=True),
    ]
    retryable, permanent = split_retryable(errors)

    assert [e.item_id for e in retryable] == ["a", "c"]
    assert [e.item_id for e in permanent] == ["b"]


@pytest.mark.asyncio
async def test_batch_routes_only_retryable_failures_to_requeue() -> None:
    """Test value > 1000 is requeued while value < 0 is counted as permanent."""
    processor = BatchProcessor(base_delay=0)
    batch = await processor.process_batch(ITEMS)

    assert is_failure(batch)
    requeue, permanent = plan_retry(ITEMS, batch.failure_value)

    assert [item.id for item in requeue] == ["item-4"]
    assert sorted(e.item_id for e in permanent) == ["invalid-2", "item-3"]
    assert all(not e.retryable for e in permanent)


@pytest.mark.asyncio
async def test_batch_all_succeed() -> None:
    """Test a clean batch succeeds with stats."""
    processor = BatchProcessor(base_delay=0)
    result = await processor.process_batch([DataItem(id="a", value=1), DataItem(id="b", value=2)])

    assert result.value().succeeded == 2
    assert result.value().failed == 0


@pytest.mark.asyncio
async def test_process_with_retry_exhausts_retryable_items() -> None:
    """Test permanent failures are not retried and retryable ones stop at max_retries."""
    attempts: dict[str, int] = {}

    class CountingProcessor(BatchProcessor):
        async def process_item(self, item: DataItem) -> Result[bool, ProcessingError]:
            attempts[item.id] = attempts.get(item.id, 0) + 1
            return await super().process_item(item)

    result = await CountingProcessor(base_delay=0).process_with_retry(ITEMS, max_retries=3)

    assert is_failure(result)
    assert attempts == {"item-1": 1, "invalid-2": 1, "item-3": 1, "item-4": 3}
    reasons = {e.item_id: e.reason for e in result.failure_value}
    assert reasons["item-4"] == "Failed after max retry attempts"
    assert set(reasons) == {"invalid-2", "item-3", "item-4"}


@pytest.mark.asyncio
async def test_process_with_retry_recovers_transient_failure() -> None:
    """Test an item that succeeds on retry ends up counted as succeeded."""
    class FlakyProcessor(BatchProcessor):
        def __init__(self) -> None:
            super().__init__(base_delay=0)
            self.seen: set[str] = set()

        async def process_item(self, item: DataItem) -> Result[bool, ProcessingError]:
            if item.id not in self.seen:
                self.seen.add(item.id)
                return failure(ProcessingError(item_id=item.id, reason="Temporary", retryable=True))
            return success(True)

    items = [DataItem(id="x", value=1), DataItem(id="y", value=2)]
    result = await FlakyProcessor().process_with_retry(items)

    assert is_success(result)
    stats = result.value()
    assert (stats.processed, stats.succeeded, stats.failed, stats.attempts) == (2, 2, 0, 2)


# ═════════════════════════════════════════════════════════════════════════════
# Order Workflow
# ═════════════════════════════════════════════════════════════════════════════


def make_order(**overrides: object) -> Order:
    data: dict = {
        "id": "ord-123",
        "customer_id": "cust-456",
        "items": [OrderItem(product_id="prod-1", quantity=2, unit_price=25)],
        "total_amount": 100,
    }
    data.update(overrides)
    return Order(**data)


@pytest.mark.asyncio
async def test_order_approved() -> None:
    """Test the happy path approves the order."""
    result = await OrderService().process_order(make_order())

    assert is_success(result)
    assert result.value().status == "approved"


@pytest.mark.asyncio
async def test_order_inventory_failure_is_wrapped() -> None:
    """Test inventory failures are mapped to a business error."""
    order = make_order(items=[OrderItem(product_id="out-of-stock", quantity=1, unit_price=5)])
    result = await OrderService().process_order(order)

    assert result.failure_value.code == "inventory_issue"
    assert result.failure_value.context["original_error"]["code"] == "insufficient_inventory"


@pytest.mark.asyncio
async def test_order_payment_failure_propagates() -> None:
    """Test payment failures are returned as-is."""
    result = await OrderService(payments=PaymentService(limit=50)).process_order(make_order())

    assert result.failure_value.code == "payment_limit_exceeded"
    assert result.failure_value.context == {"limit": 50, "attempted": 100}


@pytest.mark.asyncio
async def test_order_notification_failure_is_only_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Test a failed notification does not fail the order."""
    with caplog.at_level(logging.WARNING, logger="fallible.examples"):
        result = await OrderService().process_order(make_order(customer_id="no-email"))

    assert is_success(result)
    assert "notification failed" in caplog.text


# ═════════════════════════════════════════════════════════════════════════════
# Config Parsing
# ═════════════════════════════════════════════════════════════════════════════


def test_parse_config() -> None:
    """Test valid JSON objects parse to dicts."""
    assert parse_config('{"port": 8080}').value() == {"port": 8080}
    assert parse_config(b'{"debug": true}').value() == {"debug": True}


def test_parse_config_errors_become_messages() -> None:
    """Test decode errors and non-object JSON end on the failure track."""
    broken = parse_config("{not json")
    assert is_failure(broken)
    assert broken.failure_value.startswith("invalid config:")

    listed = parse_config("[1, 2]")
    assert listed.failure_value == "invalid config: expected a JSON object, got list"


def test_dump_config() -> None:
    """Test serialization success and failure."""
    assert dump_config({"b": 1, "a": 2}).value() == b'{"a":2,"b":1}'
    assert is_failure(dump_config({"bad": object()}))
