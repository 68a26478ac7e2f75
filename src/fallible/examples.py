"""Examples of Result-based error handling in application code.

Demonstrates:
- Field validation with early exit on the success track
- Async lookups bridged into Results with `resolve`
- Batch processing with retryable / permanent failure classification
- A multi-step business workflow mapping sub-failures into domain errors
- Parsing untrusted input with `try_catch`
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Literal

import orjson
from pydantic import BaseModel, Field

from .collect import partition
from .interop import resolve
from .lazy import lazy
from .match import match_tag
from .result import Result, failure, from_, success, try_catch
from .types import Tag

logger = logging.getLogger("fallible.examples")


# ═════════════════════════════════════════════════════════════════════════════
# Example 1: Form Validation
# ═════════════════════════════════════════════════════════════════════════════


class FieldError(BaseModel):
    """Validation failure for a single form field."""

    model_config = {"frozen": True}

    field: str
    message: str
    code: str = "invalid"


class RegistrationForm(BaseModel):
    username: str
    email: str
    password: str = ""
    confirm_password: str = ""
    age: int


class UsernameTakenError(Exception):
    """Raised by the availability lookup; carries the field error to report."""

    def __init__(self, error: FieldError) -> None:
        self.error = error
        super().__init__(error.message)


_USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_username(username: str) -> Result[str, FieldError]:
    """Check presence, length and character set of a username."""
    if not username:
        return failure(FieldError(field="username", message="Username is required", code="required"))
    if len(username) < 3:
        return failure(FieldError(field="username", message="Username must be at least 3 characters", code="min_length"))
    if len(username) > 20:
        return failure(FieldError(field="username", message="Username cannot exceed 20 characters", code="max_length"))
    if not _USERNAME_RE.match(username):
        return failure(FieldError(
            field="username",
            message="Username can only contain letters, numbers and underscores",
            code="invalid_format",
        ))
    return success(username)


def validate_email(email: str) -> Result[str, FieldError]:
    return from_(
        email,
        lambda e: bool(_EMAIL_RE.match(e)),
        lazy(lambda: FieldError(field="email", message="Email address is not valid", code="invalid_format")),
    )


def validate_age(age: int, minimum: int = 18) -> Result[int, FieldError]:
    return from_(
        age,
        lambda a: a >= minimum,
        lazy(lambda: FieldError(field="age", message=f"Must be at least {minimum} years old", code="min_value")),
    )


async def check_username_availability(
    username: str,
    taken: frozenset[str] = frozenset({"admin", "root"}),
) -> Result[str, FieldError]:
    """Simulated remote lookup; a taken name surfaces as a failure, never an exception."""

    async def lookup() -> str:
        await asyncio.sleep(0)
        if username in taken:
            raise UsernameTakenError(FieldError(
                field="username", message="This username is already taken", code="already_exists",
            ))
        return username

    return (await resolve(lookup())).not_(
        lambda e: e.error if isinstance(e, UsernameTakenError) else FieldError(field="username", message=str(e))
    )


async def validate_form(form: RegistrationForm) -> Result[RegistrationForm, list[FieldError]]:
    """Validate every field, collecting all field errors.

    The availability lookup only runs when the username passes local checks.
    """
    errors: list[FieldError] = []

    username = validate_username(form.username)
    if username.is_ok():
        username = await check_username_availability(form.username)
    username.not_(errors.append)

    validate_email(form.email).not_(errors.append)
    validate_age(form.age).not_(errors.append)

    if form.password != form.confirm_password:
        errors.append(FieldError(field="confirm_password", message="Passwords do not match", code="passwords_mismatch"))

    return success(form) if not errors else failure(errors)


# ═════════════════════════════════════════════════════════════════════════════
# Example 2: Batch Processing With Retry Classification
# ═════════════════════════════════════════════════════════════════════════════


class DataItem(BaseModel):
    id: str
    value: float


class ProcessingError(BaseModel):
    """Per-item failure. `retryable` decides whether the item is requeued."""

    model_config = {"frozen": True}

    item_id: str
    reason: str
    retryable: bool


class ProcessingStats(BaseModel):
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    attempts: int = 0


def split_retryable(errors: list[ProcessingError]) -> tuple[list[ProcessingError], list[ProcessingError]]:
    """Partition failures into (retryable, permanent)."""
    retryable = [e for e in errors if e.retryable]
    permanent = [e for e in errors if not e.retryable]
    return retryable, permanent


def plan_retry(
    items: list[DataItem],
    errors: list[ProcessingError],
) -> tuple[list[DataItem], list[ProcessingError]]:
    """Items to requeue (those with retryable failures) and the permanent failures."""
    retryable, permanent = split_retryable(errors)
    requeue_ids = {e.item_id for e in retryable}
    return [item for item in items if item.id in requeue_ids], permanent


class BatchProcessor:
    """Processes items concurrently, retrying only transient failures.

    Items whose id contains "invalid" or whose value is negative fail
    permanently. Values above `max_value` fail with a retryable error.
    """

    def __init__(self, *, max_value: float = 1000, base_delay: float = 0.1) -> None:
        self.max_value = max_value
        self.base_delay = base_delay

    async def process_item(self, item: DataItem) -> Result[bool, ProcessingError]:
        await asyncio.sleep(0)
        if "invalid" in item.id:
            return failure(ProcessingError(item_id=item.id, reason="Invalid item format", retryable=False))
        if item.value < 0:
            return failure(ProcessingError(item_id=item.id, reason="Negative values not allowed", retryable=False))
        if item.value > self.max_value:
            return failure(ProcessingError(item_id=item.id, reason="Temporary processing error", retryable=True))
        return success(True)

    async def process_batch(self, items: list[DataItem]) -> Result[ProcessingStats, list[ProcessingError]]:
        """Process all items; success with stats only if every item succeeded."""
        results = await asyncio.gather(*(self.process_item(item) for item in items))
        succeeded, errors = partition(results)
        if errors:
            return failure(errors)
        return success(ProcessingStats(processed=len(items), succeeded=len(succeeded), attempts=1))

    async def process_with_retry(
        self,
        items: list[DataItem],
        max_retries: int = 3,
    ) -> Result[ProcessingStats, list[ProcessingError]]:
        """Retry retryable failures with exponential backoff.

        Permanent failures are counted once and never requeued. Items still
        failing after `max_retries` attempts are reported as exhausted.
        """
        stats = ProcessingStats(processed=len(items))
        permanent: list[ProcessingError] = []
        pending = list(items)

        while pending and stats.attempts < max_retries:
            stats.attempts += 1
            batch = await self.process_batch(pending)
            if batch.is_ok():
                stats.succeeded += len(pending)
                pending = []
                break

            errors: list[ProcessingError] = batch.failure_value  # type: ignore[assignment]
            requeue, newly_permanent = plan_retry(pending, errors)
            stats.succeeded += len(pending) - len(errors)
            permanent.extend(newly_permanent)
            pending = requeue
            logger.debug(
                "attempt %d: %d requeued, %d permanently failed",
                stats.attempts, len(requeue), len(newly_permanent),
            )
            if pending and stats.attempts < max_retries:
                await asyncio.sleep(self.base_delay * 2 ** stats.attempts)

        exhausted = [
            ProcessingError(item_id=item.id, reason="Failed after max retry attempts", retryable=False)
            for item in pending
        ]
        stats.failed = len(permanent) + len(exhausted)
        if stats.failed:
            logger.info("batch finished with %d failed items", stats.failed)
            return failure([*permanent, *exhausted])
        return success(stats)


# ═════════════════════════════════════════════════════════════════════════════
# Example 3: Order Workflow
# ═════════════════════════════════════════════════════════════════════════════


OrderStatus = Literal["pending", "approved", "rejected", "shipped", "delivered"]


class OrderItem(BaseModel):
    product_id: str
    quantity: int
    unit_price: float


class Order(BaseModel):
    id: str
    customer_id: str
    items: list[OrderItem]
    total_amount: float
    status: OrderStatus = "pending"


class BusinessError(BaseModel):
    model_config = {"frozen": True}

    code: str
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


class InventoryService:
    async def check_inventory(self, items: list[OrderItem]) -> Result[bool, BusinessError]:
        short = [i for i in items if i.product_id == "out-of-stock" or i.quantity > 100]
        if short:
            return failure(BusinessError(
                code="insufficient_inventory",
                message="Some items are not available in requested quantity",
                context={"items": [i.product_id for i in short]},
            ))
        return success(True)


class PaymentService:
    def __init__(self, limit: float = 10_000) -> None:
        self.limit = limit
        self._counter = 0

    async def process_payment(self, customer_id: str, amount: float) -> Result[str, BusinessError]:
        if amount > self.limit:
            return failure(BusinessError(
                code="payment_limit_exceeded",
                message="Payment amount exceeds authorized limit",
                context={"limit": self.limit, "attempted": amount},
            ))
        if customer_id == "blocked-customer":
            return failure(BusinessError(code="customer_payment_blocked", message="Customer account has payment restrictions"))
        self._counter += 1
        return success(f"payment-{self._counter}")


class NotificationService:
    async def send_order_confirmation(self, customer_id: str, order_id: str) -> Result[bool, BusinessError]:
        if customer_id == "no-email":
            return failure(BusinessError(
                code="notification_failed",
                message="Could not send email notification",
                context={"order_id": order_id, "reason": "No email address on file"},
            ))
        return success(True)


class OrderService:
    """Approves an order after inventory and payment checks.

    Notification failures are logged and do not affect the outcome.
    """

    def __init__(
        self,
        inventory: InventoryService | None = None,
        payments: PaymentService | None = None,
        notifications: NotificationService | None = None,
    ) -> None:
        self.inventory = inventory or InventoryService()
        self.payments = payments or PaymentService()
        self.notifications = notifications or NotificationService()

    async def process_order(self, order: Order) -> Result[Order, BusinessError]:
        stock = await self.inventory.check_inventory(order.items)
        if stock.is_not():
            return stock.not_(lambda e: BusinessError(
                code="inventory_issue",
                message="Cannot fulfill order due to inventory issues",
                context={"original_error": e.model_dump()},
            ))

        payment = await self.payments.process_payment(order.customer_id, order.total_amount)
        if payment.is_not():
            return payment

        await match_tag(
            Tag.NOT,
            self.notifications.send_order_confirmation(order.customer_id, order.id),
            lambda e: logger.warning("order %s: notification failed: %s", order.id, e.message),
        )
        return success(order.model_copy(update={"status": "approved"}))


# ═════════════════════════════════════════════════════════════════════════════
# Example 4: Parsing Untrusted Input
# ═════════════════════════════════════════════════════════════════════════════


def _require_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def parse_config(text: str | bytes) -> Result[dict[str, Any], str]:
    """Parse a JSON config object; every problem ends up as a message on the failure track."""
    return (
        try_catch(lambda: orjson.loads(text))
        .ok(_require_object)
        .not_(lambda e: f"invalid config: {e}")
    )


def dump_config(config: dict[str, Any]) -> Result[bytes, str]:
    return try_catch(lambda: orjson.dumps(config, option=orjson.OPT_SORT_KEYS)).not_(
        lambda e: f"config is not serializable: {e}"
    )
