"""
Item usage flow.

Sits between the HTTP routes and the container engine:
checks a usage request against the item's tracking type and stock, runs the
right deduction, and recomputes the item's aggregates from the new containers.
"""

import logging
import math
from typing import Optional

from core.config import settings
from core.containers import (
    apply_content_deduction,
    consume_sealed_units,
    receive_containers,
    summarize_containers,
    total_remaining,
)
from core.errors import InsufficientStockError, UsageError
from core.measurement import (
    PACK_WITH_CONTENT,
    SIMPLE_MEASURE,
    UNIT_ONLY,
    default_content_unit,
    uses_containers,
)
from schemas.containers import ContainerSummary
from schemas.inventory import ItemState, RestockResult, UsageRequest, UsageResult

logger = logging.getLogger(__name__)


def _fmt(x: float) -> str:
    return f"{x:g}"


def content_unit_of(item: ItemState) -> str:
    if item.content_unit:
        return item.content_unit
    if item.containers:
        return item.containers[0].content_unit
    return default_content_unit(item.category)


def summarize_item(item: ItemState) -> ContainerSummary:
    if uses_containers(item.tracking_type):
        return summarize_containers(item.containers)
    return ContainerSummary(total_units=item.total_units or 0)


def available_quantity(item: ItemState, mode: str) -> float:
    if item.tracking_type == UNIT_ONLY:
        return float(item.total_units or 0)
    if mode == "UNITS":
        return float(summarize_containers(item.containers).sealed_count)
    return total_remaining(item.containers)


def resolve_mode(item: ItemState, mode: Optional[str] = None) -> str:
    """The requested mode, or the one the item's tracking type implies."""
    if mode:
        return mode
    if item.tracking_type == UNIT_ONLY:
        return "UNITS"
    return "CONTENT"


def validate_usage(item: ItemState, mode: str, amount: float, strict: bool = True) -> None:
    """Raise UsageError / InsufficientStockError when the request can't be honoured."""
    if not math.isfinite(amount) or amount <= 0:
        raise UsageError("Amount must be greater than 0")

    if item.tracking_type == UNIT_ONLY and mode != "UNITS":
        raise UsageError("UNIT_ONLY items can only be deducted in UNITS mode")
    if item.tracking_type == SIMPLE_MEASURE and mode != "CONTENT":
        raise UsageError("SIMPLE_MEASURE items can only be deducted in CONTENT mode")
    if mode == "UNITS" and not float(amount).is_integer():
        raise UsageError("Units to deduct must be a whole number")

    if not strict:
        return

    available = available_quantity(item, mode)
    if amount <= available:
        return
    if item.tracking_type == PACK_WITH_CONTENT and mode == "UNITS":
        raise InsufficientStockError(
            f"Insufficient sealed packs. Available sealed: {_fmt(available)}", available=available
        )
    if item.tracking_type == UNIT_ONLY:
        label = item.unit_type or "units"
    else:
        label = content_unit_of(item)
    raise InsufficientStockError(
        f"Insufficient stock. Available: {_fmt(available)} {label}", available=available
    )


def use_item(request: UsageRequest) -> UsageResult:
    item = request.item
    mode = resolve_mode(item, request.mode)
    strict = settings.strict_usage if request.strict is None else request.strict

    validate_usage(item, mode, request.amount, strict=strict)

    before = available_quantity(item, mode)
    if item.tracking_type == UNIT_ONLY:
        total = max((item.total_units or 0) - int(request.amount), 0)
        next_item = item.model_copy(update={"total_units": total})
    elif mode == "UNITS":
        containers = consume_sealed_units(item.containers, int(request.amount))
        next_item = item.model_copy(update={"containers": containers})
    else:
        containers = apply_content_deduction(item.containers, request.amount)
        next_item = item.model_copy(update={"containers": containers})
    after = available_quantity(next_item, mode)

    logger.info(
        f"Used {_fmt(before - after)} of {_fmt(request.amount)} requested "
        f"({item.tracking_type}/{mode}): {_fmt(before)} -> {_fmt(after)}"
    )
    if request.notes:
        logger.debug(f"Usage notes: {request.notes}")

    return UsageResult(
        item=next_item,
        summary=summarize_item(next_item),
        mode=mode,
        before_quantity=before,
        after_quantity=after,
        quantity_used=before - after,
    )


def restock_item(
    item: ItemState,
    count: int,
    content_per_unit: Optional[float] = None,
    opened_remaining: Optional[float] = None,
) -> RestockResult:
    if count <= 0:
        raise UsageError("Quantity to add must be greater than 0")

    if item.tracking_type == UNIT_ONLY:
        if content_per_unit is not None or opened_remaining is not None:
            raise UsageError("UNIT_ONLY items do not take content_per_unit or opened_remaining")
        next_item = item.model_copy(update={"total_units": (item.total_units or 0) + count})
    else:
        if content_per_unit is None or content_per_unit <= 0:
            raise UsageError("content_per_unit is required for items tracked by container")
        containers = receive_containers(
            item.containers,
            count,
            content_per_unit,
            content_unit_of(item),
            opened_remaining=opened_remaining,
        )
        next_item = item.model_copy(update={"containers": containers})

    logger.info(f"Restocked {count} unit(s) of a {item.tracking_type} {item.category} item")
    return RestockResult(item=next_item, summary=summarize_item(next_item), quantity_added=count)
