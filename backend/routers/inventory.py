import logging
import traceback

from fastapi import APIRouter, HTTPException, status

from core.containers import (
    apply_content_deduction,
    check_container_invariants,
    receive_containers,
    summarize_containers,
)
from core.errors import ContainerStateError, InsufficientStockError, InventoryError, UsageError
from core.usage import restock_item, use_item
from schemas.containers import ContainersOut, DeductRequest, ReceiveRequest, SummaryRequest
from schemas.inventory import RestockRequest, RestockResult, UsageRequest, UsageResult

router = APIRouter()
logger = logging.getLogger(__name__)


def _http_error(e: InventoryError) -> HTTPException:
    if isinstance(e, ContainerStateError):
        return HTTPException(status_code=422, detail=e.problems)
    if isinstance(e, InsufficientStockError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    if isinstance(e, UsageError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"[inventory] {action} failed: {e!r}")
    logger.error(traceback.format_exc())
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to {action}: {e}"
    )


@router.post("/containers/deduct", response_model=ContainersOut)
async def deduct_containers(payload: DeductRequest):
    """
    Run the deduction engine on a container snapshot.

    Over-deduction is not rejected here: whatever the containers hold is drained.
    Use /items/use for stock-checked usage.
    """
    try:
        check_container_invariants(payload.containers)
        containers = apply_content_deduction(payload.containers, payload.amount)
        return ContainersOut(containers=containers, summary=summarize_containers(containers))
    except InventoryError as e:
        raise _http_error(e)
    except Exception as e:
        raise _internal_error("deduct containers", e)


@router.post("/containers/receive", response_model=ContainersOut, status_code=status.HTTP_201_CREATED)
async def receive(payload: ReceiveRequest):
    """Append newly received sealed containers to a snapshot."""
    try:
        check_container_invariants(payload.containers)
        containers = receive_containers(
            payload.containers,
            payload.count,
            payload.content_per_unit,
            payload.content_unit,
            opened_remaining=payload.opened_remaining,
        )
        return ContainersOut(containers=containers, summary=summarize_containers(containers))
    except InventoryError as e:
        raise _http_error(e)
    except Exception as e:
        raise _internal_error("receive containers", e)


@router.post("/containers/summary", response_model=ContainersOut)
async def summary(payload: SummaryRequest):
    """Recompute item aggregates from a container snapshot."""
    try:
        check_container_invariants(payload.containers)
        return ContainersOut(containers=payload.containers, summary=summarize_containers(payload.containers))
    except InventoryError as e:
        raise _http_error(e)
    except Exception as e:
        raise _internal_error("summarize containers", e)


@router.post("/items/use", response_model=UsageResult)
async def use(payload: UsageRequest):
    try:
        check_container_invariants(payload.item.containers)
        return use_item(payload)
    except InventoryError as e:
        raise _http_error(e)
    except Exception as e:
        raise _internal_error("record usage", e)


@router.post("/items/restock", response_model=RestockResult)
async def restock(payload: RestockRequest):
    try:
        check_container_invariants(payload.item.containers)
        return restock_item(
            payload.item,
            payload.count,
            content_per_unit=payload.content_per_unit,
            opened_remaining=payload.opened_remaining,
        )
    except InventoryError as e:
        raise _http_error(e)
    except Exception as e:
        raise _internal_error("restock item", e)
