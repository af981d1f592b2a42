"""
Container quantity engine.

Containers are drawn down in a fixed order:
1) opened containers, lowest index first
2) sealed containers, lowest index first (a sealed container is opened as soon
   as it becomes the head of the queue)

Empty containers are never drawn from and are kept as zero-content records.
All functions here are pure: they take container snapshots and return new ones.
"""

from collections import Counter
from typing import List, Optional, Sequence, Tuple

from core.errors import ContainerStateError, UsageError
from schemas.containers import Container, ContainerSummary


def _draw(container: Container, wanted: float) -> Tuple[Container, float]:
    take = min(wanted, container.remaining_content)
    left = container.remaining_content - take
    if left <= 0:
        return container.model_copy(update={"status": "empty", "remaining_content": 0.0}), wanted - take
    return container.model_copy(update={"remaining_content": left}), wanted - take


def apply_content_deduction(containers: Sequence[Container], amount: float) -> List[Container]:
    """
    Deduct `amount` of content from an item's containers.

    Non-positive (or NaN) amounts are a no-op and return the containers as given.
    Otherwise the result is ordered by index. Asking for more than the
    containers hold drains everything and stops; it is not an error.
    """
    if not amount > 0:
        return list(containers)

    remaining_to_deduct = amount
    ordered = sorted(containers, key=lambda c: c.index)

    opened_positions = [i for i, c in enumerate(ordered) if c.status == "opened"]
    for pos in opened_positions:
        if remaining_to_deduct <= 0:
            break
        ordered[pos], remaining_to_deduct = _draw(ordered[pos], remaining_to_deduct)

    sealed_positions = [i for i, c in enumerate(ordered) if c.status == "sealed"]
    for pos in sealed_positions:
        if remaining_to_deduct <= 0:
            break
        # Opening happens before the draw, even if the draw ends up taking nothing.
        opened = ordered[pos].model_copy(update={"status": "opened"})
        ordered[pos], remaining_to_deduct = _draw(opened, remaining_to_deduct)

    return ordered


def consume_sealed_units(containers: Sequence[Container], units: int) -> List[Container]:
    """Take whole sealed packs out of stock (lowest index first); opened packs are untouched."""
    if not units > 0:
        return list(containers)

    left = int(units)
    ordered = sorted(containers, key=lambda c: c.index)
    for pos, c in enumerate(ordered):
        if left <= 0:
            break
        if c.status != "sealed":
            continue
        ordered[pos] = c.model_copy(update={"status": "empty", "remaining_content": 0.0})
        left -= 1
    return ordered


def receive_containers(
    containers: Sequence[Container],
    count: int,
    content_per_unit: float,
    content_unit: str,
    opened_remaining: Optional[float] = None,
) -> List[Container]:
    """
    Append `count` freshly received containers.

    New indices continue after the highest existing one, so an index is never
    handed out twice. With `opened_remaining`, the first new container is
    recorded as an already-opened pack holding that much content.
    """
    if count <= 0:
        return list(containers)
    if opened_remaining is not None and not 0 <= opened_remaining <= content_per_unit:
        raise UsageError(
            f"Opened pack remaining content must be between 0 and {content_per_unit:g}"
        )

    next_index = max((c.index for c in containers), default=0) + 1
    received = []
    for offset in range(count):
        status = "sealed"
        remaining = content_per_unit
        if offset == 0 and opened_remaining is not None:
            remaining = opened_remaining
            status = "opened" if opened_remaining > 0 else "empty"
        received.append(
            Container(
                index=next_index + offset,
                status=status,
                initial_content=content_per_unit,
                remaining_content=remaining,
                content_unit=content_unit,
            )
        )
    return list(containers) + received


def total_remaining(containers: Sequence[Container]) -> float:
    return sum(c.remaining_content for c in containers)


def summarize_containers(containers: Sequence[Container]) -> ContainerSummary:
    counts = Counter(c.status for c in containers)
    return ContainerSummary(
        sealed_count=counts["sealed"],
        opened_count=counts["opened"],
        empty_count=counts["empty"],
        total_units=counts["sealed"] + counts["opened"],
        total_content=total_remaining(containers),
    )


def check_container_invariants(containers: Sequence[Container]) -> None:
    """
    Precondition check for callers that accept container snapshots from outside.

    A sealed container created with zero content is tolerated; every other
    mismatch between status and content is reported.
    """
    problems: List[str] = []
    seen = set()
    for c in containers:
        if c.index in seen:
            problems.append(f"container {c.index}: duplicate index")
        seen.add(c.index)

        if c.remaining_content > c.initial_content:
            problems.append(
                f"container {c.index}: remaining_content {c.remaining_content:g} "
                f"exceeds initial_content {c.initial_content:g}"
            )
        if c.status == "sealed" and c.remaining_content != c.initial_content:
            problems.append(f"container {c.index}: sealed container must be full")
        if c.status == "empty" and c.remaining_content != 0:
            problems.append(f"container {c.index}: empty container must hold no content")
        if c.status == "opened" and c.remaining_content == 0:
            problems.append(f"container {c.index}: opened container with no content must be empty")

    if problems:
        raise ContainerStateError(problems)
