"""Tests for the container deduction engine."""

import random

import pytest

from core.containers import (
    apply_content_deduction,
    check_container_invariants,
    consume_sealed_units,
    receive_containers,
    summarize_containers,
    total_remaining,
)
from core.errors import ContainerStateError, UsageError
from factories import make_container


def by_index(containers):
    return {c.index: c for c in containers}


def assert_consistent(containers):
    for c in containers:
        assert 0 <= c.remaining_content <= c.initial_content
        assert (c.status == "empty") == (c.remaining_content == 0)
        if c.status == "sealed":
            assert c.remaining_content == c.initial_content


def random_containers(rng):
    containers = []
    for index in rng.sample(range(1, 40), rng.randint(0, 6)):
        initial = rng.choice([5, 10, 25, 50, 100])
        status = rng.choice(["sealed", "opened", "empty"])
        if status == "sealed":
            remaining = initial
        elif status == "opened":
            remaining = rng.randint(1, initial)
        else:
            remaining = 0
        containers.append(make_container(index, status, initial=initial, remaining=remaining))
    return containers


# --- Concrete scenarios ---

def test_small_draw_opens_first_sealed_container(two_sealed):
    result = by_index(apply_content_deduction(two_sealed, 1))
    assert result[1].status == "opened"
    assert result[1].remaining_content == 49
    assert result[2].status == "sealed"
    assert result[2].remaining_content == 50


def test_draw_spills_into_next_container_in_index_order(two_sealed):
    result = by_index(apply_content_deduction(two_sealed, 60))
    assert result[1].status == "empty"
    assert result[1].remaining_content == 0
    assert result[2].status == "opened"
    assert result[2].remaining_content == 40


def test_opened_container_is_drained_before_sealed(opened_and_sealed):
    result = by_index(apply_content_deduction(opened_and_sealed, 15))
    assert result[1].status == "empty"
    assert result[1].remaining_content == 0
    assert result[2].status == "opened"
    assert result[2].remaining_content == 45


def test_already_empty_container_is_left_alone():
    containers = [make_container(1, "empty", remaining=0)]
    assert apply_content_deduction(containers, 5) == containers


def test_empty_input():
    assert apply_content_deduction([], 10) == []


# --- Ordering ---

def test_opened_with_higher_index_beats_sealed_with_lower_index():
    containers = [make_container(1), make_container(7, "opened", remaining=20)]
    result = by_index(apply_content_deduction(containers, 5))
    assert result[7].remaining_content == 15
    assert result[1].status == "sealed"


def test_opened_containers_drain_lowest_index_first():
    containers = [
        make_container(3, "opened", remaining=10),
        make_container(2, "opened", remaining=10),
    ]
    result = by_index(apply_content_deduction(containers, 12))
    assert result[2].status == "empty"
    assert result[3].remaining_content == 8


def test_input_order_does_not_matter(two_sealed):
    forward = apply_content_deduction(two_sealed, 60)
    backward = apply_content_deduction(list(reversed(two_sealed)), 60)
    assert forward == backward
    assert [c.index for c in forward] == [1, 2]


def test_empty_containers_are_skipped_between_others():
    containers = [
        make_container(1, "empty", remaining=0),
        make_container(2),
        make_container(3),
    ]
    result = by_index(apply_content_deduction(containers, 10))
    assert result[1].status == "empty"
    assert result[2].remaining_content == 40
    assert result[3].status == "sealed"


# --- No-op and purity ---

@pytest.mark.parametrize("amount", [0, -1, -0.5, float("nan")])
def test_non_positive_amount_is_a_no_op(two_sealed, amount):
    result = apply_content_deduction(two_sealed, amount)
    assert result == two_sealed
    assert all(a is b for a, b in zip(result, two_sealed))


def test_input_is_never_mutated(opened_and_sealed):
    snapshot = [c.model_copy() for c in opened_and_sealed]
    apply_content_deduction(opened_and_sealed, 30)
    assert opened_and_sealed == snapshot


def test_containers_are_frozen(two_sealed):
    with pytest.raises(Exception):
        two_sealed[0].remaining_content = 1


def test_same_input_gives_same_output(opened_and_sealed):
    assert apply_content_deduction(opened_and_sealed, 17.5) == apply_content_deduction(opened_and_sealed, 17.5)


def test_fractional_amounts_are_kept():
    containers = [make_container(1, initial=1.5)]
    result = apply_content_deduction(containers, 0.25)
    assert result[0].remaining_content == pytest.approx(1.25)


# --- Over-deduction ---

def test_over_deduction_drains_everything_without_error(opened_and_sealed):
    result = apply_content_deduction(opened_and_sealed, 10_000)
    assert all(c.status == "empty" and c.remaining_content == 0 for c in result)


def test_over_drain_then_any_positive_amount_is_unchanged(two_sealed):
    drained = apply_content_deduction(two_sealed, 1_000_000)
    assert apply_content_deduction(drained, 3) == drained


# --- Eager open ---

def test_zero_content_sealed_container_is_opened_then_emptied():
    # Reaching a sealed container opens it even though nothing can be drawn from it.
    containers = [make_container(1, "sealed", initial=0), make_container(2)]
    result = by_index(apply_content_deduction(containers, 5))
    assert result[1].status == "empty"
    assert result[1].remaining_content == 0
    assert result[2].status == "opened"
    assert result[2].remaining_content == 45


def test_sealed_container_not_reached_stays_sealed(opened_and_sealed):
    result = by_index(apply_content_deduction(opened_and_sealed, 10))
    assert result[1].status == "empty"
    assert result[2].status == "sealed"


# --- Properties over random snapshots ---

@pytest.mark.parametrize("seed", range(25))
def test_conservation_and_status_consistency(seed):
    rng = random.Random(seed)
    containers = random_containers(rng)
    amount = rng.choice([0, 1, 7, 33.5, 120, 1000])

    result = apply_content_deduction(containers, amount)

    drawn = total_remaining(containers) - total_remaining(result)
    assert drawn == pytest.approx(min(amount, total_remaining(containers)))
    assert sorted(c.index for c in result) == sorted(c.index for c in containers)
    assert_consistent(result)


@pytest.mark.parametrize("seed", range(25))
def test_sealed_only_touched_once_opened_are_empty(seed):
    rng = random.Random(seed)
    containers = random_containers(rng)
    before = by_index(containers)
    result = apply_content_deduction(containers, rng.choice([1, 15, 60]))

    touched_sealed = [
        c for c in result if before[c.index].status == "sealed" and c != before[c.index]
    ]
    if touched_sealed:
        assert all(c.status == "empty" for c in result if before[c.index].status == "opened")
        # lower sealed indices are fully used before a higher one is touched
        highest = max(c.index for c in touched_sealed)
        for c in result:
            if before[c.index].status == "sealed" and c.index < highest:
                assert c.status == "empty"


# --- Units, receipts, aggregates ---

def test_consume_sealed_units_takes_lowest_sealed_packs():
    containers = [
        make_container(1, "opened", remaining=10),
        make_container(2),
        make_container(3),
        make_container(4),
    ]
    result = by_index(consume_sealed_units(containers, 2))
    assert result[1].remaining_content == 10
    assert result[2].status == "empty" and result[2].remaining_content == 0
    assert result[3].status == "empty"
    assert result[4].status == "sealed"


def test_consume_sealed_units_beyond_stock_stops_quietly(two_sealed):
    result = consume_sealed_units(two_sealed, 5)
    assert all(c.status == "empty" for c in result)


def test_consume_sealed_units_no_op(two_sealed):
    assert consume_sealed_units(two_sealed, 0) == two_sealed


def test_receive_continues_after_highest_index():
    containers = [make_container(1, "empty", remaining=0), make_container(4)]
    result = receive_containers(containers, 2, 100, "mL")
    assert [c.index for c in result] == [1, 4, 5, 6]
    assert result[2].status == "sealed"
    assert result[2].initial_content == result[2].remaining_content == 100


def test_receive_into_empty_item_starts_at_one():
    result = receive_containers([], 3, 20, "pcs")
    assert [c.index for c in result] == [1, 2, 3]


def test_receive_already_opened_pack():
    result = receive_containers([], 3, 20, "pcs", opened_remaining=7)
    assert result[0].status == "opened"
    assert result[0].remaining_content == 7
    assert [c.status for c in result[1:]] == ["sealed", "sealed"]


def test_receive_rejects_opened_remaining_above_pack_size():
    with pytest.raises(UsageError):
        receive_containers([], 1, 20, "pcs", opened_remaining=25)


def test_summary_counts(opened_and_sealed):
    containers = opened_and_sealed + [make_container(3, "empty", remaining=0)]
    summary = summarize_containers(containers)
    assert summary.sealed_count == 1
    assert summary.opened_count == 1
    assert summary.empty_count == 1
    assert summary.total_units == 2
    assert summary.total_content == 60


def test_summary_of_nothing():
    summary = summarize_containers([])
    assert summary.total_units == 0
    assert summary.total_content == 0


# --- Precondition checks ---

def test_invariant_check_accepts_valid_snapshot(opened_and_sealed):
    check_container_invariants(opened_and_sealed)


def test_invariant_check_tolerates_zero_content_sealed():
    check_container_invariants([make_container(1, "sealed", initial=0)])


@pytest.mark.parametrize(
    "containers, fragment",
    [
        ([make_container(1), make_container(1)], "duplicate index"),
        ([make_container(1, "opened", initial=10, remaining=20)], "exceeds initial_content"),
        ([make_container(1, "sealed", initial=10, remaining=5)], "sealed container must be full"),
        ([make_container(1, "empty", initial=10, remaining=5)], "empty container must hold no content"),
        ([make_container(1, "opened", initial=10, remaining=0)], "must be empty"),
    ],
)
def test_invariant_check_reports_violations(containers, fragment):
    with pytest.raises(ContainerStateError) as exc:
        check_container_invariants(containers)
    assert any(fragment in p for p in exc.value.problems)
