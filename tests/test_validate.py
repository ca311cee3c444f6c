"""Oracle and property helpers."""

from __future__ import annotations

import pytest

from shellbench.validate import (
    SortValidationError,
    check_sorted_result,
    equals_oracle,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    oracle_sort,
    permutation_counter_diff,
)


def test_oracle_does_not_mutate():
    a = [3, 1, 2]
    assert oracle_sort(a) == [1, 2, 3]
    assert a == [3, 1, 2]
    assert equals_oracle(a, [1, 2, 3])
    assert not equals_oracle(a, [1, 3, 2])


def test_nondecreasing():
    assert is_nondecreasing([])
    assert is_nondecreasing([1, 1, 2])
    assert not is_nondecreasing([1, 3, 2])
    assert first_nondecreasing_violation_index([1, 3, 2, 0]) == 1
    assert first_nondecreasing_violation_index([1, 2]) is None


def test_permutation_helpers():
    assert is_permutation([1, 2, 2], [2, 1, 2])
    assert not is_permutation([1, 2, 2], [1, 1, 2])
    assert permutation_counter_diff([1, 2, 2], [1, 1, 2]) == {2: 1, 1: -1}
    assert permutation_counter_diff([5], [5]) == {}


def test_check_sorted_result_accepts_good_output():
    check_sorted_result([3, 1, 2], [1, 2, 3])


@pytest.mark.parametrize(
    "before, after, fragment",
    [
        ([3, 1, 2], [1, 3, 2], "not nondecreasing at i=1"),
        ([3, 1, 2], [1, 2], "length changed"),
        ([3, 1, 2], [1, 1, 3], "multiset changed"),
    ],
)
def test_check_sorted_result_reports(before, after, fragment):
    with pytest.raises(SortValidationError, match=fragment):
        check_sorted_result(before, after)
