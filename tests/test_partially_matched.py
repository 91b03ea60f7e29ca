from __future__ import annotations

import warnings

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from partial_pairs.inference.errors import (
    DegenerateVarianceError,
    FallbackWarning,
    InsufficientDataError,
    LengthMismatchError,
)
from partial_pairs.inference.partially_matched import PartialMatchOptions, ekbohm_mle_test, partially_matched_test
from partial_pairs.inference.routing import Route


def test_unpaired_fallback_when_too_few_pairs() -> None:
    # n1=3, n2=3, n3=3
    x = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, None, None, None]
    y = [1.5, 2.5, 2.0, None, None, None, 7.0, 8.0, 9.5]

    with pytest.warns(FallbackWarning, match="Not enough matched pairs"):
        res = partially_matched_test(x, y, "less")

    expected = stats.ttest_ind([4.0, 5.0, 6.0], [7.0, 8.0, 9.5], equal_var=False, alternative="less")
    assert res.route is Route.UNPAIRED_FALLBACK
    assert (res.n1, res.n2, res.n3) == (3, 3, 3)
    assert res.pvalue == pytest.approx(expected.pvalue)
    assert res.alternative == "less"
    assert res.warning is not None


def test_paired_fallback_when_too_little_unmatched_data() -> None:
    x = [1.0, 2.0, 3.0, 4.0, 5.0, None]
    y = [1.2, 2.5, 2.9, 4.4, 5.1, 6.0]

    with pytest.warns(FallbackWarning, match="Matched pairs t-test attempted"):
        res = partially_matched_test(x, y, "greater")

    expected = stats.ttest_rel(x[:5], y[:5], alternative="greater")
    assert res.route is Route.PAIRED_FALLBACK
    assert res.pvalue == pytest.approx(expected.pvalue)
    assert res.df == pytest.approx(4.0)


def test_too_small_raises() -> None:
    # n1=2, n2=1, n3=1
    x = [1.0, 2.0, 3.0, None]
    y = [1.5, 2.5, None, 4.0]
    with pytest.raises(InsufficientDataError, match="too small"):
        ekbohm_mle_test(x, y)


def test_unpaired_fallback_needs_two_values_per_side() -> None:
    # n1=2, n2=0, n3=5: routed to the unpaired test but x has no unmatched values
    x = [1.0, 2.0, None, None, None, None, None]
    y = [1.5, 2.5, 3.0, 4.0, 5.0, 6.0, 7.0]
    with pytest.raises(InsufficientDataError):
        partially_matched_test(x, y)


def test_length_mismatch_falls_back_to_two_sided_welch() -> None:
    x = [1.0, 2.0, None, 4.0, 5.0]
    y = [2.0, 3.0, 4.0, 5.0, 6.5, 7.0]

    with pytest.warns(FallbackWarning, match="Length of x should equal length of y"):
        res = partially_matched_test(x, y, "greater")

    expected = stats.ttest_ind([1.0, 2.0, 4.0, 5.0], y, equal_var=False)
    assert res.route is Route.LENGTH_MISMATCH_UNPAIRED
    # the requested direction is ignored unless configured otherwise
    assert res.alternative == "two.sided"
    assert res.pvalue == pytest.approx(expected.pvalue)


def test_length_mismatch_can_honour_requested_alternative() -> None:
    x = [1.0, 2.0, None, 4.0, 5.0]
    y = [2.0, 3.0, 4.0, 5.0, 6.5, 7.0]
    options = PartialMatchOptions(alternative="less", mismatch_alternative="requested")

    with pytest.warns(FallbackWarning):
        res = partially_matched_test(x, y, options=options)

    expected = stats.ttest_ind([1.0, 2.0, 4.0, 5.0], y, equal_var=False, alternative="less")
    assert res.alternative == "less"
    assert res.pvalue == pytest.approx(expected.pvalue)


def test_length_mismatch_too_small_raises() -> None:
    with pytest.raises(LengthMismatchError):
        partially_matched_test([1.0, 2.0, None], [1.0, 2.0, 3.0, 4.0])
    # also catchable as the generic insufficient-data failure
    with pytest.raises(InsufficientDataError):
        partially_matched_test([1.0, 2.0, 3.0, 4.0], [None, 2.0, 3.0])


def test_constant_data_raises_degenerate_variance() -> None:
    # n1=4, n2=3, n3=3
    x = [2.0, 2.0, 2.0, 2.0, 2.0, 2.0, 2.0, None, None, None]
    y = [3.0, 3.0, 3.0, 3.0, None, None, None, 3.0, 3.0, 3.0]
    with pytest.raises(DegenerateVarianceError):
        ekbohm_mle_test(x, y)


def test_full_path_emits_no_warning() -> None:
    x = [1, 2, 3, 4, 5, 6, None, None, None, None]
    y = [1.1, 2.1, 2.9, 4.2, None, None, 5, 6, 7, 8]
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        p = ekbohm_mle_test(x, y)
    assert 0.0 <= p <= 1.0


def test_accepts_numpy_and_pandas_inputs() -> None:
    x = [1, 2, 3, 4, 5, 6, None, None, None, None]
    y = [1.1, 2.1, 2.9, 4.2, None, None, 5, 6, 7, 8]
    expected = ekbohm_mle_test(x, y)

    x_arr = np.array([np.nan if v is None else v for v in x], dtype=np.float64)
    y_ser = pd.Series(y, dtype="Float64")
    assert ekbohm_mle_test(x_arr, y_ser) == pytest.approx(expected)


def test_options_supply_default_alternative() -> None:
    x = [1, 2, 3, 4, 5, 6, None, None, None, None]
    y = [1.1, 2.1, 2.9, 4.2, None, None, 5, 6, 7, 8]
    res = partially_matched_test(x, y, options=PartialMatchOptions(alternative="less"))
    assert res.alternative == "less"
    # explicit argument wins over options
    res = partially_matched_test(x, y, "greater", options=PartialMatchOptions(alternative="less"))
    assert res.alternative == "greater"


def test_invalid_alternative_and_options() -> None:
    with pytest.raises(ValueError):
        ekbohm_mle_test([1.0] * 10, [2.0] * 10, "two-sided")
    with pytest.raises(ValueError):
        PartialMatchOptions(alternative="both")
    with pytest.raises(ValueError):
        PartialMatchOptions(mismatch_alternative="sometimes")  # type: ignore[arg-type]


def test_identical_samples_on_paired_fallback_raise() -> None:
    x = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    with pytest.warns(FallbackWarning), pytest.raises(DegenerateVarianceError, match="essentially constant"):
        partially_matched_test(x, list(x))


def test_constant_samples_on_length_mismatch_raise() -> None:
    with pytest.warns(FallbackWarning), pytest.raises(DegenerateVarianceError, match="essentially constant"):
        partially_matched_test([2.0, 2.0, 2.0], [2.0, 2.0, 2.0, 2.0])


def test_constant_samples_on_unpaired_fallback_raise() -> None:
    # n1=3, n2=3, n3=3; the unmatched values are constant on both sides
    x = [1.0, 2.0, 3.0, 5.0, 5.0, 5.0, None, None, None]
    y = [1.5, 2.5, 2.0, None, None, None, 7.0, 7.0, 7.0]
    with pytest.warns(FallbackWarning), pytest.raises(DegenerateVarianceError):
        partially_matched_test(x, y)


def test_constant_shift_on_paired_fallback_raises() -> None:
    # differences are all 1.0: zero spread around a non-zero mean
    x = [1.0, 2.0, 3.0, 4.0, 5.0]
    y = [0.0, 1.0, 2.0, 3.0, 4.0]
    with pytest.warns(FallbackWarning), pytest.raises(DegenerateVarianceError):
        ekbohm_mle_test(x, y)


@pytest.mark.parametrize("entry", [partially_matched_test, ekbohm_mle_test])
def test_fallback_warning_points_at_the_caller(entry) -> None:
    x = [1.0, 2.0, 3.0, 4.0, 5.0, None]
    y = [1.2, 2.5, 2.9, 4.4, 5.1, 6.0]
    with pytest.warns(FallbackWarning) as record:
        entry(x, y)
    assert record[0].filename == __file__
