import pytest

from ffshell.domain.errors import RequestValidationError
from ffshell.domain.policies.time_range import normalize_time_range


def test_start_and_duration_pass_through():
    tr = normalize_time_range(10, duration=30)
    assert tr.start == 10
    assert tr.duration == 30
    assert tr.end == 40
    assert tr.start_token() == "10"
    assert tr.duration_token() == "30"


def test_end_is_folded_into_duration():
    tr = normalize_time_range("1:00", "1:30.5")
    assert tr.start == 60
    assert tr.duration == pytest.approx(30.5)


def test_end_before_start_is_rejected_with_computed_duration():
    with pytest.raises(RequestValidationError) as e:
        normalize_time_range(60, 40)
    assert "-20" in str(e.value)
    assert "not positive" in str(e.value)


def test_end_equal_to_start_is_rejected():
    with pytest.raises(RequestValidationError):
        normalize_time_range("5", "5")


def test_end_and_duration_are_exclusive():
    with pytest.raises(RequestValidationError):
        normalize_time_range(0, end=10, duration=5)


@pytest.mark.parametrize("duration", [0, "0", -3])
def test_non_positive_duration_is_rejected(duration):
    with pytest.raises(RequestValidationError):
        normalize_time_range(0, duration=duration)


def test_open_ended_range():
    tr = normalize_time_range()
    assert tr.start == 0
    assert tr.duration is None
    assert tr.end is None
    assert tr.duration_token() is None
