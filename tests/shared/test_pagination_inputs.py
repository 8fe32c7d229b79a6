"""Tests for pagination input parsing."""

import pytest
from protean.exceptions import ValidationError

from marketplace.shared.pagination import non_negative_int, positive_int, total_pages


class TestPositiveInt:
    @pytest.mark.parametrize("value, expected", [("3", 3), (3, 3), (2.0, 2), (None, 7), ("", 7)])
    def test_accepted(self, value, expected):
        assert positive_int(value, "page", default=7) == expected

    @pytest.mark.parametrize("value", [0, "0", -2, "x", 1.5, True, [1]])
    def test_rejected(self, value):
        with pytest.raises(ValidationError) as exc:
            positive_int(value, "page", default=1)
        assert "page" in exc.value.messages

    def test_maximum(self):
        assert positive_int(100, "limit", default=10, maximum=100) == 100
        with pytest.raises(ValidationError):
            positive_int(101, "limit", default=10, maximum=100)


class TestNonNegativeInt:
    @pytest.mark.parametrize("value, expected", [("0", 0), (5, 5), (None, 0)])
    def test_accepted(self, value, expected):
        assert non_negative_int(value, "offset") == expected

    @pytest.mark.parametrize("value", [-1, "abc", False])
    def test_rejected(self, value):
        with pytest.raises(ValidationError):
            non_negative_int(value, "offset")


@pytest.mark.parametrize("total, per_page, expected", [(0, 10, 0), (10, 10, 1), (11, 10, 2), (5, 0, 0)])
def test_total_pages(total, per_page, expected):
    assert total_pages(total, per_page) == expected
