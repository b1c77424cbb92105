"""Tests for page parameter normalization and page metadata."""

import pytest

from clipgraph.config.settings import settings
from clipgraph.exceptions import InvalidOperationError
from clipgraph.utils.pagination import normalize_page, page_meta


class TestNormalizePage:
    def test_defaults(self):
        assert normalize_page(None, None) == (0, settings.DEFAULT_PAGE_SIZE)

    def test_negative_page_rejected(self):
        with pytest.raises(InvalidOperationError) as exc_info:
            normalize_page(-1, 10)
        assert exc_info.value.code == "INVALID_PAGE"

    @pytest.mark.parametrize("size,expected", [(0, 1), (-5, 1), (51, 50), (500, 50), (20, 20)])
    def test_size_clamped(self, size, expected):
        assert normalize_page(0, size) == (0, expected)


class TestPageMeta:
    def test_first_page(self):
        meta = page_meta(0, 10, 25)
        assert meta["total_pages"] == 3
        assert meta["first"] is True
        assert meta["last"] is False

    def test_last_page(self):
        meta = page_meta(2, 10, 25)
        assert meta["first"] is False
        assert meta["last"] is True

    def test_empty(self):
        meta = page_meta(0, 10, 0)
        assert meta["total_elements"] == 0
        assert meta["total_pages"] == 0
        assert meta["first"] is True
        assert meta["last"] is True

    def test_exact_multiple(self):
        assert page_meta(1, 10, 20)["last"] is True
        assert page_meta(0, 10, 20)["last"] is False
