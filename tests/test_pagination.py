import pytest
from socialfeed.core.exceptions import ValidationError
from socialfeed.core.pagination import Pagination, check_window
from socialfeed.core.validation import MAX_ID, parse_id, require_text


class TestPagination:
    """Page/limit conversion tests."""

    def test_defaults(self):
        """Test default page and limit."""
        pagination = Pagination.from_query()

        assert pagination.page == 1
        assert pagination.limit == 20
        assert pagination.offset == 0

    def test_offset_from_page(self):
        """Test offset = (page - 1) * limit."""
        assert Pagination.from_query(page=3, limit=10).offset == 20
        assert Pagination.from_query(page=2, limit=100).offset == 100

    @pytest.mark.parametrize("page,limit", [(0, 20), (-1, 20), (1, 0), (1, 101)])
    def test_out_of_range(self, page, limit):
        """Test that bad page or limit values are validation errors."""
        with pytest.raises(ValidationError):
            Pagination.from_query(page=page, limit=limit)

    def test_page_beyond_range(self):
        """Test that a page number past the id range is rejected."""
        assert Pagination.from_query(page=MAX_ID, limit=1).offset == MAX_ID - 1

        with pytest.raises(ValidationError):
            Pagination.from_query(page=MAX_ID + 1, limit=20)
        with pytest.raises(ValidationError):
            check_window(20, MAX_ID * 100 + 1)

    def test_wrap_full_page_has_more(self):
        """Test that a full page reports more results."""
        page = Pagination.from_query(page=1, limit=3).wrap([1, 2, 3])

        assert page.has_more is True
        assert page.items == [1, 2, 3]
        assert page.page == 1
        assert page.limit == 3

    def test_wrap_short_page(self):
        """Test that a short page is the last one."""
        page = Pagination.from_query(page=2, limit=3).wrap([1])

        assert page.has_more is False

    def test_wrap_empty_page(self):
        """Test that an empty page has no more results."""
        assert Pagination.from_query().wrap([]).has_more is False

    def test_check_window(self):
        """Test limit/offset checks used by the stores."""
        check_window(1, 0)
        check_window(100, 500)

        with pytest.raises(ValidationError):
            check_window(0, 0)
        with pytest.raises(ValidationError):
            check_window(101, 0)
        with pytest.raises(ValidationError):
            check_window(10, -5)
        with pytest.raises(ValidationError):
            check_window("10", 0)


class TestValidation:
    """Id and text input checks."""

    def test_parse_id(self):
        assert parse_id(7) == 7
        assert parse_id("42") == 42
        assert parse_id(" 5 ") == 5

    @pytest.mark.parametrize("value", ["abc", "", "-3", "1.5", 0, -1, True, None, 2.0, "\u00b2", "\u0661"])
    def test_parse_id_rejects(self, value):
        """Test malformed ids."""
        with pytest.raises(ValidationError):
            parse_id(value, "post id")

    def test_parse_id_column_range(self):
        """Test that ids beyond the INTEGER column range are rejected."""
        assert parse_id(str(MAX_ID)) == MAX_ID

        with pytest.raises(ValidationError):
            parse_id(MAX_ID + 1)
        with pytest.raises(ValidationError):
            parse_id("99999999999999999999999")

    def test_require_text(self):
        assert require_text("  hi  ") == "hi"

        with pytest.raises(ValidationError) as exc_info:
            require_text(" \n\t ")
        assert exc_info.value.message == "Content is required"
