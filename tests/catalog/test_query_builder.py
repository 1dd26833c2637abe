"""Tests for the product listing query builder."""

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from catalog_core.catalog.pagination import PaginationQuery, SortOrder
from catalog_core.catalog.query_builder import (
    DEFAULT_SORT_FIELD,
    SORTABLE_COLUMNS,
    ProductQueryBuilder,
    like_pattern,
    resolve_sort_field,
)


def compile_sql(query: PaginationQuery, dialect=None) -> str:
    statement = ProductQueryBuilder(query).build()
    return str(statement.compile(dialect=dialect or sqlite.dialect()))


class TestSortWhitelist:
    """Tests for sort field resolution."""

    @pytest.mark.parametrize("field", ["name", "price", "created_at", "updated_at", "status"])
    def test_whitelisted_fields_are_kept(self, field: str) -> None:
        assert resolve_sort_field(field) == field

    @pytest.mark.parametrize(
        "field",
        [None, "", "id", "description", "'; DROP TABLE products;--", "price desc"],
    )
    def test_other_values_fall_back_to_created_at(self, field: str | None) -> None:
        """Anything outside the whitelist sorts by created_at."""
        assert resolve_sort_field(field) == DEFAULT_SORT_FIELD == "created_at"

    def test_whitelist_contents(self) -> None:
        assert set(SORTABLE_COLUMNS) == {"name", "price", "created_at", "updated_at", "status"}

    def test_injection_attempt_compiles_like_default(self) -> None:
        """A hostile sort value produces the same SQL as no sort at all."""
        hostile = compile_sql(PaginationQuery(sort="'; DROP TABLE products;--"))
        default = compile_sql(PaginationQuery())

        assert hostile == default
        assert "DROP" not in hostile


class TestStatementShape:
    """Tests for the generated SQL."""

    def test_no_where_clause_without_search(self) -> None:
        sql = compile_sql(PaginationQuery())
        assert "WHERE" not in sql

    def test_total_count_uses_window_function(self) -> None:
        sql = compile_sql(PaginationQuery())
        assert "count(*) OVER ()" in sql
        assert "total_count" in sql

    def test_default_order_is_created_at_desc(self) -> None:
        sql = compile_sql(PaginationQuery())
        assert "ORDER BY products.created_at DESC, products.id DESC" in sql

    def test_ascending_sort_on_price(self) -> None:
        sql = compile_sql(PaginationQuery(sort="price", sort_order=SortOrder.ASC))
        assert "ORDER BY products.price ASC, products.id ASC" in sql

    def test_search_matches_name_description_and_material(self) -> None:
        sql = compile_sql(PaginationQuery(search="oak"), dialect=postgresql.dialect())
        assert "products.name ILIKE" in sql
        assert "products.description ILIKE" in sql
        assert "product_materials.name ILIKE" in sql
        assert "EXISTS" in sql

    def test_search_term_is_bound_not_inlined(self) -> None:
        statement = ProductQueryBuilder(PaginationQuery(search="x' OR 1=1 --")).build()
        compiled = statement.compile(dialect=postgresql.dialect())

        assert "1=1" not in str(compiled)
        assert "%x' OR 1=1 --%" in compiled.params.values()

    def test_limit_and_offset_are_bound(self) -> None:
        statement = ProductQueryBuilder(PaginationQuery(page=3, limit=4)).build()
        params = statement.compile(dialect=sqlite.dialect()).params

        assert 4 in params.values()
        assert 8 in params.values()


class TestLikePattern:
    """Tests for like_pattern."""

    def test_wraps_term(self) -> None:
        assert like_pattern("oak") == "%oak%"

    def test_escapes_wildcards(self) -> None:
        assert like_pattern("50%_off") == "%50\\%\\_off%"

    def test_escapes_backslash(self) -> None:
        assert like_pattern("a\\b") == "%a\\\\b%"
