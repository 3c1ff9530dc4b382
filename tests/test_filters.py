from werkzeug.datastructures import MultiDict

from inventory_api.services.filters import ProductFilter, build_product_query


def test_absent_bounds_produce_no_clauses():
    assert ProductFilter.from_args(MultiDict()).clauses() == []


def test_malformed_bounds_are_treated_as_absent():
    f = ProductFilter.from_args(MultiDict({
        "minPrice": "abc",
        "maxPrice": "nan",
        "minQty": "",
        "maxQty": "2.5",
    }))
    assert f == ProductFilter()
    assert f.clauses() == []


def test_supplied_bounds_are_parsed():
    f = ProductFilter.from_args({"minPrice": "1.5", "maxPrice": "10", "minQty": "0", "maxQty": "20"})
    assert f == ProductFilter(min_price=1.5, max_price=10.0, min_qty=0, max_qty=20)
    assert len(f.clauses()) == 4


def test_values_are_bound_parameters_not_sql_text():
    stmt = build_product_query(ProductFilter(min_price=1.25, max_qty=42))
    compiled = stmt.compile()
    sql = str(compiled)
    assert "1.25" not in sql
    assert "42" not in sql
    assert sorted(v for v in compiled.params.values()) == [1.25, 42]
    assert " AND " in sql


def test_ordering_is_by_product_name():
    sql = str(build_product_query().compile())
    assert "ORDER BY" in sql
    order_by = sql.split("ORDER BY", 1)[1]
    assert order_by.strip().startswith('"Products".product_name ASC')
    assert "LEFT OUTER JOIN" in sql


def test_out_of_range_quantity_bounds_are_treated_as_absent():
    f = ProductFilter.from_args({"minQty": str(10 ** 20), "maxQty": str(-(10 ** 20))})
    assert f == ProductFilter()
