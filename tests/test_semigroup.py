from __future__ import annotations

from effectstack.semigroup import (
    get_list_monoid,
    get_list_semigroup,
    monoid_string,
    monoid_sum,
    semigroup_first,
    semigroup_last,
    semigroup_product,
    semigroup_string,
    semigroup_sum,
)


def test_stock_semigroups() -> None:
    assert semigroup_sum.concat(2, 3) == 5
    assert semigroup_product.concat(2, 3) == 6
    assert semigroup_string.concat("a", "b") == "ab"
    assert semigroup_first.concat("a", "b") == "a"
    assert semigroup_last.concat("a", "b") == "b"


def test_list_semigroup_builds_new_list() -> None:
    x, y = [1], [2]
    combined = get_list_semigroup().concat(x, y)
    assert combined == [1, 2]
    assert x == [1] and y == [2]


def test_monoid_identity() -> None:
    for M, value in ((monoid_sum, 4), (monoid_string, "s"), (get_list_monoid(), [1])):
        assert M.concat(M.empty, value) == value
        assert M.concat(value, M.empty) == value
        assert M.to_semigroup().concat(value, value) == M.concat(value, value)


def test_module_is_exported_with_the_records() -> None:
    import effectstack

    assert "semigroup" in effectstack.__all__
    assert effectstack.semigroup.semigroup_first is semigroup_first
    assert effectstack.Semigroup is effectstack.semigroup.Semigroup
