"""Unit tests for QueryAssembler rendering."""

from __future__ import annotations

import logging

import pytest

from criteriaql.compile.assembler import QueryAssembler
from criteriaql.compile.criteria import CriteriaBuilder
from criteriaql.compile.fragments import Predicate, SelectFragment
from criteriaql.compile.root import TableRoot
from criteriaql.errors import (
    BuilderStateError,
    DistinctConflictError,
    EmptyPredicateError,
    OffsetWithoutLimitError,
)
from criteriaql.schema.expressions import JoinType
from tests.fixtures import Address, Customer, Order, OrderItem


def _orders() -> tuple[CriteriaBuilder, TableRoot]:
    cb = CriteriaBuilder()
    return cb, cb.from_(Order)


def test_end_to_end_join_where_order_limit():
    cb, order = _orders()
    cb.join(Customer, order.get("customerId"), "id")
    sql = (
        cb.query()
        .select(cb.select(order))
        .where(cb.equal(order.get("active"), True))
        .order_by(cb.desc(order.get("createdAt")))
        .limit(20)
        .build()
    )
    assert sql == (
        "SELECT m.* FROM order m"
        " JOIN customer j ON m.customer_id = j.id "
        " WHERE  m.active = 'true' "
        " ORDER BY  m.created_at desc"
        " LIMIT 20"
    )
    assert "OFFSET" not in sql


def test_clause_order():
    cb, order = _orders()
    cb.join(Customer, order.get("customerId"), "id")
    sql = (
        cb.query()
        .offset(40)
        .limit(20)
        .order_by(cb.asc(order.get("id")))
        .group_by(order.get("id"))
        .where(cb.is_not_null(order.get("status")))
        .select(cb.multi_select(order.get("id")))
        .build()
    )
    markers = ["SELECT", "FROM order m", " JOIN ", " WHERE ", " GROUP BY ", " ORDER BY ", " LIMIT ", " OFFSET "]
    positions = [sql.index(m) for m in markers]
    assert positions == sorted(positions)


def test_render_is_idempotent():
    cb, order = _orders()
    cb.join(Customer, order.get("customerId"), "id")
    query = cb.query().select(cb.select(order)).where(cb.equal(order.get("id"), 1)).limit(5)
    assert query.build() == query.build() == str(query)


def test_distinct_kept_when_requested():
    cb, order = _orders()
    sql = cb.query().select(cb.select(order)).distinct(True).build()
    assert sql == "SELECT DISTINCT m.* FROM order m"


def test_distinct_stripped_by_default():
    cb, order = _orders()
    sql = cb.query().select(cb.count(order)).build()
    assert sql == "SELECT COUNT(m.*) FROM order m"
    assert "DISTINCT" not in sql


def test_distinct_on_replaces_keyword():
    cb, order = _orders()
    sql = (
        cb.query()
        .select(cb.select(order))
        .distinct_on(cb.select_distinct_on(order.get("customerId")))
        .order_by(cb.asc(order.get("customerId")), cb.desc(order.get("createdAt")))
        .build()
    )
    assert sql == (
        "SELECT DISTINCT ON (m.customer_id) m.* FROM order m"
        " ORDER BY  m.customer_id asc, m.created_at desc"
    )


def test_distinct_and_distinct_on_conflict():
    cb, order = _orders()
    query = (
        cb.query()
        .select(cb.select(order))
        .distinct(True)
        .distinct_on(cb.select_distinct_on(order.get("id")))
    )
    with pytest.raises(DistinctConflictError):
        query.build()


def test_offset_without_limit_raises():
    cb, order = _orders()
    query = cb.query().select(cb.select(order)).offset(10)
    with pytest.raises(OffsetWithoutLimitError):
        query.build()
    with pytest.raises(OffsetWithoutLimitError):
        query.limit(0).build()


def test_offset_with_limit():
    cb, order = _orders()
    sql = cb.query().select(cb.select(order)).limit(20).offset(40).build()
    assert sql.endswith(" LIMIT 20 OFFSET 40")


def test_blank_where_rejected():
    cb, order = _orders()
    with pytest.raises(EmptyPredicateError):
        cb.query().where(Predicate("   "))


def test_group_by_columns():
    cb, order = _orders()
    sql = (
        cb.query()
        .select(cb.multi_select(order.get("status"), order.count("id", "n")))
        .group_by(order.get("status"), order.get("customerId"))
        .build()
    )
    assert sql == (
        "SELECT m.status, COUNT(m.id) AS n FROM order m"
        " GROUP BY m.status ,m.customer_id"
    )


def test_order_by_accepts_list():
    cb, order = _orders()
    terms = [cb.asc(order.get("id")), cb.desc(order.get("status"))]
    sql = cb.query().select(cb.select(order)).order_by(terms).build()
    assert sql.endswith(" ORDER BY  m.id asc, m.status desc")


def test_joins_render_in_declaration_order_with_extra_condition():
    cb, order = _orders()
    customer = cb.join(Customer, order.get("customerId"), "id", JoinType.LEFT_OUTER_JOIN)
    cb.join(OrderItem, order.get("id"), "orderId")
    address = cb.join(Address, customer.get("id"), "customerId", JoinType.FULL_OUTER_JOIN)
    address.join_condition(cb.equal(address.get("city"), "Oslo"))
    sql = cb.query().select(cb.select(order)).build()
    assert sql == (
        "SELECT m.* FROM order m"
        " LEFT OUTER JOIN customer j ON m.customer_id = j.id "
        " JOIN order_item j1 ON m.id = j1.order_id "
        " FULL OUTER JOIN address j2 ON j.id = j2.customer_id AND  j2.city = 'Oslo'  "
    )


def test_assembler_without_builder_raises():
    query = QueryAssembler().select(SelectFragment("SELECT DISTINCT m.* FROM "))
    with pytest.raises(BuilderStateError):
        query.build()


def test_assembler_builder_set_fluently():
    cb, order = _orders()
    sql = QueryAssembler().criteria_builder(cb).select(cb.select(order)).build()
    assert sql == "SELECT m.* FROM order m"


def test_missing_select_raises():
    cb, _ = _orders()
    with pytest.raises(BuilderStateError):
        cb.query().build()


def test_missing_from_raises():
    cb = CriteriaBuilder()
    with pytest.raises(BuilderStateError):
        cb.query().select(SelectFragment("SELECT DISTINCT m.* FROM ")).build()


def test_render_logged_at_debug(caplog):
    cb, order = _orders()
    with caplog.at_level(logging.DEBUG, logger="criteriaql"):
        sql = cb.query().select(cb.select(order)).build()
    assert sql in caplog.text


def test_distinct_keyword_inside_literal_untouched():
    cb = CriteriaBuilder()
    customer = cb.from_(Customer)
    label = cb.concat(customer.get("firstName"), "DISTINCT ").as_("x")
    query = cb.query().select(cb.multi_select(label))
    assert query.build() == "SELECT CONCAT(m.first_name || 'DISTINCT ') AS x FROM customer m"
    query.distinct_on(cb.select_distinct_on(customer.get("id")))
    assert query.build() == (
        "SELECT DISTINCT ON (m.id) CONCAT(m.first_name || 'DISTINCT ') AS x FROM customer m"
    )


def test_escaped_quote_inside_literal_keeps_distinct():
    cb = CriteriaBuilder()
    customer = cb.from_(Customer)
    label = cb.concat("it's DISTINCT ", customer.get("lastName")).as_("x")
    sql = cb.query().select(cb.multi_select(label)).build()
    assert sql.startswith("SELECT CONCAT('it''s DISTINCT ' || m.last_name) AS x FROM")
