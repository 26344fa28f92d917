"""
Tests for `services/dashboard_service.py`.
"""

from __future__ import annotations

from decimal import Decimal

from services.dashboard_service import build_dashboard_summary


def test_empty_store(customers, products, sales) -> None:
    summary = build_dashboard_summary(customers, products, sales)

    assert summary.total_customers == 0
    assert summary.total_sales == 0
    assert summary.total_revenue == Decimal("0")
    assert summary.top_products == []


def test_totals_and_ranking(customers, products, sales, sale_service, customer, product, subscription) -> None:
    cheap = products.create({"name": "Sticker", "price": "0.50"})
    sale_service.create_sale(customer.id, product.id, 3, "2025-03-05")
    sale_service.create_sale(customer.id, subscription.id, 1, "2025-03-06")
    sale_service.create_sale(customer.id, product.id, 1, "2025-03-07")

    summary = build_dashboard_summary(customers, products, sales)

    assert summary.total_customers == 1
    assert summary.total_products == 3
    assert summary.total_sales == 3
    assert summary.total_revenue == Decimal("179.96")

    ranking = [(p.product.name, p.total_quantity, p.total_revenue) for p in summary.top_products]
    assert ranking == [
        ("Support plan", 1, Decimal("100.00")),
        ("Widget", 4, Decimal("79.96")),
        ("Sticker", 0, Decimal("0")),
    ]
    assert summary.top_products[-1].product == cheap


def test_top_limit(customers, products, sales) -> None:
    for n in range(7):
        products.create({"name": f"Item {n}", "price": n})

    summary = build_dashboard_summary(customers, products, sales, top_limit=5)
    assert len(summary.top_products) == 5


def test_recent_customers_newest_first(store, customers, products, sales) -> None:
    for day in (3, 1, 7, 5, 2, 6):
        store.insert_row(
            "customers",
            {
                "name": f"Customer {day}",
                "email": f"customer{day}@example.com",
                "phone": "",
                "address": "",
                "postcode": "",
                "created_at_utc": f"2025-03-0{day}T09:00:00+00:00",
            },
        )

    summary = build_dashboard_summary(customers, products, sales)

    assert summary.total_customers == 6
    assert [c.name for c in summary.recent_customers] == [
        "Customer 7",
        "Customer 6",
        "Customer 5",
        "Customer 3",
        "Customer 2",
    ]


def test_recent_customers_empty_store(customers, products, sales) -> None:
    assert build_dashboard_summary(customers, products, sales).recent_customers == []
