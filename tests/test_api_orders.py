"""HTTP tests for placing, reading, and cancelling orders."""

from storefront.models import Order


def _order_body(*lines):
    return {
        "items": [{"menu_item_id": item_id, "quantity": qty} for item_id, qty in lines],
        "delivery_address": "1 Main St",
        "phone": "555-0100",
    }


def test_place_order(client, menu, people, auth_headers):
    resp = client.post(
        "/orders",
        json=_order_body((menu.burger_id, 2), (menu.fries_id, 1)),
        headers=auth_headers("cust-1"),
    )

    assert resp.status_code == 201
    created = resp.json()
    assert created["order_number"].startswith("ORD-")

    detail = client.get(f"/orders/{created['order_id']}", headers=auth_headers("cust-1")).json()
    assert detail["total_amount"] == 13.5
    assert detail["status"] == "pending"
    assert [(i["item_name"], i["price"], i["quantity"]) for i in detail["items"]] == [
        ("Burger", 5.0, 2),
        ("Fries", 3.5, 1),
    ]


def test_place_order_requires_token(client, menu):
    resp = client.post("/orders", json=_order_body((menu.burger_id, 1)))

    assert resp.status_code == 401
    assert resp.json()["kind"] == "unauthenticated"


def test_unavailable_item_is_400_and_nothing_saved(client, menu, people, auth_headers, db_session):
    resp = client.post(
        "/orders",
        json=_order_body((menu.burger_id, 1), (menu.soup_id, 1)),
        headers=auth_headers("cust-1"),
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["kind"] == "validation"
    assert body["detail"] == "Menu item not available: Soup"
    assert body["context"]["menu_item_id"] == menu.soup_id
    assert db_session.query(Order).count() == 0


def test_non_positive_quantity_is_rejected_by_schema(client, menu, people, auth_headers):
    resp = client.post("/orders", json=_order_body((menu.burger_id, 0)), headers=auth_headers("cust-1"))
    assert resp.status_code == 422


def test_oversized_line_is_rejected_by_schema(client, menu, people, auth_headers, db_session):
    resp = client.post("/orders", json=_order_body((menu.burger_id, 100)), headers=auth_headers("cust-1"))

    assert resp.status_code == 422
    assert db_session.query(Order).count() == 0


def test_my_orders(client, menu, people, auth_headers):
    client.post("/orders", json=_order_body((menu.burger_id, 1)), headers=auth_headers("cust-1"))
    client.post("/orders", json=_order_body((menu.fries_id, 1)), headers=auth_headers("cust-2"))

    mine = client.get("/orders", headers=auth_headers("cust-1")).json()

    assert len(mine) == 1
    assert mine[0]["item_count"] == 1


def test_other_customer_gets_403(client, menu, people, auth_headers):
    order_id = client.post(
        "/orders", json=_order_body((menu.burger_id, 1)), headers=auth_headers("cust-1")
    ).json()["order_id"]

    resp = client.get(f"/orders/{order_id}", headers=auth_headers("cust-2"))

    assert resp.status_code == 403
    assert resp.json()["kind"] == "forbidden"


def test_admin_reads_any_order(client, menu, people, auth_headers):
    order_id = client.post(
        "/orders", json=_order_body((menu.burger_id, 1)), headers=auth_headers("cust-1")
    ).json()["order_id"]

    resp = client.get(f"/api/v1/orders/{order_id}", headers=auth_headers("admin-1"))

    assert resp.status_code == 200
    assert resp.json()["user"] == {"name": "Cara Customer", "email": "cust@example.com"}


def test_cancel_flow(client, menu, people, auth_headers):
    order_id = client.post(
        "/orders", json=_order_body((menu.burger_id, 1)), headers=auth_headers("cust-1")
    ).json()["order_id"]

    first = client.post(f"/orders/{order_id}/cancel", headers=auth_headers("cust-1"))
    again = client.post(f"/orders/{order_id}/cancel", headers=auth_headers("cust-1"))

    assert first.status_code == 200
    assert first.json()["status"] == "cancelled"
    assert again.status_code == 400
    assert again.json()["detail"] == "Order cannot be cancelled at this stage"


def test_cancel_missing_order(client, people, auth_headers):
    resp = client.post("/orders/404/cancel", headers=auth_headers("cust-1"))
    assert resp.status_code == 404


def test_order_placement_is_rate_limited(client, menu, people, auth_headers):
    headers = auth_headers("cust-1")
    statuses = [
        client.post("/orders", json=_order_body((menu.lemonade_id, 1)), headers=headers).status_code
        for _ in range(11)
    ]

    assert statuses[:10] == [201] * 10
    assert statuses[10] == 429
