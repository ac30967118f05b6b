"""HTTP tests for health and public catalog browsing."""


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_categories_listed_by_display_order(client, menu):
    resp = client.get("/categories")
    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["Mains", "Drinks"]


def test_menu_is_served_under_both_prefixes(client, menu):
    root = client.get("/menu")
    versioned = client.get("/api/v1/menu")

    assert root.status_code == versioned.status_code == 200
    assert root.json() == versioned.json()
    assert len(root.json()) == 4


def test_menu_filters(client, menu):
    resp = client.get("/menu", params={"category_id": menu.mains_id, "available_only": "true"})

    data = resp.json()
    assert [item["name"] for item in data] == ["Burger", "Fries"]
    assert data[0]["price"] == 5.0
    assert data[0]["category"] == {"id": menu.mains_id, "name": "Mains"}


def test_featured_filter(client, menu):
    resp = client.get("/menu", params={"featured_only": "true"})
    assert [item["name"] for item in resp.json()] == ["Burger"]


def test_menu_item_detail(client, menu):
    resp = client.get(f"/menu/{menu.burger_id}")

    assert resp.status_code == 200
    assert resp.json()["category"] == {"id": menu.mains_id, "name": "Mains", "description": "Hot food"}


def test_missing_menu_item_is_404_with_kind(client, menu):
    resp = client.get("/menu/9999")

    assert resp.status_code == 404
    body = resp.json()
    assert body["kind"] == "not_found"
    assert body["detail"] == "Menu item not found"
    assert body["context"] == {"menu_item_id": 9999}
