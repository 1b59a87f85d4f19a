from tests.helpers import make_product


def test_empty_cart(client):
    body = client.get("/api/cart/abc").json()
    assert body == {"key": "abc", "items": [], "total_items": 0, "total": 0, "notices": []}


def test_add_increments_existing_line(client):
    product = make_product(client, name="Oak table", price=2500)
    client.post("/api/cart/k1/items", json={"product_id": product["id"]})
    body = client.post("/api/cart/k1/items", json={"product_id": product["id"], "quantity": 2}).json()

    assert len(body["items"]) == 1
    line = body["items"][0]
    assert line["id"] == product["id"]
    assert line["name"] == "Oak table"
    assert line["price"] == 2500
    assert line["quantity"] == 3
    assert body["total_items"] == 3
    assert body["total"] == 7500

    # persisted under the key
    assert client.get("/api/cart/k1").json()["total_items"] == 3
    assert client.get("/api/cart/other").json()["items"] == []


def test_add_unknown_or_inactive_product(client):
    hidden = make_product(client, active=False)
    assert client.post("/api/cart/k1/items", json={"product_id": hidden["id"]}).status_code == 404
    assert client.post("/api/cart/k1/items", json={"product_id": 999}).status_code == 404
    assert client.post("/api/cart/k1/items", json={"product_id": hidden["id"], "quantity": 0}).status_code == 400


def test_quantity_is_clamped(client):
    product = make_product(client)
    body = client.post("/api/cart/k1/items", json={"product_id": product["id"], "quantity": 150}).json()
    assert body["items"][0]["quantity"] == 99
    assert body["notices"] == ["Maximum quantity per product is 99"]


def test_change_quantity_and_remove(client):
    product = make_product(client, price=100)
    client.post("/api/cart/k1/items", json={"product_id": product["id"], "quantity": 2})

    body = client.patch(f"/api/cart/k1/items/{product['id']}", json={"change": 1}).json()
    assert body["items"][0]["quantity"] == 3

    body = client.patch(f"/api/cart/k1/items/{product['id']}", json={"change": -3}).json()
    assert body["items"] == []

    assert client.patch(f"/api/cart/k1/items/{product['id']}", json={"change": 1}).status_code == 404
    assert client.delete(f"/api/cart/k1/items/{product['id']}").status_code == 404


def test_remove_line_and_clear(client):
    first = make_product(client, sku="C1", price=10)
    second = make_product(client, sku="C2", price=20)
    client.post("/api/cart/k1/items", json={"product_id": first["id"]})
    client.post("/api/cart/k1/items", json={"product_id": second["id"]})

    body = client.delete(f"/api/cart/k1/items/{first['id']}").json()
    assert [line["id"] for line in body["items"]] == [second["id"]]
    assert body["total"] == 20

    body = client.delete("/api/cart/k1").json()
    assert body["items"] == []
    assert client.get("/api/cart/k1").json()["total_items"] == 0


def test_price_is_snapshotted(client):
    product = make_product(client, price=100)
    client.post("/api/cart/k1/items", json={"product_id": product["id"]})
    client.put(f"/api/products/{product['id']}", json={"price": 500})
    assert client.get("/api/cart/k1").json()["items"][0]["price"] == 100
