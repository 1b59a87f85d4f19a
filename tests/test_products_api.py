from tests.helpers import make_product, make_section, png_bytes


def test_create_product_generates_sku(client):
    product = make_product(client, name="Classic pantograph", sku=None)
    assert product["sku"].startswith("MFCLA")
    assert len(product["sku"]) == len("MFCLA") + 6
    assert product["active"] is True
    assert product["featured"] is False
    assert product["features"] == []
    assert product["specifications"] == {}


def test_create_product_validation(client):
    resp = client.post("/api/products", json={"name": "Chair", "category": "chairs"})
    assert resp.status_code == 400
    assert "price" in resp.json()["detail"]

    resp = client.post("/api/products", json={"name": "Chair", "category": "chairs", "price": -5})
    assert resp.status_code == 400

    resp = client.post("/api/products", json={"name": "  ", "category": "chairs", "price": 5})
    assert resp.status_code == 400


def test_duplicate_sku_rejected(client):
    make_product(client, sku="MF100")
    resp = client.post("/api/products", json={"sku": "MF100", "name": "Other", "price": 1, "category": "x"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Product with this SKU already exists"


def test_features_and_specifications_coercion(client):
    product = make_product(
        client,
        features="Soft-close system",
        specifications='{"Material": "Oak", "Color": "White"}',
    )
    assert product["features"] == ["Soft-close system"]
    assert product["specifications"] == {"Material": "Oak", "Color": "White"}


def test_get_product(client):
    product = make_product(client)
    resp = client.get(f"/api/products/{product['id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Oak wardrobe"

    assert client.get("/api/products/9999").status_code == 404
    assert client.get("/api/products/0").status_code == 400


def test_get_product_by_sku(client):
    make_product(client, sku="MF777")
    resp = client.get("/api/products/sku/MF777")
    assert resp.status_code == 200
    assert resp.json()["sku"] == "MF777"
    assert client.get("/api/products/sku/NOPE").status_code == 404
    assert client.get("/api/products/sku/%20").status_code == 400


def test_list_filters_and_sort(client):
    make_product(client, sku="A1", name="Birch shelf", price=5000, category="shelf", section="modern")
    make_product(client, sku="A2", name="Oak table", price=20000, category="table", featured=True)
    make_product(client, sku="A3", name="Ash chair", price=3000, category="chair", active=False)

    names = [p["name"] for p in client.get("/api/products", params={"sort": "price_asc"}).json()]
    assert names == ["Ash chair", "Birch shelf", "Oak table"]

    active = client.get("/api/products", params={"active": "true"}).json()
    assert {p["sku"] for p in active} == {"A1", "A2"}

    featured = client.get("/api/products", params={"featured": "true"}).json()
    assert [p["sku"] for p in featured] == ["A2"]

    modern = client.get("/api/products", params={"section": "modern"}).json()
    assert [p["sku"] for p in modern] == ["A1"]

    found = client.get("/api/products", params={"search": "oak"}).json()
    assert [p["sku"] for p in found] == ["A2"]

    limited = client.get("/api/products", params={"sort": "name", "limit": 2, "offset": 1}).json()
    assert [p["name"] for p in limited] == ["Birch shelf", "Oak table"]


def test_list_default_order_is_newest_first(client):
    first = make_product(client, sku="OLD")
    second = make_product(client, sku="NEW")
    ids = [p["id"] for p in client.get("/api/products").json()]
    assert ids == [second["id"], first["id"]]


def test_products_in_section_only_active(client):
    make_product(client, sku="S1", section="modern")
    make_product(client, sku="S2", section="modern", active=False)
    make_product(client, sku="S3", section="classic")
    resp = client.get("/api/products/section/modern")
    assert [p["sku"] for p in resp.json()] == ["S1"]


def test_partial_update_keeps_other_fields(client):
    product = make_product(client, sku="U1", stock=4, badge="New")
    resp = client.put(f"/api/products/{product['id']}", json={"price": 999.5})
    assert resp.status_code == 200
    body = resp.json()
    assert body["price"] == 999.5
    assert body["stock"] == 4
    assert body["badge"] == "New"
    assert body["sku"] == "U1"


def test_update_empty_section_deactivates(client):
    product = make_product(client)
    body = client.put(f"/api/products/{product['id']}", json={"section": ""}).json()
    assert body["section"] == ""
    assert body["active"] is False


def test_update_duplicate_sku_and_missing(client):
    make_product(client, sku="D1")
    other = make_product(client, sku="D2")
    resp = client.put(f"/api/products/{other['id']}", json={"sku": "D1"})
    assert resp.status_code == 400
    assert client.put("/api/products/4242", json={"name": "x"}).status_code == 404


def test_delete_product(client):
    product = make_product(client, sku="DEL1")
    resp = client.delete(f"/api/products/{product['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Product deleted successfully", "deleted_sku": "DEL1"}
    assert client.get(f"/api/products/{product['id']}").status_code == 404
    assert client.delete(f"/api/products/{product['id']}").status_code == 404


def test_update_section_bulk_move(client):
    make_product(client, sku="M1", section="classic")
    make_product(client, sku="M2", section="classic")
    make_product(client, sku="M3", section="modern")

    resp = client.post("/api/products/update-section", json={"old_section": "classic", "new_section": "premium"})
    assert resp.status_code == 200
    assert resp.json()["updated_count"] == 2
    moved = client.get("/api/products", params={"section": "premium"}).json()
    assert {p["sku"] for p in moved} == {"M1", "M2"}
    assert all(p["active"] for p in moved)

    resp = client.post("/api/products/update-section", json={"old_section": "modern"})
    assert resp.json()["updated_count"] == 1
    detached = client.get("/api/products/sku/M3").json()
    assert detached["section"] == ""
    assert detached["active"] is False

    assert client.post("/api/products/update-section", json={}).status_code == 400


def test_create_product_with_image_upload(client):
    make_section(client)
    resp = client.post(
        "/api/products",
        data={"name": "Pantograph", "price": "15000", "category": "pantograph", "section": "classic",
              "features": ["Smooth travel", "Steel"], "featured": "true"},
        files=[("images", ("photo.png", png_bytes(), "image/png"))],
    )
    assert resp.status_code == 201, resp.text
    product = resp.json()
    assert product["features"] == ["Smooth travel", "Steel"]
    assert product["featured"] is True
    assert len(product["images"]) == 1
    url = product["images"][0]
    assert url.startswith("/uploads/products/") and url.endswith(".png")

    served = client.get(url)
    assert served.status_code == 200
    assert served.content == png_bytes()


def test_upload_rejects_non_images(client):
    resp = client.post(
        "/api/products",
        data={"name": "Pantograph", "price": "15000", "category": "pantograph"},
        files=[("images", ("notes.txt", b"hello", "text/plain"))],
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Only image files are allowed!"
    assert client.get("/api/products").json() == []


def test_new_images_replace_old_files(client):
    resp = client.post(
        "/api/products",
        data={"name": "Pantograph", "price": "15000", "category": "pantograph"},
        files=[("images", ("a.png", png_bytes(), "image/png"))],
    )
    product = resp.json()
    old_url = product["images"][0]

    resp = client.put(
        f"/api/products/{product['id']}",
        data={"stock": "2"},
        files=[("images", ("b.png", png_bytes(color=(0, 0, 0)), "image/png"))],
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["stock"] == 2
    assert body["images"] != [old_url]
    assert client.get(old_url).status_code == 404
    assert client.get(body["images"][0]).status_code == 200


def test_non_finite_price_rejected(client):
    resp = client.post("/api/products", data={"name": "Chair", "category": "chairs", "price": "inf"})
    assert resp.status_code == 400
    assert "price" in resp.json()["detail"]
    assert client.get("/api/products").json() == []

    product = make_product(client)
    resp = client.put(f"/api/products/{product['id']}", data={"price": "nan"})
    assert resp.status_code == 400
    assert client.get(f"/api/products/{product['id']}").json()["price"] == 32000


def test_numeric_specification_values_are_kept_as_text(client):
    product = make_product(client, specifications={"Width": 120, "Depth": 60.5, "Material": "Oak"})
    assert product["specifications"] == {"Width": "120", "Depth": "60.5", "Material": "Oak"}


def test_search_folds_cyrillic_case(client):
    make_product(client, sku="RU1", name="Шкаф дубовый", description="Массив ДУБА")
    make_product(client, sku="RU2", name="Oak table")

    found = client.get("/api/products", params={"search": "шкаф"}).json()
    assert [p["sku"] for p in found] == ["RU1"]
    found = client.get("/api/products", params={"search": "дуба"}).json()
    assert [p["sku"] for p in found] == ["RU1"]

    results = client.get("/api/search", params={"q": "ШКАФ"}).json()
    assert [p["sku"] for p in results] == ["RU1"]

    shop = client.get("/api/shop", params={"search": "шкаф"}).json()
    assert [p["sku"] for p in shop["products"]] == ["RU1"]
