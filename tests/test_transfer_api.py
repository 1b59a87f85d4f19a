import json

from tests.helpers import make_product, make_section


def test_migrate_from_localstorage(client):
    resp = client.post("/api/migrate-from-localstorage", json={
        "products": [{"sku": "MF001", "name": "Pantograph", "price": 15000, "category": "pantograph"}],
        "sections": [{"name": "Classic", "code": "classic"}],
    })
    assert resp.status_code == 200
    assert resp.json() == {"message": "Migration completed", "migrated_products": 1, "migrated_sections": 1}


def test_migrate_reports_errors(client):
    resp = client.post("/api/migrate-from-localstorage", json={"products": [{"name": "No price", "category": "x"}]})
    body = resp.json()
    assert body["migrated_products"] == 0
    assert body["errors"] == ["Product No price: price: Field required"]


def test_export_json_download(client):
    make_section(client)
    make_product(client, sku="E1")

    resp = client.get("/api/export/json")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")
    disposition = resp.headers["content-disposition"]
    assert disposition.startswith("attachment; filename=ma_furniture_all_")
    assert disposition.endswith(".json")
    data = resp.json()
    assert [p["sku"] for p in data["products"]] == ["E1"]
    assert [s["code"] for s in data["sections"]] == ["classic"]

    resp = client.get("/api/export/json", params={"data_type": "products"})
    assert "ma_furniture_products_" in resp.headers["content-disposition"]
    assert set(resp.json()) == {"products"}

    assert client.get("/api/export/json", params={"data_type": "orders"}).status_code == 400


def test_export_csv(client):
    make_section(client, "Classic line", "classic")
    make_product(client, sku="E1", name="Oak table", features=["Solid", "Oiled"])

    resp = client.get("/api/export/csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.strip().splitlines()
    assert lines[0].startswith("ID,SKU,Name,Price")
    assert "E1,Oak table,32000.00,wardrobe,Classic line" in lines[1]
    assert "Solid; Oiled" in lines[1]


def test_export_pdf(client):
    make_section(client)
    make_product(client, sku="E1", name="Шкаф")
    make_product(client, sku="E2", section="")

    resp = client.get("/api/export/pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")


def test_import_json_body_and_file(client):
    make_product(client, sku="I1", name="Before", stock=3)
    document = {"products": [{"sku": "I1", "name": "After", "price": 10, "category": "x"}],
                "sections": [{"name": "Modern", "code": "modern"}]}

    resp = client.post("/api/import", json=document)
    assert resp.status_code == 200
    body = resp.json()
    assert body["products_updated"] == 1
    assert body["sections_created"] == 1
    product = client.get("/api/products/sku/I1").json()
    assert product["name"] == "After"
    assert product["stock"] == 3

    upload = json.dumps({"products": [{"sku": "I2", "name": "New", "price": 1, "category": "x"}]}).encode()
    resp = client.post(
        "/api/import",
        params={"merge": "false"},
        files={"file": ("catalog.json", upload, "application/json")},
    )
    assert resp.status_code == 200
    assert resp.json()["products_created"] == 1
    assert [p["sku"] for p in client.get("/api/products").json()] == ["I2"]
    assert client.get("/api/sections").json() == []


def test_import_rejects_bad_documents(client):
    resp = client.post("/api/import", content=b"{not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Import file is not valid JSON"

    resp = client.post("/api/import", json={"products": "nope"})
    assert resp.status_code == 400

    resp = client.post("/api/import", data={"other": "x"})
    assert resp.status_code == 400
