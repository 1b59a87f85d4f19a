import io

from PIL import Image


def png_bytes(size=(40, 30), color=(200, 120, 40)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def make_product(client, **overrides) -> dict:
    payload = {"name": "Oak wardrobe", "price": 32000, "category": "wardrobe", "section": "classic"}
    payload.update(overrides)
    resp = client.post("/api/products", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def make_section(client, name="Classic", code="classic", **overrides) -> dict:
    resp = client.post("/api/sections", json={"name": name, "code": code, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()
