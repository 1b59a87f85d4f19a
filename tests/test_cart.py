import json
import logging

from storefront.services.cart import MAX_IMAGE_LENGTH, MAX_LINES, Cart


def test_add_new_and_existing():
    cart = Cart()
    cart.add(1, name="Table", price=100.0)
    cart.add(2, name="Chair", price=25.0, quantity=4)
    cart.add(1, name="Table", price=100.0)
    assert [(line.id, line.quantity) for line in cart.items] == [(1, 2), (2, 4)]
    assert cart.total_items == 6
    assert cart.total == 300.0
    assert cart.notices == []


def test_clamp_adds_notice():
    cart = Cart()
    cart.add(1, name="Table", price=1.0, quantity=98)
    cart.add(1, name="Table", price=1.0, quantity=5)
    assert cart.find(1).quantity == 99
    assert cart.notices == ["Maximum quantity per product is 99"]


def test_change_quantity():
    cart = Cart()
    cart.add(1, name="Table", price=1.0)
    assert cart.change_quantity(1, 120) is True
    assert cart.find(1).quantity == 99
    assert cart.change_quantity(1, -99) is True
    assert cart.items == []
    assert cart.change_quantity(1, 1) is False


def test_to_json_truncates_lines_and_images():
    cart = Cart()
    for i in range(MAX_LINES + 5):
        cart.add(i, name=f"Item {i}", price=1.0, image="/uploads/products/" + "x" * 200)

    data = json.loads(cart.to_json())
    assert len(data) == MAX_LINES
    assert all(len(line["image"]) == MAX_IMAGE_LENGTH for line in data)
    assert cart.notices == [f"Cart is limited to {MAX_LINES} items"]


def test_round_trip_preserves_lines():
    cart = Cart()
    cart.add(7, name="Sofa", price=999.9, image="/img.jpg", quantity=2)
    restored = Cart.from_json(cart.to_json())
    assert restored.items == cart.items


def test_malformed_data_yields_empty_cart(caplog):
    with caplog.at_level(logging.ERROR, logger="storefront.services.cart"):
        for raw in ("not json", '{"id": 1}', '[{"id": "x"}]', '[{"id": 1, "name": "a", "price": 1, "quantity": 500}]'):
            assert Cart.from_json(raw).items == []
    assert "Discarding unreadable cart data" in caplog.text
    assert Cart.from_json(None).items == []
