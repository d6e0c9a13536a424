from __future__ import annotations

from storefront.services.grouping import group_rows
from tests.test_utils import make_row


PLACEHOLDER = "https://placeholder.example/img.jpg"


def test_groups_colors_and_sizes_of_one_model():
    rows = [
        make_row("A", color="Red", size="M", cur_qty=5),
        make_row("A", color="Red", size="L", cur_qty=5),
        make_row("A", color="Blue", size="M", cur_qty=3),
    ]

    products = group_rows(rows)

    assert len(products) == 1
    product = products[0]
    assert product.model_id == "A"
    assert [v.color for v in product.variants] == ["Red", "Blue"]
    assert product.variants[0].sizes == ["M", "L"]
    assert product.variants[1].sizes == ["M"]


def test_models_keep_first_seen_order():
    rows = [
        make_row("B", item_name="Boots"),
        make_row("A", item_name="Anorak"),
        make_row("B", color="Black"),
        make_row("C", item_name="Cap"),
    ]

    assert [p.model_id for p in group_rows(rows)] == ["B", "A", "C"]


def test_rows_without_master_code_are_dropped():
    rows = [make_row(None), make_row(""), make_row("A")]

    products = group_rows(rows)

    assert [p.model_id for p in products] == ["A"]


def test_duplicate_sizes_are_merged():
    rows = [
        make_row("A", color="Red", size="M"),
        make_row("A", color="Red", size="M"),
        make_row("A", color="Red", size=None),
        make_row("A", color="Red", size="S"),
    ]

    (product,) = group_rows(rows)

    assert len(product.variants) == 1
    assert product.variants[0].sizes == ["M", "S"]


def test_missing_color_falls_back_to_default():
    rows = [make_row("A", color=None), make_row("A", color="")]

    (product,) = group_rows(rows, default_color="Default")

    assert [v.color for v in product.variants] == ["Default"]


def test_variant_quantity_is_first_row_not_sum():
    # cur_qty of a color reflects only its first row; sizes are not summed.
    rows = [
        make_row("A", color="Red", size="M", cur_qty=5),
        make_row("A", color="Red", size="L", cur_qty=7),
    ]

    (product,) = group_rows(rows)

    assert product.variants[0].cur_qty == 5
    assert product.cur_qty == 5


def test_first_row_per_color_wins_so_order_matters():
    red_m = make_row("A", color="Red", size="M", cur_qty=5, images="https://img/red-m.jpg", unique_id="A-M")
    red_l = make_row("A", color="Red", size="L", cur_qty=2, images="https://img/red-l.jpg", unique_id="A-L")

    forward = group_rows([red_m, red_l])[0].variants[0]
    backward = group_rows([red_l, red_m])[0].variants[0]

    assert forward.cur_qty == 5
    assert forward.image_url == "https://img/red-m.jpg"
    assert forward.id == "A-M"
    assert backward.cur_qty == 2
    assert backward.image_url == "https://img/red-l.jpg"
    assert backward.id == "A-L"
    assert forward.sizes == ["M", "L"]
    assert backward.sizes == ["L", "M"]


def test_grouping_by_model_is_independent_of_row_order():
    rows = [
        make_row("A", color="Red"),
        make_row("B", color="Red"),
        make_row("A", color="Blue"),
    ]

    forward = {p.model_id: {v.color for v in p.variants} for p in group_rows(rows)}
    backward = {p.model_id: {v.color for v in p.variants} for p in group_rows(list(reversed(rows)))}

    assert forward == backward == {"A": {"Red", "Blue"}, "B": {"Red"}}


def test_empty_image_uses_placeholder():
    rows = [
        make_row("A", color="Red", images=""),
        make_row("A", color="Blue", images="   "),
        make_row("A", color="Green", images="https://img/green.jpg"),
    ]

    (product,) = group_rows(rows, placeholder_image_url=PLACEHOLDER)

    assert [v.image_url for v in product.variants] == [PLACEHOLDER, PLACEHOLDER, "https://img/green.jpg"]


def test_descriptive_fields_come_from_first_row():
    rows = [
        make_row("A", item_name="Runner", kind_name="Sneakers", group_name="Shoes", out_price=250, item_code="A-1"),
        make_row("A", item_name="Other", kind_name="Other", group_name="Other", out_price=999, color="Blue"),
    ]

    (product,) = group_rows(rows)

    assert product.price == 250
    assert product.category == "Shoes"
    assert product.group_name == "Shoes"
    assert product.kind_name == "Sneakers"
    assert product.item_name == "Runner"
    assert product.item_code == "A-1"
    assert product.description == "Runner"


def test_description_falls_back_to_kind_then_placeholder_text():
    rows = [
        make_row("A", item_name=None, kind_name="Sneakers"),
        make_row("B", item_name=None, kind_name=None),
    ]

    products = group_rows(rows, no_description="n/a")

    assert products[0].description == "Sneakers"
    assert products[1].description == "n/a"


def test_malformed_row_is_skipped_and_others_still_group(caplog):
    rows = [
        make_row("A", color="Red", cur_qty="not-a-number"),
        make_row("A", color="Blue", cur_qty=4),
        make_row("B", color="Red", cur_qty="broken"),
    ]

    products = group_rows(rows)

    assert [p.model_id for p in products] == ["A"]
    assert [v.color for v in products[0].variants] == ["Blue"]
    assert "Skipping malformed product row" in caplog.text


def test_empty_input_returns_no_products():
    assert group_rows([]) == []
