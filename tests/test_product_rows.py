import pandas as pd
import pytest

from catalog_models import Money, Product
from product_rows import (
    load_catalog_csv,
    parse_product_row,
    row_to_product,
    split_categories,
)


@pytest.mark.unit
def test_parse_product_row_splits_categories():
    product = parse_product_row(
        "1", "Botas", "De cuero", "bota.jpg", "USD", "ropa,calzado,invierno", 50, 0
    )

    assert len(product.categories) == 3
    assert product.categories[0] == "ropa"
    assert product.categories[2] == "invierno"
    assert product.categories == ("ropa", "calzado", "invierno")


@pytest.mark.unit
def test_parse_product_row_empty_categories():
    product = parse_product_row("2", "Taza", "Cerámica", "taza.jpg", "USD", "", 10, 0)

    assert product.categories == ()


@pytest.mark.unit
def test_parse_product_row_maps_money():
    product = parse_product_row("3", "PC", "Gamer", "pc.jpg", "EUR", "tech", 1200, 500)

    assert product.price_usd == Money(currency_code="EUR", units=1200, nanos=500)
    assert product.categories == ("tech",)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        ("a", ("a",)),
        ("a,b", ("a", "b")),
        ("a,,b", ("a", "", "b")),
        (",", ("", "")),
        ("kitchen, home", ("kitchen", " home")),
    ],
)
def test_split_categories_keeps_every_segment(value, expected):
    assert split_categories(value) == expected


@pytest.mark.unit
def test_parse_product_row_passes_fields_through_unchanged():
    product = parse_product_row(
        " 42 ", "  Lamp", "desc\twith tab", "static/img/lamp.jpg", "xx", "home", -3, 2_000_000_000
    )

    assert product == Product(
        id=" 42 ",
        name="  Lamp",
        description="desc\twith tab",
        picture="static/img/lamp.jpg",
        price_usd=Money(currency_code="xx", units=-3, nanos=2_000_000_000),
        categories=("home",),
    )


@pytest.mark.unit
def test_parse_product_row_is_pure():
    args = ("7", "Mug", "Blue", "mug.jpg", "USD", "kitchen,gifts", 8, 990000000)

    first = parse_product_row(*args)
    second = parse_product_row(*args)

    assert first == second
    assert first is not second
    assert hash(first) == hash(second)


def _row(**overrides):
    data = {
        "id": "OLJCESPC7Z",
        "name": "Sunglasses",
        "description": "Add a modern touch to your outfits.",
        "picture": "/static/img/products/sunglasses.jpg",
        "currency_code": "USD",
        "categories": "accessories",
        "units": "19",
        "nanos": "990000000",
    }
    data.update(overrides)
    return pd.Series(data)


def test_row_to_product_converts_numeric_text():
    product = row_to_product(_row())

    assert product is not None
    assert product.id == "OLJCESPC7Z"
    assert product.price_usd == Money("USD", 19, 990000000)
    assert product.categories == ("accessories",)


def test_row_to_product_blank_numbers_default_to_zero():
    product = row_to_product(_row(units="", nanos=None, categories=""))

    assert product is not None
    assert product.price_usd.units == 0
    assert product.price_usd.nanos == 0
    assert product.categories == ()


def test_row_to_product_skips_rows_without_id():
    assert row_to_product(_row(id="   ")) is None


def test_row_to_product_skips_non_integer_price(caplog):
    with caplog.at_level("WARNING"):
        assert row_to_product(_row(units="19.99")) is None

    assert "non-integer price" in caplog.text


def test_load_catalog_csv_keeps_empty_cells_as_strings(tmp_path):
    csv_path = tmp_path / "products.csv"
    csv_path.write_text(
        "id,name,description,picture,currency_code,categories,units,nanos\n"
        '1,Botas,De cuero,bota.jpg,USD,"ropa,calzado",50,0\n'
        "2,Taza,,taza.jpg,USD,,10,0\n",
        encoding="utf-8",
    )

    df = load_catalog_csv(csv_path)

    assert len(df) == 2
    assert df.loc[0, "categories"] == "ropa,calzado"
    assert df.loc[1, "description"] == ""
    assert df.loc[1, "categories"] == ""


def test_load_catalog_csv_reports_missing_columns(tmp_path):
    csv_path = tmp_path / "products.csv"
    csv_path.write_text("id,name,units\n1,Botas,50\n", encoding="utf-8")

    with pytest.raises(ValueError) as excinfo:
        load_catalog_csv(csv_path)

    assert "categories" in str(excinfo.value)
    assert "nanos" in str(excinfo.value)
