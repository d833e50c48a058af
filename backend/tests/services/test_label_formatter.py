"""Тесты подготовки данных ценника label_formatter.py."""

from datetime import date
from decimal import Decimal

import pytest

from pricelabel.config import LABEL
from pricelabel.models.label_types import STANDARD_30, THERMAL_78x25, LabelOptions, ProductRecord
from pricelabel.services.barcode_generator import GeneratedBarcode, Symbology, detect_symbology
from pricelabel.services.label_formatter import (
    LabelDataError,
    format_label_data,
    format_price,
    resolve_barcode_value,
    resolve_sku,
)

# === Fixtures ===


class FakeBarcodeGenerator:
    """Записывает вызовы вместо реальной генерации PNG."""

    def __init__(self, fail: bool = False):
        self.calls: list[tuple[str, dict]] = []
        self.fail = fail

    def generate(self, value, options=None):
        self.calls.append((value, options))
        if self.fail or not value:
            return None
        return GeneratedBarcode(
            data_uri=f"data:image/png;base64,{value}",
            symbology=detect_symbology(value),
            width_pixels=100,
            height_pixels=40,
        )


@pytest.fixture
def fake_barcodes() -> FakeBarcodeGenerator:
    return FakeBarcodeGenerator()


@pytest.fixture
def lager() -> ProductRecord:
    """Товар из сценария печати."""
    return ProductRecord(id=7, name="Lager 500ml", price=24.99)


@pytest.fixture
def full_product() -> ProductRecord:
    return ProductRecord(
        id=12,
        name="Cheddar Cheese",
        price="89.5",
        cost_price=Decimal("61.20"),
        barcode="6001234567899",
        sku="CHD-250",
        unit="kg",
        description="Mature cheddar",
        category_name="Dairy",
    )


# === Тесты ===


class TestBarcodeValue:
    """Цепочка barcode → sku → PRD + id."""

    def test_barcode_wins(self, full_product):
        assert resolve_barcode_value(full_product) == "6001234567899"

    def test_sku_when_no_barcode(self):
        product = ProductRecord(id=3, name="Milk", price=10, sku="MLK-1")
        assert resolve_barcode_value(product) == "MLK-1"

    @pytest.mark.parametrize("barcode,sku", [(None, None), ("", ""), ("  ", None)])
    def test_fallback_prd_and_sku(self, barcode, sku):
        product = ProductRecord(id=41, name="Bread", price=15, barcode=barcode, sku=sku)

        assert resolve_barcode_value(product) == "PRD41"
        assert resolve_sku(product) == "SKU41"

    def test_ean13_barcode_goes_to_encoder(self, full_product, fake_barcodes):
        label = format_label_data(full_product, barcode_generator=fake_barcodes)

        value, _ = fake_barcodes.calls[0]
        assert value == "6001234567899"
        assert detect_symbology(value) is Symbology.EAN13
        assert label.barcode_image == "data:image/png;base64,6001234567899"

    def test_sku_fallback_goes_to_encoder_as_code128(self, lager, fake_barcodes):
        format_label_data(lager, barcode_generator=fake_barcodes)

        value, _ = fake_barcodes.calls[0]
        assert value == "PRD7"
        assert detect_symbology(value) is Symbology.CODE128

    def test_barcode_options_follow_format(self, lager, fake_barcodes):
        format_label_data(lager, label_format=THERMAL_78x25, barcode_generator=fake_barcodes)
        format_label_data(lager, label_format=STANDARD_30, barcode_generator=fake_barcodes)

        assert fake_barcodes.calls[0][1] == LABEL.BARCODE_THERMAL_OPTIONS
        assert fake_barcodes.calls[1][1] == LABEL.BARCODE_GRID_OPTIONS

    def test_encoding_failure_keeps_label(self, lager):
        label = format_label_data(lager, barcode_generator=FakeBarcodeGenerator(fail=True))

        assert label.barcode == "PRD7"
        assert label.barcode_image is None

    def test_show_barcode_off(self, lager, fake_barcodes):
        label = format_label_data(lager, LabelOptions(show_barcode=False), barcode_generator=fake_barcodes)

        assert label.barcode is None
        assert label.barcode_image is None
        assert fake_barcodes.calls == []


class TestBarcodeFailure:
    """Штрихкод, который не кодируется, просто не попадает на ценник."""

    def test_bad_check_digit_drops_image(self):
        product = ProductRecord(id=3, name="Yoghurt", price=12, barcode="4006381333932")
        label = format_label_data(product)

        assert label.barcode == "4006381333932"
        assert label.barcode_image is None
        assert label.price_formatted == "R12.00"


class TestPrice:
    """Цена: розничная или закупочная, два знака."""

    def test_default_currency(self, lager, fake_barcodes):
        label = format_label_data(lager, barcode_generator=fake_barcodes)

        assert label.price_formatted == "R24.99"
        assert label.price == Decimal("24.99")

    def test_cost_price(self, fake_barcodes):
        product = ProductRecord(id=7, name="Lager 500ml", price=24.99, cost_price=15.00)
        label = format_label_data(product, LabelOptions(show_cost_price=True), barcode_generator=fake_barcodes)

        assert label.price_formatted == "R15.00"

    def test_cost_price_missing(self, lager, fake_barcodes):
        with pytest.raises(LabelDataError):
            format_label_data(lager, LabelOptions(show_cost_price=True), barcode_generator=fake_barcodes)

    @pytest.mark.parametrize(
        "value,expected",
        [(5, "$5.00"), ("89.5", "$89.50"), (Decimal("1.005"), "$1.01"), (0.1 + 0.2, "$0.30")],
    )
    def test_two_decimals(self, value, expected):
        assert format_price(value, "$") == expected

    @pytest.mark.parametrize("value", ["abc", "NaN", Decimal("1e30")])
    def test_invalid_price(self, value):
        with pytest.raises(LabelDataError, match="Invalid price"):
            format_price(value)

    def test_was_price(self, lager, fake_barcodes):
        label = format_label_data(lager, LabelOptions(was_price="29.99"), barcode_generator=fake_barcodes)

        assert label.was_price == "R29.99"

    def test_was_price_absent(self, lager, fake_barcodes):
        assert format_label_data(lager, barcode_generator=fake_barcodes).was_price is None
        assert format_label_data(lager, LabelOptions(was_price=""), barcode_generator=fake_barcodes).was_price is None

    def test_zero_was_price_is_shown(self, lager, fake_barcodes):
        label = format_label_data(lager, LabelOptions(was_price=0), barcode_generator=fake_barcodes)

        assert label.was_price == "R0.00"


class TestOptionalFields:
    """Выключенное или пустое поле — None, не пустая строка."""

    def test_defaults(self, full_product, fake_barcodes):
        label = format_label_data(full_product, barcode_generator=fake_barcodes)

        assert label.unit == "kg"
        assert label.description is None
        assert label.category is None
        assert label.store_name is None
        assert label.expiry_date is None
        assert label.batch_number is None
        assert label.promotion_text is None

    def test_unit_defaults_to_pcs(self, lager, fake_barcodes):
        assert format_label_data(lager, barcode_generator=fake_barcodes).unit == "pcs"

    def test_unit_hidden(self, full_product, fake_barcodes):
        label = format_label_data(full_product, LabelOptions(show_unit=False), barcode_generator=fake_barcodes)
        assert label.unit is None

    def test_all_enabled(self, full_product, fake_barcodes):
        options = LabelOptions(
            show_description=True,
            show_category=True,
            show_store_name=True,
            show_expiry_date=True,
            expiry_date=date(2026, 12, 31),
            show_batch_number=True,
            batch_number="B-77",
            show_promotion=True,
            promotion_text="SALE",
        )
        label = format_label_data(full_product, options, barcode_generator=fake_barcodes)

        assert label.description == "Mature cheddar"
        assert label.category == "Dairy"
        assert label.store_name == "CELLERHUT"
        assert label.expiry_date == "2026-12-31"
        assert label.batch_number == "B-77"
        assert label.promotion_text == "SALE"

    @pytest.mark.parametrize("field", ["expiry_date", "batch_number", "promotion_text"])
    def test_flag_without_value(self, lager, fake_barcodes, field):
        options = LabelOptions(show_expiry_date=True, show_batch_number=True, show_promotion=True)
        label = format_label_data(lager, options, barcode_generator=fake_barcodes)

        assert getattr(label, field) is None

    def test_value_without_flag(self, lager, fake_barcodes):
        options = LabelOptions(expiry_date="2026-01-01", batch_number="B1", promotion_text="SALE")
        label = format_label_data(lager, options, barcode_generator=fake_barcodes)

        assert label.expiry_date is None
        assert label.batch_number is None
        assert label.promotion_text is None

    def test_empty_description_is_none(self, fake_barcodes):
        product = ProductRecord(id=1, name="Water", price=5, description="", category_name="")
        options = LabelOptions(show_description=True, show_category=True)
        label = format_label_data(product, options, barcode_generator=fake_barcodes)

        assert label.description is None
        assert label.category is None

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_unknown_product_name(self, fake_barcodes, name):
        product = ProductRecord(id=1, name=name, price=5)
        assert format_label_data(product, barcode_generator=fake_barcodes).name == "Unknown Product"


class TestCustomFields:
    """custom_fields мержатся последними."""

    def test_override_known_field(self, lager, fake_barcodes):
        options = LabelOptions(custom_fields={"price_formatted": "2 for R40", "sku": "PROMO"})
        label = format_label_data(lager, options, barcode_generator=fake_barcodes)

        assert label.price_formatted == "2 for R40"
        assert label.sku == "PROMO"
        assert label.extra == {}

    def test_camel_case_keys(self, lager, fake_barcodes):
        options = LabelOptions(custom_fields={"priceFormatted": "SPECIAL", "wasPrice": "R30.00"})
        label = format_label_data(lager, options, barcode_generator=fake_barcodes)

        assert label.price_formatted == "SPECIAL"
        assert label.was_price == "R30.00"
        assert label.extra == {}

    def test_unknown_keys_go_to_extra(self, lager, fake_barcodes):
        options = LabelOptions(custom_fields={"shelf": "A3"})
        label = format_label_data(lager, options, barcode_generator=fake_barcodes)

        assert label.extra == {"shelf": "A3"}


class TestIdempotence:
    """Одинаковый вход → одинаковый ценник."""

    def test_same_input_same_output(self, full_product):
        options = LabelOptions(show_store_name=True, was_price=99)

        assert format_label_data(full_product, options) == format_label_data(full_product, options)
