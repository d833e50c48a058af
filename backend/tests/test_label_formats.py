"""
Тесты каталога форматов этикеток label_types.py.

Каталог должен совпадать с форматами, под которые закуплены листы и термоленты.
"""

import dataclasses

import pytest

from pricelabel.models.label_types import (
    CUSTOM,
    LABEL_FORMATS,
    LARGE_10,
    SHELF_TAG_80,
    STANDARD_30,
    THERMAL_78x25,
    LabelFormat,
    LayoutKind,
    ProductRecord,
    custom_label_format,
    get_label_format,
)


class TestCatalogue:
    """Пять форматов с точными размерами."""

    @pytest.mark.parametrize(
        "label_format,expected",
        [
            (THERMAL_78x25, ("thermal_78x25", "78mm", "25mm", 1, 1, "custom", True)),
            (STANDARD_30, ("standard_30", "2.625in", "1in", 3, 10, "letter", False)),
            (LARGE_10, ("large_10", "4in", "2in", 2, 5, "letter", False)),
            (SHELF_TAG_80, ("shelf_80", "1.75in", "0.5in", 4, 20, "letter", False)),
            (CUSTOM, ("custom", "3in", "1.5in", 2, 6, "letter", False)),
        ],
    )
    def test_dimensions(self, label_format, expected):
        actual = (
            label_format.id,
            label_format.label_width,
            label_format.label_height,
            label_format.labels_per_row,
            label_format.rows_per_page,
            label_format.page_size,
            label_format.is_thermal,
        )
        assert actual == expected

    def test_five_formats(self):
        assert list(LABEL_FORMATS) == ["THERMAL_78x25", "STANDARD_30", "LARGE_10", "SHELF_TAG_80", "CUSTOM"]

    def test_capacity(self):
        assert STANDARD_30.labels_per_page == 30
        assert LARGE_10.labels_per_page == 10
        assert SHELF_TAG_80.labels_per_page == 80

    def test_thermal_tabs(self):
        assert THERMAL_78x25.printable_width == "58mm"
        assert THERMAL_78x25.left_tab == "10mm"
        assert THERMAL_78x25.right_tab == "10mm"

    def test_layout_kind(self):
        assert THERMAL_78x25.layout_kind is LayoutKind.THERMAL
        assert all(
            fmt.layout_kind is LayoutKind.GRID for fmt in LABEL_FORMATS.values() if fmt is not THERMAL_78x25
        )

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            STANDARD_30.labels_per_row = 5


class TestLookup:
    def test_by_id(self):
        assert get_label_format("shelf_80") is SHELF_TAG_80

    def test_unknown(self):
        with pytest.raises(KeyError):
            get_label_format("a4_24")


class TestCustomFormat:
    """Пользовательский формат поверх CUSTOM."""

    def test_defaults(self):
        assert custom_label_format() == CUSTOM

    def test_overrides(self):
        fmt = custom_label_format(label_width="2in", labels_per_row=3)

        assert fmt.id == "custom"
        assert fmt.label_width == "2in"
        assert fmt.labels_per_row == 3
        assert fmt.rows_per_page == 6

    @pytest.mark.parametrize("kwargs", [{"labels_per_row": 0}, {"rows_per_page": 0}, {"labels_per_row": -2}])
    def test_invariants(self, kwargs):
        with pytest.raises(ValueError):
            custom_label_format(**kwargs)

    def test_bad_page_size(self):
        with pytest.raises(ValueError):
            LabelFormat(id="x", name="x", label_width="1in", label_height="1in",
                        labels_per_row=1, rows_per_page=1, page_size="a4")


class TestProductRecord:
    def test_from_camel_case(self):
        product = ProductRecord.from_mapping(
            {"id": 7, "name": "Lager", "price": 24.99, "costPrice": 15, "categoryName": "Beer"}
        )

        assert product.cost_price == 15
        assert product.category_name == "Beer"
        assert product.barcode is None
