"""Unit tests for attaching image URLs to a product tree."""

import pytest

from src.catalog.entities.service.product import (
    AttachmentResult,
    ProductBrand,
    ProductItem,
    ProductType,
    attach_image,
    locate_first_item_details,
    to_storage,
)

IMAGE_URL = "https://test-bucket.s3.amazonaws.com/shoe.png"


def _details(document):
    return document.types[0].items[0].brands[0].items[0]


class TestAttachImage:
    def test_appends_to_first_leaf(self, make_product):
        document = make_product()

        result = attach_image(document, IMAGE_URL)

        assert result == AttachmentResult(attached=True)
        assert _details(document).images == [IMAGE_URL]

    def test_modifies_nothing_else(self, make_product):
        document = make_product()
        before = to_storage(document)

        attach_image(document, IMAGE_URL)

        after = to_storage(document)
        after["type_"][0]["items"][0]["brands"][0]["items"][0]["images"] = []
        assert after == before

    def test_only_first_entries_are_touched(self, make_product):
        document = make_product()
        second_details = _details(document).model_copy(deep=True)
        document.types[0].items[0].brands[0].items.append(second_details)
        document.types.append(document.types[0].model_copy(deep=True))

        attach_image(document, IMAGE_URL)

        assert _details(document).images == [IMAGE_URL]
        assert document.types[0].items[0].brands[0].items[1].images == []
        assert document.types[1].items[0].brands[0].items[0].images == []

    def test_repeated_calls_append_duplicates(self, make_product):
        document = make_product()

        attach_image(document, IMAGE_URL)
        attach_image(document, IMAGE_URL)

        assert _details(document).images == [IMAGE_URL, IMAGE_URL]

    def test_keeps_existing_images(self, make_product):
        document = make_product()
        _details(document).images.append("https://example.com/existing.png")

        attach_image(document, IMAGE_URL)

        assert _details(document).images == [
            "https://example.com/existing.png",
            IMAGE_URL,
        ]

    def test_no_types_is_reported(self, make_product):
        document = make_product(with_types=False)

        result = attach_image(document, IMAGE_URL)

        assert result == AttachmentResult(attached=False, missing_level="types")
        assert to_storage(document) == {"type_": []}

    @pytest.mark.parametrize(
        ("truncate", "missing_level"),
        [
            (lambda d: setattr(d.types[0], "items", []), "items"),
            (lambda d: setattr(d.types[0].items[0], "brands", []), "brands"),
            (lambda d: setattr(d.types[0].items[0].brands[0], "items", []), "item_details"),
        ],
    )
    def test_missing_level_is_reported(self, make_product, truncate, missing_level):
        document = make_product()
        truncate(document)
        before = to_storage(document)

        result = attach_image(document, IMAGE_URL)

        assert not result.attached
        assert result.missing_level == missing_level
        assert to_storage(document) == before


class TestLocateFirstItemDetails:
    def test_returns_leaf(self, make_product):
        document = make_product()

        details, missing_level = locate_first_item_details(document)

        assert details is _details(document)
        assert missing_level is None

    def test_empty_brand_list(self, make_product):
        document = make_product(with_types=False)
        document.types.append(
            ProductType(
                type_name="Bags",
                items=[ProductItem(item_name="Totes", brands=[ProductBrand(brand_name="Acme")])],
            )
        )

        details, missing_level = locate_first_item_details(document)

        assert details is None
        assert missing_level == "item_details"
