"""Unit tests for the product document model and its storage codec."""

import math

import bson
import pytest
from bson import ObjectId
from pydantic import ValidationError

from src.catalog.core.errors import SerializationError
from src.catalog.entities.service.product import (
    ProductDocument,
    Subtitle,
    from_storage,
    to_storage,
)
from src.catalog.entities.service.product.serialization import MAX_BSON_SIZE
from tests.fixtures.core import product_payload


def _details(document: ProductDocument):
    return document.types[0].items[0].brands[0].items[0]


def _assign_ids(document: ProductDocument) -> ProductDocument:
    document.id = ObjectId()
    product_type = document.types[0]
    product_type.id = ObjectId()
    product_type.items[0].id = ObjectId()
    product_type.items[0].brands[0].id = ObjectId()
    _details(document).id = ObjectId()
    _details(document).subtitle[0].id = ObjectId()
    return document


class TestProductDocumentModel:
    """Test parsing and dumping of the nested product model."""

    def test_parses_full_tree(self, make_product):
        document = make_product()

        details = _details(document)
        assert document.types[0].type_name == "Footwear"
        assert details.product_name == "Acme Runner"
        assert details.subtitle[0].subtitle[0].titledetail == "Rubber"
        assert details.images == []

    def test_new_document_has_no_identifiers(self, make_product):
        document = make_product()

        assert document.id is None
        assert _details(document).id is None

    def test_dump_omits_missing_identifiers(self, make_product):
        data = to_storage(make_product())

        assert "_id" not in data
        assert "_id" not in data["type_"][0]
        assert "_id" not in data["type_"][0]["items"][0]["brands"][0]["items"][0]

    def test_dump_uses_storage_keys(self, make_product):
        data = to_storage(make_product())

        assert list(data) == ["type_"]
        details = data["type_"][0]["items"][0]["brands"][0]["items"][0]
        assert set(details) == {
            "product_name",
            "title",
            "subtitle",
            "description",
            "amount",
            "discount_amount",
            "quantity",
            "images",
        }

    def test_types_accepts_attribute_name(self):
        document = ProductDocument(types=[])
        assert document.types == []

    def test_identifier_accepts_hex_string(self):
        oid = ObjectId()
        document = ProductDocument.model_validate({"_id": str(oid), "type_": []})
        assert document.id == oid

    def test_identifier_dumps_as_string_in_json(self):
        oid = ObjectId()
        document = ProductDocument(id=oid)

        assert document.model_dump(by_alias=True)["_id"] == oid
        assert document.model_dump(mode="json", by_alias=True)["_id"] == str(oid)

    def test_rejects_malformed_identifier(self):
        with pytest.raises(ValidationError):
            ProductDocument.model_validate({"_id": "not-an-id", "type_": []})

    def test_rejects_missing_required_fields(self):
        payload = product_payload()
        del payload["type_"][0]["items"][0]["brands"][0]["items"][0]["amount"]

        with pytest.raises(ValidationError):
            ProductDocument.model_validate(payload)

    def test_subtitle_none_and_empty_are_distinct(self):
        none_child = Subtitle(title="a", titledetail="b")
        empty_child = Subtitle(title="a", titledetail="b", subtitle=[])

        assert none_child.model_dump(by_alias=True)["subtitle"] is None
        assert empty_child.model_dump(by_alias=True)["subtitle"] == []
        assert none_child != empty_child


class TestStorageRoundTrip:
    """Documents survive conversion to and from the storage format."""

    def test_round_trip_without_identifiers(self, make_product):
        document = make_product()
        assert from_storage(to_storage(document)) == document

    def test_round_trip_with_identifiers(self, make_product):
        document = _assign_ids(make_product())
        assert from_storage(to_storage(document)) == document

    def test_round_trip_empty_document(self):
        document = ProductDocument()
        assert from_storage(to_storage(document)) == document

    def test_round_trip_empty_nested_sequences(self, make_product):
        document = make_product()
        _details(document).title = []
        _details(document).subtitle = []
        document.types[0].items[0].brands[0].items = []

        assert from_storage(to_storage(document)) == document

    def test_stored_bytes_round_trip(self, make_product):
        document = _assign_ids(make_product())
        _details(document).images.append("https://test-bucket.s3.amazonaws.com/a.png")
        encoded = bson.encode(to_storage(document))

        assert bson.encode(to_storage(from_storage(bson.decode(encoded)))) == encoded

    def test_from_storage_rejects_foreign_document(self):
        with pytest.raises(SerializationError):
            from_storage({"type_": [{"name": "missing keys"}]})


class TestStorageLimits:
    """Documents that MongoDB cannot store are rejected before sending."""

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite_amount(self, make_product, value):
        document = make_product()
        _details(document).amount = value

        with pytest.raises(SerializationError, match="non-finite"):
            to_storage(document)

    def test_rejects_non_finite_discount(self, make_product):
        document = make_product()
        _details(document).discount_amount = math.nan

        with pytest.raises(SerializationError, match="Error converting to BSON"):
            to_storage(document)

    @staticmethod
    def _nested_subtitles(levels: int) -> Subtitle:
        node = Subtitle(title="leaf", titledetail="innermost")
        for level in range(levels - 1):
            node = Subtitle(title=f"level {level}", titledetail="x", subtitle=[node])
        return node

    def test_accepts_moderate_subtitle_depth(self, make_product):
        document = make_product()
        _details(document).subtitle = [self._nested_subtitles(40)]

        assert from_storage(to_storage(document)) == document

    def test_rejects_excessive_subtitle_depth(self, make_product):
        document = make_product()
        _details(document).subtitle = [self._nested_subtitles(60)]

        with pytest.raises(SerializationError, match="nesting depth"):
            to_storage(document)

    def test_rejects_oversized_document(self, make_product):
        document = make_product()
        _details(document).description = "x" * (MAX_BSON_SIZE + 1)

        with pytest.raises(SerializationError, match="byte limit"):
            to_storage(document)

    def test_rejects_quantity_outside_int64(self, make_product):
        document = make_product()
        _details(document).quantity = 2**70

        with pytest.raises(SerializationError):
            to_storage(document)
