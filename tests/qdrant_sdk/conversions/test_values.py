"""Tests for payload value conversions."""

import pytest
from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.conversions import from_payload, from_value, to_payload, to_struct, to_value


@pytest.mark.unit
class TestToValue:
    """Test native value -> Value conversion."""

    @pytest.mark.parametrize(
        ("native", "kind"),
        [
            (None, "null_value"),
            (True, "bool_value"),
            (42, "integer_value"),
            (1.5, "double_value"),
            ("Berlin", "string_value"),
            ({"a": 1}, "struct_value"),
            ([1, 2], "list_value"),
            ((1, 2), "list_value"),
        ],
    )
    def test_kind_per_type(self, native: object, kind: str) -> None:
        """Each native type lands in its own variant of the kind oneof."""
        assert to_value(native).WhichOneof("kind") == kind

    def test_bool_is_not_integer(self) -> None:
        """bool subclasses int but must stay a boolean."""
        value = to_value(False)

        assert value.WhichOneof("kind") == "bool_value"
        assert value.bool_value is False

    def test_nested_structure(self) -> None:
        """Nested mappings and lists are converted recursively."""
        value = to_value({"city": {"name": "Berlin", "tags": ["capital", 3]}})

        city = value.struct_value.fields["city"].struct_value
        assert city.fields["name"].string_value == "Berlin"
        tags = city.fields["tags"].list_value.values
        assert tags[0].string_value == "capital"
        assert tags[1].integer_value == 3

    def test_value_passes_through(self) -> None:
        """An existing Value is returned unchanged."""
        original = qdrant_grpc.Value(string_value="x")

        assert to_value(original) is original

    def test_unsupported_type_raises(self) -> None:
        """Values without a payload representation are rejected."""
        with pytest.raises(TypeError, match="Unsupported payload value type: set"):
            to_value({1, 2})

    def test_non_string_key_raises(self) -> None:
        """Payload keys must be strings."""
        with pytest.raises(TypeError, match="Payload keys must be strings"):
            to_struct({1: "a"})


@pytest.mark.unit
class TestFromValue:
    """Test Value -> native conversion of response payloads."""

    def test_payload_round_trip(self) -> None:
        """A payload read back from the server equals the native input."""
        native = {
            "name": "doc",
            "count": 3,
            "score": 0.25,
            "draft": False,
            "missing": None,
            "tags": ["a", "b"],
            "meta": {"lang": "en"},
        }

        assert from_payload(to_payload(native)) == native

    def test_unset_value_is_none(self) -> None:
        """A Value with no kind set reads as None."""
        assert from_value(qdrant_grpc.Value()) is None

    def test_reads_point_payload_map(self) -> None:
        """from_payload accepts the payload map of a RetrievedPoint."""
        point = qdrant_grpc.RetrievedPoint(
            id=qdrant_grpc.PointId(num=1),
            payload={"city": qdrant_grpc.Value(string_value="Berlin")},
        )

        assert from_payload(point.payload) == {"city": "Berlin"}
