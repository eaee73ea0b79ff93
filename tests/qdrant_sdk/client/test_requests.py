"""Tests for request builders: defaults, conversions and timeouts."""

from datetime import timedelta

import pytest
from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.client import requests
from qdrant_sdk.client.requests import convert_timeout
from qdrant_sdk.conversions import match, point_struct, prefetch, query, vector_params


@pytest.mark.unit
class TestConvertTimeout:
    """Test server-side timeout conversion."""

    @pytest.mark.parametrize(
        ("timeout", "expected"),
        [(None, None), (0, 0), (30, 30), (2.0, 2), (timedelta(minutes=1), 60)],
    )
    def test_whole_seconds(self, timeout: object, expected: int | None) -> None:
        """Whole seconds convert to an int."""
        assert convert_timeout(timeout) == expected

    def test_sub_second_rejected(self) -> None:
        """Fractions of a second are not supported."""
        with pytest.raises(ValueError, match="Sub-second components"):
            convert_timeout(timedelta(milliseconds=1500))
        with pytest.raises(ValueError, match="Sub-second components"):
            convert_timeout(0.5)

    def test_negative_rejected(self) -> None:
        """Negative timeouts are rejected."""
        with pytest.raises(ValueError, match="must not be negative"):
            convert_timeout(-1)


@pytest.mark.unit
class TestCollectionRequests:
    """Test collection request defaults."""

    def test_create_collection_defaults(self) -> None:
        """Shards, replication and write consistency default to 1."""
        request = requests.create_collection("docs", vector_params(4))

        assert request.collection_name == "docs"
        assert request.shard_number == 1
        assert request.replication_factor == 1
        assert request.write_consistency_factor == 1
        assert request.on_disk_payload is False
        assert request.vectors_config.params.size == 4
        assert not request.HasField("timeout")

    def test_create_collection_named_vectors_and_timeout(self) -> None:
        """Named vectors and a timeout are converted."""
        request = requests.create_collection(
            "docs", {"text": vector_params(4)}, timeout=timedelta(seconds=30)
        )

        assert "text" in request.vectors_config.params_map.map
        assert request.timeout == 30

    def test_update_collection_only_sets_given_fields(self) -> None:
        """Unset sections stay unset so the server keeps them."""
        request = requests.update_collection(
            "docs", optimizers_config=qdrant_grpc.OptimizersConfigDiff(indexing_threshold=0)
        )

        assert request.HasField("optimizers_config")
        assert not request.HasField("vectors_config")
        assert not request.HasField("params")

    def test_alias_operations(self) -> None:
        """Alias actions are batched into one ChangeAliases request."""
        request = requests.change_aliases(
            [
                requests.create_alias_operation("prod", "docs_v2"),
                requests.delete_alias_operation("old"),
            ],
            timeout=10,
        )

        assert request.actions[0].create_alias.collection_name == "docs_v2"
        assert request.actions[1].delete_alias.alias_name == "old"
        assert request.timeout == 10

    def test_create_shard_key(self) -> None:
        """The shard key and placement are wrapped in the inner request."""
        request = requests.create_shard_key("docs", "eu", shards_number=2, placement=[1, 2])

        assert request.request.shard_key.keyword == "eu"
        assert request.request.shards_number == 2
        assert list(request.request.placement) == [1, 2]


@pytest.mark.unit
class TestPointWriteRequests:
    """Test point write request defaults and conversions."""

    def test_upsert_defaults_to_wait(self) -> None:
        """Writes wait for completion unless told otherwise."""
        request = requests.upsert_points("docs", [(1, [0.1, 0.2], {"city": "Berlin"})])

        assert request.wait is True
        assert request.points[0].id.num == 1
        assert request.points[0].payload["city"].string_value == "Berlin"
        assert not request.HasField("ordering")

    def test_upsert_accepts_point_structs_and_ordering(self) -> None:
        """PointStruct messages pass through; ordering is wrapped."""
        request = requests.upsert_points(
            "docs",
            [point_struct(2, [0.3])],
            wait=False,
            ordering=qdrant_grpc.WriteOrderingType.Strong,
            shard_key_selector="eu",
        )

        assert request.wait is False
        assert request.ordering.type == qdrant_grpc.WriteOrderingType.Strong
        assert request.shard_key_selector.shard_keys[0].keyword == "eu"

    def test_delete_by_filter(self) -> None:
        """A condition selects points by filter."""
        request = requests.delete_points("docs", match("city", "Berlin"))

        assert request.points.filter.must[0].field.key == "city"

    def test_set_payload_without_selector(self) -> None:
        """Omitting the selector leaves it unset; key selects a nested path."""
        request = requests.set_payload_points("docs", {"a": 1}, key="meta")

        assert not request.HasField("points_selector")
        assert request.key == "meta"
        assert request.payload["a"].integer_value == 1

    def test_clear_payload_without_selector(self) -> None:
        """Clearing without a selector leaves the selector unset."""
        assert not requests.clear_payload_points("docs").HasField("points")

    def test_delete_vectors(self) -> None:
        """Vector names and selector are both set."""
        request = requests.delete_point_vectors("docs", ["image"], [1, 2])

        assert list(request.vectors.names) == ["image"]
        assert len(request.points_selector.points.ids) == 2

    def test_field_index_honors_schema_type(self) -> None:
        """The requested schema type selects the field type."""
        request = requests.create_field_index("docs", "price", "float")

        assert request.field_type == qdrant_grpc.FieldType.FieldTypeFloat
        assert request.wait is True

    def test_field_index_defaults_to_keyword(self) -> None:
        """Without a schema type a keyword index is created."""
        request = requests.create_field_index("docs", "city")

        assert request.field_type == qdrant_grpc.FieldType.FieldTypeKeyword


@pytest.mark.unit
class TestReadRequests:
    """Test search, scroll and query request defaults."""

    def test_search_defaults(self) -> None:
        """Limit 10, offset 0, payload on and vectors off."""
        request = requests.search_points("docs", [0.1, 0.2])

        assert list(request.vector) == pytest.approx([0.1, 0.2])
        assert request.limit == 10
        assert request.offset == 0
        assert request.with_payload.enable is True
        assert request.with_vectors.enable is False
        assert not request.HasField("filter")
        assert not request.HasField("read_consistency")

    def test_search_options(self) -> None:
        """Filter, named vector, sparse indices and read options are converted."""
        request = requests.search_points(
            "docs",
            [0.5, 0.7],
            query_filter=match("lang", "en"),
            vector_name="keywords",
            sparse_indices=[3, 10],
            read_consistency=qdrant_grpc.ReadConsistencyType.All,
            timeout=5,
        )

        assert request.filter.must[0].field.key == "lang"
        assert request.vector_name == "keywords"
        assert list(request.sparse_indices.data) == [3, 10]
        assert request.read_consistency.type == qdrant_grpc.ReadConsistencyType.All
        assert request.timeout == 5

    def test_search_batch_stamps_collection(self) -> None:
        """Each batched search is copied with the batch's collection name."""
        inner = requests.search_points("other", [0.1])

        batch = requests.search_batch_points("docs", [inner])

        assert batch.search_points[0].collection_name == "docs"
        assert inner.collection_name == "other"

    def test_search_groups_defaults(self) -> None:
        """Group size defaults to 1."""
        request = requests.search_point_groups("docs", [0.1], "doc_id")

        assert request.group_by == "doc_id"
        assert request.group_size == 1

    def test_scroll_offset_and_order_by(self) -> None:
        """Offset is a point id; a string order_by becomes an OrderBy."""
        request = requests.scroll_points("docs", offset=5, order_by="created_at")

        assert request.offset.num == 5
        assert request.order_by.key == "created_at"
        assert request.limit == 10

    def test_recommend_ids_and_vectors(self) -> None:
        """Example ids and example vectors are both accepted."""
        request = requests.recommend_points(
            "docs", [1, 2], [3], positive_vectors=[[0.1, 0.2]]
        )

        assert [pid.num for pid in request.positive] == [1, 2]
        assert request.negative[0].num == 3
        assert request.positive_vectors[0].WhichOneof("vector") == "dense"

    def test_discover_target_and_context(self) -> None:
        """Target and context pairs accept ids and vectors."""
        request = requests.discover_points("docs", 1, [(2, [0.1, 0.2])])

        assert request.target.single.id.num == 1
        assert request.context[0].positive.id.num == 2
        assert request.context[0].negative.vector.WhichOneof("vector") == "dense"

    def test_discover_without_target(self) -> None:
        """A context-only discovery leaves the target unset."""
        assert not requests.discover_points("docs", context=[(1, 2)]).HasField("target")

    def test_count_defaults_to_exact(self) -> None:
        """Counts are exact by default."""
        assert requests.count_points("docs").exact is True

    def test_query_defaults(self) -> None:
        """Without a query value the query field stays unset."""
        request = requests.query_points("docs")

        assert not request.HasField("query")
        assert request.limit == 10
        assert request.with_payload.enable is True

    def test_query_with_prefetch(self) -> None:
        """Prefetch stages and fusion form a hybrid query."""
        request = requests.query_points(
            "docs",
            query(fusion=qdrant_grpc.Fusion.RRF),
            prefetch=[prefetch([0.1], using="text"), prefetch(([1.0], [4]), using="keywords")],
        )

        assert request.query.WhichOneof("variant") == "fusion"
        assert [stage.using for stage in request.prefetch] == ["text", "keywords"]

    def test_facet_and_matrix_defaults(self) -> None:
        """Facets are approximate; the matrix samples 10 points with 3 neighbours."""
        facet = requests.facet_counts("docs", "city")
        assert facet.exact is False
        assert facet.limit == 10

        matrix = requests.search_matrix_points("docs")
        assert matrix.sample == 10
        assert matrix.limit == 3
