from core.filters.metadata_match_filter import MetadataMatchFilter


ITEMS = [
    {"image_identifier": "a", "metadata": {"color": "red", "camera": {"make": "Nikon"}}},
    {"image_identifier": "b", "metadata": {"color": "blue", "rating": 5}},
    {"image_identifier": "c", "metadata": {}},
    {"image_identifier": "d"},
]


class TestMetadataMatchFilter:
    def test_empty_query_returns_all(self) -> None:
        assert MetadataMatchFilter.apply(ITEMS, {}) == ITEMS

    def test_equality_match(self) -> None:
        result = MetadataMatchFilter.apply(ITEMS, {"color": "red"})

        assert [item["image_identifier"] for item in result] == ["a"]

    def test_every_key_must_match(self) -> None:
        assert MetadataMatchFilter.apply(ITEMS, {"color": "blue", "rating": 4}) == []

    def test_dotted_key_matches_nested_value(self) -> None:
        result = MetadataMatchFilter.apply(ITEMS, {"camera.make": "Nikon"})

        assert [item["image_identifier"] for item in result] == ["a"]

    def test_missing_key_never_matches_none(self) -> None:
        assert MetadataMatchFilter.apply(ITEMS, {"color": None}) == []

    def test_nested_mapping_compared_as_whole(self) -> None:
        assert MetadataMatchFilter.matches(ITEMS[0]["metadata"], {"camera": {"make": "Nikon"}})
        assert not MetadataMatchFilter.matches(ITEMS[0]["metadata"], {"camera": {}})
