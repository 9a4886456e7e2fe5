import hashlib

import pytest
from pydantic import ValidationError

from core.events.event import Event
from core.events.event_manager import EventManager
from core.listeners.database_operations import DatabaseOperations
from core.models.errors import StoreUnavailableError
from core.models.http import Request
from core.models.query import Query
from core.resources.images import ImagesResource
from core.utils.constants import (
    HEADER_ETAG,
    TOPIC_DB_IMAGES_LOAD,
    TOPIC_IMAGES_GET,
    TOPIC_IMAGES_HEAD,
)


def dispatch(manager: EventManager, topic: str, **params: str) -> Event:
    event = Event(manager=manager, request=Request(query_params=params))
    return manager.trigger(topic, event)


@pytest.fixture
def manager(memory_store) -> EventManager:
    manager = EventManager()
    ImagesResource().attach(manager)
    DatabaseOperations(memory_store).attach(manager)
    return manager


class TestBuildQuery:
    def test_defaults(self) -> None:
        assert ImagesResource.build_query({}) == Query()

    def test_all_parameters(self) -> None:
        query = ImagesResource.build_query(
            {
                "page": "2",
                "limit": "5",
                "metadata": "1",
                "from": "100",
                "to": "200",
                "query": '{"color": "red"}',
            }
        )

        assert query == Query(
            page=2,
            limit=5,
            return_metadata=True,
            from_time=100,
            to_time=200,
            metadata_query={"color": "red"},
        )

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", True), ("true", True), ("Yes", True), ("on", True), ("0", False), ("no", False)],
    )
    def test_metadata_flag(self, raw: str, expected: bool) -> None:
        assert ImagesResource.build_query({"metadata": raw}).return_metadata is expected

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"text"', "null"])
    def test_unusable_metadata_query_ignored(self, raw: str) -> None:
        assert ImagesResource.build_query({"query": raw}).metadata_query is None

    @pytest.mark.parametrize(
        "params",
        [{"limit": "abc"}, {"limit": "0"}, {"page": "0"}, {"from": "yesterday"}],
    )
    def test_invalid_numbers_rejected(self, params: dict[str, str]) -> None:
        with pytest.raises(ValidationError):
            ImagesResource.build_query(params)


class TestEtag:
    def test_quoted_md5_of_last_modified(self) -> None:
        value = "Thu, 01 Jan 1970 00:00:00 GMT"

        assert ImagesResource.etag(value) == f'"{hashlib.md5(value.encode()).hexdigest()}"'

    def test_deterministic(self) -> None:
        assert ImagesResource.etag("a") == ImagesResource.etag("a")
        assert ImagesResource.etag("a") != ImagesResource.etag("b")

    def test_body_changes_tag(self) -> None:
        marker = "Thu, 01 Jan 1970 00:00:00 GMT"

        assert ImagesResource.etag(marker, []) != ImagesResource.etag(marker)
        assert ImagesResource.etag(marker, [{"a": 1}]) != ImagesResource.etag(marker, [{"a": 2}])
        assert ImagesResource.etag(marker, [{"a": 1, "b": 2}]) == ImagesResource.etag(
            marker, [{"b": 2, "a": 1}]
        )


class TestGetAndHead:
    def test_get_lists_images_with_etag(self, manager, memory_store, insert_images) -> None:
        insert_images(memory_store, 3)

        event = dispatch(manager, TOPIC_IMAGES_GET, limit="2")

        assert [image["image_identifier"] for image in event.response.body] == [
            "img_02",
            "img_01",
        ]
        assert event.response.headers[HEADER_ETAG] == ImagesResource.etag(
            event.response.last_modified, event.response.body
        )
        assert event.query == Query(limit=2)

    def test_etag_stable_until_newer_image_added(
        self, manager, memory_store, insert_images, make_image, clock
    ) -> None:
        insert_images(memory_store, 2)

        first = dispatch(manager, TOPIC_IMAGES_GET).response.headers[HEADER_ETAG]
        again = dispatch(manager, TOPIC_IMAGES_GET).response.headers[HEADER_ETAG]

        clock.now = 5_000
        memory_store.insert_image(image_identifier="newest", image=make_image(9))
        changed = dispatch(manager, TOPIC_IMAGES_GET).response.headers[HEADER_ETAG]

        assert first == again
        assert changed != first

    def test_etag_changes_when_metadata_in_set_changes(
        self, manager, memory_store, insert_images
    ) -> None:
        insert_images(memory_store, 3)

        before = dispatch(manager, TOPIC_IMAGES_GET, metadata="1", limit="2")
        memory_store.replace_metadata(image_identifier="img_02", metadata={"a": 1})
        after = dispatch(manager, TOPIC_IMAGES_GET, metadata="1", limit="2")

        assert before.response.last_modified == after.response.last_modified
        assert before.response.headers[HEADER_ETAG] != after.response.headers[HEADER_ETAG]

    def test_etag_changes_when_older_image_removed(
        self, manager, memory_store, insert_images
    ) -> None:
        insert_images(memory_store, 3)

        before = dispatch(manager, TOPIC_IMAGES_GET, limit="2")
        memory_store.delete_image(image_identifier="img_01")
        after = dispatch(manager, TOPIC_IMAGES_GET, limit="2")

        assert [image["image_identifier"] for image in after.response.body] == [
            "img_02",
            "img_00",
        ]
        assert before.response.headers[HEADER_ETAG] != after.response.headers[HEADER_ETAG]

    def test_head_drops_body_keeps_headers(self, manager, memory_store, insert_images) -> None:
        insert_images(memory_store, 2)

        get_event = dispatch(manager, TOPIC_IMAGES_GET)
        head_event = dispatch(manager, TOPIC_IMAGES_HEAD)

        assert head_event.response.body is None
        assert head_event.response.headers[HEADER_ETAG] == get_event.response.headers[HEADER_ETAG]
        assert head_event.response.last_modified == get_event.response.last_modified

    def test_database_errors_propagate(self) -> None:
        manager = EventManager()
        ImagesResource().attach(manager)

        def fail(event: Event) -> None:
            raise StoreUnavailableError(message="Unable to search for images")

        manager.attach(TOPIC_DB_IMAGES_LOAD, fail)

        with pytest.raises(StoreUnavailableError):
            dispatch(manager, TOPIC_IMAGES_GET)
