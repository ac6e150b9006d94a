"""Unit tests for bulk ingestion."""

from itertools import count
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

from sqlalchemy.exc import OperationalError

from cinecatalog.actor import Actor
from cinecatalog.exceptions import ConflictError
from cinecatalog.services.bulk import BulkIngestor, KindResult
from cinecatalog.services.genres import GenreService
from cinecatalog.services.media import MediaService

ACTOR = Actor(id="user-1")

MEDIA_ITEM = {
    "title": "Inception",
    "synopsis": "A thief who steals corporate secrets through dream-sharing.",
    "releaseDate": "2010-07-16",
    "duration": 148,
    "type": "movie",
    "director": "nolan",
    "producer": "producer-uuid",
    "genres": ["scifi", "genre-uuid"],
}


def fake_create(prefix: str) -> AsyncMock:
    """Service.create stand-in returning entities with sequential ids."""
    ids = count(1)

    async def create(data: Any, actor: Actor) -> MagicMock:
        entity = MagicMock()
        entity.id = f"{prefix}-{next(ids)}"
        return entity

    return AsyncMock(side_effect=create)


class TestKindResult:
    def test_success_shape(self) -> None:
        result = KindResult(total=3, inserted_ids=["a", "b"], failed=[{"index": 2, "error": "x"}])
        assert result.as_dict() == {
            "created": 2,
            "total": 3,
            "insertedIds": ["a", "b"],
            "failed": [{"index": 2, "error": "x"}],
        }

    def test_refs_included_when_present(self) -> None:
        result = KindResult(total=1, inserted_ids=["a"], refs={"drama": "a"})
        assert result.as_dict()["refs"] == {"drama": "a"}

    def test_error_shape(self) -> None:
        result = KindResult(total=4, inserted_ids=["a"], error="connection lost")
        assert result.created == 0
        assert result.as_dict() == {"error": "connection lost", "created": 0, "total": 4}


class TestIngest:
    async def test_valid_items_created_and_invalid_reported(self, db: MagicMock) -> None:
        items = [
            {"name": "Drama", "ref": "drama"},
            {"name": "X"},
            "not an object",
            {"name": "Comedia"},
        ]

        with patch.object(GenreService, "create", fake_create("genre")):
            result = await BulkIngestor(db, ACTOR).ingest("genres", items)

        assert result.inserted_ids == ["genre-1", "genre-2"]
        assert result.refs == {"drama": "genre-1"}
        assert [f["index"] for f in result.failed] == [1, 2]
        assert result.failed[0]["error"].startswith("name:")
        assert result.failed[1]["error"] == "Item must be an object"

    async def test_service_errors_fail_only_that_item(self, db: MagicMock) -> None:
        create = AsyncMock(
            side_effect=[MagicMock(id="genre-1"), ConflictError("A genre named 'Drama' already exists")]
        )

        with patch.object(GenreService, "create", create):
            result = await BulkIngestor(db, ACTOR).ingest(
                "genres", [{"name": "Drama"}, {"name": "drama"}]
            )

        assert result.created == 1
        assert result.failed == [{"index": 1, "error": "A genre named 'Drama' already exists"}]

    async def test_store_failure_reported_for_whole_kind(self, db: MagicMock) -> None:
        create = AsyncMock(
            side_effect=[
                MagicMock(id="genre-1"),
                OperationalError("INSERT", {}, Exception("connection lost")),
            ]
        )

        with patch.object(GenreService, "create", create):
            ingestor = BulkIngestor(db, ACTOR)
            result = await ingestor.ingest(
                "genres", [{"name": "Drama", "ref": "drama"}, {"name": "Comedia"}]
            )

        assert result.error is not None
        assert result.as_dict()["created"] == 0
        assert ingestor.refs["genres"] == {}

    async def test_items_go_through_create_schema(self, db: MagicMock) -> None:
        create = fake_create("genre")

        with patch.object(GenreService, "create", create):
            await BulkIngestor(db, ACTOR).ingest("genres", [{"name": "  drama ", "ref": "d"}])

        data, actor = create.call_args.args
        assert data.name == "drama"
        assert actor == ACTOR


class TestMediaRefs:
    def test_known_keys_replaced_and_ids_left_alone(self, db: MagicMock) -> None:
        ingestor = BulkIngestor(db, ACTOR)
        ingestor.refs["types"] = {"movie": "type-1"}
        ingestor.refs["directors"] = {"nolan": "director-1"}
        ingestor.refs["genres"] = {"scifi": "genre-1"}

        item = ingestor.resolve_media_refs(dict(MEDIA_ITEM))

        assert item["type"] == "type-1"
        assert item["director"] == "director-1"
        assert item["producer"] == "producer-uuid"
        assert item["genres"] == ["genre-1", "genre-uuid"]


async def test_ingest_all_links_media_to_entities_created_earlier(db: MagicMock) -> None:
    media_create = fake_create("media")
    bundle = {
        "genres": [{"name": "Ciencia Ficción", "ref": "scifi"}],
        "directors": None,
        "producers": [],
        "types": None,
        "media": [MEDIA_ITEM],
    }

    with (
        patch.object(GenreService, "create", fake_create("genre")),
        patch.object(MediaService, "create", media_create),
    ):
        summary = await BulkIngestor(db, ACTOR).ingest_all(bundle)

    assert set(summary) == {"genres", "media", "totalCreated", "totalRequested"}
    assert summary["genres"]["refs"] == {"scifi": "genre-1"}
    assert summary["media"]["insertedIds"] == ["media-1"]
    assert summary["totalCreated"] == 2
    assert summary["totalRequested"] == 2

    data, _ = media_create.call_args.args
    assert data.genres == ["genre-1", "genre-uuid"]
    assert data.type == "movie"


async def test_case_insensitive_duplicates_in_one_batch(db: MagicMock) -> None:
    # Uniqueness pre-check: miss, hit ("action" after "Action"), miss
    checks = iter([None, "genre-existing", None])

    async def execute(stmt: Any) -> MagicMock:
        res = MagicMock()
        res.scalar_one_or_none.return_value = next(checks)
        return res

    db.execute = AsyncMock(side_effect=execute)
    items = [{"name": "Action"}, {"name": "action"}, {"name": "Drama"}]

    result = await BulkIngestor(db, ACTOR).ingest("genres", items)

    assert result.created == 2
    assert result.total == 3
    assert result.failed == [{"index": 1, "error": "A genre named 'action' already exists"}]
    assert db.add.call_count == 2
    assert all(call.args[0].created_by == "user-1" for call in db.add.call_args_list)
