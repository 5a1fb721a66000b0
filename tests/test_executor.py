"""Batch execution against the SQLite catalog: sequential, independent, partial success."""

import json

from ai_mode.executor import BatchExecutor
from ai_mode.schema import Action
from src.core.queries.catalog_queries import CatalogStore, fetch_catalog_snapshot


def make(kind, target_id=None, **payload):
    return Action(type=kind, id=target_id, data=payload)


def titles(store):
    return [e["title"] for e in store.snapshot()]


def test_create_update_delete(media_store):
    report = BatchExecutor(media_store).execute([make("create", title="Dune Part 3", status="Planned")])
    assert report.success is True
    new_id = report.results[0].entry_id
    assert new_id

    report = BatchExecutor(media_store).execute([make("update", new_id, title="Dune Part 3", status="Finished", my_rating=8)])
    assert report.summary.succeeded == 1
    assert media_store.snapshot() == [{"id": new_id, "title": "Dune Part 3", "status": "Finished"}]

    report = BatchExecutor(media_store).execute([make("delete", new_id, title="Dune Part 3")])
    assert report.summary.succeeded == 1
    assert media_store.snapshot() == []


def test_one_failure_mid_list_does_not_stop_the_batch(media_store):
    actions = [
        make("create", title="First"),
        make("create", title="Second"),
        make("delete", "missing-id", title="Ghost"),
        make("create", title="Fourth"),
        make("create", title="Fifth"),
    ]
    report = BatchExecutor(media_store).execute(actions)

    assert report.summary.model_dump() == {"total": 5, "succeeded": 4, "failed": 1}
    assert report.success is False
    assert [r.success for r in report.results] == [True, True, False, True, True]
    assert report.results[2].error == "Entry not found: missing-id"
    assert sorted(titles(media_store)) == ["Fifth", "First", "Fourth", "Second"]


def test_failures_are_written_to_error_log(media_store, error_log_dir):
    BatchExecutor(media_store).execute([make("delete", "missing-id", title="Ghost")])
    lines = (error_log_dir / "errors.jsonl").read_text().strip().splitlines()
    record = json.loads(lines[-1])
    assert record["context"]["error_kind"] == "action_execution_failure"
    assert record["context"]["kind"] == "delete"


def test_title_fallback_when_target_id_missing(media_store):
    media_store.create({"title": "The Room", "status": "Finished"})
    report = BatchExecutor(media_store).execute([make("update", title="the room", status="Dropped")])
    assert report.summary.succeeded == 1
    assert media_store.snapshot()[0]["status"] == "Dropped"


def test_unresolvable_target(media_store):
    report = BatchExecutor(media_store).execute([make("delete", title="Nothing Here")])
    assert report.results[0].error == "Entry ID or title match is required for delete action"


def test_create_requires_title(media_store):
    report = BatchExecutor(media_store).execute([make("create", status="Planned")])
    assert report.results[0].error == "Title is required for create action"


def test_unknown_kind(media_store):
    report = BatchExecutor(media_store).execute([make("archive", title="X")])
    assert report.results[0].error == "Unknown action type: archive"


def test_unknown_field_fails_item(media_store):
    report = BatchExecutor(media_store).execute([make("create", title="X", favourite_snack="popcorn")])
    assert report.results[0].success is False
    assert "favourite_snack" in report.results[0].error


def test_list_fields_are_stored_as_json(media_store, db_conn):
    report = BatchExecutor(media_store).execute([make("create", title="Anime X", genre=["Action", "Drama"])])
    row = db_conn.execute("SELECT genre FROM media_entries WHERE id = ?", (report.results[0].entry_id,)).fetchone()
    assert json.loads(row["genre"]) == ["Action", "Drama"]


def test_food_title_maps_to_name(food_store, db_conn):
    report = BatchExecutor(food_store).execute([make("create", title="Taco Place", overall_rating=8, visit_date="2024-05-01")])
    assert report.success is True
    row = db_conn.execute("SELECT name, overall_rating FROM food_entries").fetchone()
    assert row["name"] == "Taco Place"
    assert row["overall_rating"] == 8


def test_writes_are_scoped_to_user(db_conn):
    other = CatalogStore(db_conn, "someone-else", "media")
    other.create({"title": "Private Film"})
    mine = CatalogStore(db_conn, "test-user", "media")

    report = BatchExecutor(mine).execute([make("delete", title="Private Film")])
    assert report.summary.failed == 1
    assert fetch_catalog_snapshot(db_conn, "someone-else", "media")[0]["title"] == "Private Film"
