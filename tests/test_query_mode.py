"""Query mode: generated SELECT, allow-list, row limit, visualization metadata."""

import pytest

from ai_mode.errors import GenerationError, QueryExecutionError, QueryRejectedError
from ai_mode.orchestrator import process_request
from tests.fakes import FakeOracle

USER = "test-user"

STATUS_SQL = (
    "SELECT status, COUNT(*) AS n FROM media_entries "
    "WHERE user_id = :user_id GROUP BY status ORDER BY status"
)


@pytest.fixture
def seeded(media_store):
    for title, status in [("Dune", "Finished"), ("Heat", "Finished"), ("Alien", "Planned")]:
        media_store.create({"title": title, "status": status})
    return media_store


def ask(db_conn, sql, text="How many entries per status?", **kwargs):
    return process_request(text, "media", db_conn, FakeOracle(sql=sql), USER, **kwargs)


def test_select_runs_with_metadata(db_conn, seeded):
    response = ask(db_conn, {"sql": STATUS_SQL, "explanation": "Entries by status", "visualization": "bar"})

    assert response.type == "query"
    assert response.sql.endswith("LIMIT 1000")
    assert response.explanation == "Entries by status"
    assert response.data == [{"status": "Finished", "n": 2}, {"status": "Planned", "n": 1}]
    assert response.metadata.visualization_type == "bar"
    assert response.metadata.columns == ["status", "n"]
    assert response.metadata.row_count == 2


def test_results_are_bound_to_user(db_conn, seeded):
    from src.core.queries.catalog_queries import CatalogStore

    CatalogStore(db_conn, "someone-else", "media").create({"title": "Other", "status": "Planned"})
    response = ask(db_conn, {"sql": "SELECT COUNT(*) AS n FROM media_entries WHERE user_id = :user_id"})
    assert response.data == [{"n": 3}]
    assert response.metadata.visualization_type == "kpi"


def test_row_limit(db_conn, seeded):
    response = ask(db_conn, {"sql": "SELECT title FROM media_entries"}, row_limit=2)
    assert response.metadata.row_count == 2


def test_stacked_statement_never_reaches_store(db_conn, seeded):
    with pytest.raises(QueryRejectedError):
        ask(db_conn, {"sql": "SELECT * FROM media_entries; DROP TABLE media_entries;"})

    assert db_conn.execute("SELECT COUNT(*) FROM media_entries").fetchone()[0] == 3
    row = db_conn.execute("SELECT mode, error_message FROM ai_logs").fetchone()
    assert row["mode"] == "query"
    assert "DROP" in row["error_message"]


def test_no_sql_is_generation_error(db_conn):
    with pytest.raises(GenerationError, match="don't track ratings"):
        ask(db_conn, {"sql": "", "explanation": "We don't track ratings of podcasts."})


def test_bad_sql_is_execution_error(db_conn):
    with pytest.raises(QueryExecutionError):
        ask(db_conn, {"sql": "SELECT * FROM no_such_table"})


def test_successful_query_is_logged(db_conn, seeded):
    response = ask(db_conn, {"sql": STATUS_SQL})
    row = db_conn.execute("SELECT * FROM ai_logs WHERE query_id = ?", (response.query_id,)).fetchone()
    assert row["mode"] == "query"
    assert row["sql_generated"] == response.sql
