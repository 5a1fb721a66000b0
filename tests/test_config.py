"""OpenAI settings: system_config overrides the environment."""

from ai_mode.llm.client import get_ai_client, get_ai_model


def test_model_from_environment(db_conn, monkeypatch):
    monkeypatch.setattr("src.core.config.app_config.OPENAI_MODEL", "env-model")
    assert get_ai_model(db_conn) == "env-model"


def test_database_setting_wins(db_conn, monkeypatch):
    monkeypatch.setattr("src.core.config.app_config.OPENAI_MODEL", "env-model")
    db_conn.execute("INSERT INTO system_config (key, value) VALUES ('openai_model', 'db-model')")
    db_conn.commit()
    assert get_ai_model(db_conn) == "db-model"


def test_no_key_no_client(db_conn, monkeypatch):
    monkeypatch.setattr("src.core.config.app_config.OPENAI_API_KEY", "")
    assert get_ai_client(db_conn) is None


def test_key_from_database(db_conn, monkeypatch):
    monkeypatch.setattr("src.core.config.app_config.OPENAI_API_KEY", "")
    db_conn.execute("INSERT INTO system_config (key, value) VALUES ('openai_api_key', 'sk-test')")
    db_conn.commit()
    assert get_ai_client(db_conn).api_key == "sk-test"
