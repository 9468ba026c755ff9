from dropee import config
from dropee.utils import helpers


class TestSupabaseClient:

    def test_missing_credentials_returns_none(self, monkeypatch):
        monkeypatch.setattr(helpers, "_supabase", None)
        monkeypatch.setattr(config, "SUPABASE_URL", None)

        assert helpers.get_supabase_client() is None

    def test_client_created_once(self, monkeypatch):
        created = []
        monkeypatch.setattr(helpers, "_supabase", None)
        monkeypatch.setattr(config, "SUPABASE_URL", "https://projeto.supabase.co")
        monkeypatch.setattr(config, "SUPABASE_SERVICE_KEY", "service-key")
        monkeypatch.setattr(helpers, "create_client", lambda url, key: created.append((url, key)) or object())

        first = helpers.get_supabase_client()
        assert helpers.get_supabase_client() is first
        assert created == [("https://projeto.supabase.co", "service-key")]

    def test_creation_failure_returns_none(self, monkeypatch):
        def _boom(url, key):
            raise ValueError("chave inválida")

        monkeypatch.setattr(helpers, "_supabase", None)
        monkeypatch.setattr(config, "SUPABASE_URL", "https://projeto.supabase.co")
        monkeypatch.setattr(config, "SUPABASE_SERVICE_KEY", "service-key")
        monkeypatch.setattr(helpers, "create_client", _boom)

        assert helpers.get_supabase_client() is None


class TestDbConnection:

    def test_missing_database_url(self, monkeypatch):
        monkeypatch.setattr(config, "DATABASE_URL", None)
        assert helpers.get_db_connection() is None
