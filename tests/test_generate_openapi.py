import json

import pytest

from aurora_tasks.generate_openapi import generate_openapi, main


class TestGenerateOpenAPI:
    def test_writes_schema_with_tags(self, tmp_path):
        out = tmp_path / "interfaces" / "openapi.json"
        path = generate_openapi(str(out))
        assert path == str(out)

        schema = json.loads(out.read_text(encoding="utf-8"))
        assert schema["info"]["title"] == "Aurora Tasks"
        assert {t["name"] for t in schema["tags"]} >= {"health", "tasks"}
        assert "/api/v1/tasks/" in schema["paths"]
        assert "/api/v1/tasks/{task_id}/toggle" in schema["paths"]
        assert "/api/v1/tasks/focus" in schema["paths"]

    def test_main_prints_path(self, tmp_path, capsys):
        out = tmp_path / "schema.json"
        main([str(out)])
        assert out.exists()
        assert str(out) in capsys.readouterr().out

    def test_does_not_touch_configured_storage(self, tmp_path, monkeypatch):
        db_path = tmp_path / "data" / "aurora.db"
        monkeypatch.setenv("PERSISTENCE_BACKEND", "sqlite")
        monkeypatch.setenv("SQLITE_DB_PATH", str(db_path))
        generate_openapi(str(tmp_path / "openapi.json"))
        assert not db_path.exists()


class TestModuleApp:
    def test_app_is_built_once_on_first_access(self):
        from aurora_tasks import main as main_module

        assert main_module.app is main_module.app
        assert main_module.app.state.store.tasks is not None

    def test_unknown_attribute(self):
        from aurora_tasks import main as main_module

        with pytest.raises(AttributeError):
            main_module.not_there
