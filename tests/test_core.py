"""
Tests for settings, logging setup, database wiring and the envelope
helpers.
"""

import json
import logging
import os

import pytest
from fastapi.exceptions import RequestValidationError

from contact_manager_api.app.core.config import Settings
from contact_manager_api.app.core.db import get_database_path, init_db, open_connection
from contact_manager_api.app.core.logging_config import JSONFormatter, setup_logging
from contact_manager_api.app.main import validation_message
from contact_manager_api.app.schemas.response import HTTP_STATUS_FOR_CODE, ResponseCode, send_response


class TestSettings:
    def test_development_defaults_to_debug(self):
        assert Settings(environment="development", log_level="").log_level == "DEBUG"

    def test_production_defaults_to_warning(self):
        settings = Settings(environment="production", log_level="")

        assert settings.is_production
        assert settings.log_level == "WARNING"

    def test_explicit_log_level_wins(self):
        assert Settings(environment="production", log_level="INFO").log_level == "INFO"

    def test_defaults(self):
        settings = Settings()

        assert settings.port == int(os.getenv("PORT", "3000"))
        assert settings.api_prefix == os.getenv("API_PREFIX", "/api")

    def test_cors_origins_parsed_from_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

        assert Settings().cors_origins == ["http://a.test", "http://b.test"]


class TestDatabase:
    def test_absolute_and_memory_paths_kept(self, tmp_path):
        absolute = str(tmp_path / "x.db")

        assert get_database_path(Settings(database_url=absolute)) == absolute
        assert get_database_path(Settings(database_url=":memory:")) == ":memory:"

    def test_relative_path_resolved(self):
        path = get_database_path(Settings(database_url="contacts.db"))

        assert os.path.isabs(path)
        assert path.endswith("contacts.db")

    def test_init_db_is_repeatable(self, tmp_path):
        conn = open_connection(Settings(database_url=str(tmp_path / "x.db")))
        try:
            init_db(conn, unique_email=True)
            init_db(conn, unique_email=True)
            indexes = [row["name"] for row in conn.execute("PRAGMA index_list(contacts)")]
            assert "idx_contacts_email" in indexes
            mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
            assert mode == "wal"
        finally:
            conn.close()


class TestLogging:
    @pytest.fixture
    def bare_root(self, monkeypatch):
        """Root logger with no handlers for the duration of the test body.

        pytest attaches its capture handlers at the start of each test
        phase, so the handler list is swapped out lazily from inside the
        test rather than during fixture setup.
        """
        root = logging.getLogger()
        added = []

        def isolate():
            monkeypatch.setattr(root, "handlers", added)
            monkeypatch.setattr(root, "level", root.level)
            return root

        yield isolate
        for handler in added:
            handler.close()

    def test_json_formatter_includes_extra(self):
        record = logging.LogRecord("contacts", logging.ERROR, __file__, 1, "Error %s", ("x",), None)
        record.id = 5

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "Error x"
        assert entry["level"] == "ERROR"
        assert entry["logger"] == "contacts"
        assert entry["id"] == 5

    def test_console_only_without_log_dir(self, bare_root):
        root = bare_root()
        setup_logging("warning")

        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_file_handlers(self, bare_root, tmp_path):
        root = bare_root()
        log_dir = tmp_path / "logs"
        setup_logging("DEBUG", str(log_dir))

        logging.getLogger("contacts.test").info("kept", extra={"count": 2})
        logging.getLogger("contacts.test").error("failed", extra={"id": 9})
        for handler in root.handlers:
            handler.flush()

        all_lines = (log_dir / "all.log").read_text(encoding="utf-8").splitlines()
        error_lines = (log_dir / "error.log").read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["message"] for line in all_lines] == ["kept", "failed"]
        assert len(error_lines) == 1
        assert json.loads(error_lines[0])["id"] == 9

    def test_configures_once(self, bare_root):
        root = bare_root()
        setup_logging("INFO")
        setup_logging("INFO")

        assert len(root.handlers) == 1


class TestEnvelope:
    def test_data_omitted_when_none(self):
        response = send_response(ResponseCode.SUCCESS, "done")

        assert response.status_code == 200
        assert json.loads(response.body) == {"code": 0, "msg": "done"}

    def test_empty_list_kept(self):
        response = send_response(ResponseCode.SUCCESS, None, [])

        assert json.loads(response.body) == {"code": 0, "msg": None, "data": []}

    @pytest.mark.parametrize(
        "code, status",
        [
            (ResponseCode.VALIDATION_ERROR, 400),
            (ResponseCode.NOT_FOUND, 404),
            (ResponseCode.DATABASE_ERROR, 500),
        ],
    )
    def test_failure_status(self, code, status):
        assert send_response(code, "x").status_code == status

    def test_network_code_is_reserved_negative(self):
        assert ResponseCode.NETWORK_ERROR == -1

    def test_network_code_has_no_http_status(self):
        assert ResponseCode.NETWORK_ERROR not in HTTP_STATUS_FOR_CODE
        assert set(HTTP_STATUS_FOR_CODE) == {
            ResponseCode.SUCCESS,
            ResponseCode.VALIDATION_ERROR,
            ResponseCode.NOT_FOUND,
            ResponseCode.DATABASE_ERROR,
        }


class TestValidationMessage:
    def test_path_error(self):
        exc = RequestValidationError(
            [{"type": "int_parsing", "loc": ("path", "contact_id"), "input": "abc"}]
        )

        assert validation_message(exc) == "Invalid contact ID provided"

    def test_required_field(self):
        exc = RequestValidationError([{"type": "missing", "loc": ("body", "phone"), "input": {}}])

        assert validation_message(exc) == "Required field is missing"

    def test_wrong_type_for_optional_field(self):
        exc = RequestValidationError([{"type": "string_type", "loc": ("body", "email"), "input": 5}])

        assert validation_message(exc) == "Invalid input data provided"

    def test_blank_required_field(self):
        exc = RequestValidationError(
            [{"type": "value_error", "loc": ("body", "name"), "input": "   "}]
        )

        assert validation_message(exc) == "Required field is missing"
