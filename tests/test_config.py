import logging

from catalog.core.config import Settings
from catalog.core.logging import RequestLogFilter, get_logger, setup_logging


class TestSettings:
    def test_authors_path_with_prefix(self):
        assert Settings(CATALOG_PREFIX="/catalog/").authors_path == "/catalog/authors"

    def test_authors_path_default(self):
        assert Settings(CATALOG_PREFIX="").authors_path == "/authors"

    def test_database_url_from_env(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./other.db")
        assert Settings().DATABASE_URL == "sqlite+aiosqlite:///./other.db"


class TestLogging:
    def test_filter_adds_request_id(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        assert RequestLogFilter().filter(record) is True
        assert record.request_id == "-"

    def test_setup_logging_accepts_level_names(self):
        setup_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
        setup_logging("not-a-level")
        assert logging.getLogger().level == logging.INFO
        setup_logging(logging.WARNING)

    def test_get_logger_without_request(self):
        logger = get_logger("catalog.test")
        assert logger.extra == {}
