"""Tests for printbuf utility modules."""

import logging

import pytest


class TestGetLogger:
    """Tests for get_logger."""

    def test_prefixes_name(self) -> None:
        from printbuf.utils.logger import get_logger

        assert get_logger("mymodule").name == "printbuf.mymodule"

    def test_keeps_package_names(self) -> None:
        from printbuf.utils.logger import get_logger

        assert get_logger("printbuf").name == "printbuf"
        assert get_logger("printbuf.core").name == "printbuf.core"

    def test_returns_stdlib_logger(self) -> None:
        from printbuf.utils import get_logger

        assert isinstance(get_logger(__name__), logging.Logger)

    def test_growth_is_logged_at_debug(self, caplog) -> None:
        from printbuf import Printbuf

        with caplog.at_level(logging.DEBUG, logger="printbuf"):
            Printbuf().append_string("hello")
        assert any("grew buffer" in record.message for record in caplog.records)


class TestPackageLogger:
    """Package-level logger setup."""

    @pytest.fixture(autouse=True)
    def _restore_level(self):
        yield
        logging.getLogger("printbuf").setLevel(logging.NOTSET)

    def test_has_null_handler(self) -> None:
        import printbuf.utils.logger  # noqa: F401

        handlers = logging.getLogger("printbuf").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)

    def test_set_log_level_by_name(self) -> None:
        from printbuf.utils import set_log_level

        set_log_level("debug")
        assert logging.getLogger("printbuf").level == logging.DEBUG
        assert logging.getLogger("printbuf.core").getEffectiveLevel() == logging.DEBUG

    def test_set_log_level_by_number(self) -> None:
        from printbuf.utils import set_log_level

        set_log_level(logging.ERROR)
        assert logging.getLogger("printbuf").level == logging.ERROR

    def test_set_log_level_leaves_root_alone(self) -> None:
        from printbuf.utils import set_log_level

        root_level = logging.getLogger().level
        set_log_level("WARNING")
        assert logging.getLogger().level == root_level

    def test_unknown_level_rejected(self) -> None:
        from printbuf.utils import set_log_level

        with pytest.raises(ValueError, match="unknown log level"):
            set_log_level("chatty")
