import logging

from soundalgebra import logging_utils
from soundalgebra.logging_utils import LOG_DIR_ENV, configure_logging, get_log_dir, get_log_path


def test_file_logging_is_off_without_env(monkeypatch) -> None:
    monkeypatch.delenv(LOG_DIR_ENV, raising=False)
    assert get_log_dir() is None
    assert get_log_path() is None


def test_log_path_uses_env_override(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(LOG_DIR_ENV, str(tmp_path))
    assert get_log_dir() == tmp_path
    assert get_log_path() == tmp_path / "soundalgebra.log"


def test_configure_logging_adds_file_handler(tmp_path, monkeypatch) -> None:
    target = tmp_path / "logs"
    monkeypatch.setenv(LOG_DIR_ENV, str(target))
    logger = logging.getLogger("soundalgebra")
    try:
        configure_logging(force=True)
        handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert handlers
        assert target.is_dir()
        logging.getLogger("soundalgebra.test").warning("written to file")
        for handler in handlers:
            handler.flush()
        assert "written to file" in (target / "soundalgebra.log").read_text(encoding="utf-8")
    finally:
        monkeypatch.delenv(LOG_DIR_ENV)
        configure_logging(force=True)
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)


def test_configure_logging_runs_once() -> None:
    logger = logging.getLogger("soundalgebra")
    count = len(logger.handlers)
    configure_logging()
    assert len(logger.handlers) == count
    assert logging_utils._logging_configured is True


def test_level_prefix() -> None:
    assert logging_utils._level_prefix(logging.WARNING) == "⚠️"
    assert logging_utils._level_prefix(5) == ""
