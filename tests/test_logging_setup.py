import logging
import logging.handlers

from mandelppm.util.logging_setup import configure_root_logging, get_logger


def test_console_logging_goes_to_stderr(capsys):
    configure_root_logging(level=logging.INFO, console=True, log_file=None)
    get_logger().info("render started")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "render started" in captured.err


def test_reconfigure_replaces_handlers(tmp_path):
    log_file = tmp_path / "render.log"
    logger = configure_root_logging(level=logging.DEBUG, console=True, log_file=str(log_file))
    assert len(logger.handlers) == 2
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)
    logger = configure_root_logging(level=logging.INFO, console=True, log_file=None)
    assert len(logger.handlers) == 1
    assert not logger.propagate
