# tests/core/test_config_logging.py
import logging

import pytest

from seo_grader.utils.config_loader import CONFIG, get_nested_config
from seo_grader.utils.configure_logging import LogWithTqdm, configure_logger
from seo_grader.utils.path_utils import PathUtils


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    names = ["seo_grader.test_module", "noisy.library"]
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, lvl in levels.items():
        logging.getLogger(name).setLevel(lvl)


def test_settings_file_is_packaged():
    assert PathUtils.get_settings_file().is_file()
    assert "logging" in CONFIG


def test_get_nested_config():
    assert get_nested_config("keywords.similarity_threshold") == 0.3
    assert get_nested_config("recommendations.max_quick_wins") == 5
    assert get_nested_config("keywords.missing", 7) == 7
    assert get_nested_config("keywords.similarity_threshold.deeper", "x") == "x"
    assert get_nested_config("nothing.here") is None


def test_configure_logger(restore_logging):
    configure_logger(
        general_level="DEBUG",
        module_specific_levels={"seo_grader.test_module": "ERROR"},
        silenced_loggers={"noisy.library": "CRITICAL"},
    )
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], LogWithTqdm)
    assert logging.getLogger("seo_grader.test_module").level == logging.ERROR
    assert logging.getLogger("noisy.library").level == logging.CRITICAL


def test_unknown_level_name_falls_back(restore_logging):
    configure_logger(general_level="CHATTY", module_specific_levels={}, silenced_loggers={})
    assert logging.getLogger().level == logging.INFO


def test_handler_writes_through_tqdm(capsys, restore_logging):
    configure_logger(general_level="INFO", module_specific_levels={}, silenced_loggers={})
    logging.getLogger("seo_grader.test_module").warning("visible line")
    assert "visible line" in capsys.readouterr().err
