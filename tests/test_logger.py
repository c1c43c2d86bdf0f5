import logging

from simpledb.utils.logger import _build_handler, get_logger


def test_loggers_share_one_package_handler():
    first = get_logger("simpledb.db.database")
    second = get_logger("simpledb.db.connection")
    package = logging.getLogger("simpledb")
    assert first.name == "simpledb.db.database"
    assert second.name == "simpledb.db.connection"
    assert len(package.handlers) == 1
    assert package.propagate


def test_stdout_handler_is_opt_in():
    assert isinstance(_build_handler(False), logging.NullHandler)
    handler = _build_handler(True)
    assert isinstance(handler, logging.StreamHandler)
    assert "%(levelname)-8s" in handler.formatter._fmt
