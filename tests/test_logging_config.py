import logging

from pet_catalog.app.core.logging_config import setup_logging


def test_setup_logging_writes_to_file(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    logfile = tmp_path / "logs" / "pets.log"

    setup_logging("debug", str(logfile))
    try:
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        logging.getLogger("pet_catalog.test").info("Inserted pet %s", 1)
        for handler in root.handlers:
            handler.flush()
        assert "[INFO] pet_catalog.test: Inserted pet 1" in logfile.read_text(encoding="utf-8")

        # second call keeps the existing handlers
        setup_logging("INFO")
        assert len(root.handlers) == 2
    finally:
        for handler in root.handlers:
            handler.close()


def test_unknown_level_falls_back_to_info(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    setup_logging("chatty")
    assert root.level == logging.INFO
