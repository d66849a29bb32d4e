import logging
import os
import sys
from pathlib import Path

from glisp import config
from glisp.interpreter import Interpreter


def test_default_prelude_root_holds_core(monkeypatch):
    monkeypatch.delenv("GLISP_PRELUDE_PATH", raising=False)
    root = config.get_prelude_root()
    assert (root / config.PRELUDE_FILE).is_file()


def test_prelude_root_accepts_a_file_path(tmp_path, monkeypatch):
    target = tmp_path / "core.glisp"
    target.write_text("", encoding="utf-8")
    monkeypatch.setenv("GLISP_PRELUDE_PATH", str(target))
    assert config.get_prelude_root() == tmp_path


def test_load_paths_split_on_pathsep(monkeypatch):
    monkeypatch.setenv("GLISP_LOAD_PATH", os.pathsep.join(["/a", "", "/b"]))
    assert config.get_load_paths() == [Path("/a"), Path("/b")]


def test_load_paths_default_to_cwd(monkeypatch):
    monkeypatch.delenv("GLISP_LOAD_PATH", raising=False)
    assert config.get_load_paths() == [Path.cwd()]


def test_recursion_limit(monkeypatch, caplog):
    monkeypatch.delenv("GLISP_RECURSION_LIMIT", raising=False)
    assert config.get_recursion_limit() is None
    monkeypatch.setenv("GLISP_RECURSION_LIMIT", "5000")
    assert config.get_recursion_limit() == 5000
    monkeypatch.setenv("GLISP_RECURSION_LIMIT", "lots")
    with caplog.at_level(logging.WARNING, logger="glisp.config"):
        assert config.get_recursion_limit() is None
    assert "GLISP_RECURSION_LIMIT" in caplog.text


def test_interpreter_leaves_recursion_limit_alone(monkeypatch):
    old = sys.getrecursionlimit()
    monkeypatch.setenv("GLISP_RECURSION_LIMIT", str(old + 1000))
    Interpreter(prelude=None)
    assert sys.getrecursionlimit() == old


def test_configure_recursion_limit(monkeypatch):
    old = sys.getrecursionlimit()
    monkeypatch.setenv("GLISP_RECURSION_LIMIT", str(old + 1000))
    try:
        config.configure_recursion_limit()
        assert sys.getrecursionlimit() == old + 1000
        config.configure_recursion_limit(old - 10)
        assert sys.getrecursionlimit() == old + 1000
    finally:
        sys.setrecursionlimit(old)


def test_log_level(monkeypatch):
    monkeypatch.delenv("GLISP_LOGLEVEL", raising=False)
    assert config.get_log_level() == logging.WARNING
    monkeypatch.setenv("GLISP_LOGLEVEL", "debug")
    assert config.get_log_level() == logging.DEBUG
    monkeypatch.setenv("GLISP_LOGLEVEL", "chatty")
    assert config.get_log_level() == logging.WARNING
