import re
import threading

import pytest

from xweb import logger as logmod
from xweb.logger import Level, Logger, log


@pytest.fixture(autouse=True)
def log_path(tmp_path):
    previous = logmod.get_log_file_name()
    path = tmp_path / "WebServer.log"
    logmod.shutdown()
    logmod.set_log_file_name(str(path))
    yield path
    logmod.shutdown()
    logmod.set_log_file_name(previous)


def test_default_file_name_roundtrip(log_path):
    assert logmod.get_log_file_name() == str(log_path)
    logmod.set_log_file_name("other.log")
    assert logmod.get_log_file_name() == "other.log"


@pytest.mark.parametrize(
    "level, tag",
    [
        (Level.INFO, b"[INFO]\t"),
        (Level.WARN, b"[WARN]\t"),
        (Level.ERROR, b"[ERROR]\t"),
        (Level.FATAL, b"[FATAL]\t"),
    ],
)
def test_line_format(level, tag):
    line = log(level, "hello world")
    assert line.startswith(tag)
    assert re.match(
        rb"\[\w+\]\t\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\t\thello world\t\t",
        line,
    )
    assert line.endswith(b"\n")
    assert __file__.encode() in line


def test_debug_hidden_by_default():
    assert log(Level.DEBUG, "hello world") == b""


def test_lines_reach_the_file(log_path):
    log(Level.INFO, "hello world", "\n")
    log(Level.DEBUG, "hello world")
    log(Level.ERROR, "hello world")
    log(Level.ERROR, "hello world")
    log(Level.FATAL, "hello world")
    logmod.shutdown()
    content = log_path.read_bytes()
    assert content.count(b"hello world") == 4
    assert b"[DEBUG]" not in content
    assert content.count(b"[ERROR]") == 2


def test_context_manager_sends_once(log_path):
    entry = Logger("server.c", 10, Level.WARN)
    with entry as stream:
        stream << "abc" << 5
    assert entry.finish() == b""
    logmod.shutdown()
    content = log_path.read_bytes()
    assert content.count(b"abc5") == 1
    assert content.endswith(b"\t\tserver.c10\n")


def test_max_level_filters():
    hidden = Logger("f", 1, Level.WARN, Level.ERROR)
    hidden.stream() << "nope"
    assert hidden.finish() == b""
    shown = Logger("f", 1, Level.ERROR, Level.ERROR)
    shown.stream() << "yes"
    assert b"yes" in shown.finish()


def test_many_threads(log_path):
    def worker(n):
        for i in range(100):
            log(Level.INFO, "thread", n, " get ", i, "\n")

    threads = [threading.Thread(target=worker, args=(n + 1,)) for n in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    logmod.shutdown()
    content = log_path.read_bytes()
    assert content.count(b" get ") == 1000
    assert content.count(b"[INFO]") == 1000
    for n in range(1, 11):
        assert content.count(f"thread{n} get 99\n".encode()) == 1


def test_output_restarts_after_shutdown(log_path):
    logmod.output(b"first\n")
    logmod.shutdown()
    logmod.output(b"second\n")
    logmod.shutdown()
    assert log_path.read_bytes() == b"first\nsecond\n"