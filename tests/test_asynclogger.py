import time

import pytest

from xweb.asynclogger import AsyncLogger


def test_rejects_short_name():
    with pytest.raises(ValueError):
        AsyncLogger("a")


def test_lines_written_in_order_after_stop(tmp_path):
    path = tmp_path / "app.log"
    lines = [f"line {i}\n".encode() for i in range(500)]
    logger = AsyncLogger(str(path), flush_interval=10)
    logger.start()
    assert logger.running
    for line in lines:
        logger.append(line)
    logger.stop()
    assert not logger.running
    assert path.read_bytes() == b"".join(lines)


def test_buffer_swap_keeps_every_line(tmp_path):
    path = tmp_path / "app.log"
    lines = [f"{i:04d}\n".encode() for i in range(300)]
    with AsyncLogger(str(path), flush_interval=10, buffer_size=64) as logger:
        for line in lines:
            logger.append(line)
    assert path.read_bytes() == b"".join(lines)


def test_double_start_raises(tmp_path):
    logger = AsyncLogger(str(tmp_path / "app.log"))
    logger.start()
    try:
        with pytest.raises(RuntimeError):
            logger.start()
    finally:
        logger.stop()
    assert not logger.running