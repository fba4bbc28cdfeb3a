import threading

from xweb.latch import CountDownLatch


def test_wait_times_out_while_count_positive():
    latch = CountDownLatch(1)
    assert latch.wait(timeout=0.05) is False


def test_wait_returns_immediately_at_zero():
    latch = CountDownLatch(0)
    assert latch.wait(timeout=0.05) is True


def test_count_down_releases_waiter_from_other_thread():
    latch = CountDownLatch(2)
    results = []

    def waiter():
        results.append(latch.wait(timeout=5))

    t = threading.Thread(target=waiter)
    t.start()
    latch.count_down()
    latch.count_down()
    t.join(timeout=5)
    assert results == [True]
    assert latch.count == 0
    assert latch.wait(timeout=0.01) is True


def test_count_decreases():
    latch = CountDownLatch(3)
    latch.count_down()
    assert latch.count == 2
    assert latch.wait(timeout=0.01) is False