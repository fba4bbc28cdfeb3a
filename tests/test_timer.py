from xweb.channel import Channel
from xweb.timer import TimerManager, TimerNode


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def test_expire_time_is_offset_by_timeout():
    clock = FakeClock()
    base = TimerNode(None, 0, clock)
    node = TimerNode(None, 250, clock)
    assert node.expire_time - base.expire_time == 250


def test_is_valid_until_deadline():
    clock = FakeClock()
    node = TimerNode(None, 250, clock)
    clock.advance(0.2)
    assert node.is_valid() is True
    assert node.deleted is False
    clock.advance(0.1)
    assert node.is_valid() is False
    assert node.deleted is True


def test_update_moves_deadline():
    clock = FakeClock()
    node = TimerNode(None, 100, clock)
    clock.advance(0.5)
    assert node.is_valid() is False
    node.update(500)
    assert node.is_valid() is True


def test_clear_req_detaches_channel():
    channel = Channel()
    node = TimerNode(channel, 100, FakeClock())
    assert node.channel is channel
    node.clear_req()
    assert node.channel is None
    assert node.deleted is True


def test_manager_drops_expired_timers():
    clock = FakeClock()
    manager = TimerManager(clock)
    for timeout in (100, 200, 300):
        manager.add_timer(None, timeout)
    assert len(manager) == 3
    clock.advance(0.15)
    manager.handle_expired_event()
    assert len(manager) == 2
    clock.advance(1)
    manager.handle_expired_event()
    assert len(manager) == 0


def test_manager_drops_deleted_front():
    manager = TimerManager(FakeClock())
    first = manager.add_timer(None, 1000)
    manager.add_timer(None, 2000)
    first.clear_req()
    manager.handle_expired_event()
    assert len(manager) == 1


def test_manager_stops_at_live_front():
    manager = TimerManager(FakeClock())
    manager.add_timer(None, 100)
    later = manager.add_timer(None, 1000)
    later.clear_req()
    manager.handle_expired_event()
    assert len(manager) == 2


def test_add_timer_returns_node_for_channel():
    channel = Channel()
    node = TimerManager(FakeClock()).add_timer(channel, 10)
    assert node.channel is channel
    assert node.deleted is False