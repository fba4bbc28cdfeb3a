import pytest

from xweb.trie import Trie


class Data:
    def __init__(self, label):
        self.label = label


@pytest.fixture
def trie():
    t = Trie()
    t.add("/hello", Data("1"))
    t.add("/hello/world", Data("2"))
    return t


def test_search_existing_key_then_get(trie):
    assert trie.search("/hello", lambda d: True)
    assert trie.get("/hello").label == "1"


def test_search_missing_key_fails(trie):
    assert not trie.search("/hello/hello", lambda d: True)


def test_search_missing_key_with_rejecting_predicate_fails(trie):
    assert not trie.search("/hello/hello", lambda d: False)


def test_search_longer_key(trie):
    assert trie.search("/hello/world", lambda d: True)
    assert trie.get("/hello/world").label == "2"


def test_predicate_rejection_hides_existing_key(trie):
    assert not trie.search("/hello", lambda d: False)


def test_predicate_sees_stored_value(trie):
    assert trie.search("/hello/world", lambda d: d.label == "2")
    assert not trie.search("/hello/world", lambda d: d.label == "1")


def test_prefix_that_is_not_a_key_is_absent(trie):
    assert not trie.search("/hel", lambda d: True)
    with pytest.raises(KeyError):
        trie.get("/hel")


def test_empty_key_is_never_found(trie):
    assert not trie.search("", lambda d: True)
    with pytest.raises(KeyError):
        trie.get("")


def test_add_overwrites_value(trie):
    trie.add("/hello", Data("new"))
    assert trie.get("/hello").label == "new"


def test_non_ascii_key_rejected():
    t = Trie()
    with pytest.raises(ValueError):
        t.add("/héllo", Data("x"))
    assert not t.search("/h", lambda d: True)


def test_reset_removes_all(trie):
    trie.reset()
    assert not trie.search("/hello", lambda d: True)
    with pytest.raises(KeyError):
        trie.get("/hello/world")


def test_search_on_empty_trie():
    assert not Trie().search("/a", lambda d: True)