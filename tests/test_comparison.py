"""Tests for the relationship comparison."""

import pytest

from followback.comparison import FANS, GHOSTS, MUTUALS, analyze_relationships, compare
from followback.models import NamedCollection, UserRecord

def _collection(name, usernames):
    return NamedCollection(name, [UserRecord(u, f"https://x/{name}/{u}") for u in usernames])

def _usernames(collection):
    return [r.username for r in collection]

def test_ghosts_fans_mutuals():
    following = _collection("following", ["alice", "bob", "carol"])
    followers = _collection("followers", ["bob", "dan"])

    result = compare(following, followers)

    assert _usernames(result.only_in_a) == ["alice", "carol"]
    assert _usernames(result.only_in_b) == ["dan"]
    assert _usernames(result.both) == ["bob"]

def test_both_keeps_a_copy():
    following = _collection("following", ["bob"])
    followers = _collection("followers", ["bob"])
    result = compare(following, followers)
    assert result.both.records[0].profile_url == "https://x/following/bob"

@pytest.mark.parametrize("a,b", [
    ([], []),
    (["a"], []),
    ([], ["b"]),
    (["a", "b", "c"], ["c", "d", "a"]),
    (["x", "y"], ["x", "y"]),
])
def test_partitions_are_exhaustive_and_disjoint(a, b):
    result = compare(_collection("a", a), _collection("b", b))
    parts = [set(_usernames(p)) for p in result.partitions]
    assert set().union(*parts) == set(a) | set(b)
    assert sum(len(p) for p in parts) == len(set(a) | set(b))

def test_order_follows_sources():
    result = compare(_collection("a", ["z", "m", "a"]), _collection("b", ["q", "m", "b"]))
    assert _usernames(result.only_in_a) == ["z", "a"]
    assert _usernames(result.only_in_b) == ["q", "b"]

def test_partition_names():
    result = compare(_collection("following", []), _collection("followers", []))
    assert list(result.counts()) == ["following_only", "followers_only", "both"]

def test_analyze_relationships():
    collections = {
        "followers_1": _collection("followers_1", ["bob", "dan"]),
        "following": _collection("following", ["alice", "bob", "carol"]),
        "close_friends": _collection("close_friends", ["erin"]),
    }
    report = analyze_relationships(collections)

    assert report.has_data
    assert report.following_label == "following"
    assert report.followers_label == "followers_1"
    assert report.ghosts.name == GHOSTS
    assert _usernames(report.ghosts) == ["alice", "carol"]
    assert report.fans.name == FANS
    assert _usernames(report.fans) == ["dan"]
    assert report.mutuals.name == MUTUALS
    assert _usernames(report.mutuals) == ["bob"]

def test_insufficient_data():
    report = analyze_relationships({"followers": _collection("followers", ["bob"])})
    assert not report.has_data
    assert report.result is None
    assert report.ghosts is None
    assert report.followers_label == "followers"
    assert report.following_label is None
    assert "Insufficient data" in report.guidance

def test_partition_names_avoid_extracted_labels():
    collections = {
        "followers": _collection("followers", ["bob"]),
        "following": _collection("following", ["alice", "bob"]),
        "ghosts": _collection("ghosts", ["casper"]),
        "mutuals": _collection("mutuals", ["zed"]),
        "mutuals (2)": _collection("mutuals (2)", ["zed"]),
    }
    report = analyze_relationships(collections)

    assert list(report.result.counts()) == ["ghosts (2)", FANS, "mutuals (3)"]
    assert _usernames(report.ghosts) == ["alice"]
    assert _usernames(collections["ghosts"]) == ["casper"]
