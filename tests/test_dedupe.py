from followback.dedupe import dedupe
from followback.models import UserRecord

def _record(username, timestamp=0):
    return UserRecord(username, f"https://x/{username}", timestamp)

def test_last_occurrence_wins():
    records = [_record("alice", 1), _record("bob", 2), _record("alice", 3)]
    result = dedupe(records)
    assert [r.username for r in result] == ["alice", "bob"]
    assert result[0].event_timestamp == 3

def test_idempotent():
    records = [_record("a"), _record("b", 1), _record("a", 2), _record("c"), _record("b", 3)]
    once = dedupe(records)
    assert dedupe(once) == once

def test_unique_usernames():
    result = dedupe([_record(name) for name in "abcabcab"])
    usernames = [r.username for r in result]
    assert len(usernames) == len(set(usernames)) == 3

def test_empty():
    assert dedupe([]) == []
