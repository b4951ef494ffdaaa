"""Test fixtures and configuration."""

import json
import zipfile

import pytest

from followback.config import Config

@pytest.fixture
def settings():
    """Inline extraction without a progress bar."""
    config = Config()
    config.max_workers = 1
    config.show_progress = False
    return config

@pytest.fixture
def followers_data():
    """followers_1.json as exported: a bare list of string_list_data groups."""
    return [
        {
            "title": "",
            "media_list_data": [],
            "string_list_data": [
                {"href": "https://www.instagram.com/bob", "value": "bob", "timestamp": 1700000000}
            ]
        },
        {
            "title": "",
            "media_list_data": [],
            "string_list_data": [
                {"href": "https://www.instagram.com/dan", "value": "dan", "timestamp": 1700000100}
            ]
        }
    ]

@pytest.fixture
def following_data():
    """following.json as exported: usernames in titles, links under /_u/."""
    return {
        "relationships_following": [
            {
                "title": "alice",
                "string_list_data": [
                    {"href": "https://www.instagram.com/_u/alice", "timestamp": 1690000000}
                ]
            },
            {
                "title": "bob",
                "string_list_data": [
                    {"href": "https://www.instagram.com/_u/bob", "timestamp": 1690000100}
                ]
            },
            {
                "title": "carol",
                "string_list_data": [
                    {"href": "https://www.instagram.com/_u/carol", "timestamp": 1690000200}
                ]
            }
        ]
    }

@pytest.fixture
def close_friends_data():
    return {
        "relationships_close_friends": [
            {"string_list_data": [{"href": "https://www.instagram.com/erin", "value": "erin", "timestamp": 0}]}
        ]
    }

@pytest.fixture
def make_zip(tmp_path):
    """Build an export ZIP from a mapping of entry name -> JSON data (or raw text)."""
    def _make_zip(files, name="instagram_data.zip"):
        path = tmp_path / name
        with zipfile.ZipFile(path, 'w') as zf:
            for entry_name, content in files.items():
                if entry_name.endswith('/'):
                    zf.writestr(entry_name, '')
                elif isinstance(content, str):
                    zf.writestr(entry_name, content)
                else:
                    zf.writestr(entry_name, json.dumps(content))
        return path
    return _make_zip

@pytest.fixture
def export_zip(make_zip, followers_data, following_data, close_friends_data):
    """A small but complete export."""
    return make_zip({
        "connections/": None,
        "connections/followers_and_following/followers_1.json": followers_data,
        "connections/followers_and_following/following.json": following_data,
        "connections/followers_and_following/close_friends.json": close_friends_data,
        "connections/followers_and_following/blocked_profiles.json": {"relationships_blocked_users": []},
        "__MACOSX/connections/._followers_1.json": "not json",
        "connections/.DS_Store.json": "not json",
        "media/photo.jpg": "binary",
    })
