import json
import os

import pytest


def followers_payload(usernames):
    return [
        {
            'title': '',
            'media_list_data': [],
            'string_list_data': [
                {'href': f'https://www.instagram.com/{u}', 'value': u, 'timestamp': 1700000000}
            ],
        }
        for u in usernames
    ]


def following_payload(usernames):
    return {'relationships_following': followers_payload(usernames)}


def write_json(path, data):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f)
    return str(path)


@pytest.fixture
def make_export(tmp_path):
    """Builds an export folder; nested=True uses the followers_and_following/ layout."""
    def _make(name, followers, following=(), nested=False):
        export_dir = tmp_path / name
        base = export_dir / 'followers_and_following' if nested else export_dir
        write_json(str(base / 'followers_1.json'), followers_payload(followers))
        write_json(str(base / 'following.json'), following_payload(following))
        return str(export_dir)
    return _make
