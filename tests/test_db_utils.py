import os

import pytest

from db.db_utils import (
    add_comparison_report, add_snapshot_record, count_comparison_reports,
    get_latest_comparison_report, get_snapshot_record_by_path, upsert_snapshot_record,
)
from db.models import dispose_session_factory, make_session_factory


@pytest.fixture
def db(tmp_path):
    session_factory = make_session_factory(f"sqlite:///{tmp_path / 'db' / 'history.db'}")
    with session_factory() as session:
        yield session


def _snapshot(label, followers=1, following=2):
    return {'label': label, 'export_dir': '/exports/' + label, 'counts': {'followers': followers, 'following': following}}


def test_make_session_factory_creates_parent_dir(tmp_path):
    make_session_factory(f"sqlite:///{tmp_path / 'nested' / 'dir' / 'h.db'}")
    assert os.path.isdir(str(tmp_path / 'nested' / 'dir'))


def test_add_and_get_snapshot_record(db, tmp_path):
    path = str(tmp_path / 'snap.json')
    record = add_snapshot_record(db, _snapshot('old', 5, 6), path)
    assert record.id is not None
    found = get_snapshot_record_by_path(db, path)
    assert found.id == record.id
    assert found.followers_count == 5
    assert found.following_count == 6
    assert get_snapshot_record_by_path(db, str(tmp_path / 'other.json')) is None


def test_upsert_snapshot_record_reuses_row(db, tmp_path):
    path = str(tmp_path / 'snap.json')
    first = upsert_snapshot_record(db, _snapshot('old', 1), path)
    second = upsert_snapshot_record(db, _snapshot('old', 9), path)
    assert first.id == second.id
    assert second.followers_count == 9


def test_comparison_reports(db, tmp_path):
    assert get_latest_comparison_report(db) is None
    old = add_snapshot_record(db, _snapshot('old'), str(tmp_path / 'o.json'))
    new = add_snapshot_record(db, _snapshot('new'), str(tmp_path / 'n.json'))
    add_comparison_report(db, old.id, new.id, str(tmp_path / 'r1.html'), 1, 0)
    add_comparison_report(db, old.id, new.id, str(tmp_path / 'r2.html'), 2, 3)
    assert count_comparison_reports(db) == 2
    latest = get_latest_comparison_report(db)
    assert latest.report_path == str(tmp_path / 'r2.html')
    assert latest.new_snapshot.label == 'new'


def test_dispose_session_factory(tmp_path):
    session_factory = make_session_factory(f"sqlite:///{tmp_path / 'h.db'}")
    with session_factory() as session:
        add_snapshot_record(session, _snapshot('old'), str(tmp_path / 'o.json'))

    dispose_session_factory(session_factory)

    # A disposed engine reconnects on next use
    with session_factory() as session:
        assert get_snapshot_record_by_path(session, str(tmp_path / 'o.json')) is not None
