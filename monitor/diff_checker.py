import os
from typing import Dict
import logging

from config.settings import REPORTS_DIR
from monitor.export_reader import normalize_username
from monitor.snapshot_writer import load_snapshot
from report.html_report import make_report_html, report_file_name, write_report

logger = logging.getLogger(__name__)


def _follower_set(snapshot: Dict) -> set:
    # Snapshot files may have been edited by hand, so normalize again
    usernames = (normalize_username(u) for u in snapshot.get('followers') or [])
    return {u for u in usernames if u}


def compare_followers(old_data: Dict, new_data: Dict) -> Dict:
    """
    Compares two snapshots and identifies follower changes.
    old_data and new_data are snapshot dictionaries containing:
    - 'followers': list of usernames
    - 'counts': {'followers': int, 'following': int} (optional)
    """
    old_followers = _follower_set(old_data)
    new_followers = _follower_set(new_data)
    old_counts = old_data.get('counts') or {}
    new_counts = new_data.get('counts') or {}

    diff = {
        'unfollowers': sorted(old_followers - new_followers),
        'new_followers': sorted(new_followers - old_followers),
        'old_count': len(old_followers),
        'new_count': len(new_followers),
        'followers_count_change': new_counts.get('followers', 0) - old_counts.get('followers', 0),
        'following_count_change': new_counts.get('following', 0) - old_counts.get('following', 0),
    }

    logger.info(f"Follower comparison: New={len(diff['new_followers'])}, Unfollowers={len(diff['unfollowers'])}, Followers Change={diff['followers_count_change']}")

    return diff


def compare_snapshots(old_snapshot_path: str, new_snapshot_path: str, reports_dir: str = REPORTS_DIR) -> Dict:
    """
    Loads two snapshot files (older first), diffs their followers and writes
    the HTML report. Returns the diff with an added 'report_path'.
    """
    diff = compare_followers(load_snapshot(old_snapshot_path), load_snapshot(new_snapshot_path))

    report_path = os.path.join(reports_dir, report_file_name(old_snapshot_path, new_snapshot_path))
    write_report(report_path, make_report_html(
        diff['unfollowers'], diff['new_followers'], diff['old_count'], diff['new_count']
    ))

    diff['report_path'] = report_path
    return diff
