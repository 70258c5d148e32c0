import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional, Set

from config.settings import SNAPSHOTS_DIR
from monitor.export_reader import load_followers_and_following, read_json

logger = logging.getLogger(__name__)


def now_slug(now: Optional[datetime] = None) -> str:
    # Local time, one second granularity
    return (now or datetime.now()).strftime('%Y%m%d_%H%M%S')


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_snapshot(export_dir: str, label: str, followers: Set[str], following: Set[str],
                   created_at: Optional[str] = None) -> dict:
    return {
        'created_at': created_at or utc_timestamp(),
        'label': label,
        'export_dir': os.path.abspath(export_dir),
        'counts': {'followers': len(followers), 'following': len(following)},
        'followers': sorted(followers),
        'following': sorted(following),
    }


def save_snapshot(export_dir: str, label: str, snapshots_dir: str = SNAPSHOTS_DIR) -> str:
    """
    Extracts followers/following from an export and writes them to
    <snapshots_dir>/<YYYYMMDD_HHMMSS>__<label>.json.
    Returns the path of the written snapshot.
    """
    followers, following = load_followers_and_following(export_dir)
    snapshot = build_snapshot(export_dir, label, followers, following)

    os.makedirs(snapshots_dir, exist_ok=True)
    out_path = os.path.join(snapshots_dir, f'{now_slug()}__{label}.json')
    if os.path.exists(out_path):
        logger.warning(f'Snapshot {out_path} already exists and will be overwritten')

    with open(out_path, 'w', encoding='utf-8') as f:
        json.dump(snapshot, f, indent=2, ensure_ascii=False)

    logger.info(f"Snapshot '{label}' saved to {out_path}: followers={snapshot['counts']['followers']}, following={snapshot['counts']['following']}")
    return out_path


def load_snapshot(path: str) -> dict:
    return read_json(path)
