import logging
import os
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from config.settings import SNAPSHOTS_DIR, REPORTS_DIR
from db.db_utils import (upsert_snapshot_record, add_comparison_report, get_latest_comparison_report,
                         count_comparison_reports)
from monitor.diff_checker import compare_snapshots
from monitor.export_reader import MissingExportFolderError
from monitor.snapshot_writer import save_snapshot, load_snapshot

logger = logging.getLogger(__name__)


def check_export_folders(export_old: str, export_new: str):
    for export_dir in (export_old, export_new):
        if not os.path.isdir(export_dir):
            raise MissingExportFolderError(f'Missing folder: {export_dir}')


def previous_comparison(db_session_factory: Callable[[], Session]) -> Optional[Dict]:
    """Summary of the latest recorded comparison, or None when history is empty."""
    with db_session_factory() as db:
        report = get_latest_comparison_report(db)
        if not report:
            return None
        return {
            'report_path': report.report_path,
            'created_at': report.created_at,
            'unfollowers_count': report.unfollowers_count,
            'new_followers_count': report.new_followers_count,
            'total_comparisons': count_comparison_reports(db),
        }


def record_history(db_session_factory: Callable[[], Session], old_snapshot_path: str, new_snapshot_path: str, diff: Dict):
    with db_session_factory() as db:
        old_record = upsert_snapshot_record(db, load_snapshot(old_snapshot_path), old_snapshot_path)
        new_record = upsert_snapshot_record(db, load_snapshot(new_snapshot_path), new_snapshot_path)
        report = add_comparison_report(
            db,
            old_snapshot_id=old_record.id,
            new_snapshot_id=new_record.id,
            report_path=diff['report_path'],
            unfollowers_count=len(diff['unfollowers']),
            new_followers_count=len(diff['new_followers']),
        )
        logger.info(f'Recorded comparison #{report.id} in run history')


def run_comparison(export_old: str, export_new: str, snapshots_dir: str = SNAPSHOTS_DIR,
                   reports_dir: str = REPORTS_DIR,
                   db_session_factory: Optional[Callable[[], Session]] = None) -> Dict:
    """
    Snapshots the old and the new export, diffs their followers and writes
    the HTML report. Records the run in the history database when a session
    factory is given.
    """
    check_export_folders(export_old, export_new)

    logger.info(f'Starting comparison of {export_old} -> {export_new}')

    old_snapshot = save_snapshot(export_old, 'old', snapshots_dir)
    new_snapshot = save_snapshot(export_new, 'new', snapshots_dir)

    diff = compare_snapshots(old_snapshot, new_snapshot, reports_dir)

    if db_session_factory:
        record_history(db_session_factory, old_snapshot, new_snapshot, diff)

    result = {'old_snapshot': old_snapshot, 'new_snapshot': new_snapshot}
    result.update(diff)
    return result
