import os
from sqlalchemy.orm import Session
from db.models import SnapshotRecord, ComparisonReport
from typing import Optional

# --- Snapshot Operations ---
def add_snapshot_record(db: Session, snapshot: dict, file_path: str) -> SnapshotRecord:
    counts = snapshot.get('counts') or {}
    record = SnapshotRecord(
        label=snapshot.get('label', ''),
        export_dir=snapshot.get('export_dir', ''),
        file_path=os.path.abspath(file_path),
        followers_count=counts.get('followers', 0),
        following_count=counts.get('following', 0),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record

def get_snapshot_record_by_path(db: Session, file_path: str) -> Optional[SnapshotRecord]:
    return db.query(SnapshotRecord).filter(SnapshotRecord.file_path == os.path.abspath(file_path)).first()

def upsert_snapshot_record(db: Session, snapshot: dict, file_path: str) -> SnapshotRecord:
    # A same-second rewrite of a snapshot file reuses its row
    record = get_snapshot_record_by_path(db, file_path)
    if not record:
        return add_snapshot_record(db, snapshot, file_path)
    counts = snapshot.get('counts') or {}
    record.export_dir = snapshot.get('export_dir', record.export_dir)
    record.followers_count = counts.get('followers', 0)
    record.following_count = counts.get('following', 0)
    db.commit()
    db.refresh(record)
    return record

# --- Comparison Report Operations ---
def add_comparison_report(db: Session, old_snapshot_id: int, new_snapshot_id: int, report_path: str,
                          unfollowers_count: int, new_followers_count: int) -> ComparisonReport:
    report = ComparisonReport(
        old_snapshot_id=old_snapshot_id,
        new_snapshot_id=new_snapshot_id,
        report_path=os.path.abspath(report_path),
        unfollowers_count=unfollowers_count,
        new_followers_count=new_followers_count,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    return report

def get_latest_comparison_report(db: Session) -> Optional[ComparisonReport]:
    return db.query(ComparisonReport).order_by(ComparisonReport.created_at.desc(), ComparisonReport.id.desc()).first()

def count_comparison_reports(db: Session) -> int:
    return db.query(ComparisonReport).count()
