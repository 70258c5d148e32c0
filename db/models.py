import os
from datetime import datetime, timezone

from sqlalchemy import create_engine, Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import declarative_base, sessionmaker, relationship

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SnapshotRecord(Base):
    __tablename__ = 'snapshots'
    id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String(50), nullable=False) # 'old' or 'new'
    export_dir = Column(String(1024), nullable=False)
    file_path = Column(String(1024), unique=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow)
    followers_count = Column(Integer, nullable=False)
    following_count = Column(Integer, nullable=False)

    def __repr__(self):
        return f'<SnapshotRecord(label={self.label}, path={self.file_path}, followers={self.followers_count})>'


class ComparisonReport(Base):
    __tablename__ = 'comparison_reports'
    id = Column(Integer, primary_key=True, autoincrement=True)
    old_snapshot_id = Column(Integer, ForeignKey('snapshots.id'), nullable=False)
    new_snapshot_id = Column(Integer, ForeignKey('snapshots.id'), nullable=False)
    report_path = Column(String(1024), nullable=False)
    unfollowers_count = Column(Integer, nullable=False)
    new_followers_count = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=_utcnow)

    old_snapshot = relationship('SnapshotRecord', foreign_keys=[old_snapshot_id])
    new_snapshot = relationship('SnapshotRecord', foreign_keys=[new_snapshot_id])

    def __repr__(self):
        return f'<ComparisonReport(report={self.report_path}, unfollowers={self.unfollowers_count}, new={self.new_followers_count})>'


def make_session_factory(database_url: str) -> sessionmaker:
    # SQLite needs the parent directory of the database file to exist
    if database_url.startswith('sqlite:///') and database_url != 'sqlite:///:memory:':
        db_dir = os.path.dirname(database_url[len('sqlite:///'):])
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    engine = create_engine(database_url)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def dispose_session_factory(session_factory: sessionmaker):
    engine = session_factory.kw.get('bind')
    if engine is not None:
        engine.dispose()
