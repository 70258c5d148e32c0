import logging
import os
import sys

from config.settings import (EXPORT_OLD_DIR, EXPORT_NEW_DIR, SNAPSHOTS_DIR, REPORTS_DIR,
                             HISTORY_DATABASE_URL, LOG_LEVEL)
from db.models import make_session_factory, dispose_session_factory
from pipeline.job_runner import check_export_folders, previous_comparison, run_comparison
from cli.utils import print_report_location, format_user_lines

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s', level=getattr(logging, LOG_LEVEL.upper(), logging.WARNING)
)
logger = logging.getLogger(__name__)


def print_previous_comparison(previous) -> None:
    if not previous:
        print('🕘 No previous comparison in history')
        return
    print(f"🕘 Previous comparison ({previous['total_comparisons']} recorded): {previous['report_path']}")
    print(f"  Unfollowers: {previous['unfollowers_count']}, New followers: {previous['new_followers_count']}")


def main() -> int:
    session_factory = None
    try:
        check_export_folders(EXPORT_OLD_DIR, EXPORT_NEW_DIR)

        print('⏳ Reading exports from:')
        print('  OLD:', EXPORT_OLD_DIR)
        print('  NEW:', EXPORT_NEW_DIR)

        if HISTORY_DATABASE_URL:
            session_factory = make_session_factory(HISTORY_DATABASE_URL)
            print_previous_comparison(previous_comparison(session_factory))

        result = run_comparison(EXPORT_OLD_DIR, EXPORT_NEW_DIR, SNAPSHOTS_DIR, REPORTS_DIR, session_factory)

        print('✅ Snapshots saved:')
        print('  OLD:', result['old_snapshot'])
        print('  NEW:', result['new_snapshot'])

        print(f"✅ Report generated: {result['report_path']}")
        print(f"Followers: {result['old_count']} → {result['new_count']} ({result['followers_count_change']:+d}), "
              f"Following change: {result['following_count_change']:+d}")
        print(f"Unfollowers ({len(result['unfollowers'])}):")
        for line in format_user_lines(result['unfollowers'], '-'):
            print(line)

        print(f"\nNew followers ({len(result['new_followers'])}):")
        for line in format_user_lines(result['new_followers'], '+'):
            print(line)

        print_report_location(os.path.dirname(result['report_path']))
    except Exception as e:
        logger.debug('Comparison failed', exc_info=True)
        print(f'❌ {e}', file=sys.stderr)
        return 1
    finally:
        if session_factory is not None:
            dispose_session_factory(session_factory)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == '__main__':
    run()
