import logging
import os
import platform
import subprocess
import sys
from typing import List, Optional

from report.html_report import profile_link

logger = logging.getLogger(__name__)


def is_wsl() -> bool:
    # Linux running under Windows (WSL 1 or 2)
    return sys.platform.startswith('linux') and (
        os.path.exists('/mnt/c') or 'microsoft' in platform.release().lower()
    )


def to_windows_path(linux_path: str) -> Optional[str]:
    try:
        result = subprocess.run(['wslpath', '-w', linux_path], check=True, capture_output=True, text=True)
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug(f'wslpath failed for {linux_path}: {e}')
        return None
    return result.stdout.strip() or None


def print_report_location(folder: str) -> None:
    win_path = to_windows_path(folder) if is_wsl() else None
    if win_path:
        print('\n📂 Open this folder in Windows Explorer:')
        print(win_path)
        print('\nOr run:')
        print(f'explorer.exe "{win_path}"\n')
    else:
        print('\n📂 Report saved at:')
        print(folder + '\n')


def format_user_lines(usernames: List[str], marker: str) -> List[str]:
    return [f' {marker} @{u}  {profile_link(u)}' for u in usernames]
