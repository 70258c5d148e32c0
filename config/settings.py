import os
from dotenv import load_dotenv

load_dotenv()

# All relative paths below resolve against the directory the tool is run from
APP_DIR = os.path.abspath(os.getenv('APP_DIR', os.getcwd()))

EXPORT_OLD_DIR = os.path.join(APP_DIR, os.getenv('EXPORT_OLD_DIR', 'export_old'))
EXPORT_NEW_DIR = os.path.join(APP_DIR, os.getenv('EXPORT_NEW_DIR', 'export_new'))

SNAPSHOTS_DIR = os.path.join(APP_DIR, os.getenv('SNAPSHOTS_DIR', '.snapshots'))
REPORTS_DIR = os.path.join(APP_DIR, os.getenv('REPORTS_DIR', '.reports'))

PROFILE_BASE_URL = os.getenv('PROFILE_BASE_URL', 'https://www.instagram.com').rstrip('/')

# Set to an empty string to turn the run history index off
HISTORY_DATABASE_URL = os.getenv('HISTORY_DATABASE_URL', f'sqlite:///{os.path.join(SNAPSHOTS_DIR, "history.db")}')

LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')

# Export file names, flat layout first, then the nested one
FOLLOWERS_FILE_NAME = 'followers_1.json'
FOLLOWING_FILE_NAME = 'following.json'
NESTED_EXPORT_DIR = 'followers_and_following'
