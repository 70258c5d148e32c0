import html
import logging
import os
from datetime import datetime
from typing import List, Optional

from config.settings import PROFILE_BASE_URL

logger = logging.getLogger(__name__)

REPORT_TITLE = 'Instagram Unfollowers'

REPORT_STYLE = '''    body { font-family: system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif; margin: 24px; }
    .card { max-width: 760px; border: 1px solid #ddd; border-radius: 12px; padding: 16px; }
    h1 { font-size: 20px; margin: 0 0 12px; }
    h2 { font-size: 16px; margin: 18px 0 8px; }
    .meta { color: #555; font-size: 13px; }
    ul { padding-left: 18px; }
    a { text-decoration: none; }
    a:hover { text-decoration: underline; }
    .pill { display:inline-block; padding: 2px 10px; border-radius: 999px; border: 1px solid #ddd; font-size: 12px; margin-left: 8px; }'''


def profile_link(username: str) -> str:
    return f'{PROFILE_BASE_URL}/{username}/'


def format_datetime(dt: datetime) -> str:
    return dt.strftime('%Y-%m-%d %H:%M:%S')


def _list_item(username: str) -> str:
    href = html.escape(profile_link(username), quote=True)
    return f'<li><a href="{href}" target="_blank" rel="noopener noreferrer">@{html.escape(username)}</a></li>'


def _list_items(usernames: List[str], placeholder: str) -> str:
    if not usernames:
        return f'<li><em>{placeholder}</em></li>'
    return '\n'.join(_list_item(u) for u in usernames)


def make_report_html(unfollowers: List[str], new_followers: List[str], old_count: int, new_count: int,
                     generated_at: Optional[datetime] = None) -> str:
    """
    Renders the diff as a self-contained HTML page.
    The output only varies with the inputs and generated_at.
    """
    generated = format_datetime(generated_at or datetime.now())
    return f'''<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width,initial-scale=1"/>
  <title>{REPORT_TITLE}</title>
  <style>
{REPORT_STYLE}
  </style>
</head>
<body>
  <div class="card">
    <h1>{REPORT_TITLE}</h1>
    <div class="meta">
      Followers: {old_count} → {new_count}
      <span class="pill">Generated {generated}</span>
    </div>

    <h2>Unfollowers ({len(unfollowers)})</h2>
    <ul>{_list_items(unfollowers, "None 🎉")}</ul>

    <h2>New followers ({len(new_followers)})</h2>
    <ul>{_list_items(new_followers, "None")}</ul>
  </div>
</body>
</html>'''


def report_file_name(old_snapshot_path: str, new_snapshot_path: str) -> str:
    old_stem = os.path.splitext(os.path.basename(old_snapshot_path))[0]
    new_stem = os.path.splitext(os.path.basename(new_snapshot_path))[0]
    return f'report__{old_stem}__TO__{new_stem}.html'


def write_report(path: str, content: str) -> str:
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    logger.info(f'Report written to {path}')
    return path
