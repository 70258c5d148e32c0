import json
import logging
import os
from typing import Any, Iterator, Set, Tuple

from config.settings import FOLLOWERS_FILE_NAME, FOLLOWING_FILE_NAME, NESTED_EXPORT_DIR

logger = logging.getLogger(__name__)


class MissingExportFolderError(FileNotFoundError):
    pass


class ExportFileNotFoundError(FileNotFoundError):
    pass


class MalformedExportError(ValueError):
    pass


def _resolve_one(export_dir: str, file_name: str, kind: str) -> str:
    direct = os.path.join(export_dir, file_name)
    nested = os.path.join(export_dir, NESTED_EXPORT_DIR, file_name)

    if os.path.isfile(direct):
        return direct
    if os.path.isfile(nested):
        return nested

    raise ExportFileNotFoundError(
        f'{kind} JSON not found in: {export_dir}\nLooked for:\n- {direct}\n- {nested}'
    )


def resolve_export_files(export_dir: str) -> Tuple[str, str]:
    """
    Finds the followers and following files of an export.
    Each file is looked up on its own, so an export may mix the flat and the
    followers_and_following/ layouts.
    Returns (followers_path, following_path).
    """
    followers_path = _resolve_one(export_dir, FOLLOWERS_FILE_NAME, 'Followers')
    following_path = _resolve_one(export_dir, FOLLOWING_FILE_NAME, 'Following')
    logger.info(f'Resolved export files in {export_dir}: {followers_path}, {following_path}')
    return followers_path, following_path


def read_json(path: str) -> Any:
    with open(path, 'r', encoding='utf-8') as f:
        try:
            return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedExportError(f'Malformed JSON in {path}: {e}') from e


def normalize_username(value: Any) -> str:
    if not isinstance(value, str):
        return ''
    return value.strip().lstrip('@')


def iter_string_list_nodes(data: Any) -> Iterator[dict]:
    # Yields every object carrying a string_list_data array, then keeps walking into it
    if isinstance(data, list):
        for item in data:
            yield from iter_string_list_nodes(item)
    elif isinstance(data, dict):
        if isinstance(data.get('string_list_data'), list):
            yield data
        for value in data.values():
            yield from iter_string_list_nodes(value)


def extract_usernames(data: Any) -> Set[str]:
    usernames = set()
    for node in iter_string_list_nodes(data):
        for item in node['string_list_data']:
            if not isinstance(item, dict):
                continue
            username = normalize_username(item.get('value', ''))
            if username:
                usernames.add(username)
    return usernames


def load_followers_and_following(export_dir: str) -> Tuple[Set[str], Set[str]]:
    followers_path, following_path = resolve_export_files(export_dir)
    followers = extract_usernames(read_json(followers_path))
    following = extract_usernames(read_json(following_path))
    logger.info(f'Extracted {len(followers)} followers and {len(following)} following from {export_dir}')
    return followers, following
