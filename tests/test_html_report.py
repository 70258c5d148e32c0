from datetime import datetime

from report.html_report import make_report_html, profile_link, report_file_name, write_report

GENERATED = datetime(2024, 1, 2, 3, 4, 5)


def test_profile_link():
    assert profile_link('alice') == 'https://www.instagram.com/alice/'


def test_report_lists_links():
    content = make_report_html(['alice'], ['bob', 'carol'], 10, 11, GENERATED)
    assert '<li><a href="https://www.instagram.com/alice/" target="_blank" rel="noopener noreferrer">@alice</a></li>' in content
    assert 'Unfollowers (1)' in content
    assert 'New followers (2)' in content
    assert 'Followers: 10 → 11' in content
    assert 'Generated 2024-01-02 03:04:05' in content
    assert 'None' not in content


def test_report_empty_placeholders():
    content = make_report_html([], [], 5, 5, GENERATED)
    assert '<ul><li><em>None 🎉</em></li></ul>' in content
    assert '<ul><li><em>None</em></li></ul>' in content


def test_report_is_deterministic_for_fixed_time():
    assert make_report_html(['a'], ['b'], 1, 1, GENERATED) == make_report_html(['a'], ['b'], 1, 1, GENERATED)


def test_report_escapes_usernames():
    content = make_report_html(['<script>'], [], 1, 0, GENERATED)
    assert '<script>' not in content
    assert '@&lt;script&gt;' in content


def test_report_file_name():
    name = report_file_name('/s/20240101_000000__old.json', '/s/20240102_000000__new.json')
    assert name == 'report__20240101_000000__old__TO__20240102_000000__new.html'


def test_write_report_creates_directory(tmp_path):
    path = str(tmp_path / 'reports' / 'r.html')
    assert write_report(path, '<html></html>') == path
    assert (tmp_path / 'reports' / 'r.html').read_text(encoding='utf-8') == '<html></html>'
