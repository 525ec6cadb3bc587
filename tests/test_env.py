"""Tests for glyph_cutter.core.env — .env loading, walk-up logic and settings."""

import os
from pathlib import Path

import pytest
from glyph_cutter.core.env import Settings, _find_dotenv, _parse_dotenv, load_env, load_settings


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('GLYPH_TOOL_MIN_W=3\n')
        assert _parse_dotenv(f) == {'GLYPH_TOOL_MIN_W': '3'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('A="two words"\nB=\'single\'\n')
        assert _parse_dotenv(f) == {'A': 'two words', 'B': 'single'}

    def test_comments_blank_lines_and_junk_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# comment\n\nNOEQUALS\nFOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_export_prefix(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('export FOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}


class TestFindDotenv:
    def test_finds_in_parent(self, tmp_path: Path) -> None:
        subdir = tmp_path / 'sub'
        subdir.mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(subdir) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        (repo / '.git').mkdir(parents=True)
        (repo / 'src').mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        assert _find_dotenv(repo / 'src') is None

    def test_stops_at_git_file(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        repo.mkdir()
        (repo / '.git').write_text('gitdir: ../elsewhere\n')
        (tmp_path / '.env').write_text('X=1\n')
        assert _find_dotenv(repo) is None


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('GLYPH_TOOL_TEST_KEY', raising=False)
        (tmp_path / '.git').mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('GLYPH_TOOL_TEST_KEY=value\n')
        monkeypatch.chdir(tmp_path)
        assert load_env() == dotenv
        assert os.environ.get('GLYPH_TOOL_TEST_KEY') == 'value'
        monkeypatch.delenv('GLYPH_TOOL_TEST_KEY')

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('GLYPH_TOOL_TEST_KEY2', 'original')
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('GLYPH_TOOL_TEST_KEY2=fromfile\n')
        load_env(env_file=str(dotenv))
        assert os.environ.get('GLYPH_TOOL_TEST_KEY2') == 'original'

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'nope.env')) is None

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestLoadSettings:
    def test_defaults(self) -> None:
        assert load_settings({}) == Settings()
        assert Settings().tolerance == '101010'
        assert Settings().max_rules == 10

    def test_overrides(self) -> None:
        env = {
            'GLYPH_TOOL_TOLERANCE': '050505',
            'GLYPH_TOOL_MIN_W': '3',
            'GLYPH_TOOL_MIN_H': '4',
            'GLYPH_TOOL_MAX_RULES': '5',
            'GLYPH_TOOL_WORKERS': '8',
        }
        assert load_settings(env) == Settings(tolerance='050505', min_w=3, min_h=4, max_rules=5, workers=8)

    def test_bad_numbers_fall_back(self) -> None:
        settings = load_settings({'GLYPH_TOOL_MIN_W': 'wide', 'GLYPH_TOOL_MIN_H': '-2'})
        assert settings.min_w == 2
        assert settings.min_h == 2

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('GLYPH_TOOL_MAX_RULES', '3')
        assert load_settings().max_rules == 3
