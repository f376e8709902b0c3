"""Tests for palette_tool.core.env — .env loading and provider resolution."""

import os
from pathlib import Path

import pytest
from palette_tool.core.env import ProviderConfig, _find_dotenv, _parse_dotenv, load_env, resolve_provider

_PROVIDER_VARS = [
    'OPENAI_API_KEY',
    'OPENAI_API_URL',
    'OPENAI_MODEL',
    'GROQ_API_KEY',
    'GROQ_API_URL',
    'GROQ_MODEL',
    'LOCAL_API_KEY',
    'LOCAL_API_URL',
    'LOCAL_MODEL',
    'PALETTE_API_KEY',
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for var in _PROVIDER_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('FOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('KEY="hello world"\nKEY2=\'single\'\n')
        assert _parse_dotenv(f) == {'KEY': 'hello world', 'KEY2': 'single'}

    def test_export_prefix(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('export OPENAI_API_KEY=sk-test\n')
        assert _parse_dotenv(f) == {'OPENAI_API_KEY': 'sk-test'}

    def test_comments_and_blanks_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# comment\n\nFOO=bar\nNOEQUALS\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_value_may_contain_equals(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('URL=http://x/?a=b\n')
        assert _parse_dotenv(f) == {'URL': 'http://x/?a=b'}


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
        (repo / '.git').write_text('gitdir: ../somewhere\n')
        (tmp_path / '.env').write_text('X=1\n')
        assert _find_dotenv(repo) is None


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('TEST_PALETTE_KEY', raising=False)
        (tmp_path / '.env').write_text('TEST_PALETTE_KEY=secret\n')
        monkeypatch.chdir(tmp_path)
        assert load_env() == tmp_path / '.env'
        assert os.environ.get('TEST_PALETTE_KEY') == 'secret'

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TEST_PALETTE_KEY2', 'original')
        (tmp_path / '.env').write_text('TEST_PALETTE_KEY2=fromfile\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('TEST_PALETTE_KEY2') == 'original'

    def test_explicit_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('TEST_PALETTE_KEY3', raising=False)
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('TEST_PALETTE_KEY3=custom\n')
        load_env(env_file=str(dotenv))
        assert os.environ.get('TEST_PALETTE_KEY3') == 'custom'

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'nope.env')) is None

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestResolveProvider:
    def test_openai_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv('OPENAI_API_KEY', 'sk-1')
        config = resolve_provider()
        assert config == ProviderConfig('openai', 'sk-1', 'https://api.openai.com/v1', 'gpt-4o-mini')
        assert config.missing() is None

    def test_explicit_key_wins(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv('OPENAI_API_KEY', 'sk-env')
        assert resolve_provider('openai', 'sk-flag').api_key == 'sk-flag'

    def test_generic_key_fallback(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv('PALETTE_API_KEY', 'shared')
        assert resolve_provider('groq').api_key == 'shared'

    def test_provider_name_case_insensitive(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv('GROQ_API_KEY', 'gk')
        config = resolve_provider('Groq')
        assert config.name == 'groq'
        assert config.api_url == 'https://api.groq.com/openai/v1'

    def test_model_override(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv('OPENAI_MODEL', 'gpt-4o')
        assert resolve_provider().model == 'gpt-4o'

    def test_custom_provider(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv('LOCAL_API_KEY', 'x')
        clean_env.setenv('LOCAL_API_URL', 'http://localhost:11434/v1')
        clean_env.setenv('LOCAL_MODEL', 'llama3')
        assert resolve_provider('local').missing() is None

    def test_missing_settings_named(self, clean_env: pytest.MonkeyPatch) -> None:
        assert resolve_provider().missing() == 'OPENAI_API_KEY'
        clean_env.setenv('LOCAL_API_KEY', 'x')
        assert resolve_provider('local').missing() == 'LOCAL_API_URL'
