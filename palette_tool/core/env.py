"""Environment and provider configuration for palette-tool.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Provider settings, for any OpenAI-compatible backend NAME:

    NAME_API_KEY   required (falls back to PALETTE_API_KEY)
    NAME_API_URL   required unless NAME is a known provider
    NAME_MODEL     optional, overrides the provider default
"""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PROVIDER = 'openai'

_DEFAULT_URLS: dict[str, str] = {
    'openai': 'https://api.openai.com/v1',
    'groq': 'https://api.groq.com/openai/v1',
    'mistral': 'https://api.mistral.ai/v1',
}

_DEFAULT_MODELS: dict[str, str] = {
    'openai': 'gpt-4o-mini',
    'groq': 'llama-3.3-70b-versatile',
    'mistral': 'mistral-medium-2505',
}


@dataclass
class ProviderConfig:
    """Resolved connection settings for one generation backend."""

    name: str
    api_key: str
    api_url: str
    model: str

    def missing(self) -> str | None:
        """Name of the first unset env var, or None if complete."""
        prefix = self.name.upper()
        if not self.api_key:
            return f'{prefix}_API_KEY'
        if not self.api_url:
            return f'{prefix}_API_URL'
        if not self.model:
            return f'{prefix}_MODEL'
        return None


def resolve_provider(provider: str | None = None, explicit_key: str | None = None) -> ProviderConfig:
    """Resolve api key, url and model for the provider from env vars."""
    name = (provider or DEFAULT_PROVIDER).lower()
    prefix = name.upper()
    api_key = explicit_key or os.environ.get(f'{prefix}_API_KEY') or os.environ.get('PALETTE_API_KEY') or ''
    api_url = os.environ.get(f'{prefix}_API_URL') or _DEFAULT_URLS.get(name, '')
    model = os.environ.get(f'{prefix}_MODEL') or _DEFAULT_MODELS.get(name, '')
    return ProviderConfig(name=name, api_key=api_key, api_url=api_url, model=model)


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or a file (worktree)
        if (current / '.git').exists():
            return None
        if current.parent == current:
            return None
        current = current.parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=value lines. Quotes and a leading `export ` are stripped."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        if line.startswith('export '):
            line = line[len('export ') :].lstrip()
        key, _, raw_value = line.partition('=')
        key = key.strip()
        if key:
            result[key] = raw_value.strip().strip('"').strip("'")
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path
