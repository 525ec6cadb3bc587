"""Settings and .env loading for glyph-tool.

Load order (first wins):
  1. Existing OS environment variables — never overwritten.
  2. The .env file given with --env-file.
  3. The first .env found walking up from cwd; the walk stops at a .git
     entry so a .env outside the repository is never read.

Recognised variables:
  GLYPH_TOOL_TOLERANCE   default rule tolerance, hex (default 101010)
  GLYPH_TOOL_MIN_W       minimum region width in pixels (default 2)
  GLYPH_TOOL_MIN_H       minimum region height in pixels (default 2)
  GLYPH_TOOL_MAX_RULES   cap on the number of colour rules (default 10)
  GLYPH_TOOL_WORKERS     background recomputation threads (default 2)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = 'GLYPH_TOOL_'


@dataclass(frozen=True)
class Settings:
    tolerance: str = '101010'
    min_w: int = 2
    min_h: int = 2
    max_rules: int = 10
    workers: int = 2


def _find_dotenv(start: Path) -> Path | None:
    """Return the nearest .env at or above start, without crossing a .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git is a dir in a clone and a file in a worktree
        if (current / '.git').exists():
            return None
        if current.parent == current:
            return None
        current = current.parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Read KEY=value lines; quotes around values are stripped, comments skipped."""
    result: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export ') :].strip()
        if key:
            result[key] = value.strip().strip('"').strip("'")
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env entries into os.environ for keys not already set.

    Returns the path that was loaded, or None when no file was used.
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


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment. Unparseable values fall back to defaults."""
    env = os.environ if environ is None else environ
    defaults = Settings()
    return Settings(
        tolerance=env.get(ENV_PREFIX + 'TOLERANCE', defaults.tolerance).strip() or defaults.tolerance,
        min_w=_int_setting(env, 'MIN_W', defaults.min_w),
        min_h=_int_setting(env, 'MIN_H', defaults.min_h),
        max_rules=_int_setting(env, 'MAX_RULES', defaults.max_rules),
        workers=_int_setting(env, 'WORKERS', defaults.workers),
    )
