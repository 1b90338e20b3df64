from __future__ import annotations
import logging
import os
from pathlib import Path

# Resolve installation dir (klisp package directory)
_KLISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_PATH = _KLISP_DIR / 'prelude' / 'common.lisp'
_DEFAULT_PROMPT = '>>> '
_DEFAULT_LOG_LEVEL = 'WARNING'
# Each klisp call costs roughly nine Python frames
_DEFAULT_RECURSION_LIMIT = 10000


def get_prelude_path() -> Path:
    raw = os.environ.get('KLISP_PRELUDE_PATH')
    if not raw or not raw.strip():
        return _DEFAULT_PRELUDE_PATH
    return Path(raw.strip())


def get_prompt() -> str:
    return os.environ.get('KLISP_PROMPT', _DEFAULT_PROMPT)


def get_log_level() -> int:
    raw = os.environ.get('KLISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName maps unknown names to the string "Level <name>"
    return level if isinstance(level, int) else logging.WARNING


def color_enabled() -> bool:
    return os.environ.get('KLISP_COLOR', '1').strip() not in ('0', 'false', 'no', '')


def get_pprint_options_json() -> str | None:
    raw = os.environ.get('KLISP_PPRINT_OPTIONS')
    return raw if raw and raw.strip() else None


def get_recursion_limit() -> int:
    raw = os.environ.get('KLISP_RECURSION_LIMIT', '').strip()
    return int(raw) if raw.isdigit() else _DEFAULT_RECURSION_LIMIT
