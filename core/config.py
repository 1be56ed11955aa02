"""
Bot configuration loading and validation.

Settings come from the process environment (optionally populated from a
``.env`` file by ``main.py``). All problems are collected and reported
together in a single ``ConfigError``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

from .constants import DEFAULT_AUTO_REPLIES_FILE, EnvKey
from .utils import safe_int


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class BotSettings:
    token: str
    auto_replies_path: Path
    log_level: str = "INFO"
    exchangerate_api_key: str = ""
    analisis_guild_id: Optional[int] = None
    analisis_channel_id: Optional[int] = None


def _optional_id(env: Mapping[str, str], key: str, errors: List[str]) -> Optional[int]:
    raw = (env.get(key) or "").strip()
    if not raw:
        return None
    value = safe_int(raw)
    if value is None or value <= 0:
        errors.append(f"{key} must be an integer ID")
        return None
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> BotSettings:
    if env is None:
        env = os.environ
    errors: List[str] = []

    token = (env.get(EnvKey.TOKEN) or env.get(EnvKey.TOKEN_FALLBACK) or "").strip()
    if not token:
        errors.append(f"Missing bot token. Set {EnvKey.TOKEN} in .env or environment.")

    path_value = (env.get(EnvKey.AUTO_REPLIES_PATH) or "").strip() or DEFAULT_AUTO_REPLIES_FILE
    # Relative paths resolve against the working directory.
    auto_replies_path = Path(path_value).expanduser()

    log_level = (env.get(EnvKey.LOG_LEVEL) or "INFO").strip().upper() or "INFO"

    guild_id = _optional_id(env, EnvKey.ANALISIS_GUILD_ID, errors)
    channel_id = _optional_id(env, EnvKey.ANALISIS_CHANNEL_ID, errors)

    if errors:
        raise ConfigError("; ".join(errors))

    return BotSettings(
        token=token,
        auto_replies_path=auto_replies_path,
        log_level=log_level,
        exchangerate_api_key=(env.get(EnvKey.EXCHANGERATE_API_KEY) or "").strip(),
        analisis_guild_id=guild_id,
        analisis_channel_id=channel_id,
    )
