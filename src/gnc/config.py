from __future__ import annotations

import json
import os
import urllib.parse
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import ConfigError


_BLOCK_KEYS = frozenset({"interval", "api_server", "format", "token_env", "timeout"})


def _require_dict(value: Any, *, where: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"Expected object at {where}, got {type(value)}")
    return value


def _get_seconds(d: Mapping[str, Any], key: str, default: float, *, where: str) -> float:
    v = d.get(key, default)
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ConfigError(f"Expected number of seconds at {where}.{key}, got {v!r}")
    if v <= 0:
        raise ConfigError(f"Expected positive number of seconds at {where}.{key}, got {v!r}")
    return float(v)


def _get_str(d: Mapping[str, Any], key: str, default: str, *, where: str) -> str:
    v = d.get(key, default)
    if not isinstance(v, str) or not v:
        raise ConfigError(f"Expected non-empty string at {where}.{key}, got {v!r}")
    return v


def _check_url(value: str, *, where: str) -> str:
    parsed = urllib.parse.urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc or not value.isascii():
        raise ConfigError(f"Expected http(s):// URL at {where}, got {value!r}")
    return value


@dataclass(frozen=True, slots=True)
class BlockConfig:
    """
    GitHub 通知计数 block 的配置。

    interval_seconds:
      - 轮询间隔（由外部调度器执行）
    api_server:
      - GitHub API 根地址，GitHub Enterprise 可改为 https://host/api/v3
    format:
      - 显示格式，占位符见 gnc.render.PLACEHOLDERS
    token_env:
      - 凭据所在环境变量名；凭据只从环境变量读取，不落盘
    timeout_seconds:
      - 单个 HTTP 请求超时
    """

    interval_seconds: float = 30.0
    api_server: str = "https://api.github.com"
    format: str = "{total}"
    token_env: str = "GITHUB_TOKEN"
    timeout_seconds: float = 5.0

    def __post_init__(self) -> None:
        _check_url(self.api_server, where="api_server")

    def resolve_token(self, environ: Mapping[str, str] | None = None) -> str | None:
        env = os.environ if environ is None else environ
        return env.get(self.token_env) or None


def config_from_mapping(raw: Any, *, where: str = "$") -> BlockConfig:
    d = _require_dict(raw, where=where)
    unknown = sorted(set(d) - _BLOCK_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys at {where}: {', '.join(unknown)}")

    defaults = BlockConfig()
    return BlockConfig(
        interval_seconds=_get_seconds(d, "interval", defaults.interval_seconds, where=where),
        api_server=_check_url(
            _get_str(d, "api_server", defaults.api_server, where=where), where=f"{where}.api_server"
        ),
        format=_get_str(d, "format", defaults.format, where=where),
        token_env=_get_str(d, "token_env", defaults.token_env, where=where),
        timeout_seconds=_get_seconds(d, "timeout", defaults.timeout_seconds, where=where),
    )


def load_config(config_path: str) -> BlockConfig:
    """
    使用 JSON 作为配置落地形式，避免引入第三方解析依赖。

    顶层结构（示意），也可以直接把 block 对象放在顶层：
    {
      "github": {
        "interval": 30,
        "api_server": "https://api.github.com",
        "format": "{total} ({mention})",
        "token_env": "GITHUB_TOKEN"
      }
    }
    """
    try:
        with open(config_path, "rb") as f:
            raw = json.loads(f.read().decode("utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    root = _require_dict(raw, where="$")
    if set(root) == {"github"}:
        return config_from_mapping(root["github"], where="$.github")
    return config_from_mapping(root, where="$")
