"""Layered configuration for smartpaste.

Loads and merges configuration from:
1. Default settings (built-in)
2. A YAML config file (optional)
3. CLI parameters (override)
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "ai": {
        "provider": "dashscope",
        # None disables the client timeout; a hung request blocks that call.
        "timeout_seconds": None,
        "dashscope": {
            "endpoint": "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation",
            "model": "qwen-plus-latest",
            "reported_model": "gpt-3.5-turbo-instruct",
        },
    },
    # Identifiers are shared with the desktop settings UI that stores the key.
    "credentials": {
        "service": "https://platform.openai.com/api-keys",
        "account": "PowerToys_AdvancedPaste_OpenAIKey",
    },
    "telemetry": {
        "enabled": True,
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = dict(base)
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_config_file(config_path: Path) -> dict:
    """Load a YAML config file. Missing or unreadable files yield {}."""
    if not config_path.exists():
        return {}
    try:
        content = config_path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
        data = yaml.safe_load(content)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def get_effective_config(
    config_path: Optional[Path] = None,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        file_config = load_config_file(config_path)
        if file_config:
            config = deep_merge(config, file_config)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    return config
