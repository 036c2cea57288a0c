"""
Run settings for batch PDF generation.

Settings are layered (later overrides earlier):
    1. DEFAULT_SETTINGS below
    2. YAML file (explicit path, else CSVTOPDF_CONFIG env variable, if set)
    3. Dotted-key overrides, usually from CLI options

Examples:
    >>> settings = load_settings()
    >>> settings.renderer.timeout_s
    15.0

    >>> settings = load_settings(overrides={"pipeline.max_workers": 2})
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

load_dotenv()
RENDERER_BINARY = os.getenv("RENDERER_BINARY", "chromium")
CSVTOPDF_CONFIG = os.getenv("CSVTOPDF_CONFIG")

# Headless Chrome print-to-pdf invocation; {input} and {output} are filled per row
CHROME_ARGS = [
    "--enable-logging",
    "--disable-extensions",
    "--headless",
    "--disable-gpu",
    "--print-to-pdf-no-header",
    "--run-all-compositor-stages-before-draw",
    "--virtual-time-budget=10000",
    "--print-to-pdf={output}",
    "{input}",
]

DEFAULT_SETTINGS: Dict[str, Any] = {
    "renderer": {
        "binary": RENDERER_BINARY,
        "args": CHROME_ARGS,
        "timeout_s": 15.0,
    },
    "pipeline": {
        # null = one worker per row
        "max_workers": 8,
        "merged_filename": "output.pdf",
    },
    "staging": {
        # null = system temp directory
        "dir": None,
        "keep": False,
    },
}


def load_settings(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> DictConfig:
    """
    Build the effective settings for a run.

    Args:
        config_path: Optional YAML file (defaults to CSVTOPDF_CONFIG env variable)
        overrides: Dotted keys to set last, e.g. {"renderer.timeout_s": 5}.
                   None values are ignored so unset CLI options fall through.

    Returns:
        DictConfig with renderer, pipeline and staging sections

    Raises:
        FileNotFoundError: If an explicit config file does not exist
        ValueError: If an override names a key that does not exist
    """
    settings = OmegaConf.create(DEFAULT_SETTINGS)

    if config_path is None and CSVTOPDF_CONFIG:
        config_path = Path(CSVTOPDF_CONFIG)

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        settings = OmegaConf.merge(settings, OmegaConf.load(config_path))

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if not _has_key(settings, key):
            raise ValueError(f"Unknown setting '{key}'")
        OmegaConf.update(settings, key, value, merge=False)

    return settings


def _has_key(settings: DictConfig, dotted_key: str) -> bool:
    """Check a dotted key exists even when its value is null."""
    node: Any = settings
    for part in dotted_key.split("."):
        if not isinstance(node, DictConfig) or part not in node:
            return False
        node = node[part]
    return True
