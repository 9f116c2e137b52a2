"""
Configuration management for Farm Catalog.

Loads server options from an options file (JSON, or YAML when the file ends in
.yaml/.yml) and provides typed defaults. The file location comes from the
FARM_CATALOG_OPTIONS environment variable, falling back to /data/options.json.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from logging_util import log

APP_DIR = Path(__file__).parent

OPTIONS_PATH = "/data/options.json"
OPTIONS_ENV = "FARM_CATALOG_OPTIONS"

DEFAULT_DATA_PATH = str(APP_DIR / "dev-data" / "data.json")
DEFAULT_TEMPLATE_DIR = str(APP_DIR / "web" / "templates")


@dataclass
class Config:
    """All configuration options with sensible defaults."""

    # --- Web server ---
    host: str = "127.0.0.1"
    port: int = 8000

    # --- Static sources, read once at startup ---
    data_path: str = DEFAULT_DATA_PATH
    template_dir: str = DEFAULT_TEMPLATE_DIR

    # --- Logging ---
    log_level: str = "info"

    # Where the values came from, for the startup log
    source: str = field(default="defaults", compare=False)


def _read_options(path: Path) -> dict:
    if path.suffix in (".yaml", ".yml"):
        import yaml
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from the options file, falling back to defaults."""
    options_path = Path(path or os.environ.get(OPTIONS_ENV) or OPTIONS_PATH)
    cfg = Config()
    if not options_path.exists():
        log("info", f"No options file at {options_path}, using defaults")
        return cfg

    try:
        raw = _read_options(options_path)
        if not isinstance(raw, dict):
            raise ValueError("options must be a mapping")
        log("debug", f"Loaded options: {list(raw.keys())}")
    except Exception as e:
        log("warning", f"Could not load config: {e}, using defaults")
        return cfg

    for k, v in raw.items():
        if hasattr(cfg, k) and k != "source":
            setattr(cfg, k, v)
        else:
            log("warning", f"Ignoring unknown option '{k}'")
    cfg.source = str(options_path)
    return cfg
