# config.py: config-first settings for the humble site build
# - Config keys: source, destination, assets_source, assets_destination,
#                markdown_glob, publish_marker, index_title, index_filename, posts_dir,
#                link_image_exts, asset_image_exts, include_hidden, duplicate_titles,
#                dry_run, debug, list_selected

import json
from pathlib import Path

import yaml
from tqdm import tqdm

from .assets import DEFAULT_ASSET_EXTS
from .pages import DEFAULT_MARKDOWN_GLOB, DEFAULT_PUBLISH_MARKER, DUPLICATE_POLICIES
from .wikilinks import DEFAULT_LINK_IMAGE_EXTS

CONFIG_CANDIDATES = ("humble.yaml", "humble.yml", "humble.json")

CFG_DEFAULTS = {
    # Trees
    "source": ".",
    "destination": "site/content",
    "assets_source": ".",
    "assets_destination": "site/static/assets",

    # Selection
    "markdown_glob": DEFAULT_MARKDOWN_GLOB,
    "publish_marker": DEFAULT_PUBLISH_MARKER,
    "include_hidden": False,
    "duplicate_titles": "error",   # error | warn (last write wins)

    # Output layout
    "index_title": "Index",
    "index_filename": "_index.md",
    "posts_dir": "posts",

    # Extension sets; svg is an asset but links to it stay TEXT
    "link_image_exts": list(DEFAULT_LINK_IMAGE_EXTS),
    "asset_image_exts": list(DEFAULT_ASSET_EXTS),

    # Execution controls
    "dry_run": False,
    "debug": False,
    "list_selected": False,
}


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def validate_config(cfg: dict) -> dict:
    if cfg.get("duplicate_titles") not in DUPLICATE_POLICIES:
        raise ValueError(f"config.duplicate_titles must be one of {DUPLICATE_POLICIES}")
    for key in ("link_image_exts", "asset_image_exts"):
        if not cfg.get(key):
            raise ValueError(f"config.{key} must list at least one extension")
    for key in ("index_filename", "posts_dir", "publish_marker"):
        if not str(cfg.get(key) or "").strip():
            raise ValueError(f"config.{key} must not be empty")
    return cfg


def load_config(config_path: Path | None = None) -> dict:
    if config_path is None:
        for cand in CONFIG_CANDIDATES:
            if Path(cand).exists():
                config_path = Path(cand)
                break

    if config_path is None:
        tqdm.write("[cfg] No config file found; using built-in defaults")
        return dict(CFG_DEFAULTS)

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    text = config_path.read_text(encoding="utf-8")
    try:
        if config_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text) or {}
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise RuntimeError(f"Failed to parse config {config_path}: {e}")
    if not isinstance(data, dict):
        raise RuntimeError(f"Config {config_path} must be a mapping, got {type(data).__name__}")

    tqdm.write(f"[cfg] Loaded {config_path}")
    return validate_config(_deep_merge(CFG_DEFAULTS, data))
