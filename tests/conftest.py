"""Shared helpers for building small note trees on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from humble.config import CFG_DEFAULTS, _deep_merge

# smallest valid PNG: signature + IHDR + IDAT + IEND
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d49444154789c6360000002000001e221bc330000000049454e44ae426082"
)


def write_note(root: Path, rel: str, body: str, *, publish: bool = True, extra_fm: str = "") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    fm = f"---\n{extra_fm}publish: {'true' if publish else 'false'}\n---\n"
    path.write_text(fm + body, encoding="utf-8")
    return path


@pytest.fixture()
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "notes"
    root.mkdir()
    return root


@pytest.fixture()
def make_cfg(tmp_path: Path):
    def _make(**overrides):
        base = {
            "source": str(tmp_path / "notes"),
            "destination": str(tmp_path / "site" / "content"),
            "assets_source": str(tmp_path / "notes"),
            "assets_destination": str(tmp_path / "site" / "static" / "assets"),
        }
        return _deep_merge(CFG_DEFAULTS, {**base, **overrides})
    return _make
