# assets.py: find images in the assets tree and copy the embedded ones
# - Image map is keyed by basename (case-sensitive); later files win on collisions.
# - Destination path follows the embed text: ![[sub/pic.png]] -> <assets_dest>/sub/pic.png,
#   links that climb out (../, absolute) keep only the basename.
# - Unresolved embeds are skipped, never fatal.

import posixpath
import shutil
from pathlib import Path

from tqdm import tqdm

from .pages import Page, is_hidden, is_under
from .wikilinks import DEFAULT_SYNTAX, WikilinkSyntax

# svg is an asset here but a TEXT link for the wikilink classifier
DEFAULT_ASSET_EXTS = ("png", "jpg", "gif", "svg")


# ================= Safety guard: never write outside a destination root =================
def assert_in_publish_root(publish_root: Path, target: Path):
    target = Path(target).resolve()
    pub = Path(publish_root).resolve()
    try:
        target.relative_to(pub)
    except ValueError:
        raise RuntimeError(f"Refusing to write outside publish root: {target} (publish_root={pub})")


# ================= Image resolution =================
def build_image_map(root: Path, exts=DEFAULT_ASSET_EXTS, include_hidden: bool = False,
                    debug: bool = False, exclude=()) -> dict[str, Path]:
    root = Path(root)
    if not root.is_dir():
        tqdm.write(f"[warn] Assets directory not found: {root}")
        return {}
    wanted = {e.lower().lstrip(".") for e in exts}
    images: dict[str, Path] = {}
    for p in sorted(root.rglob("*"), key=lambda p: p.relative_to(root).as_posix()):
        if not p.is_file() or p.suffix.lower().lstrip(".") not in wanted:
            continue
        if not include_hidden and is_hidden(p.relative_to(root)):
            continue
        if exclude and is_under(p, exclude):
            continue
        if debug and p.name in images:
            tqdm.write(f"[warn] image {p.name} shadows {images[p.name]}")
        images[p.name] = p
    return images


def embedded_images(contents: str, syntax: WikilinkSyntax = DEFAULT_SYNTAX) -> list[str]:
    names = []
    for m in syntax.embed_re.finditer(contents):
        link = m.group(1).split("|", 1)[0].split("#", 1)[0].strip()
        if link:
            names.append(link)
    return names


def asset_relpath(link: str) -> str:
    """Path of an embed under the assets root; links leaving it (../, absolute) keep only the basename."""
    norm = posixpath.normpath(link.replace("\\", "/"))
    if posixpath.isabs(norm) or norm == ".." or norm.startswith("../"):
        return posixpath.basename(norm)
    return norm


def copy_images(page: Page, image_map: dict[str, Path], dest_root: Path,
                syntax: WikilinkSyntax = DEFAULT_SYNTAX,
                dry_run: bool = False, debug: bool = False) -> tuple[list[Path], list[str]]:
    """Copy every embedded image of a page; returns (destinations, unresolved names)."""
    dest_root = Path(dest_root)
    copied, missing = [], []
    for link in embedded_images(page.contents, syntax):
        src = image_map.get(Path(link).name)
        if src is None:
            missing.append(link)
            if debug:
                tqdm.write(f"[miss] {page.title}: no image named {Path(link).name}")
            continue
        dst = dest_root / asset_relpath(link)
        assert_in_publish_root(dest_root, dst)
        if dry_run:
            tqdm.write(f"[dry] copy (image) {src} -> {dst}")
        else:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)
            if debug:
                tqdm.write(f"[assets] {src} -> {dst}")
        copied.append(dst)
    return copied, missing
