# pages.py: load notes from the source tree and select the publishable ones

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from .wikilinks import DEFAULT_SYNTAX, WikiLink, WikilinkSyntax, extract_links

DEFAULT_MARKDOWN_GLOB = "**/*.md"
DEFAULT_PUBLISH_MARKER = "publish: true"
DUPLICATE_POLICIES = ("error", "warn")


@dataclass
class Page:
    title: str
    path: Path
    contents: str
    # parsed once at load time; later stages only touch contents
    wikilinks: list[WikiLink] = field(default_factory=list)


def title_from_path(path: Path) -> str:
    return Path(path).stem


def load_page(path: Path, syntax: WikilinkSyntax = DEFAULT_SYNTAX) -> Page:
    path = Path(path)
    contents = path.read_text(encoding="utf-8")
    return Page(
        title=title_from_path(path),
        path=path,
        contents=contents,
        wikilinks=extract_links(contents, syntax),
    )


def is_hidden(rel: Path) -> bool:
    return any(part.startswith(".") for part in rel.parts)


def is_under(path: Path, roots) -> bool:
    path = Path(path).resolve()
    return any(path.is_relative_to(Path(r).resolve()) for r in roots)


def get_markdown_files(root: Path, pattern: str = DEFAULT_MARKDOWN_GLOB,
                       include_hidden: bool = False, exclude=()) -> list[Path]:
    """exclude: roots (e.g. the output trees) whose files are never treated as notes."""
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Source directory not found: {root}")
    files = []
    for p in root.glob(pattern):
        if not p.is_file():
            continue
        if not include_hidden and is_hidden(p.relative_to(root)):
            continue
        if exclude and is_under(p, exclude):
            continue
        files.append(p)
    return sorted(files, key=lambda p: p.relative_to(root).as_posix())


def load_pages(root: Path, pattern: str = DEFAULT_MARKDOWN_GLOB,
               syntax: WikilinkSyntax = DEFAULT_SYNTAX,
               include_hidden: bool = False, debug: bool = False, exclude=()) -> list[Page]:
    pages = []
    for path in tqdm(get_markdown_files(root, pattern, include_hidden, exclude), desc="Loading notes", unit="note"):
        page = load_page(path, syntax)
        if debug:
            tqdm.write(f"[scan] {page.title}: {len(page.wikilinks)} wikilinks")
        pages.append(page)
    return pages


# ================= Publish selection =================
def is_publishable(page: Page, marker: str = DEFAULT_PUBLISH_MARKER) -> bool:
    return any(line.strip() == marker for line in page.contents.splitlines())


def filter_publishable(pages: list[Page], marker: str = DEFAULT_PUBLISH_MARKER,
                       debug: bool = False) -> list[Page]:
    selected = []
    for page in pages:
        ok = is_publishable(page, marker)
        if debug:
            tqdm.write(f"[sel] {'PASS' if ok else 'skip'} {page.title}")
        if ok:
            selected.append(page)
    return selected


def check_unique_titles(pages: list[Page], policy: str = "error") -> None:
    """Titles key the backlink index and the output file names, so two notes with one stem collide."""
    if policy not in DUPLICATE_POLICIES:
        raise ValueError(f"Unknown duplicate_titles policy: {policy!r}")
    by_title: dict[str, list[Path]] = defaultdict(list)
    for page in pages:
        by_title[page.title].append(page.path)
    dupes = {t: paths for t, paths in by_title.items() if len(paths) > 1}
    if not dupes:
        return
    lines = [f"{t}: " + ", ".join(str(p) for p in paths) for t, paths in sorted(dupes.items())]
    if policy == "error":
        raise ValueError("Duplicate page titles among publishable notes:\n  " + "\n  ".join(lines))
    for line in lines:
        tqdm.write(f"[warn] duplicate title, last one wins: {line}")
