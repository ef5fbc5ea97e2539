# backlinks.py: reverse link index + front-matter injection
# - Only TEXT wikilinks with a non-empty target count as references.
# - Titles match exactly (case-sensitive).
# - backlinks / backlinks_count are written as the first two keys of the front matter.

import json
import re

from tqdm import tqdm

from .pages import Page
from .wikilinks import LinkType

BacklinkIndex = dict[str, list[tuple[str, int]]]

FM_OPEN_RE = re.compile(r'^---[ \t]*\r?\n', re.MULTILINE)
FM_CLOSE_RE = re.compile(r'^---[ \t]*(?:\r?\n|\Z)', re.MULTILINE)
BACKLINK_KEY_RE = re.compile(r'^(backlinks|backlinks_count)\s*:')


class FrontMatterError(ValueError):
    pass


def build_backlinks(pages: list[Page]) -> BacklinkIndex:
    backlinks: BacklinkIndex = {}
    for page in pages:
        for link in page.wikilinks:
            if link.link_type != LinkType.TEXT or not link.link:
                continue
            entry = backlinks.setdefault(link.link, [])
            for i, (other, count) in enumerate(entry):
                if other == page.title:
                    entry[i] = (other, count + 1)
                    break
            else:
                entry.append((page.title, 1))
    return backlinks


# ================= Front matter =================
def split_frontmatter(contents: str) -> tuple[str, str, str] | None:
    """Return (head, block, tail) around the first ---/--- pair, head ending with the opening delimiter."""
    opening = FM_OPEN_RE.search(contents)
    if not opening:
        return None
    closing = FM_CLOSE_RE.search(contents, opening.end())
    if not closing:
        return None
    return (
        contents[:opening.end()],
        contents[opening.end():closing.start()],
        contents[closing.start():],
    )


def _strip_backlink_keys(block: str) -> list[str]:
    kept = []
    dropping = False
    for line in block.splitlines(keepends=True):
        if BACKLINK_KEY_RE.match(line):
            dropping = True
            continue
        # continuation of a dropped key (block-style list items or indented values)
        if dropping and (line[:1] in (" ", "\t") or line.startswith("-")):
            continue
        dropping = False
        kept.append(line)
    return kept


def backlink_lines(referrers: list[tuple[str, int]]) -> tuple[str, str]:
    titles = json.dumps([title for title, _ in referrers], ensure_ascii=False)
    counts = json.dumps([count for _, count in referrers])
    return f"backlinks: {titles}\n", f"backlinks_count: {counts}\n"


def annotate_page(page: Page, index: BacklinkIndex) -> Page:
    parts = split_frontmatter(page.contents)
    if parts is None:
        raise FrontMatterError(f"No --- front matter block in {page.path}")
    head, block, tail = parts
    titles_line, counts_line = backlink_lines(index.get(page.title, []))
    newline = "\r\n" if head.endswith("\r\n") else "\n"
    if newline != "\n":
        titles_line = titles_line.replace("\n", newline)
        counts_line = counts_line.replace("\n", newline)
    page.contents = head + titles_line + counts_line + "".join(_strip_backlink_keys(block)) + tail
    return page


def annotate_pages(pages: list[Page], index: BacklinkIndex, debug: bool = False) -> list[Page]:
    for page in tqdm(pages, desc="Annotating backlinks", unit="note"):
        annotate_page(page, index)
        if debug:
            refs = index.get(page.title, [])
            tqdm.write(f"[index] {page.title}: {len(refs)} referrers")
    return pages
