# site.py: the whole build, one batch stage after another:
#   load -> filter -> index -> annotate -> write pages -> resolve images -> copy images
# Any read/write error aborts the run; nothing already written is rolled back.

from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from .assets import assert_in_publish_root, build_image_map, copy_images
from .backlinks import BacklinkIndex, annotate_pages, build_backlinks
from .hugo import convert_wikilinks_to_hugo
from .pages import Page, check_unique_titles, filter_publishable, load_pages
from .wikilinks import WikilinkSyntax


@dataclass
class BuildReport:
    source: Path
    destination: Path
    assets_destination: Path
    scanned: int = 0
    published: list[str] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    images_copied: list[Path] = field(default_factory=list)
    images_missing: list[str] = field(default_factory=list)
    backlinks: BacklinkIndex = field(default_factory=dict)
    dry_run: bool = False


def page_destination(page: Page, destination: Path, index_title: str = "Index",
                     index_filename: str = "_index.md", posts_dir: str = "posts") -> Path:
    if page.title == index_title:
        return Path(destination) / index_filename
    return Path(destination) / posts_dir / f"{page.title}.md"


def write_page(page: Page, dst: Path, destination: Path, syntax: WikilinkSyntax,
               dry_run: bool = False) -> None:
    assert_in_publish_root(destination, dst)
    if dry_run:
        tqdm.write(f"[dry] write (note) {page.path} -> {dst}")
        return
    dst.parent.mkdir(parents=True, exist_ok=True)
    dst.write_text(convert_wikilinks_to_hugo(page.contents, syntax), encoding="utf-8")


def build_site(cfg: dict) -> BuildReport:
    source = Path(cfg["source"]).resolve()
    destination = Path(cfg["destination"]).resolve()
    assets_source = Path(cfg["assets_source"]).resolve()
    assets_destination = Path(cfg["assets_destination"]).resolve()
    debug = bool(cfg.get("debug"))
    dry_run = bool(cfg.get("dry_run"))
    syntax = WikilinkSyntax.from_config(cfg)
    # output trees may sit inside the source trees; never read our own output back
    outputs = (destination, assets_destination)

    report = BuildReport(source=source, destination=destination,
                         assets_destination=assets_destination, dry_run=dry_run)

    # 1) load every note
    pages = load_pages(source, cfg["markdown_glob"], syntax,
                       include_hidden=cfg["include_hidden"], debug=debug, exclude=outputs)
    report.scanned = len(pages)
    tqdm.write(f"[scan] md files found: {len(pages)}")

    # 2) keep publish: true
    pages = filter_publishable(pages, cfg["publish_marker"], debug=debug)
    check_unique_titles(pages, cfg["duplicate_titles"])
    report.published = [p.title for p in pages]
    tqdm.write(f"[scan] {cfg['publish_marker']} selected: {len(pages)}")
    if cfg.get("list_selected"):
        for page in pages:
            tqdm.write(f" - {page.path.relative_to(source)}")

    # 3) backlink index over the published set only
    report.backlinks = build_backlinks(pages)
    tqdm.write(f"[index] {len(report.backlinks)} linked titles")

    # 4) front matter
    annotate_pages(pages, report.backlinks, debug=debug)

    # 5) write rewritten pages; page.contents keeps wikilinks for the asset scan
    for page in tqdm(pages, desc="Writing pages", unit="note"):
        dst = page_destination(page, destination, cfg["index_title"],
                               cfg["index_filename"], cfg["posts_dir"])
        write_page(page, dst, destination, syntax, dry_run=dry_run)
        if debug:
            tqdm.write(f"[write] {page.title} -> {dst}")
        report.written.append(dst)

    # 6) image map, built once, read-only afterwards
    image_map = build_image_map(assets_source, cfg["asset_image_exts"],
                                include_hidden=cfg["include_hidden"], debug=debug, exclude=outputs)
    tqdm.write(f"[assets] images available: {len(image_map)}")

    # 7) copy embedded images
    for page in tqdm(pages, desc="Copying images", unit="note"):
        copied, missing = copy_images(page, image_map, assets_destination, syntax,
                                      dry_run=dry_run, debug=debug)
        report.images_copied.extend(copied)
        report.images_missing.extend(missing)

    return report
