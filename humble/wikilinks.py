# wikilinks.py: parse [[wikilinks]] out of markdown notes
# - [[Title]], [[Title|Alias]], [[Title#Anchor]], [[#Anchor]], ![[image.png]]
# - Fenced code blocks are stripped before scanning.
# - Link type comes from the target's extension, not from the leading "!".

import re
from dataclasses import dataclass
from enum import Enum

# link classifier set; svg is deliberately absent (see assets.DEFAULT_ASSET_EXTS)
DEFAULT_LINK_IMAGE_EXTS = ("jpg", "jpeg", "png", "gif")


class LinkType(Enum):
    TEXT = "text"
    IMAGE = "image"


@dataclass(frozen=True)
class WikiLink:
    name: str
    link: str
    anchor: str
    link_type: LinkType
    original: str = ""


@dataclass(frozen=True)
class WikilinkSyntax:
    """Compiled patterns and extension sets shared by the parser and asset copier."""

    wikilink_re: re.Pattern
    embed_re: re.Pattern
    code_block_re: re.Pattern
    image_exts: frozenset

    @classmethod
    def build(cls, image_exts=DEFAULT_LINK_IMAGE_EXTS) -> "WikilinkSyntax":
        return cls(
            wikilink_re=re.compile(r'(!)?\[\[(.*?)\]\]'),
            embed_re=re.compile(r'!\[\[(.*?)\]\]'),
            code_block_re=re.compile(r'```.*?```', re.DOTALL),
            image_exts=frozenset(e.lower().lstrip(".") for e in image_exts),
        )

    @classmethod
    def from_config(cls, cfg: dict) -> "WikilinkSyntax":
        return cls.build(cfg.get("link_image_exts") or DEFAULT_LINK_IMAGE_EXTS)


DEFAULT_SYNTAX = WikilinkSyntax.build()


def remove_code_blocks(text: str, syntax: WikilinkSyntax = DEFAULT_SYNTAX) -> str:
    return syntax.code_block_re.sub("", text)


def filename_type(filename: str, syntax: WikilinkSyntax = DEFAULT_SYNTAX) -> LinkType:
    if "." not in filename:
        return LinkType.TEXT
    ext = filename.rsplit(".", 1)[1].lower()
    return LinkType.IMAGE if ext in syntax.image_exts else LinkType.TEXT


def parse_wikilink(inner: str, syntax: WikilinkSyntax = DEFAULT_SYNTAX, original: str = "") -> WikiLink | None:
    """Parse the text between [[ and ]]; returns None when nothing usable is left."""
    contents = inner
    if contents.startswith("[["):
        contents = contents[2:]
    if contents.endswith("]]"):
        contents = contents[:-2]
    if not contents.strip():
        return None

    if "|" in contents:
        link, name = contents.split("|", 1)
        link = link.strip()
    else:
        link = name = contents

    if "#" in link:
        link_only, anchor = link.split("#", 1)
        link_only = link_only.strip()
        anchor = anchor.lstrip("#")
    else:
        link_only, anchor = link, ""

    just_anchor = link.startswith("#")
    final_link = "" if just_anchor else link_only
    final_anchor = link.lstrip("#") if just_anchor else anchor
    final_name = final_link if name == link else name

    if not (final_link or final_anchor or final_name):
        return None

    return WikiLink(
        name=final_name,
        link=final_link,
        anchor=final_anchor,
        link_type=filename_type(final_link, syntax),
        original=original or f"[[{contents}]]",
    )


def extract_links(contents: str, syntax: WikilinkSyntax = DEFAULT_SYNTAX) -> list[WikiLink]:
    links = []
    for m in syntax.wikilink_re.finditer(remove_code_blocks(contents, syntax)):
        wl = parse_wikilink(m.group(2), syntax, original=m.group(0))
        if wl is not None:
            links.append(wl)
    return links
