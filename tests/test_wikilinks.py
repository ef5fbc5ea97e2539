import pytest

from humble.wikilinks import (
    LinkType,
    WikilinkSyntax,
    extract_links,
    filename_type,
    parse_wikilink,
    remove_code_blocks,
)


def test_simple():
    wl = parse_wikilink("Test")
    assert (wl.name, wl.link, wl.anchor, wl.link_type) == ("Test", "Test", "", LinkType.TEXT)


def test_alias():
    wl = parse_wikilink("Test|Another")
    assert wl.name == "Another"
    assert wl.link == "Test"
    assert wl.anchor == ""


def test_anchor():
    wl = parse_wikilink("Test#Anchor")
    assert (wl.name, wl.link, wl.anchor) == ("Test", "Test", "Anchor")


def test_just_anchor():
    wl = parse_wikilink("#Anchor Test")
    assert (wl.name, wl.link, wl.anchor) == ("", "", "Anchor Test")
    assert wl.link_type == LinkType.TEXT


def test_anchor_and_alias():
    wl = parse_wikilink("Test#Anchor2|Another")
    assert (wl.name, wl.link, wl.anchor) == ("Another", "Test", "Anchor2")


def test_accepts_brackets():
    assert parse_wikilink("[[Test]]").link == "Test"


@pytest.mark.parametrize("inner", ["Test.jpg", "Test.jpeg", "Test.gif", "Test.png|Another", "FOO.JPG", "shot.PNG"])
def test_image_types(inner):
    assert parse_wikilink(inner).link_type == LinkType.IMAGE


def test_image_alias_keeps_link():
    wl = parse_wikilink("Test.png|Another")
    assert (wl.name, wl.link) == ("Another", "Test.png")


def test_svg_is_text_link():
    # asset copier treats svg as an image; the link classifier does not
    assert parse_wikilink("diagram.svg").link_type == LinkType.TEXT
    assert filename_type("diagram.svg") == LinkType.TEXT


def test_filename_type_without_extension():
    assert filename_type("png") == LinkType.TEXT
    assert filename_type("") == LinkType.TEXT


def test_custom_image_exts():
    syntax = WikilinkSyntax.build(image_exts=("svg", ".webp"))
    assert filename_type("a.svg", syntax) == LinkType.IMAGE
    assert filename_type("a.webp", syntax) == LinkType.IMAGE
    assert filename_type("a.png", syntax) == LinkType.TEXT


@pytest.mark.parametrize("inner", ["", "   ", "#", "|", "[[]]"])
def test_unusable_links_are_none(inner):
    assert parse_wikilink(inner) is None


def test_extract_links_in_order():
    text = "See [[A]], then [[B|bee]] and ![[pic.png]]. Also [[#local]]."
    links = extract_links(text)
    assert [l.link for l in links] == ["A", "B", "pic.png", ""]
    assert links[1].name == "bee"
    assert links[2].link_type == LinkType.IMAGE
    assert links[2].original == "![[pic.png]]"
    assert links[3].anchor == "local"


def test_extract_links_drops_empty():
    assert extract_links("[[]] and [[ ]] and [[Real]]") == extract_links("[[Real]]")


def test_extract_links_skips_code_blocks():
    text = "[[Before]]\n```python\nx = [[NotALink]]\n```\n[[After]] `[[Inline]]`"
    assert [l.link for l in extract_links(text)] == ["Before", "After", "Inline"]


def test_remove_code_blocks_multiline():
    assert remove_code_blocks("a```\nb\n```c") == "ac"


def test_extract_links_never_raises_on_garbage():
    assert extract_links("[[|]] [[#]] [[]] ]] [[") == []


def test_just_anchor_with_alias():
    # the anchor stops at the alias separator
    wl = parse_wikilink("#Section|see below")
    assert (wl.name, wl.link, wl.anchor) == ("see below", "", "Section")
    assert wl.link_type == LinkType.TEXT
