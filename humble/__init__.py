# humble: compile a folder of wiki-style markdown notes into a Hugo site

from .backlinks import FrontMatterError, annotate_page, build_backlinks
from .pages import Page, filter_publishable, load_page, load_pages
from .site import BuildReport, build_site
from .wikilinks import LinkType, WikiLink, extract_links, parse_wikilink

__version__ = "0.1.0"
