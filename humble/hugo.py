# hugo.py: rewrite wikilinks into Hugo shortcodes
#   ![[pic.png]]        -> {{< figure src="/assets/pic.png" alt="pic.png" >}}
#   ![[pic.png|300]]    -> {{< figure src="/assets/pic.png" alt="pic.png" width="300" >}}
#   [[Target|Alias]]    -> [Alias]({{< ref "Target" >}})
#   [[Target]]          -> [Target]({{< ref "Target" >}})
# Image vs text is decided by the leading "!" alone, not by the extension.

import re

from .assets import asset_relpath
from .wikilinks import DEFAULT_SYNTAX, WikilinkSyntax

ASSET_URL_PREFIX = "/assets/"
# Obsidian image size alias: |300 or |300x200
SIZE_ALIAS_RE = re.compile(r'^\s*(\d+)(?:x\d+)?\s*$')


def _quote(value: str) -> str:
    # shortcode params are double-quoted strings with backslash escapes
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _figure(inner: str, prefix: str) -> str:
    link, alias = inner.split("|", 1) if "|" in inner else (inner, inner)
    src = prefix + asset_relpath(link)
    size = SIZE_ALIAS_RE.match(alias)
    if size:
        return f'{{{{< figure src="{_quote(src)}" alt="{_quote(link)}" width="{size.group(1)}" >}}}}'
    return f'{{{{< figure src="{_quote(src)}" alt="{_quote(alias)}" >}}}}'


def _ref(inner: str) -> str:
    if "|" in inner:
        link, name = inner.split("|", 1)
    else:
        link = name = inner
    return f'[{name}]({{{{< ref "{_quote(link)}" >}}}})'


def convert_wikilinks_to_hugo(contents: str, syntax: WikilinkSyntax = DEFAULT_SYNTAX,
                              asset_prefix: str = ASSET_URL_PREFIX) -> str:
    def _repl(m: re.Match):
        bang, inner = m.group(1), m.group(2)
        if bang:
            return _figure(inner, asset_prefix)
        return _ref(inner)
    return syntax.wikilink_re.sub(_repl, contents)
