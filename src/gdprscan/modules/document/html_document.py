"""BeautifulSoup-backed DocumentModel over a captured HTML snapshot."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from bs4 import BeautifulSoup, Tag

from .base import StyleInfo

logger = logging.getLogger(__name__)

CSS_RULE_PATTERN = re.compile(r"([^{}]+)\{([^{}]*)\}")
CSS_COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
# Only plain tag/class/id selectors (optionally with descendant combinators)
SIMPLE_SELECTOR_PATTERN = re.compile(r"^[a-zA-Z0-9_\-.#\s>]+$")
STYLE_PROPERTIES = ("display", "visibility")


def normalize_text(text: str) -> str:
    """Collapse whitespace and case-fold."""
    return " ".join(text.split()).casefold()


def parse_declarations(block: str) -> dict[str, str]:
    """Parse ``display: none; visibility: hidden`` into a property map."""
    declarations: dict[str, str] = {}
    for part in block.split(";"):
        if ":" not in part:
            continue
        name, value = part.split(":", 1)
        name = name.strip().lower()
        if name not in STYLE_PROPERTIES:
            continue
        value = value.replace("!important", "").strip().lower()
        if value:
            declarations[name] = value
    return declarations


def strip_at_rules(css: str) -> str:
    """Drop at-rules such as @media or @import, nested blocks included.

    Only unconditional rules describe the default screen rendering.
    """
    kept: list[str] = []
    depth = 0
    in_at_rule = False
    for char in css:
        if not in_at_rule:
            if char == "@" and depth == 0:
                in_at_rule = True
                continue
            kept.append(char)
            if char == "{":
                depth += 1
            elif char == "}" and depth:
                depth -= 1
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth <= 0:
                depth = 0
                in_at_rule = False
        elif char == ";" and depth == 0:
            in_at_rule = False
    return "".join(kept)


class HtmlDocument:
    """Snapshot of a rendered page: parsed markup plus client storage copies."""

    def __init__(
        self,
        html: str,
        url: str = "",
        cookies: Iterable[str] = (),
        local_entries: Mapping[str, str] | None = None,
    ):
        self.url = url
        self.soup = BeautifulSoup(html or "", "html.parser")
        self._cookies = tuple(c.strip() for c in cookies if c and c.strip())
        self._local_entries = MappingProxyType(dict(local_entries or {}))
        self._style_rules = self._collect_style_rules()
        self._text_cache: dict[int, str] = {}

    # ------------------------------------------------------------------
    # DocumentModel
    # ------------------------------------------------------------------
    def get_text_content(self, scope: Any = None) -> str:
        element = scope if scope is not None else (self.soup.body or self.soup)
        key = id(element)
        if key not in self._text_cache:
            self._text_cache[key] = normalize_text(element.get_text())
        return self._text_cache[key]

    def query_elements(self, selector: str, scope: Any = None) -> list[Tag]:
        root = scope if scope is not None else self.soup
        return list(root.select(selector))

    def get_cookies(self) -> tuple[str, ...]:
        return self._cookies

    def get_local_entries(self) -> Mapping[str, str]:
        return self._local_entries

    def get_computed_style(self, element: Any) -> StyleInfo:
        display = "inline"
        visibility = "visible"
        visibility_set = False

        node = element
        while isinstance(node, Tag) and not isinstance(node, BeautifulSoup):
            own = self._declared_style(node)
            if own.get("display") == "none":
                display = "none"
            elif node is element and "display" in own:
                display = own["display"]
            if not visibility_set and "visibility" in own:
                visibility = own["visibility"]
                visibility_set = True
            node = node.parent

        return StyleInfo(display=display, visibility=visibility)

    def get_current_url(self) -> str:
        return self.url

    # ------------------------------------------------------------------
    # Style resolution
    # ------------------------------------------------------------------
    def _collect_style_rules(self) -> list[tuple[Any, dict[str, str]]]:
        rules: list[tuple[Any, dict[str, str]]] = []
        for style_tag in self.soup.find_all("style"):
            css = strip_at_rules(CSS_COMMENT_PATTERN.sub("", style_tag.get_text()))
            for selectors, block in CSS_RULE_PATTERN.findall(css):
                declarations = parse_declarations(block)
                if not declarations:
                    continue
                for selector in selectors.split(","):
                    selector = selector.strip()
                    if not selector or not SIMPLE_SELECTOR_PATTERN.match(selector):
                        logger.debug("Skipping unsupported CSS selector %r", selector)
                        continue
                    rules.append((self.soup.css.compile(selector), declarations))
        return rules

    def _declared_style(self, node: Tag) -> dict[str, str]:
        declared: dict[str, str] = {}
        for matcher, declarations in self._style_rules:
            if matcher.match(node):
                declared.update(declarations)
        if node.has_attr("hidden"):
            declared["display"] = "none"
        inline = node.get("style")
        if inline:
            declared.update(parse_declarations(str(inline)))
        return declared
