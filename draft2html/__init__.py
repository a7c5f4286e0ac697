"""
draft2html - Convert Draft.js rich-text content to HTML

Blocks with per-character inline styles and entities are turned into
nested HTML (lists by depth, styled runs, links and images), with a
configurable mapping from inline style names to elements and CSS.
"""

__version__ = "0.1.0"

from .config import ConversionConfig, DEFAULT_CONFIG
from .content_state import (
    CharacterMeta,
    ContentBlock,
    ContentState,
    ImageEntity,
    LinkEntity,
    UnknownEntity,
    make_entity,
)
from .DraftToHtml import DraftToHtml, convert
from .exceptions import ConfigError, ContentStateError, ConversionError, Draft2HtmlError
from .frontmatter_parser import (
    parse_markdown_with_frontmatter,
    parse_markdown_string_with_frontmatter,
    convert_metadata_to_config,
)
from .marko_adapter import MarkoToContentState
from .raw_parser import from_json, load_raw, parse_raw, to_raw
from .style_to_css import StyleToCss

__all__ = [
    "DraftToHtml",
    "convert",
    "StyleToCss",
    "ConversionConfig",
    "DEFAULT_CONFIG",
    "ContentState",
    "ContentBlock",
    "CharacterMeta",
    "LinkEntity",
    "ImageEntity",
    "UnknownEntity",
    "make_entity",
    "MarkoToContentState",
    "parse_raw",
    "from_json",
    "load_raw",
    "to_raw",
    "parse_markdown_with_frontmatter",
    "parse_markdown_string_with_frontmatter",
    "convert_metadata_to_config",
    "Draft2HtmlError",
    "ContentStateError",
    "ConfigError",
    "ConversionError",
]
