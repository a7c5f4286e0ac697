"""
Front matter support for Markdown input.

A Markdown file may open with a YAML block carrying conversion options:

    ---
    defaultBlockTag: div
    inlineStyles:
      RED:
        style: {color: red}
    ---
"""

import frontmatter
import yaml

from .config import ConversionConfig
from .exceptions import ConfigError, ContentStateError


def parse_markdown_with_frontmatter(path):
    """Read a Markdown file and return ``(metadata, content)``."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        raise ContentStateError(f"Cannot read Markdown file {path}: {e}") from e
    return parse_markdown_string_with_frontmatter(text)


def parse_markdown_string_with_frontmatter(text):
    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as e:
        raise ContentStateError(f"Invalid front matter: {e}") from e
    return dict(post.metadata), post.content


def convert_metadata_to_config(metadata, base=None):
    """Turn front matter metadata into a ConversionConfig.

    Only the conversion keys (``inlineStyles``, ``defaultBlockTag``,
    ``blockTags``) are used; title, author and the like are ignored.
    """
    if not isinstance(metadata, dict):
        raise ConfigError("Front matter must be a mapping")
    return ConversionConfig.from_dict(metadata, base=base)
