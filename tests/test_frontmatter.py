"""Tests for front matter handling."""

import pytest

from draft2html.config import DEFAULT_CONFIG
from draft2html.exceptions import ConfigError, ContentStateError
from draft2html.frontmatter_parser import (
    convert_metadata_to_config,
    parse_markdown_string_with_frontmatter,
    parse_markdown_with_frontmatter,
)


MD_WITH_FRONTMATTER = """---
title: Notes
defaultBlockTag: div
inlineStyles:
  RED:
    style:
      color: red
---
Hello
"""


class TestFrontmatter:
    """Test parsing and converting front matter."""

    def test_metadata_and_content_split(self):
        metadata, content = parse_markdown_string_with_frontmatter(MD_WITH_FRONTMATTER)
        assert metadata['title'] == 'Notes'
        assert content.strip() == 'Hello'

    def test_no_frontmatter(self):
        metadata, content = parse_markdown_string_with_frontmatter("Just text")
        assert metadata == {}
        assert content == "Just text"

    def test_invalid_yaml_raises(self):
        with pytest.raises(ContentStateError):
            parse_markdown_string_with_frontmatter("---\nkey: [unclosed\n---\nbody")

    def test_read_file(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text(MD_WITH_FRONTMATTER, encoding="utf-8")
        metadata, _ = parse_markdown_with_frontmatter(str(path))
        assert metadata['defaultBlockTag'] == 'div'

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ContentStateError):
            parse_markdown_with_frontmatter(str(tmp_path / "missing.md"))

    def test_convert_metadata_to_config(self):
        metadata, _ = parse_markdown_string_with_frontmatter(MD_WITH_FRONTMATTER)
        config = convert_metadata_to_config(metadata)
        assert config.DEFAULT_BLOCK_TAG == 'div'
        assert config.INLINE_STYLES['RED'] == {'style': {'color': 'red'}}
        assert config.STYLE_ORDER[-1] == 'RED'
        assert DEFAULT_CONFIG.DEFAULT_BLOCK_TAG == 'p'

    def test_invalid_inline_styles_raise(self):
        with pytest.raises(ConfigError):
            convert_metadata_to_config({'inlineStyles': ['RED']})
