"""Tests for ConversionConfig."""

import pytest

from draft2html.config import ConversionConfig, DEFAULT_CONFIG
from draft2html.exceptions import ConfigError


class TestConversionConfig:
    """Test config defaults and derived copies."""

    def test_defaults(self, config):
        assert config.DEFAULT_BLOCK_TAG == 'p'
        assert config.BLOCK_TAGS['code-block'] == ['pre', 'code']
        assert config.WRAPPER_TAGS == {'unordered-list-item': 'ul', 'ordered-list-item': 'ol'}
        assert config.STYLE_ORDER == ['BOLD', 'ITALIC', 'UNDERLINE', 'STRIKETHROUGH', 'CODE']

    def test_with_inline_styles_merges(self, config):
        derived = config.with_inline_styles({'BOLD': {'element': 'b'}, 'RED': {'style': {'color': 'red'}}})
        assert derived.INLINE_STYLES['BOLD'] == {'element': 'b'}
        assert derived.INLINE_STYLES['ITALIC'] == {'element': 'em'}
        assert derived.STYLE_ORDER == ['BOLD', 'ITALIC', 'UNDERLINE', 'STRIKETHROUGH', 'CODE', 'RED']
        assert config.INLINE_STYLES['BOLD'] == {'element': 'strong'}
        assert 'RED' not in config.STYLE_ORDER

    def test_with_no_inline_styles_returns_same(self, config):
        assert config.with_inline_styles(None) is config
        assert config.with_inline_styles({}) is config

    def test_style_descriptor_copied(self, config):
        styles = {'RED': {'style': {'color': 'red'}}}
        derived = config.with_inline_styles(styles)
        styles['RED']['style']['color'] = 'blue'
        assert derived.INLINE_STYLES['RED']['style']['color'] == 'red'

    def test_invalid_inline_styles(self, config):
        with pytest.raises(ConfigError):
            config.with_inline_styles(['BOLD'])
        with pytest.raises(ConfigError):
            config.with_inline_styles({'BOLD': 'b'})

    def test_from_dict(self):
        config = ConversionConfig.from_dict({
            'defaultBlockTag': None,
            'blockTags': {'pullquote': 'aside', 'atomic': ['div', 'figure']},
            'inlineStyles': {'BOLD': {'element': 'b'}},
        })
        assert config.DEFAULT_BLOCK_TAG is None
        assert config.BLOCK_TAGS['pullquote'] == ['aside']
        assert config.BLOCK_TAGS['atomic'] == ['div', 'figure']
        assert config.INLINE_STYLES['BOLD'] == {'element': 'b'}
        assert 'pullquote' not in DEFAULT_CONFIG.BLOCK_TAGS

    def test_from_dict_uses_base(self):
        base = ConversionConfig.from_dict({'defaultBlockTag': 'div'})
        config = ConversionConfig.from_dict({'inlineStyles': {'RED': {}}}, base=base)
        assert config.DEFAULT_BLOCK_TAG == 'div'
        assert 'RED' in config.STYLE_ORDER

    @pytest.mark.parametrize("options", [
        ['inlineStyles'],
        {'defaultBlockTag': 3},
        {'blockTags': ['p']},
        {'blockTags': {'atomic': [1]}},
    ])
    def test_from_dict_invalid(self, options):
        with pytest.raises(ConfigError):
            ConversionConfig.from_dict(options)
