"""Conversion settings for DraftToHtml."""

import copy

from .exceptions import ConfigError


BLOCK_TYPE_UNSTYLED = 'unstyled'
BLOCK_TYPE_HEADER_ONE = 'header-one'
BLOCK_TYPE_HEADER_TWO = 'header-two'
BLOCK_TYPE_HEADER_THREE = 'header-three'
BLOCK_TYPE_HEADER_FOUR = 'header-four'
BLOCK_TYPE_HEADER_FIVE = 'header-five'
BLOCK_TYPE_HEADER_SIX = 'header-six'
BLOCK_TYPE_UNORDERED_LIST_ITEM = 'unordered-list-item'
BLOCK_TYPE_ORDERED_LIST_ITEM = 'ordered-list-item'
BLOCK_TYPE_BLOCKQUOTE = 'blockquote'
BLOCK_TYPE_PULLQUOTE = 'pullquote'
BLOCK_TYPE_CODE = 'code-block'
BLOCK_TYPE_ATOMIC = 'atomic'

ENTITY_TYPE_LINK = 'LINK'
ENTITY_TYPE_IMAGE = 'IMAGE'
ENTITY_TYPE_EMBED = 'embed'

INLINE_STYLE_BOLD = 'BOLD'
INLINE_STYLE_CODE = 'CODE'
INLINE_STYLE_ITALIC = 'ITALIC'
INLINE_STYLE_STRIKETHROUGH = 'STRIKETHROUGH'
INLINE_STYLE_UNDERLINE = 'UNDERLINE'


class ConversionConfig:
    """Tag tables, inline style map and hooks used by one conversion.

    Attributes are plain and upper-case so a caller can tweak a fresh
    instance before handing it over. The converter only reads them.
    """

    def __init__(self):
        # None disables the wrapper for unknown block types.
        self.DEFAULT_BLOCK_TAG = 'p'

        # Outer-most tag first, content goes into the last one.
        self.BLOCK_TAGS = {
            BLOCK_TYPE_HEADER_ONE: ['h1'],
            BLOCK_TYPE_HEADER_TWO: ['h2'],
            BLOCK_TYPE_HEADER_THREE: ['h3'],
            BLOCK_TYPE_HEADER_FOUR: ['h4'],
            BLOCK_TYPE_HEADER_FIVE: ['h5'],
            BLOCK_TYPE_HEADER_SIX: ['h6'],
            BLOCK_TYPE_UNORDERED_LIST_ITEM: ['li'],
            BLOCK_TYPE_ORDERED_LIST_ITEM: ['li'],
            BLOCK_TYPE_BLOCKQUOTE: ['blockquote'],
            BLOCK_TYPE_CODE: ['pre', 'code'],
            BLOCK_TYPE_ATOMIC: ['figure'],
        }

        self.WRAPPER_TAGS = {
            BLOCK_TYPE_UNORDERED_LIST_ITEM: 'ul',
            BLOCK_TYPE_ORDERED_LIST_ITEM: 'ol',
        }

        self.INLINE_STYLES = {
            INLINE_STYLE_BOLD: {'element': 'strong'},
            INLINE_STYLE_CODE: {'element': 'code'},
            INLINE_STYLE_ITALIC: {'element': 'em'},
            INLINE_STYLE_STRIKETHROUGH: {'element': 'del'},
            INLINE_STYLE_UNDERLINE: {'element': 'u'},
        }

        # Order: inner-most style to outer-most, e.g. <em><strong>foo</strong></em>
        self.STYLE_ORDER = [
            INLINE_STYLE_BOLD,
            INLINE_STYLE_ITALIC,
            INLINE_STYLE_UNDERLINE,
            INLINE_STYLE_STRIKETHROUGH,
            INLINE_STYLE_CODE,
        ]

        # Entity data key -> element attribute
        self.ENTITY_ATTRIBUTES = {
            ENTITY_TYPE_LINK: {
                'url': 'href',
                'href': 'href',
                'rel': 'rel',
                'target': 'target',
                'title': 'title',
                'className': 'class',
            },
            ENTITY_TYPE_IMAGE: {
                'src': 'src',
                'height': 'height',
                'width': 'width',
                'alt': 'alt',
                'className': 'class',
            },
        }

        self.ATTR_NAME_MAP = {
            'acceptCharset': 'accept-charset',
            'className': 'class',
            'htmlFor': 'for',
            'httpEquiv': 'http-equiv',
        }

        # block -> dict of attributes ('style' may be a style map)
        self.BLOCK_ATTRIBUTES_FN = None

        # frozenset of style names -> {'element', 'attributes', 'style'} or None
        self.INLINE_STYLE_FN = None

    def with_inline_styles(self, inline_styles):
        """Return a copy with ``inline_styles`` merged into the style map.

        Names that are new to the map are appended to the style order, so
        they wrap outside the built-in styles in the order first seen.
        """
        if not inline_styles:
            return self
        if not isinstance(inline_styles, dict):
            raise ConfigError(f"inlineStyles must be a mapping, got {type(inline_styles).__name__}")

        config = copy.copy(self)
        config.INLINE_STYLES = dict(self.INLINE_STYLES)
        config.STYLE_ORDER = list(self.STYLE_ORDER)

        for style, properties in inline_styles.items():
            if properties is None:
                properties = {}
            if not isinstance(properties, dict):
                raise ConfigError(f"Style '{style}' must map to an object, got {type(properties).__name__}")

            if style not in config.INLINE_STYLES and style not in config.STYLE_ORDER:
                config.STYLE_ORDER.append(style)

            config.INLINE_STYLES[style] = copy.deepcopy(properties)

        return config

    @classmethod
    def from_dict(cls, options, base=None):
        """Build a config from a style-map document.

        Recognised keys: ``inlineStyles``, ``defaultBlockTag`` and
        ``blockTags``. Unknown keys are ignored.
        """
        if options is None:
            options = {}
        if not isinstance(options, dict):
            raise ConfigError(f"Style map must be an object, got {type(options).__name__}")

        config = copy.copy(base if base is not None else DEFAULT_CONFIG)
        config.BLOCK_TAGS = dict(config.BLOCK_TAGS)

        if 'defaultBlockTag' in options:
            tag = options['defaultBlockTag']
            if tag is not None and not isinstance(tag, str):
                raise ConfigError("defaultBlockTag must be a tag name or null")
            config.DEFAULT_BLOCK_TAG = tag or None

        block_tags = options.get('blockTags') or {}
        if not isinstance(block_tags, dict):
            raise ConfigError("blockTags must be an object")
        for block_type, tags in block_tags.items():
            if isinstance(tags, str):
                tags = [tags]
            if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
                raise ConfigError(f"blockTags['{block_type}'] must be a tag name or a list of tag names")
            config.BLOCK_TAGS[block_type] = list(tags)

        return config.with_inline_styles(options.get('inlineStyles'))


DEFAULT_CONFIG = ConversionConfig()
