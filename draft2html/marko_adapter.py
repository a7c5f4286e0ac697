"""
Markdown to ContentState adapter.

Parses Markdown with marko (GFM flavour) and flattens the result into
Draft.js style blocks, so Markdown files go through the same
DraftToHtml pipeline as raw content JSON.
"""

import logging
import os

from marko import Markdown
from PIL import Image

from .config import (
    BLOCK_TYPE_BLOCKQUOTE,
    BLOCK_TYPE_CODE,
    BLOCK_TYPE_ORDERED_LIST_ITEM,
    BLOCK_TYPE_UNORDERED_LIST_ITEM,
    BLOCK_TYPE_UNSTYLED,
    ENTITY_TYPE_IMAGE,
    ENTITY_TYPE_LINK,
    INLINE_STYLE_BOLD,
    INLINE_STYLE_CODE,
    INLINE_STYLE_ITALIC,
    INLINE_STYLE_STRIKETHROUGH,
)
from .content_state import CharacterMeta, ContentBlock, ContentState, make_entity

logger = logging.getLogger(__name__)

HEADER_TYPES = {
    1: 'header-one',
    2: 'header-two',
    3: 'header-three',
    4: 'header-four',
    5: 'header-five',
    6: 'header-six',
}

STYLE_ELEMENTS = {
    'StrongEmphasis': INLINE_STYLE_BOLD,
    'Emphasis': INLINE_STYLE_ITALIC,
    'Strikethrough': INLINE_STYLE_STRIKETHROUGH,
}


class _BlockText:
    """Collects the characters of one block together with their metadata."""

    def __init__(self):
        self.chars = []
        self.character_list = []

    def add(self, text, styles, entity):
        meta = CharacterMeta(entity, styles)
        for char in text:
            self.chars.append(char)
            self.character_list.append(meta)

    @property
    def text(self):
        return ''.join(self.chars)


class MarkoToContentState:
    def __init__(self, input_dir=None):
        self.markdown = Markdown(extensions=['gfm'])
        # Directory used to resolve relative image paths
        self.input_dir = input_dir
        self.blocks = []
        self.entity_map = {}

    def parse(self, text):
        """Parse Markdown text and return a ContentState."""
        self.blocks = []
        self.entity_map = {}

        document = self.markdown.parse(text)
        self._process_blocks(document.children)

        return ContentState(self.blocks, self.entity_map)

    # --- BLOCKS ---

    def _process_blocks(self, elements, list_type=None, depth=0, in_quote=False):
        for element in elements:
            e_type = element.get_type()

            if e_type in ('Heading', 'SetextHeading'):
                self._add_block(HEADER_TYPES.get(element.level, BLOCK_TYPE_UNSTYLED), element.children)

            elif e_type == 'Paragraph':
                if list_type:
                    block_type = list_type
                elif in_quote:
                    block_type = BLOCK_TYPE_BLOCKQUOTE
                else:
                    block_type = BLOCK_TYPE_UNSTYLED
                self._add_block(block_type, element.children, depth=depth if list_type else 0)

            elif e_type == 'List':
                item_type = BLOCK_TYPE_ORDERED_LIST_ITEM if element.ordered else BLOCK_TYPE_UNORDERED_LIST_ITEM
                item_depth = depth + 1 if list_type else 0
                for item in element.children:
                    self._process_list_item(item.children, item_type, item_depth, in_quote)

            elif e_type == 'Quote':
                self._process_blocks(element.children, None, 0, True)

            elif e_type in ('FencedCode', 'CodeBlock'):
                code = self._get_plain_text(element).rstrip('\n')
                block = _BlockText()
                block.add(code, None, None)
                self._append_block(BLOCK_TYPE_CODE, block)

            elif e_type in ('BlankLine', 'LinkRefDef'):
                continue

            else:
                logger.debug("Skipped unsupported Markdown block: %s", e_type)

    def _process_list_item(self, elements, item_type, depth, in_quote):
        """One list item is one block: later paragraphs and headings join it on new lines."""
        block = None

        for element in elements:
            e_type = element.get_type()

            if e_type in ('Paragraph', 'Heading', 'SetextHeading'):
                if block is None:
                    block = _BlockText()
                else:
                    block.add('\n', frozenset(), None)
                self._process_inlines(element.children, block, frozenset(), None)
                continue

            if e_type == 'BlankLine':
                continue

            if block is not None:
                self._append_block(item_type, block, depth)
                block = None
            self._process_blocks([element], item_type, depth, in_quote)

        if block is not None:
            self._append_block(item_type, block, depth)

    def _add_block(self, block_type, inlines, depth=0):
        block = _BlockText()
        self._process_inlines(inlines, block, frozenset(), None)
        self._append_block(block_type, block, depth)

    def _append_block(self, block_type, block, depth=0):
        self.blocks.append(ContentBlock(
            key=str(len(self.blocks)),
            type=block_type,
            text=block.text,
            depth=depth,
            character_list=block.character_list,
        ))

    # --- INLINES ---

    def _process_inlines(self, inlines, block, styles, entity):
        if isinstance(inlines, str):
            block.add(inlines, styles, entity)
            return

        for item in inlines:
            i_type = item.get_type()

            if i_type in ('RawText', 'Literal', 'InlineHTML'):
                block.add(item.children, styles, entity)

            elif i_type == 'LineBreak':
                block.add(' ' if item.soft else '\n', styles, entity)

            elif i_type in STYLE_ELEMENTS:
                self._process_inlines(item.children, block, styles | {STYLE_ELEMENTS[i_type]}, entity)

            elif i_type == 'CodeSpan':
                block.add(self._get_plain_text(item), styles | {INLINE_STYLE_CODE}, entity)

            elif i_type == 'Link':
                key = self._add_entity(ENTITY_TYPE_LINK, {'url': item.dest, 'title': item.title})
                self._process_inlines(item.children, block, styles, key)

            elif i_type in ('AutoLink', 'Url'):
                key = self._add_entity(ENTITY_TYPE_LINK, {'url': item.dest})
                self._process_inlines(item.children, block, styles, key)

            elif i_type == 'Image':
                alt = self._get_plain_text(item)
                key = self._add_entity(ENTITY_TYPE_IMAGE, self._get_image_data(item.dest, alt, item.title))
                # The image element ignores its text, but the entity needs a character.
                block.add(alt or ' ', styles, key)

            else:
                logger.debug("Unhandled inline %s, keeping its text", i_type)
                self._process_inlines(getattr(item, 'children', ''), block, styles, entity)

    def _add_entity(self, entity_type, data):
        key = str(len(self.entity_map))
        self.entity_map[key] = make_entity(entity_type, data, 'MUTABLE')
        return key

    def _get_image_data(self, src, alt, title):
        data = {'src': src, 'alt': alt or None, 'title': title or None}

        size = self._read_image_size(src)
        if size:
            data['width'], data['height'] = size

        return data

    def _read_image_size(self, src):
        """Read pixel size of a local image with Pillow, None when unavailable."""
        if not src or '://' in src or src.startswith('data:'):
            return None

        candidates = [src]
        if self.input_dir:
            candidates.append(os.path.join(self.input_dir, src))

        for cand in candidates:
            if os.path.isfile(cand):
                try:
                    with Image.open(cand) as im:
                        return im.size
                except OSError as e:
                    logger.debug("Cannot read image size of %s: %s", cand, e)
                    return None

        return None

    def _get_plain_text(self, element):
        children = getattr(element, 'children', '')
        if isinstance(children, str):
            return children
        return ''.join(self._get_plain_text(child) for child in children)
