import logging
import os
import re
import xml.etree.ElementTree as ET

from .config import BLOCK_TYPE_CODE, DEFAULT_CONFIG, INLINE_STYLE_CODE
from .content_state import ImageEntity, LinkEntity
from .exceptions import ContentStateError, ConversionError
from .raw_parser import load_raw
from .style_to_css import StyleToCss

logger = logging.getLogger(__name__)

NBSP = '\xa0'
BREAK = 'br'
DATA_ATTRIBUTE = re.compile(r'^data-([a-z0-9-]+)$')


class DraftToHtml:
    def __init__(self, content_state=None, config=None, inline_styles=None):
        self.state = content_state
        self.config = (config if config is not None else DEFAULT_CONFIG).with_inline_styles(inline_styles)
        self.style_to_css = StyleToCss()

    @staticmethod
    def convert_to_html(input_path, output_path, content_state=None, config=None, inline_styles=None):
        """
        Convert a content state to an HTML file.

        Args:
            input_path: Raw content JSON, read when content_state is not given
            output_path: HTML file to write
            content_state: Pre-parsed ContentState (e.g. from MarkoToContentState)
            config: ConversionConfig, defaults to DEFAULT_CONFIG
            inline_styles: Extra inline style descriptors merged into the config

        Returns:
            The HTML written to output_path.
        """
        if content_state is None:
            if input_path is None:
                raise ConversionError("Either input_path or content_state is required")
            if not os.path.exists(input_path):
                raise ContentStateError(f"Input file not found: {input_path}")
            content_state = load_raw(input_path)

        converter = DraftToHtml(content_state, config=config, inline_styles=inline_styles)
        html = converter.convert()

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html)

        logger.info("Wrote %d blocks to %s", len(content_state.blocks), output_path)
        return html

    def convert(self):
        """Convert the content state to an HTML fragment string."""
        if self.state is None:
            return ''

        root = self.build_tree()

        # Serialize the root so text placed directly in it is kept, then drop the root tag.
        html = self._serialize(root)
        return html[len('<div>'):-len('</div>')]

    def build_tree(self):
        """Build the output tree: a ``div`` holding one node per top-level group."""
        root = ET.Element('div')
        if self.state is None:
            return root

        # Each frame is (container, wrapper_tag); frames[0] is the root.
        frames = [(root, None)]

        for block in self.state.blocks:
            container = self._get_container(block, frames)
            self._append_block(container, block)

        return root

    # --- LIST NESTING ---

    def _get_container(self, block, frames):
        wrapper_tag = self._get_wrapper_tag(block.type)

        if wrapper_tag is None:
            # Depth only applies to list items; everything else closes open lists.
            del frames[1:]
            return frames[0][0]

        wanted = block.depth + 1

        while len(frames) - 1 > wanted:
            frames.pop()

        if len(frames) - 1 == wanted and frames[-1][1] != wrapper_tag:
            frames.pop()

        while len(frames) - 1 < wanted:
            parent = frames[-1][0]
            # Deeper lists go inside the previous item of the enclosing list.
            if len(frames) > 1 and len(parent):
                parent = parent[-1]
            wrapper = ET.SubElement(parent, wrapper_tag)
            frames.append((wrapper, wrapper_tag))

        return frames[-1][0]

    # --- BLOCKS ---

    def _append_block(self, container, block):
        tags = self._get_tags_for_block(block.type)

        if not tags:
            self._render_block_content(block, container)
            return

        element = ET.SubElement(container, tags[0], self._get_block_attributes(block))

        for inner_tag in tags[1:]:
            element = ET.SubElement(element, inner_tag)

        self._render_block_content(block, element)

    def _get_block_attributes(self, block):
        if self.config.BLOCK_ATTRIBUTES_FN is None:
            return {}
        attributes = self.config.BLOCK_ATTRIBUTES_FN(block) or {}
        return self._normalize_attributes(attributes)

    def _render_block_content(self, block, element):
        if block.text == '':
            # Prevent element collapse if completely empty.
            ET.SubElement(element, BREAK)
            return

        text = self._preserve_whitespace(block.text)

        for entity_key, start, end in self._split_runs(block, 0, len(text), lambda meta: meta.entity):
            nodes = [
                self._build_style_range(block, text[s:e], style_set)
                for style_set, s, e in self._split_runs(block, start, end, lambda meta: meta.style)
            ]

            entity = self.state.get_entity(entity_key)
            entity_element = self._build_entity_element(entity, nodes) if entity is not None else None

            if entity_element is not None:
                element.append(entity_element)
            else:
                for items in nodes:
                    self._append_items(element, items)

    @staticmethod
    def _split_runs(block, start, end, key):
        """Yield (value, run_start, run_end) for maximal runs of equal ``key(meta)``."""
        if start >= end:
            return
        run_start = start
        run_value = key(block.get_meta(start))
        for i in range(start + 1, end):
            value = key(block.get_meta(i))
            if value != run_value:
                yield run_value, run_start, i
                run_start = i
                run_value = value
        yield run_value, run_start, end

    # --- INLINE STYLES ---

    def _build_style_range(self, block, text, style_set):
        """Return the nodes for one style range: text items or a single styled element."""
        items = self._text_items(text)

        elements = [
            self._create_style_element(self.config.INLINE_STYLES.get(name) or {})
            for name in self._get_style_names(block, style_set)
        ]

        if self.config.INLINE_STYLE_FN is not None:
            custom = self.config.INLINE_STYLE_FN(style_set)
            if custom:
                elements.insert(0, self._create_style_element(custom))

        if not elements:
            return items

        for outer, inner in zip(elements, elements[1:]):
            outer.append(inner)
        self._append_items(elements[-1], items)

        return [elements[0]]

    def _get_style_names(self, block, style_set):
        """Active style names, outer-most first."""
        order = self.config.STYLE_ORDER
        unordered = sorted((name for name in style_set if name not in order), key=str)
        ordered = [name for name in reversed(order) if name in style_set]

        names = []
        for name in unordered + ordered:
            # Code blocks already render as code.
            if name == INLINE_STYLE_CODE and block.type == BLOCK_TYPE_CODE:
                continue
            names.append(name)
        return names

    def _create_style_element(self, descriptor):
        tag = descriptor.get('element') or 'span'
        attributes = self._normalize_attributes(descriptor.get('attributes') or {})

        if descriptor.get('style'):
            attributes['style'] = self._style_value(descriptor['style'])

        return ET.Element(tag, attributes)

    # --- ENTITIES ---

    def _build_entity_element(self, entity, nodes):
        if isinstance(entity, ImageEntity):
            return ET.Element('img', self._get_entity_attributes(entity))

        if isinstance(entity, LinkEntity):
            element = ET.Element('a', self._get_entity_attributes(entity))
            for items in nodes:
                self._append_items(element, items)
            return element

        logger.debug("No element for entity type %r, rendering its text unwrapped", entity.type)
        return None

    def _get_entity_attributes(self, entity):
        allowed = self.config.ENTITY_ATTRIBUTES.get(entity.type) or {}
        attributes = {}

        for key, value in entity.data.items():
            if value is None:
                continue

            if key in allowed:
                name = allowed[key]
                # An exact key (href) beats an alias (url) whatever the order.
                if name in attributes and key != name:
                    continue
                attributes[name] = self._attribute_value(value)
            elif DATA_ATTRIBUTE.match(key):
                attributes[key] = self._attribute_value(value)

        return attributes

    # --- TEXT & ATTRIBUTES ---

    def _preserve_whitespace(self, text):
        """Prevent leading/trailing/consecutive whitespace collapse."""
        last = len(text) - 1
        chars = []
        for i, char in enumerate(text):
            if char == ' ' and (i == 0 or i == last or text[i - 1] == ' '):
                chars.append(NBSP)
            else:
                chars.append(char)
        return ''.join(chars)

    def _text_items(self, text):
        """Split text on newlines into text and ``<br>`` items."""
        lines = text.split('\n')
        items = [lines[0]]
        for line in lines[1:]:
            items.append(ET.Element(BREAK))
            items.append('\n' + line)
        return items

    @staticmethod
    def _append_items(parent, items):
        """Append elements and text to parent, text going to the last child's tail."""
        for item in items:
            if isinstance(item, str):
                if not item:
                    continue
                if len(parent):
                    last = parent[-1]
                    last.tail = (last.tail or '') + item
                else:
                    parent.text = (parent.text or '') + item
            else:
                parent.append(item)

    def _normalize_attributes(self, attributes):
        """Normalize `className` -> `class`, etc. and stringify values."""
        normalized = {}
        for name, value in attributes.items():
            if value is None:
                continue
            name = self.config.ATTR_NAME_MAP.get(name, name)
            if name == 'style':
                normalized[name] = self._style_value(value)
            else:
                normalized[name] = self._attribute_value(value)
        return normalized

    def _style_value(self, style):
        if isinstance(style, dict):
            return self.style_to_css.convert(style)
        return str(style)

    @staticmethod
    def _attribute_value(value):
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return str(value)

    def _get_tags_for_block(self, block_type):
        tags = self.config.BLOCK_TAGS.get(block_type)
        if tags is not None:
            return list(tags)
        if self.config.DEFAULT_BLOCK_TAG is None:
            return []
        return [self.config.DEFAULT_BLOCK_TAG]

    def _get_wrapper_tag(self, block_type):
        return self.config.WRAPPER_TAGS.get(block_type)

    def _serialize(self, node):
        html = ET.tostring(node, encoding='unicode', method='html')
        return html.replace(NBSP, '&nbsp;')


def convert(content_state, inline_styles=None, config=None):
    """Convert a ContentState to an HTML fragment in one call."""
    return DraftToHtml(content_state, config=config, inline_styles=inline_styles).convert()
