"""Read Draft.js raw content (``convertToRaw`` output) into a ContentState."""

import json
import logging

from .content_state import CharacterMeta, ContentBlock, ContentState, make_entity
from .exceptions import ContentStateError

logger = logging.getLogger(__name__)


def load_raw(path):
    """Read a raw content JSON file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        raise ContentStateError(f"Cannot read content file {path}: {e}") from e
    return from_json(text)


def from_json(text):
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ContentStateError(f"Invalid content JSON: {e}") from e
    return parse_raw(raw)


def parse_raw(raw):
    """
    Build a ContentState from a raw content dict.

    Args:
        raw: ``{"entityMap": {...}, "blocks": [...]}``

    Offsets in ``inlineStyleRanges``/``entityRanges`` are UTF-16 code units,
    as Draft.js counts them. Malformed blocks and ranges are skipped.
    """
    if not isinstance(raw, dict):
        raise ContentStateError(f"Raw content must be an object, got {type(raw).__name__}")

    raw_entities = raw.get('entityMap') or {}
    raw_blocks = raw.get('blocks') or []

    if not isinstance(raw_entities, dict):
        raise ContentStateError("entityMap must be an object")
    if not isinstance(raw_blocks, list):
        raise ContentStateError("blocks must be a list")

    entity_map = {}
    for key, raw_entity in raw_entities.items():
        if not isinstance(raw_entity, dict):
            logger.debug("Skipped invalid entity %r: %r", key, raw_entity)
            continue
        data = raw_entity.get('data')
        entity_map[str(key)] = make_entity(
            raw_entity.get('type'),
            data if isinstance(data, dict) else {},
            raw_entity.get('mutability', 'MUTABLE'),
        )

    blocks = []
    for raw_block in raw_blocks:
        if not isinstance(raw_block, dict):
            logger.debug("Skipped invalid block: %r", raw_block)
            continue
        blocks.append(_parse_block(raw_block))

    return ContentState(blocks, entity_map)


def _parse_block(raw_block):
    text = raw_block.get('text')
    if not isinstance(text, str):
        text = '' if text is None else str(text)

    try:
        depth = int(raw_block.get('depth') or 0)
    except (TypeError, ValueError):
        logger.debug("Invalid depth %r in block %r, using 0", raw_block.get('depth'), raw_block.get('key'))
        depth = 0

    length = len(text)
    styles = [set() for _ in range(length)]
    entities = [None] * length
    to_index = _utf16_index_map(text)

    for style_range in _get_ranges(raw_block, 'inlineStyleRanges'):
        span = _resolve_range(style_range, to_index, length)
        if span is None or not isinstance(style_range.get('style'), str) or not style_range['style']:
            logger.debug("Skipped invalid style range %r", style_range)
            continue
        for i in range(*span):
            styles[i].add(style_range['style'])

    for entity_range in _get_ranges(raw_block, 'entityRanges'):
        span = _resolve_range(entity_range, to_index, length)
        if span is None or entity_range.get('key') is None:
            logger.debug("Skipped invalid entity range %r", entity_range)
            continue
        for i in range(*span):
            entities[i] = str(entity_range['key'])

    character_list = [CharacterMeta(entities[i], styles[i]) for i in range(length)]

    data = raw_block.get('data')
    return ContentBlock(
        key=raw_block.get('key'),
        type=raw_block.get('type') or 'unstyled',
        text=text,
        depth=depth,
        character_list=character_list,
        data=data if isinstance(data, dict) else {},
    )


def _get_ranges(raw_block, field):
    ranges = raw_block.get(field)
    if ranges is None:
        return []
    if not isinstance(ranges, list):
        logger.debug("Skipped invalid %s %r in block %r", field, ranges, raw_block.get('key'))
        return []
    return ranges


def _utf16_index_map(text):
    """Map every UTF-16 offset (plus the end offset) to a code point index."""
    index_map = []
    for i, char in enumerate(text):
        index_map.append(i)
        if ord(char) > 0xFFFF:
            index_map.append(i)
    index_map.append(len(text))
    return index_map


def _resolve_range(raw_range, to_index, length):
    if not isinstance(raw_range, dict):
        return None
    try:
        offset = int(raw_range.get('offset', 0))
        range_length = int(raw_range.get('length', 0))
    except (TypeError, ValueError):
        return None
    if offset < 0 or range_length <= 0:
        return None

    last = len(to_index) - 1
    if offset > last:
        logger.debug("Range %r starts past the end of the text", raw_range)
        return None
    end = offset + range_length
    if end > last:
        logger.debug("Clipped range %r to the end of the text", raw_range)
        end = last

    start = to_index[offset]
    stop = to_index[end]
    # An offset inside a surrogate pair still covers that character.
    if stop == start and end > offset:
        stop = min(start + 1, length)
    return start, stop


def to_raw(content_state):
    """Dump a ContentState back into the raw content dict shape."""
    entity_map = {
        key: {'type': entity.type, 'mutability': entity.mutability, 'data': dict(entity.data)}
        for key, entity in content_state.entity_map.items()
    }

    blocks = []
    for block in content_state.blocks:
        offsets = _utf16_offsets(block.text)
        metas = [block.get_meta(i) for i in range(len(block.text))]

        style_names = []
        for meta in metas:
            for name in sorted(meta.style, key=str):
                if name not in style_names:
                    style_names.append(name)

        inline_style_ranges = []
        for name in style_names:
            for start, end in _runs(metas, lambda meta: name in meta.style):
                inline_style_ranges.append({
                    'offset': offsets[start],
                    'length': offsets[end] - offsets[start],
                    'style': name,
                })

        entity_ranges = []
        for start, end in _runs(metas, lambda meta: meta.entity is not None, split=lambda meta: meta.entity):
            key = metas[start].entity
            entity_ranges.append({
                'offset': offsets[start],
                'length': offsets[end] - offsets[start],
                'key': int(key) if key.isdigit() else key,
            })

        blocks.append({
            'key': block.key,
            'text': block.text,
            'type': block.type,
            'depth': block.depth,
            'inlineStyleRanges': inline_style_ranges,
            'entityRanges': entity_ranges,
            'data': dict(block.data),
        })

    return {'entityMap': entity_map, 'blocks': blocks}


def _utf16_offsets(text):
    offsets = [0]
    for char in text:
        offsets.append(offsets[-1] + (2 if ord(char) > 0xFFFF else 1))
    return offsets


def _runs(metas, predicate, split=None):
    """Yield (start, end) of maximal runs where predicate holds and split() stays equal."""
    start = None
    for i, meta in enumerate(metas):
        if start is not None and (not predicate(meta) or (split and split(meta) != split(metas[start]))):
            yield start, i
            start = None
        if start is None and predicate(meta):
            start = i
    if start is not None:
        yield start, len(metas)
