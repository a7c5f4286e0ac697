"""In-memory content state consumed by DraftToHtml.

Mirrors the Draft.js model: a list of blocks, each with one
CharacterMeta per character, and an entity map keyed by string.
"""

from .config import ENTITY_TYPE_IMAGE, ENTITY_TYPE_LINK


EMPTY_STYLE = frozenset()


class CharacterMeta:
    __slots__ = ('entity', 'style')

    def __init__(self, entity=None, style=None):
        self.entity = None if entity is None else str(entity)
        self.style = frozenset(style) if style else EMPTY_STYLE

    def __eq__(self, other):
        if not isinstance(other, CharacterMeta):
            return NotImplemented
        return self.entity == other.entity and self.style == other.style

    def __hash__(self):
        return hash((self.entity, self.style))

    def __repr__(self):
        return f"CharacterMeta(entity={self.entity!r}, style={sorted(self.style)!r})"


EMPTY_META = CharacterMeta()


class ContentBlock:
    def __init__(self, key=None, type='unstyled', text='', depth=0, character_list=None, data=None):
        self.key = key
        self.type = type or 'unstyled'
        self.text = text or ''
        self.depth = max(int(depth or 0), 0)
        self.character_list = list(character_list or [])
        self.data = dict(data or {})

    def get_meta(self, index):
        """Return the metadata for one character, empty when absent."""
        if index < len(self.character_list):
            return self.character_list[index] or EMPTY_META
        return EMPTY_META

    def __repr__(self):
        return f"ContentBlock(key={self.key!r}, type={self.type!r}, depth={self.depth}, text={self.text!r})"


class Entity:
    """An annotation attached to a range of characters.

    Use :func:`make_entity` to get the right variant for a type string.
    """

    def __init__(self, type, data=None, mutability='MUTABLE'):
        self.type = type
        self.data = dict(data or {})
        self.mutability = mutability

    def __repr__(self):
        return f"{self.__class__.__name__}(type={self.type!r}, data={self.data!r})"


class LinkEntity(Entity):
    pass


class ImageEntity(Entity):
    pass


class UnknownEntity(Entity):
    """Any entity type without an HTML rendering (e.g. ``embed``)."""


ENTITY_CLASSES = {
    ENTITY_TYPE_LINK: LinkEntity,
    ENTITY_TYPE_IMAGE: ImageEntity,
}


def make_entity(type, data=None, mutability='MUTABLE'):
    entity_class = ENTITY_CLASSES.get(type, UnknownEntity)
    return entity_class(type, data, mutability)


class ContentState:
    def __init__(self, blocks=None, entity_map=None):
        self.blocks = list(blocks or [])
        self.entity_map = {str(k): v for k, v in (entity_map or {}).items()}

    def get_entity(self, key):
        if key is None:
            return None
        return self.entity_map.get(str(key))

    def __repr__(self):
        return f"ContentState(blocks={len(self.blocks)}, entities={len(self.entity_map)})"
