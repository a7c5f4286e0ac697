import math
import re


VENDOR_PREFIX = re.compile(r'^(moz|ms|o|webkit)-')
UPPERCASE = re.compile(r'([A-Z])')
NUMERIC = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')


class StyleToCss:
    """Encode a style object (``{'fontSize': 12}``) as a CSS declaration string."""

    # Lifted from React's CSSProperty.js: numbers for these stay unitless.
    UNITLESS_NUMBERS = frozenset([
        'animationIterationCount',
        'borderImageOutset',
        'borderImageSlice',
        'borderImageWidth',
        'boxFlex',
        'boxFlexGroup',
        'boxOrdinalGroup',
        'columnCount',
        'flex',
        'flexGrow',
        'flexPositive',
        'flexShrink',
        'flexNegative',
        'flexOrder',
        'gridRow',
        'gridRowEnd',
        'gridRowSpan',
        'gridRowStart',
        'gridColumn',
        'gridColumnEnd',
        'gridColumnSpan',
        'gridColumnStart',
        'fontWeight',
        'lineClamp',
        'lineHeight',
        'opacity',
        'order',
        'orphans',
        'tabSize',
        'widows',
        'zIndex',
        'zoom',
        # SVG-related properties
        'fillOpacity',
        'floodOpacity',
        'stopOpacity',
        'strokeDasharray',
        'strokeDashoffset',
        'strokeMiterlimit',
        'strokeOpacity',
        'strokeWidth',
    ])

    def convert(self, style_descr):
        """
        Convert a style mapping to a string for an HTML ``style`` attribute.

        Declarations keep the mapping's order. ``None`` values are left out.

        Example:
            >>> StyleToCss().convert({'fontSize': '12', 'color': 'red'})
            'font-size: 12px; color: red'
        """
        declarations = []
        for key, value in style_descr.items():
            if value is None:
                continue
            name = self.process_style_name(key)
            declarations.append(f"{name}: {self.process_style_value(key, value)}")
        return '; '.join(declarations)

    def process_style_value(self, key, value):
        if isinstance(value, bool):
            return str(value).lower()

        text = str(value)
        if not self._is_numeric(value) or text == '0' or key in self.UNITLESS_NUMBERS:
            return text
        return text + 'px'

    def process_style_name(self, name):
        # Based on React's CSSPropertyOperations: fontSize -> font-size,
        # WebkitTransition -> -webkit-transition
        hyphenated = UPPERCASE.sub(r'-\1', name).lower()
        return VENDOR_PREFIX.sub(r'-\1-', hyphenated)

    @staticmethod
    def _is_numeric(value):
        if isinstance(value, float):
            return math.isfinite(value)
        if isinstance(value, int):
            return True
        return isinstance(value, str) and NUMERIC.match(value) is not None
