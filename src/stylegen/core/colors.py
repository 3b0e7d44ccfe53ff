"""
CSS color literal parsing.

Supports hex notation, rgb()/rgba(), hsl()/hsla() in both the legacy comma
syntax and the space syntax with an optional ``/ alpha``, ``transparent``
and the CSS named colors. ``currentColor`` has no value outside a browser
and is rejected.
"""

from __future__ import annotations

import colorsys
import re

from .errors import InvalidColorLiteral
from .ir.stylesheet import ColorValue

# CSS Color Module Level 4 named colors
NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "aliceblue": (240, 248, 255),
    "antiquewhite": (250, 235, 215),
    "aqua": (0, 255, 255),
    "aquamarine": (127, 255, 212),
    "azure": (240, 255, 255),
    "beige": (245, 245, 220),
    "bisque": (255, 228, 196),
    "black": (0, 0, 0),
    "blanchedalmond": (255, 235, 205),
    "blue": (0, 0, 255),
    "blueviolet": (138, 43, 226),
    "brown": (165, 42, 42),
    "burlywood": (222, 184, 135),
    "cadetblue": (95, 158, 160),
    "chartreuse": (127, 255, 0),
    "chocolate": (210, 105, 30),
    "coral": (255, 127, 80),
    "cornflowerblue": (100, 149, 237),
    "cornsilk": (255, 248, 220),
    "crimson": (220, 20, 60),
    "cyan": (0, 255, 255),
    "darkblue": (0, 0, 139),
    "darkcyan": (0, 139, 139),
    "darkgoldenrod": (184, 134, 11),
    "darkgray": (169, 169, 169),
    "darkgreen": (0, 100, 0),
    "darkgrey": (169, 169, 169),
    "darkkhaki": (189, 183, 107),
    "darkmagenta": (139, 0, 139),
    "darkolivegreen": (85, 107, 47),
    "darkorange": (255, 140, 0),
    "darkorchid": (153, 50, 204),
    "darkred": (139, 0, 0),
    "darksalmon": (233, 150, 122),
    "darkseagreen": (143, 188, 143),
    "darkslateblue": (72, 61, 139),
    "darkslategray": (47, 79, 79),
    "darkslategrey": (47, 79, 79),
    "darkturquoise": (0, 206, 209),
    "darkviolet": (148, 0, 211),
    "deeppink": (255, 20, 147),
    "deepskyblue": (0, 191, 255),
    "dimgray": (105, 105, 105),
    "dimgrey": (105, 105, 105),
    "dodgerblue": (30, 144, 255),
    "firebrick": (178, 34, 34),
    "floralwhite": (255, 250, 240),
    "forestgreen": (34, 139, 34),
    "fuchsia": (255, 0, 255),
    "gainsboro": (220, 220, 220),
    "ghostwhite": (248, 248, 255),
    "gold": (255, 215, 0),
    "goldenrod": (218, 165, 32),
    "gray": (128, 128, 128),
    "green": (0, 128, 0),
    "greenyellow": (173, 255, 47),
    "grey": (128, 128, 128),
    "honeydew": (240, 255, 240),
    "hotpink": (255, 105, 180),
    "indianred": (205, 92, 92),
    "indigo": (75, 0, 130),
    "ivory": (255, 255, 240),
    "khaki": (240, 230, 140),
    "lavender": (230, 230, 250),
    "lavenderblush": (255, 240, 245),
    "lawngreen": (124, 252, 0),
    "lemonchiffon": (255, 250, 205),
    "lightblue": (173, 216, 230),
    "lightcoral": (240, 128, 128),
    "lightcyan": (224, 255, 255),
    "lightgoldenrodyellow": (250, 250, 210),
    "lightgray": (211, 211, 211),
    "lightgreen": (144, 238, 144),
    "lightgrey": (211, 211, 211),
    "lightpink": (255, 182, 193),
    "lightsalmon": (255, 160, 122),
    "lightseagreen": (32, 178, 170),
    "lightskyblue": (135, 206, 250),
    "lightslategray": (119, 136, 153),
    "lightslategrey": (119, 136, 153),
    "lightsteelblue": (176, 196, 222),
    "lightyellow": (255, 255, 224),
    "lime": (0, 255, 0),
    "limegreen": (50, 205, 50),
    "linen": (250, 240, 230),
    "magenta": (255, 0, 255),
    "maroon": (128, 0, 0),
    "mediumaquamarine": (102, 205, 170),
    "mediumblue": (0, 0, 205),
    "mediumorchid": (186, 85, 211),
    "mediumpurple": (147, 112, 219),
    "mediumseagreen": (60, 179, 113),
    "mediumslateblue": (123, 104, 238),
    "mediumspringgreen": (0, 250, 154),
    "mediumturquoise": (72, 209, 204),
    "mediumvioletred": (199, 21, 133),
    "midnightblue": (25, 25, 112),
    "mintcream": (245, 255, 250),
    "mistyrose": (255, 228, 225),
    "moccasin": (255, 228, 181),
    "navajowhite": (255, 222, 173),
    "navy": (0, 0, 128),
    "oldlace": (253, 245, 230),
    "olive": (128, 128, 0),
    "olivedrab": (107, 142, 35),
    "orange": (255, 165, 0),
    "orangered": (255, 69, 0),
    "orchid": (218, 112, 214),
    "palegoldenrod": (238, 232, 170),
    "palegreen": (152, 251, 152),
    "paleturquoise": (175, 238, 238),
    "palevioletred": (219, 112, 147),
    "papayawhip": (255, 239, 213),
    "peachpuff": (255, 218, 185),
    "peru": (205, 133, 63),
    "pink": (255, 192, 203),
    "plum": (221, 160, 221),
    "powderblue": (176, 224, 230),
    "purple": (128, 0, 128),
    "rebeccapurple": (102, 51, 153),
    "red": (255, 0, 0),
    "rosybrown": (188, 143, 143),
    "royalblue": (65, 105, 225),
    "saddlebrown": (139, 69, 19),
    "salmon": (250, 128, 114),
    "sandybrown": (244, 164, 96),
    "seagreen": (46, 139, 87),
    "seashell": (255, 245, 238),
    "sienna": (160, 82, 45),
    "silver": (192, 192, 192),
    "skyblue": (135, 206, 235),
    "slateblue": (106, 90, 205),
    "slategray": (112, 128, 144),
    "slategrey": (112, 128, 144),
    "snow": (255, 250, 250),
    "springgreen": (0, 255, 127),
    "steelblue": (70, 130, 180),
    "tan": (210, 180, 140),
    "teal": (0, 128, 128),
    "thistle": (216, 191, 216),
    "tomato": (255, 99, 71),
    "turquoise": (64, 224, 208),
    "violet": (238, 130, 238),
    "wheat": (245, 222, 179),
    "white": (255, 255, 255),
    "whitesmoke": (245, 245, 245),
    "yellow": (255, 255, 0),
    "yellowgreen": (154, 205, 50),
}

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNCTION_RE = re.compile(r"^([a-zA-Z]+)\((.*)\)$", re.DOTALL)
_NUMBER_RE = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)(%|deg|grad|rad|turn)?$")


def parse_color(text: str) -> ColorValue:
    """
    Parse a CSS color literal.

    Args:
        text: Literal as written in the stylesheet (surrounding whitespace ignored)

    Returns:
        ColorValue

    Raises:
        InvalidColorLiteral: If the text is not a supported color
    """
    value = text.strip()
    lowered = value.lower()

    if lowered.startswith("#"):
        return parse_hex(value)
    if lowered == "transparent":
        return ColorValue(red=0, green=0, blue=0, alpha=0)
    if lowered in NAMED_COLORS:
        r, g, b = NAMED_COLORS[lowered]
        return ColorValue(red=r, green=g, blue=b)

    match = _FUNCTION_RE.match(value)
    if match:
        name = match.group(1).lower()
        args = _split_arguments(match.group(2), value)
        if name in ("rgb", "rgba"):
            return _parse_rgb(args, value)
        if name in ("hsl", "hsla"):
            return _parse_hsl(args, value)

    raise InvalidColorLiteral(value)


def parse_hex(text: str) -> ColorValue:
    """Parse ``#rgb``, ``#rgba``, ``#rrggbb`` or ``#rrggbbaa``."""
    value = text.strip()
    if not _HEX_RE.match(value):
        raise InvalidColorLiteral(value)

    digits = value[1:]
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) == 6:
        digits += "ff"

    channels = [int(digits[i : i + 2], 16) for i in range(0, 8, 2)]
    return ColorValue(red=channels[0], green=channels[1], blue=channels[2], alpha=channels[3])


# =============================================================================
# Functional notation
# =============================================================================


def _split_arguments(raw: str, original: str) -> list[str]:
    """Split ``1, 2, 3`` / ``1 2 3 / 0.5`` into components, alpha last."""
    if "," in raw:
        parts = [p.strip() for p in raw.split(",")]
        if any(not p for p in parts) or "/" in raw:
            raise InvalidColorLiteral(original)
        return parts

    main, slash, alpha = raw.partition("/")
    parts = main.split()
    if slash:
        alpha = alpha.strip()
        if not alpha or len(alpha.split()) != 1:
            raise InvalidColorLiteral(original)
        parts.append(alpha)
    return parts


def _number(component: str, original: str) -> tuple[float, str | None]:
    match = _NUMBER_RE.match(component)
    if not match:
        raise InvalidColorLiteral(original)
    return float(match.group(1)), match.group(2)


def _clamp_byte(value: float) -> int:
    return max(0, min(255, round(value)))


def _alpha(component: str, original: str) -> int:
    value, unit = _number(component, original)
    if unit == "%":
        value /= 100
    elif unit is not None:
        raise InvalidColorLiteral(original)
    return _clamp_byte(max(0.0, min(1.0, value)) * 255)


def _parse_rgb(args: list[str], original: str) -> ColorValue:
    if len(args) not in (3, 4):
        raise InvalidColorLiteral(original)

    channels = []
    units = set()
    for component in args[:3]:
        value, unit = _number(component, original)
        if unit not in (None, "%"):
            raise InvalidColorLiteral(original)
        units.add(unit)
        channels.append(_clamp_byte(value * 2.55 if unit == "%" else value))
    if len(units) > 1:
        # Mixing numbers and percentages is invalid CSS
        raise InvalidColorLiteral(original)

    alpha = _alpha(args[3], original) if len(args) == 4 else 255
    return ColorValue(red=channels[0], green=channels[1], blue=channels[2], alpha=alpha)


def _parse_hsl(args: list[str], original: str) -> ColorValue:
    if len(args) not in (3, 4):
        raise InvalidColorLiteral(original)

    hue, unit = _number(args[0], original)
    if unit == "rad":
        hue = hue * 180 / 3.141592653589793
    elif unit == "grad":
        hue = hue * 0.9
    elif unit == "turn":
        hue = hue * 360
    elif unit not in (None, "deg"):
        raise InvalidColorLiteral(original)

    saturation, s_unit = _number(args[1], original)
    lightness, l_unit = _number(args[2], original)
    if s_unit != "%" or l_unit != "%":
        raise InvalidColorLiteral(original)

    h = (hue % 360) / 360
    s = max(0.0, min(100.0, saturation)) / 100
    l = max(0.0, min(100.0, lightness)) / 100  # noqa: E741
    r, g, b = colorsys.hls_to_rgb(h, l, s)

    alpha = _alpha(args[3], original) if len(args) == 4 else 255
    return ColorValue(
        red=_clamp_byte(r * 255),
        green=_clamp_byte(g * 255),
        blue=_clamp_byte(b * 255),
        alpha=alpha,
    )
