"""Colour names, textual colour specifications and pixel format conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass

_INT_MIN = -(2**31)
_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1
_NAME_BUFFER = 63

# Single names, in table order; where a name repeats, the first entry wins.
_SINGLE_COLORS: tuple[tuple[str, int], ...] = (
    ("snow", 0xFFFAFA), ("ghost white", 0xF8F8FF), ("ghostwhite", 0xF8F8FF),
    ("white smoke", 0xF5F5F5), ("whitesmoke", 0xF5F5F5),
    ("gainsboro", 0xDCDCDC), ("floral white", 0xFFFAF0),
    ("floralwhite", 0xFFFAF0), ("old lace", 0xFDF5E6), ("oldlace", 0xFDF5E6),
    ("linen", 0xFAF0E6), ("antique white", 0xFAEBD7),
    ("antiquewhite", 0xFAEBD7), ("papaya whip", 0xFFEFD5),
    ("papayawhip", 0xFFEFD5), ("blanched almond", 0xFFEBCD),
    ("blanchedalmond", 0xFFEBCD), ("bisque", 0xFFE4C4),
    ("peach puff", 0xFFDAB9), ("peachpuff", 0xFFDAB9),
    ("navajo white", 0xFFDEAD), ("navajowhite", 0xFFDEAD),
    ("moccasin", 0xFFE4B5), ("cornsilk", 0xFFF8DC), ("ivory", 0xFFFFF0),
    ("lemon chiffon", 0xFFFACD), ("lemonchiffon", 0xFFFACD),
    ("seashell", 0xFFF5EE), ("honeydew", 0xF0FFF0),
    ("mint cream", 0xF5FFFA), ("mintcream", 0xF5FFFA), ("azure", 0xF0FFFF),
    ("alice blue", 0xF0F8FF), ("aliceblue", 0xF0F8FF),
    ("lavender", 0xE6E6FA), ("lavender blush", 0xFFF0F5),
    ("lavenderblush", 0xFFF0F5), ("misty rose", 0xFFE4E1),
    ("mistyrose", 0xFFE4E1), ("white", 0xFFFFFF), ("black", 0x000000),
    ("dark slate", 0x2F4F4F), ("darkslategray", 0x2F4F4F),
    ("dark slate", 0x2F4F4F), ("darkslategrey", 0x2F4F4F),
    ("dim gray", 0x696969), ("dimgray", 0x696969), ("dim grey", 0x696969),
    ("dimgrey", 0x696969), ("slate gray", 0x708090),
    ("slategray", 0x708090), ("slate grey", 0x708090),
    ("slategrey", 0x708090), ("light slate", 0x778899),
    ("lightslategray", 0x778899), ("light slate", 0x778899),
    ("lightslategrey", 0x778899), ("gray", 0xBEBEBE), ("grey", 0xBEBEBE),
    ("light grey", 0xD3D3D3), ("lightgrey", 0xD3D3D3),
    ("light gray", 0xD3D3D3), ("lightgray", 0xD3D3D3),
    ("midnight blue", 0x191970), ("midnightblue", 0x191970),
    ("navy", 0x000080), ("navy blue", 0x000080), ("navyblue", 0x000080),
    ("cornflower blue", 0x6495ED), ("cornflowerblue", 0x6495ED),
    ("dark slate", 0x483D8B), ("darkslateblue", 0x483D8B),
    ("slate blue", 0x6A5ACD), ("slateblue", 0x6A5ACD),
    ("medium slate", 0x7B68EE), ("mediumslateblue", 0x7B68EE),
    ("light slate", 0x8470FF), ("lightslateblue", 0x8470FF),
    ("medium blue", 0x0000CD), ("mediumblue", 0x0000CD),
    ("royal blue", 0x4169E1), ("royalblue", 0x4169E1), ("blue", 0x0000FF),
    ("dodger blue", 0x1E90FF), ("dodgerblue", 0x1E90FF),
    ("deep sky", 0x00BFFF), ("deepskyblue", 0x00BFFF),
    ("sky blue", 0x87CEEB), ("skyblue", 0x87CEEB), ("light sky", 0x87CEFA),
    ("lightskyblue", 0x87CEFA), ("steel blue", 0x4682B4),
    ("steelblue", 0x4682B4), ("light steel", 0xB0C4DE),
    ("lightsteelblue", 0xB0C4DE), ("light blue", 0xADD8E6),
    ("lightblue", 0xADD8E6), ("powder blue", 0xB0E0E6),
    ("powderblue", 0xB0E0E6), ("pale turquoise", 0xAFEEEE),
    ("paleturquoise", 0xAFEEEE), ("dark turquoise", 0x00CED1),
    ("darkturquoise", 0x00CED1), ("medium turquoise", 0x48D1CC),
    ("mediumturquoise", 0x48D1CC), ("turquoise", 0x40E0D0),
    ("cyan", 0x00FFFF), ("light cyan", 0xE0FFFF), ("lightcyan", 0xE0FFFF),
    ("cadet blue", 0x5F9EA0), ("cadetblue", 0x5F9EA0),
    ("medium aquamarine", 0x66CDAA), ("mediumaquamarine", 0x66CDAA),
    ("aquamarine", 0x7FFFD4), ("dark green", 0x006400),
    ("darkgreen", 0x006400), ("dark olive", 0x556B2F),
    ("darkolivegreen", 0x556B2F), ("dark sea", 0x8FBC8F),
    ("darkseagreen", 0x8FBC8F), ("sea green", 0x2E8B57),
    ("seagreen", 0x2E8B57), ("medium sea", 0x3CB371),
    ("mediumseagreen", 0x3CB371), ("light sea", 0x20B2AA),
    ("lightseagreen", 0x20B2AA), ("pale green", 0x98FB98),
    ("palegreen", 0x98FB98), ("spring green", 0x00FF7F),
    ("springgreen", 0x00FF7F), ("lawn green", 0x7CFC00),
    ("lawngreen", 0x7CFC00), ("green", 0x00FF00), ("chartreuse", 0x7FFF00),
    ("medium spring", 0x00FA9A), ("mediumspringgreen", 0x00FA9A),
    ("green yellow", 0xADFF2F), ("greenyellow", 0xADFF2F),
    ("lime green", 0x32CD32), ("limegreen", 0x32CD32),
    ("yellow green", 0x9ACD32), ("yellowgreen", 0x9ACD32),
    ("forest green", 0x228B22), ("forestgreen", 0x228B22),
    ("olive drab", 0x6B8E23), ("olivedrab", 0x6B8E23),
    ("dark khaki", 0xBDB76B), ("darkkhaki", 0xBDB76B), ("khaki", 0xF0E68C),
    ("pale goldenrod", 0xEEE8AA), ("palegoldenrod", 0xEEE8AA),
    ("light goldenrod", 0xFAFAD2), ("lightgoldenrodyellow", 0xFAFAD2),
    ("light yellow", 0xFFFFE0), ("lightyellow", 0xFFFFE0),
    ("yellow", 0xFFFF00), ("gold", 0xFFD700),
    ("light goldenrod", 0xEEDD82), ("lightgoldenrod", 0xEEDD82),
    ("goldenrod", 0xDAA520), ("dark goldenrod", 0xB8860B),
    ("darkgoldenrod", 0xB8860B), ("rosy brown", 0xBC8F8F),
    ("rosybrown", 0xBC8F8F), ("indian red", 0xCD5C5C),
    ("indianred", 0xCD5C5C), ("saddle brown", 0x8B4513),
    ("saddlebrown", 0x8B4513), ("sienna", 0xA0522D), ("peru", 0xCD853F),
    ("burlywood", 0xDEB887), ("beige", 0xF5F5DC), ("wheat", 0xF5DEB3),
    ("sandy brown", 0xF4A460), ("sandybrown", 0xF4A460), ("tan", 0xD2B48C),
    ("chocolate", 0xD2691E), ("firebrick", 0xB22222), ("brown", 0xA52A2A),
    ("dark salmon", 0xE9967A), ("darksalmon", 0xE9967A),
    ("salmon", 0xFA8072), ("light salmon", 0xFFA07A),
    ("lightsalmon", 0xFFA07A), ("orange", 0xFFA500),
    ("dark orange", 0xFF8C00), ("darkorange", 0xFF8C00),
    ("coral", 0xFF7F50), ("light coral", 0xF08080),
    ("lightcoral", 0xF08080), ("tomato", 0xFF6347),
    ("orange red", 0xFF4500), ("orangered", 0xFF4500), ("red", 0xFF0000),
    ("hot pink", 0xFF69B4), ("hotpink", 0xFF69B4),
    ("deep pink", 0xFF1493), ("deeppink", 0xFF1493), ("pink", 0xFFC0CB),
    ("light pink", 0xFFB6C1), ("lightpink", 0xFFB6C1),
    ("pale violet", 0xDB7093), ("palevioletred", 0xDB7093),
    ("maroon", 0xB03060), ("medium violet", 0xC71585),
    ("mediumvioletred", 0xC71585), ("violet red", 0xD02090),
    ("violetred", 0xD02090), ("magenta", 0xFF00FF), ("violet", 0xEE82EE),
    ("plum", 0xDDA0DD), ("orchid", 0xDA70D6),
    ("medium orchid", 0xBA55D3), ("mediumorchid", 0xBA55D3),
    ("dark orchid", 0x9932CC), ("darkorchid", 0x9932CC),
    ("dark violet", 0x9400D3), ("darkviolet", 0x9400D3),
    ("blue violet", 0x8A2BE2), ("blueviolet", 0x8A2BE2),
    ("purple", 0xA020F0), ("medium purple", 0x9370DB),
    ("mediumpurple", 0x9370DB), ("thistle", 0xD8BFD8),
)

# Families with four numbered shades: "<name>1" .. "<name>4".
_NUMBERED_COLORS = """
snow fffafa eee9e9 cdc9c9 8b8989
seashell fff5ee eee5de cdc5bf 8b8682
antiquewhite ffefdb eedfcc cdc0b0 8b8378
bisque ffe4c4 eed5b7 cdb79e 8b7d6b
peachpuff ffdab9 eecbad cdaf95 8b7765
navajowhite ffdead eecfa1 cdb38b 8b795e
lemonchiffon fffacd eee9bf cdc9a5 8b8970
cornsilk fff8dc eee8cd cdc8b1 8b8878
ivory fffff0 eeeee0 cdcdc1 8b8b83
honeydew f0fff0 e0eee0 c1cdc1 838b83
lavenderblush fff0f5 eee0e5 cdc1c5 8b8386
mistyrose ffe4e1 eed5d2 cdb7b5 8b7d7b
azure f0ffff e0eeee c1cdcd 838b8b
slateblue 836fff 7a67ee 6959cd 473c8b
royalblue 4876ff 436eee 3a5fcd 27408b
blue 0000ff 0000ee 0000cd 00008b
dodgerblue 1e90ff 1c86ee 1874cd 104e8b
steelblue 63b8ff 5cacee 4f94cd 36648b
deepskyblue 00bfff 00b2ee 009acd 00688b
skyblue 87ceff 7ec0ee 6ca6cd 4a708b
lightskyblue b0e2ff a4d3ee 8db6cd 607b8b
slategray c6e2ff b9d3ee 9fb6cd 6c7b8b
lightsteelblue cae1ff bcd2ee a2b5cd 6e7b8b
lightblue bfefff b2dfee 9ac0cd 68838b
lightcyan e0ffff d1eeee b4cdcd 7a8b8b
paleturquoise bbffff aeeeee 96cdcd 668b8b
cadetblue 98f5ff 8ee5ee 7ac5cd 53868b
turquoise 00f5ff 00e5ee 00c5cd 00868b
cyan 00ffff 00eeee 00cdcd 008b8b
darkslategray 97ffff 8deeee 79cdcd 528b8b
aquamarine 7fffd4 76eec6 66cdaa 458b74
darkseagreen c1ffc1 b4eeb4 9bcd9b 698b69
seagreen 54ff9f 4eee94 43cd80 2e8b57
palegreen 9aff9a 90ee90 7ccd7c 548b54
springgreen 00ff7f 00ee76 00cd66 008b45
green 00ff00 00ee00 00cd00 008b00
chartreuse 7fff00 76ee00 66cd00 458b00
olivedrab c0ff3e b3ee3a 9acd32 698b22
darkolivegreen caff70 bcee68 a2cd5a 6e8b3d
khaki fff68f eee685 cdc673 8b864e
lightgoldenrod ffec8b eedc82 cdbe70 8b814c
lightyellow ffffe0 eeeed1 cdcdb4 8b8b7a
yellow ffff00 eeee00 cdcd00 8b8b00
gold ffd700 eec900 cdad00 8b7500
goldenrod ffc125 eeb422 cd9b1d 8b6914
darkgoldenrod ffb90f eead0e cd950c 8b6508
rosybrown ffc1c1 eeb4b4 cd9b9b 8b6969
indianred ff6a6a ee6363 cd5555 8b3a3a
sienna ff8247 ee7942 cd6839 8b4726
burlywood ffd39b eec591 cdaa7d 8b7355
wheat ffe7ba eed8ae cdba96 8b7e66
tan ffa54f ee9a49 cd853f 8b5a2b
chocolate ff7f24 ee7621 cd661d 8b4513
firebrick ff3030 ee2c2c cd2626 8b1a1a
brown ff4040 ee3b3b cd3333 8b2323
salmon ff8c69 ee8262 cd7054 8b4c39
lightsalmon ffa07a ee9572 cd8162 8b5742
orange ffa500 ee9a00 cd8500 8b5a00
darkorange ff7f00 ee7600 cd6600 8b4500
coral ff7256 ee6a50 cd5b45 8b3e2f
tomato ff6347 ee5c42 cd4f39 8b3626
orangered ff4500 ee4000 cd3700 8b2500
red ff0000 ee0000 cd0000 8b0000
deeppink ff1493 ee1289 cd1076 8b0a50
hotpink ff6eb4 ee6aa7 cd6090 8b3a62
pink ffb5c5 eea9b8 cd919e 8b636c
lightpink ffaeb9 eea2ad cd8c95 8b5f65
palevioletred ff82ab ee799f cd6889 8b475d
maroon ff34b3 ee30a7 cd2990 8b1c62
violetred ff3e96 ee3a8c cd3278 8b2252
magenta ff00ff ee00ee cd00cd 8b008b
orchid ff83fa ee7ae9 cd69c9 8b4789
plum ffbbff eeaeee cd96cd 8b668b
mediumorchid e066ff d15fee b452cd 7a378b
darkorchid bf3eff b23aee 9a32cd 68228b
purple 9b30ff 912cee 7d26cd 551a8b
mediumpurple ab82ff 9f79ee 8968cd 5d478b
thistle ffe1ff eed2ee cdb5cd 8b7b8b
"""

# Grey levels for "gray0".."gray100" (and "grey0".."grey100").
_GRAY_LEVELS = bytes.fromhex(
    "00 03 05 08 0a 0d 0f 12 14 17 1a 1c 1f 21 24 26 29 2b 2e 30"
    " 33 36 38 3b 3d 40 42 45 47 4a 4d 4f 52 54 57 59 5c 5e 61 63"
    " 66 69 6b 6e 70 73 75 78 7a 7d 7f 82 85 87 8a 8c 8f 91 94 96"
    " 99 9c 9e a1 a3 a6 a8 ab ad b0 b3 b5 b8 ba bd bf c2 c4 c7 c9"
    " cc cf d1 d4 d6 d9 db de e0 e3 e5 e8 eb ed f0 f2 f5 f7 fa fc ff"
)

_TRAILING_COLORS: tuple[tuple[str, int], ...] = (
    ("dark grey", 0xA9A9A9), ("darkgrey", 0xA9A9A9),
    ("dark gray", 0xA9A9A9), ("darkgray", 0xA9A9A9),
    ("dark blue", 0x00008B), ("darkblue", 0x00008B),
    ("dark cyan", 0x008B8B), ("darkcyan", 0x008B8B),
    ("dark magenta", 0x8B008B), ("darkmagenta", 0x8B008B),
    ("dark red", 0x8B0000), ("darkred", 0x8B0000),
    ("light green", 0x90EE90), ("lightgreen", 0x90EE90),
    ("none", -1),
)


def _color_entries():
    yield from _SINGLE_COLORS
    for line in _NUMBERED_COLORS.split("\n"):
        if not line.strip():
            continue
        family, *shades = line.split()
        for index, shade in enumerate(shades, start=1):
            yield f"{family}{index}", int(shade, 16)
    for index, level in enumerate(_GRAY_LEVELS):
        yield f"gray{index}", level * 0x010101
        yield f"grey{index}", level * 0x010101
    yield from _TRAILING_COLORS


def _build_table() -> dict[str, int]:
    table: dict[str, int] = {}
    for name, value in _color_entries():
        table.setdefault(name.lower(), value)
    return table


COLOR_NAMES: dict[str, int] = _build_table()

_HEX_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


def _to_c_int(value: int) -> int:
    return (value - _INT_MIN) % 2**32 + _INT_MIN


def _parse_hex(text: str) -> int:
    """Read a leading hexadecimal number the way strtol does; 0 if none."""
    match = _HEX_PREFIX.match(text)
    digits = match.group(2) if match else ""
    if not digits:
        return 0
    value = int(digits, 16)
    if match.group(1) == "-":
        value = -value
    value = min(max(value, _LONG_MIN), _LONG_MAX)
    return _to_c_int(value)


def lookup_color(name: str) -> int:
    """Return the 0xRRGGBB value of a colour name, ignoring case.

    The name "none" gives -1. Raises KeyError for an unknown name.
    """
    try:
        return COLOR_NAMES[name.lower()]
    except KeyError:
        raise KeyError(name) from None


def text_to_rgb(name: str, suffix: str | None = None) -> int:
    """Turn an XPM colour specification into an RGB value.

    "#RRGGBB" is read as hexadecimal. Otherwise the name, joined with the
    optional suffix word by a space, is looked up in the colour table;
    an unknown name gives 0.
    """
    if name.startswith("#"):
        return _parse_hex(name[1:])
    if suffix:
        name = f"{name} {suffix}"[:_NAME_BUFFER]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _shift_and_width(mask: int) -> tuple[int, int]:
    if mask <= 0:
        raise ValueError(f"colour mask must be a positive bit field, got {mask!r}")
    shift = (mask & -mask).bit_length() - 1
    mask >>= shift
    width = 0
    while mask & 1:
        mask >>= 1
        width += 1
    return shift, width


@dataclass(frozen=True)
class PixelFormat:
    """Layout of a visual's pixels: depth and per-channel shift and width."""

    depth: int
    red_shift: int
    red_bits: int
    green_shift: int
    green_bits: int
    blue_shift: int
    blue_bits: int

    @classmethod
    def from_masks(cls, depth: int, red_mask: int, green_mask: int, blue_mask: int) -> PixelFormat:
        """Derive channel positions from a TrueColor visual's masks."""
        red_shift, red_bits = _shift_and_width(red_mask)
        green_shift, green_bits = _shift_and_width(green_mask)
        blue_shift, blue_bits = _shift_and_width(blue_mask)
        return cls(depth, red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits)

    def convert(self, color: int) -> int:
        """Map a 0xRRGGBB colour to this format's pixel value."""
        if self.depth >= 24:
            return color
        red = (color >> 8) & 0xFF00
        green = color & 0xFF00
        blue = (color << 8) & 0xFF00
        return (
            ((red >> (16 - self.red_bits)) << self.red_shift)
            + ((green >> (16 - self.green_bits)) << self.green_shift)
            + ((blue >> (16 - self.blue_bits)) << self.blue_shift)
        )