import pytest

from cub3d.colors import PixelFormat, lookup_color, text_to_rgb


def _mask(shift, bits):
    return ((1 << bits) - 1) << shift


@pytest.mark.parametrize(
    "masks",
    [(0xFF0000, 0x00FF00, 0x0000FF), (0xF800, 0x07E0, 0x001F), (0x7C00, 0x03E0, 0x001F)],
)
def test_from_masks_recovers_masks(masks):
    fmt = PixelFormat.from_masks(16, *masks)
    assert _mask(fmt.red_shift, fmt.red_bits) == masks[0]
    assert _mask(fmt.green_shift, fmt.green_bits) == masks[1]
    assert _mask(fmt.blue_shift, fmt.blue_bits) == masks[2]


def test_from_masks_rejects_empty_mask():
    with pytest.raises(ValueError):
        PixelFormat.from_masks(16, 0, 0x07E0, 0x001F)


@pytest.mark.parametrize("color", [0, 0xFF99FF, 0x00FFFF, 0xFFFFFF, 0x123456])
def test_deep_visual_passes_colour_through(color):
    fmt = PixelFormat.from_masks(24, 0xFF0000, 0x00FF00, 0x0000FF)
    assert fmt.convert(color) == color


def test_shallow_visual_maps_primaries_onto_masks():
    red, green, blue = 0xF800, 0x07E0, 0x001F
    fmt = PixelFormat.from_masks(16, red, green, blue)
    assert fmt.convert(0xFF0000) == red
    assert fmt.convert(0x00FF00) == green
    assert fmt.convert(0x0000FF) == blue
    assert fmt.convert(0xFFFFFF) == red | green | blue
    assert fmt.convert(0x000000) == 0


def test_shallow_visual_stays_within_masks():
    red, green, blue = 0x7C00, 0x03E0, 0x001F
    fmt = PixelFormat.from_masks(15, red, green, blue)
    for color in (0x123456, 0xABCDEF, 0x808080, 0xFF99FF):
        assert fmt.convert(color) & ~(red | green | blue) == 0


def test_lookup_known_names():
    assert lookup_color("snow") == 0xFFFAFA
    assert lookup_color("ghost white") == 0xF8F8FF
    assert lookup_color("gray50") == 0x7F7F7F
    assert lookup_color("grey50") == lookup_color("gray50")
    assert lookup_color("thistle4") == 0x8B7B8B


def test_lookup_is_case_insensitive():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Dark Red") == 0x8B0000


def test_lookup_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_lookup_none_is_transparent():
    assert lookup_color("None") == -1


def test_lookup_unknown_raises():
    with pytest.raises(KeyError):
        lookup_color("not a colour")


def test_text_to_rgb_hex():
    assert text_to_rgb("#ff0000") == 0xFF0000
    assert text_to_rgb("#00FFFF", None) == 0x00FFFF


def test_text_to_rgb_hex_without_digits_is_zero():
    assert text_to_rgb("#zz") == 0


def test_text_to_rgb_joins_suffix():
    assert text_to_rgb("ghost", "white") == lookup_color("ghost white")
    assert text_to_rgb("lavender", "blush") == 0xFFF0F5


def test_text_to_rgb_single_name():
    assert text_to_rgb("red") == 0xFF0000
    assert text_to_rgb("None") == -1


def test_text_to_rgb_unknown_is_zero():
    assert text_to_rgb("nosuch", "colour") == 0
    assert text_to_rgb("nosuch") == 0