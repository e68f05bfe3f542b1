import pytest

from cub3d.image import Image


def test_new_image_is_black():
    image = Image(3, 2)
    assert all(image.get_pixel(x, y) == 0 for x in range(3) for y in range(2))


def test_buffer_length_matches_rows():
    image = Image(5, 4)
    assert len(image.data) == image.size_line * image.height
    assert image.size_line * 8 == image.width * image.bits_per_pixel


def test_round_trip():
    image = Image(4, 4)
    image.set_pixel(2, 3, 0x00ABCDEF)
    assert image.get_pixel(2, 3) == 0x00ABCDEF
    assert image.get_pixel(3, 2) == 0


def test_little_endian_layout():
    image = Image(2, 1)
    image.set_pixel(1, 0, 0x11223344)
    assert bytes(image.data[4:8]) == b"\x44\x33\x22\x11"


def test_big_endian_layout():
    image = Image(2, 1, byte_order=1)
    image.set_pixel(0, 0, 0x11223344)
    assert bytes(image.data[0:4]) == b"\x11\x22\x33\x44"
    assert image.get_pixel(0, 0) == 0x11223344


def test_high_bits_dropped():
    image = Image(1, 1)
    image.set_pixel(0, 0, 0x1FF000000)
    assert image.get_pixel(0, 0) == 0xFF000000


def test_negative_colour_wraps():
    image = Image(1, 1)
    image.set_pixel(0, 0, -1)
    assert image.get_pixel(0, 0) == 0xFFFFFFFF


def test_fill():
    image = Image(3, 3)
    image.fill(0x00123456)
    assert {image.get_pixel(x, y) for x in range(3) for y in range(3)} == {0x00123456}


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (2, 0), (0, 2)])
def test_out_of_bounds(x, y):
    image = Image(2, 2)
    with pytest.raises(IndexError):
        image.set_pixel(x, y, 1)
    with pytest.raises(IndexError):
        image.get_pixel(x, y)


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-3, 2)])
def test_invalid_size(width, height):
    with pytest.raises(ValueError):
        Image(width, height)


def test_invalid_byte_order():
    with pytest.raises(ValueError):
        Image(1, 1, byte_order=2)