from chessmatch.systems.shapes import (
    BASE_KNIGHT_SHAPE,
    knight_shapes,
    normalize,
    shape_extent,
    shape_key,
)


def test_knight_catalog_has_every_l_orientation():
    shapes = knight_shapes()
    assert len(shapes) == 8
    assert len({shape_key(s) for s in shapes}) == 8


def test_knight_shapes_are_normalized_tetrominoes():
    for shape in knight_shapes():
        assert len(shape) == 4
        assert min(r for r, _ in shape) == 0
        assert min(c for _, c in shape) == 0
        assert shape_extent(shape) in ((2, 1), (1, 2))


def test_base_shape_is_in_catalog():
    keys = {shape_key(s) for s in knight_shapes()}
    assert shape_key(BASE_KNIGHT_SHAPE) in keys


def test_normalize_shifts_to_origin():
    assert normalize([(3, 4), (4, 4), (5, 4), (5, 5)]) == BASE_KNIGHT_SHAPE
