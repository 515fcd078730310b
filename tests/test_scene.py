import math

import pytest

from objview.model import ObjModel
from objview.scene import Projection, Scene


def _apply(matrix, vector):
    return [sum(row[k] * vector[k] for k in range(4)) for row in matrix]


def _ndc_z(matrix, z):
    x, y, zz, w = _apply(matrix, (0.0, 0.0, z, 1.0))
    return zz / w


def _line_scene():
    scene = Scene(background=(1.0, 0.0, 0.0), line_color=(0.0, 0.0, 1.0), points=False)
    scene.set_orthographic()
    scene.set_model(ObjModel(vertices=[(-0.5, 0.0, 0.0), (0.5, 0.0, 0.0)], indices=[0, 1]))
    return scene


def test_projection_switches():
    scene = Scene()
    assert scene.projection is Projection.PERSPECTIVE
    scene.set_orthographic()
    assert scene.projection is Projection.ORTHOGRAPHIC
    scene.set_perspective()
    assert scene.projection is Projection.PERSPECTIVE


def test_default_background():
    assert Scene().background == (0.30, 0.30, 0.30)


def test_orthographic_depth_range():
    scene = Scene()
    scene.set_orthographic()
    matrix = scene.projection_matrix()
    assert _ndc_z(matrix, -1.0) == pytest.approx(-1.0)
    assert _ndc_z(matrix, -3.0) == pytest.approx(1.0)


def test_perspective_far_plane():
    matrix = Scene().projection_matrix()
    assert _ndc_z(matrix, -6.0) == pytest.approx(1.0)


def test_modelview_translates_camera():
    matrix = Scene().modelview_matrix()
    assert _apply(matrix, (0.0, 0.0, 0.0, 1.0)) == pytest.approx([0.0, 0.0, -2.0, 1.0])


def test_drag_without_movement_keeps_view():
    scene = Scene()
    before = scene.modelview_matrix()
    scene.press(10, 10)
    scene.drag(10, 10)
    assert scene.modelview_matrix() == pytest.approx(before)


def test_drag_sets_rotation():
    scene = Scene()
    scene.press(0, 0)
    scene.drag(45 * math.pi, 90 * math.pi)
    assert scene.x_rotation == pytest.approx(90.0)
    assert scene.y_rotation == pytest.approx(45.0)


def test_origin_projects_to_center():
    for projection in (Projection.PERSPECTIVE, Projection.ORTHOGRAPHIC):
        scene = Scene(projection=projection)
        scene.set_model(ObjModel(vertices=[(0.0, 0.0, 0.0)], indices=[0]))
        (x, y, _), = scene.project(200, 100)
        assert (x, y) == pytest.approx((100.0, 50.0))


def test_rotation_moves_vertex_onto_axis():
    scene = Scene()
    scene.set_orthographic()
    scene.set_model(ObjModel(vertices=[(0.0, 1.0, 0.0)], indices=[0]))
    scene.press(0, 0)
    scene.drag(0, 90 * math.pi)
    (x, y, _), = scene.project(100, 100)
    assert (x, y) == pytest.approx((50.0, 50.0), abs=1e-9)


def test_project_without_model_is_empty():
    assert Scene().project(10, 10) == []


def test_render_without_model_is_background():
    image = Scene(background=(1.0, 0.0, 0.0)).render(20, 10)
    assert image.getcolors() == [(200, (255, 0, 0))]


def test_render_draws_line():
    image = _line_scene().render(101, 101)
    assert image.getpixel((50, 50)) == (0, 0, 255)
    assert image.getpixel((50, 10)) == (255, 0, 0)


def test_stipple_draws_fewer_pixels():
    solid_scene = _line_scene()
    solid = solid_scene.render(101, 101)
    dashed_scene = _line_scene()
    dashed_scene.stipple = True
    dashed = dashed_scene.render(101, 101)
    blue = (0, 0, 255)
    solid_count = sum(1 for x in range(101) if solid.getpixel((x, 50)) == blue)
    dashed_count = sum(1 for x in range(101) if dashed.getpixel((x, 50)) == blue)
    assert 0 < dashed_count < solid_count


def test_points_drawn_over_lines():
    scene = _line_scene()
    scene.points = True
    scene.dot_color = (0.0, 1.0, 0.0)
    scene.dot_width = 3
    image = scene.render(101, 101)
    assert image.getpixel((25, 50)) == (0, 255, 0)
    assert image.getpixel((50, 50)) == (0, 0, 255)


def test_render_follows_model_changes():
    scene = _line_scene()
    scene.model.vertices[:] = [(-0.5, 0.5, 0.0), (0.5, 0.5, 0.0)]
    image = scene.render(101, 101)
    assert image.getpixel((50, 50)) == (255, 0, 0)
    assert image.getpixel((50, 25)) == (0, 0, 255)