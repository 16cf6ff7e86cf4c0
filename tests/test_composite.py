import numpy as np
import pytest

from photofx.core.color import TRANSPARENT, Color
from photofx.core.image import ImageResource, ResourceTracker
from photofx.core.matrix import ColorMatrices, identity
from photofx.core.utils import BlendCurve, RadialGradient
from photofx.effects.composite import LayeredEffect, lomograph, polaroid
from photofx.exceptions import InvalidParameter, ProcessingError


def flat_image(tracker=None, width=30, height=20):
    pixels = np.full((height, width, 4), 160, dtype=np.uint8)
    pixels[..., 3] = 255
    return ImageResource(pixels, tracker=tracker)


class RecordingEffect:
    name = "recorder"

    def __init__(self, calls):
        self.calls = calls

    def process(self, image):
        self.calls.append(self.name)
        return image.derive(image.pixels.copy())


class FailingEffect:
    name = "boom"

    def process(self, image):
        raise RuntimeError("delegate exploded")


def test_polaroid_leaves_exactly_one_live_image():
    tracker = ResourceTracker()
    image = flat_image(tracker)

    output = polaroid().process(image)

    assert image.disposed
    assert not output.disposed
    assert tracker.live == 1
    assert (output.width, output.height) == (30, 20)


def test_lomograph_leaves_exactly_one_live_image():
    tracker = ResourceTracker()
    output = lomograph().process(flat_image(tracker))
    assert tracker.live == 1
    assert not output.disposed


def test_polaroid_adds_glow_and_vignette_to_matrix_pass():
    matrix_only = LayeredEffect("base", matrix=ColorMatrices.POLAROID).process(flat_image()).pixels.copy()
    output = polaroid().process(flat_image())
    assert not np.array_equal(output.pixels, matrix_only)


def test_delegates_run_after_matrix_and_overlay():
    calls = []
    tracker = ResourceTracker()
    effect = LayeredEffect(
        "layered",
        matrix=identity(),
        overlay=RadialGradient(center_color=TRANSPARENT, edge_colors=(TRANSPARENT,)),
        delegates=[RecordingEffect(calls), RecordingEffect(calls)],
    )

    output = effect.process(flat_image(tracker))

    assert calls == ["recorder", "recorder"]
    assert tracker.live == 1
    assert np.all(output.pixels[..., :3] == 160)


def test_stage_names_follow_execution_order():
    effect = LayeredEffect(
        "layered",
        matrix=identity(),
        overlay=RadialGradient(center_color=TRANSPARENT, edge_colors=(TRANSPARENT,)),
        delegates=[FailingEffect()],
    )
    assert [name for name, _ in effect.stages()] == ["matrix", "overlay", "delegate:boom"]


def test_failing_delegate_aborts_and_disposes():
    tracker = ResourceTracker()
    calls = []
    effect = LayeredEffect(
        "layered",
        matrix=identity(),
        delegates=[FailingEffect(), RecordingEffect(calls)],
    )

    with pytest.raises(ProcessingError) as excinfo:
        effect.process(flat_image(tracker))

    assert excinfo.value.effect == "layered"
    assert excinfo.value.stage == "delegate:boom"
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert calls == []
    assert tracker.live == 0


def test_failing_overlay_names_overlay_stage(monkeypatch):
    def broken(self, width, height):
        raise MemoryError("no room for gradient")

    monkeypatch.setattr(RadialGradient, "render", broken)
    tracker = ResourceTracker()
    calls = []
    effect = LayeredEffect(
        "polaroid",
        matrix=ColorMatrices.POLAROID,
        overlay=RadialGradient(center_color=TRANSPARENT, edge_colors=(TRANSPARENT,)),
        delegates=[RecordingEffect(calls)],
    )

    with pytest.raises(ProcessingError) as excinfo:
        effect.process(flat_image(tracker))

    assert excinfo.value.stage == "overlay"
    assert isinstance(excinfo.value.__cause__, ProcessingError)
    assert isinstance(excinfo.value.__cause__.__cause__, MemoryError)
    assert calls == []
    assert tracker.live == 0


def test_failing_matrix_stage_keeps_single_prefix(monkeypatch):
    def broken(pixels, matrix):
        raise MemoryError("no room for output")

    monkeypatch.setattr("photofx.core.matrix.transform_pixels", broken)
    tracker = ResourceTracker()

    with pytest.raises(ProcessingError) as excinfo:
        polaroid().process(flat_image(tracker))

    assert excinfo.value.stage == "matrix"
    assert excinfo.value.message == "Error processing image with polaroid"
    assert tracker.live == 0


class BrokenDelegate:
    name = "broken"

    def process(self, image):
        image.dispose()
        raise ProcessingError("broken failed", effect=self.name)


def test_failing_delegate_message_names_both_effects():
    tracker = ResourceTracker()

    with pytest.raises(ProcessingError) as excinfo:
        LayeredEffect("layered", delegates=[BrokenDelegate()]).process(flat_image(tracker))

    assert excinfo.value.message == "Error processing image with layered: broken failed"
    assert excinfo.value.stage == "delegate:broken"
    assert tracker.live == 0


def test_invalid_vignette_color_setting_names_filter():
    with pytest.raises(InvalidParameter) as excinfo:
        polaroid({"vignette-color": "zz"})
    assert excinfo.value.effect == "filter"
    assert excinfo.value.value == "zz"
    assert isinstance(excinfo.value.__cause__, InvalidParameter)


def test_vignette_color_setting_recolors_delegate():
    (vignette,) = lomograph({"vignette-color": "navy"}).delegates
    assert vignette.parameter == Color(0, 0, 128)


def test_blend_curve_validation():
    with pytest.raises(InvalidParameter):
        BlendCurve.from_points([(0.0, 0.0), (0.6, 1.0), (0.4, 1.0), (1.0, 1.0)])
    with pytest.raises(InvalidParameter):
        BlendCurve.from_points([(0.1, 0.0), (1.0, 1.0)])
    with pytest.raises(InvalidParameter):
        BlendCurve.from_points([(0.0, 0.0), (1.0, 1.5)])
    with pytest.raises(InvalidParameter):
        BlendCurve.from_points([(0.0, 0.0)])


def test_blend_curve_interpolates():
    curve = BlendCurve.from_points([(0.0, 0.0), (0.2, 0.5), (0.4, 1.0), (1.0, 1.0)])
    values = curve.evaluate(np.array([0.0, 0.1, 0.3, 0.9]))
    assert np.allclose(values, [0.0, 0.25, 0.75, 1.0])


def test_gradient_is_transparent_outside_the_ellipse():
    gradient = RadialGradient(center_color=Color(255, 0, 0), edge_colors=(Color(0, 0, 255),))
    rendered = gradient.render(21, 21)

    assert rendered.shape == (21, 21, 4)
    assert np.all(rendered[0, 0] == 0.0)
    assert np.allclose(rendered[10, 10], [1.0, 0.0, 0.0, 1.0])


def test_gradient_spreads_edge_colors_by_angle():
    gradient = RadialGradient(
        center_color=TRANSPARENT,
        edge_colors=(Color(255, 0, 0), Color(0, 0, 255)),
    )
    rendered = gradient.render(101, 101)

    right = rendered[50, 100]
    left = rendered[50, 0]
    assert right[0] > 0.9 and right[2] < 0.1
    assert left[2] > 0.9 and left[0] < 0.1


def test_gradient_requires_edge_color():
    with pytest.raises(InvalidParameter):
        RadialGradient(center_color=TRANSPARENT, edge_colors=())
