import numpy as np
import pytest

from photofx.core.color import Color
from photofx.core.image import ImageResource, ResourceTracker
from photofx.effects.pipeline import EffectPipeline, build_plan, execute, process_query
from photofx.exceptions import InvalidParameter, ProcessingError
from photofx.query.registry import EffectDefinition, EffectRegistry


def sample_image(tracker=None):
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(12, 16, 4), dtype=np.uint8)
    return ImageResource(pixels, tracker=tracker)


class CopyEffect:
    def __init__(self, name):
        self.name = name

    def process(self, image):
        output = image.derive(image.pixels.copy())
        image.dispose()
        return output


class ExplodingEffect:
    name = "explode"

    def process(self, image):
        raise ValueError("cannot process")


def copy_definition(name):
    return EffectDefinition(name, str, lambda argument, settings: CopyEffect(name))


def test_plan_follows_textual_order():
    assert [s.name for s in build_plan("brightness=50&tint=ff0000")] == ["brightness", "tint"]
    assert [s.name for s in build_plan("tint=ff0000&brightness=50")] == ["tint", "brightness"]


def test_plan_excludes_absent_effects():
    plan = build_plan("width=100&contrast=10")
    assert [s.name for s in plan] == ["contrast"]
    assert plan[0].argument == 10
    assert plan[0].position == 10


def test_plan_uses_first_occurrence_values():
    plan = build_plan("tint=red&brightness=5&tint=blue")
    assert [(s.name, s.argument) for s in plan] == [
        ("tint", Color(255, 0, 0)),
        ("brightness", 5),
    ]


def test_plan_ties_keep_registration_order():
    registry = EffectRegistry([copy_definition("a=b"), copy_definition("a")])
    plan = build_plan("a=b=1", registry)
    assert [s.name for s in plan] == ["a=b", "a"]
    assert [s.position for s in plan] == [0, 0]


def test_registry_rejects_duplicates():
    with pytest.raises(ValueError):
        EffectRegistry([copy_definition("a"), copy_definition("a")])


def test_empty_plan_returns_same_image():
    image = sample_image()
    assert execute([], image) is image
    assert process_query("width=100", image) is image
    assert not image.disposed


def test_malformed_value_leaves_source_intact():
    tracker = ResourceTracker()
    image = sample_image(tracker)
    before = image.pixels.copy()

    with pytest.raises(InvalidParameter):
        process_query("tint=00ff00&brightness=abc", image)

    assert not image.disposed
    assert np.array_equal(image.pixels, before)
    assert tracker.live == 1


def test_execute_threads_ownership():
    tracker = ResourceTracker()
    image = sample_image(tracker)

    output = process_query("brightness=20&filter=polaroid&alpha=90", image)

    assert image.disposed
    assert not output.disposed
    assert tracker.live == 1


def test_effects_apply_in_query_order():
    first = process_query("brightness=40&filter=greyscale", sample_image()).pixels
    second = process_query("filter=greyscale&brightness=40", sample_image()).pixels
    assert first.shape == second.shape
    assert np.all(first[..., 0] == first[..., 1])


def test_failure_releases_intermediate_image():
    tracker = ResourceTracker()
    registry = EffectRegistry([
        copy_definition("copy"),
        EffectDefinition("explode", str, lambda argument, settings: ExplodingEffect()),
    ])

    with pytest.raises(ProcessingError) as excinfo:
        process_query("copy=1&explode=1", sample_image(tracker), registry)

    assert excinfo.value.effect == "explode"
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert tracker.live == 0


def test_effect_errors_propagate_unchanged(monkeypatch):
    from photofx.core import matrix as matrix_module

    def broken(pixels, matrix):
        raise RuntimeError("boom")

    monkeypatch.setattr(matrix_module, "transform_pixels", broken)
    tracker = ResourceTracker()

    with pytest.raises(ProcessingError) as excinfo:
        process_query("vignette=true&brightness=10", sample_image(tracker))

    assert excinfo.value.effect == "brightness"
    assert excinfo.value.stage == "matrix"
    assert tracker.live == 0


def test_effects_are_fresh_per_pipeline():
    first = EffectPipeline.from_query("brightness=10&tint=red")
    second = EffectPipeline.from_query("brightness=10&tint=red")
    assert len(first.effects) == 2
    for a, b in zip(first.effects, second.effects):
        assert a is not b
        assert a.parameter == b.parameter


def test_settings_reach_effects():
    settings = {"filter": {"vignette-color": "red"}}
    pipeline = EffectPipeline.from_query("filter=lomograph", settings=settings)
    effect = pipeline.effects[0]
    assert effect.settings == {"vignette-color": "red"}
    assert effect.effect.delegates[0].parameter == Color(255, 0, 0)
