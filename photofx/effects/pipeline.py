"""Effect composition pipeline and query-driven dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..core.image import ImageResource, dispose_quietly, ensure_valid
from ..exceptions import PhotofxError, ProcessingError
from .base import Effect

if TYPE_CHECKING:
    from ..query.registry import EffectDefinition, EffectRegistry

logger = logging.getLogger(__name__)

Settings = dict[str, dict[str, str]]


@dataclass(frozen=True)
class PlanStep:
    """One entry of an execution plan."""

    definition: "EffectDefinition"
    argument: Any
    position: int

    @property
    def name(self) -> str:
        return self.definition.name

    def create(self, settings: Settings | None = None) -> Effect:
        effect_settings = (settings or {}).get(self.name)
        return self.definition.create(self.argument, effect_settings)


def build_plan(query: str, registry: EffectRegistry | None = None) -> list[PlanStep]:
    """Select and order the effects named in ``query``.

    Every definition is resolved against the same string; absent effects are
    dropped and the rest are ordered by the offset of their first occurrence.
    The sort is stable, so equal offsets keep registration order.

    Args:
        query: Raw parameter string.
        registry: Candidate effects (defaults to the built-in registry).

    Returns:
        Ordered plan steps.

    Raises:
        InvalidParameter: If a matched value cannot be parsed.
    """
    from ..query.registry import default_registry
    from ..query.resolver import resolve

    if registry is None:
        registry = default_registry()

    matches = [resolve(definition, query) for definition in registry]
    found = [m for m in matches if m.found]
    found.sort(key=lambda m: m.position)
    plan = [PlanStep(m.definition, m.argument, m.position) for m in found]
    logger.debug("Built plan for %r: %s", query, [step.name for step in plan])
    return plan


class EffectPipeline:
    """Chain multiple effects and apply them in sequence."""

    def __init__(self, effects: list[Effect]):
        """Initialize pipeline with ordered effects.

        Args:
            effects: Effects to apply in order.
        """
        self.effects = list(effects)

    @classmethod
    def from_plan(cls, plan: list[PlanStep], settings: Settings | None = None) -> "EffectPipeline":
        """Instantiate fresh effects for every step of ``plan``."""
        return cls([step.create(settings) for step in plan])

    @classmethod
    def from_query(cls, query: str, registry=None, settings: Settings | None = None) -> "EffectPipeline":
        return cls.from_plan(build_plan(query, registry), settings)

    def process(self, image: ImageResource) -> ImageResource:
        """Apply all effects to an image in sequence.

        Ownership of ``image`` moves into the pipeline. An empty pipeline
        returns the same object. If an effect fails, the image currently held
        is disposed and the error propagates; no partial result is returned.

        Args:
            image: Input image.

        Returns:
            The processed image after all effects.
        """
        ensure_valid(image)
        output = image
        for effect in self.effects:
            previous = output
            try:
                output = effect.process(previous)
            except PhotofxError:
                dispose_quietly(previous)
                raise
            except Exception as exc:
                dispose_quietly(previous)
                raise ProcessingError(f"Error processing image with {effect.name}", effect=effect.name) from exc
            if output is not previous:
                dispose_quietly(previous)
            if output is None or output.disposed:
                raise ProcessingError(f"{effect.name} returned no live image", effect=effect.name)
            logger.debug("Applied %s", effect.name)
        return output


def execute(plan: list[PlanStep], image: ImageResource, settings: Settings | None = None) -> ImageResource:
    """Run ``plan`` over ``image``, threading ownership through each step."""
    return EffectPipeline.from_plan(plan, settings).process(image)


def process_query(
    query: str,
    image: ImageResource,
    registry: EffectRegistry | None = None,
    settings: Settings | None = None,
) -> ImageResource:
    """Build the plan for ``query`` and apply it to ``image``.

    The plan is fully parsed before any pixel is touched, so an
    ``InvalidParameter`` leaves ``image`` allocated and unchanged.
    """
    plan = build_plan(query, registry)
    return execute(plan, image, settings)
