"""Layered effects built from a matrix pass, an overlay and delegate effects."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..core.color import TRANSPARENT, Color, parse_color
from ..core.image import ImageResource, dispose_quietly, ensure_valid
from ..core.matrix import ColorMatrices, apply_color_matrix, as_matrix
from ..core.utils import BlendCurve, RadialGradient, apply_gradient
from ..exceptions import InvalidParameter, ProcessingError
from .base import Effect
from .vignette import VignetteEffect

logger = logging.getLogger(__name__)

POLAROID_GLOW = RadialGradient(
    center_color=Color(255, 153, 102, 70),
    edge_colors=(TRANSPARENT,),
    blend=BlendCurve.from_points(
        [(0.0, 0.0), (0.2, 0.5), (0.4, 1.0), (0.6, 1.0), (0.8, 1.0), (1.0, 1.0)]
    ),
)


class LayeredEffect:
    """Effect composed of up to three ordered stages.

    1. ``matrix``: apply a fixed color matrix to the whole image.
    2. ``overlay``: composite a full-canvas radial gradient over the result.
    3. ``delegate:<name>``: hand the result to each delegate effect in turn.

    Every stage disposes the image it consumed once the next one exists, so
    callers only ever see the final image. A failing stage aborts the rest,
    disposes whatever is held and raises ``ProcessingError`` naming the stage.
    """

    def __init__(
        self,
        name: str,
        matrix: np.ndarray | None = None,
        overlay: RadialGradient | None = None,
        delegates: Sequence[Effect] = (),
    ):
        self.name = name
        self.matrix = as_matrix(matrix) if matrix is not None else None
        self.overlay = overlay
        self.delegates = list(delegates)

    def stages(self):
        """Yield ``(stage_name, step)`` pairs in execution order."""
        if self.matrix is not None:
            yield "matrix", lambda image: apply_color_matrix(image, self.matrix, name=self.name)
        if self.overlay is not None:
            yield "overlay", lambda image: apply_gradient(image, self.overlay, name=self.name)
        for delegate in self.delegates:
            yield f"delegate:{delegate.name}", delegate.process

    def process(self, image: ImageResource) -> ImageResource:
        ensure_valid(image)
        current = image
        for stage, step in self.stages():
            previous = current
            try:
                current = step(previous)
            except ProcessingError as exc:
                dispose_quietly(current)
                # matrix and overlay failures already carry this effect's name
                message = exc.message
                if exc.effect != self.name:
                    message = f"Error processing image with {self.name}: {message}"
                raise ProcessingError(
                    message,
                    effect=self.name,
                    stage=stage,
                ) from exc
            except Exception as exc:
                dispose_quietly(current)
                raise ProcessingError(
                    f"Error processing image with {self.name}",
                    effect=self.name,
                    stage=stage,
                ) from exc
            if current is not previous:
                dispose_quietly(previous)
            if current is None or current.disposed:
                raise ProcessingError(
                    f"Stage returned no live image in {self.name}",
                    effect=self.name,
                    stage=stage,
                )
            logger.debug("%s: finished stage %s", self.name, stage)
        return current

    def __repr__(self) -> str:
        return f"LayeredEffect({self.name!r}, delegates={[d.name for d in self.delegates]})"


def _vignette(settings: dict[str, str] | None) -> VignetteEffect:
    settings = settings or {}
    color = settings.get("vignette-color")
    if not color:
        return VignetteEffect()
    try:
        return VignetteEffect(parse_color(color))
    except InvalidParameter as exc:
        raise InvalidParameter(exc.message, effect="filter", value=color) from exc


def polaroid(settings: dict[str, str] | None = None) -> LayeredEffect:
    """Warm color shift with an orange glow toward the center and a vignette."""
    return LayeredEffect(
        "polaroid",
        matrix=ColorMatrices.POLAROID,
        overlay=POLAROID_GLOW,
        delegates=[_vignette(settings)],
    )


def lomograph(settings: dict[str, str] | None = None) -> LayeredEffect:
    """High-contrast toy-camera look finished with a vignette."""
    return LayeredEffect(
        "lomograph",
        matrix=ColorMatrices.LOMOGRAPH,
        delegates=[_vignette(settings)],
    )
