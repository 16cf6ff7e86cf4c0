"""Headless batch processing runner."""

import logging
from pathlib import Path

from tqdm import tqdm

from ..config import ProcessingConfig
from ..core.image import ImageResource, ResourceTracker, dispose_quietly
from ..core.io import load_image, save_image
from ..core.utils import resize_to_fit
from ..effects.pipeline import EffectPipeline, PlanStep, build_plan, execute

logger = logging.getLogger(__name__)


def output_path_for(input_path: str, config: ProcessingConfig) -> Path:
    """Path of the processed copy of ``input_path``."""
    return Path(config.output.directory) / (Path(input_path).stem + config.output.suffix)


def prepare_image(image: ImageResource, max_dim: int) -> ImageResource:
    """Scale ``image`` down to ``max_dim``, replacing it if resized.

    Args:
        image: Input image; disposed when a resized copy is returned.
        max_dim: Maximum dimension (0 disables).

    Returns:
        Prepared image.
    """
    pixels = resize_to_fit(image.pixels, max_dim)
    if pixels is image.pixels:
        return image
    resized = image.derive(pixels)
    image.dispose()
    return resized


def process_file(path: str, plan: list[PlanStep], config: ProcessingConfig) -> Path:
    """Load, process and save a single image.

    Every buffer allocated for ``path`` is released before returning, also
    when loading succeeded but a later step raised.

    Returns:
        Path of the written file.
    """
    tracker = ResourceTracker()
    image = load_image(path, tracker=tracker)
    try:
        image = prepare_image(image, config.max_dimension)
        image = execute(plan, image, config.settings)
        destination = output_path_for(path, config)
        save_image(image, str(destination), quality=config.output.quality)
    finally:
        dispose_quietly(image)
    if tracker.live:
        logger.warning("%d image buffers still allocated after %s", tracker.live, path)
    logger.debug("%s: allocated %d buffers", path, tracker.allocated)
    return destination


def run_headless(config: ProcessingConfig) -> list[Path]:
    """Run headless batch processing.

    Args:
        config: Processing configuration.

    Returns:
        Paths of the written images.

    Raises:
        InvalidParameter: If the query or a setting contains a malformed value.
        InvalidImage: If an input cannot be decoded.
        ProcessingError: If an effect fails.
    """
    # Parse the query and settings before touching any file
    plan = build_plan(config.query)
    EffectPipeline.from_plan(plan, config.settings)
    if plan:
        print(f"Effects: {', '.join(step.name for step in plan)}")
    else:
        print("No effects matched the query; images are copied unchanged.")

    written = []
    for path in tqdm(config.input_paths, desc="Processing"):
        written.append(process_file(path, plan, config))

    print(f"Output saved to: {config.output.directory}")
    return written
