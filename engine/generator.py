"""
Character generation entry point.

    data = load_reference_data(Path("data/eberron.json"))
    characters = generate(data, "Sharn", {"race": ["Human"], "num": 5}, seed=7)
"""

import random
from typing import Any, List, Mapping, Optional, Union

from telemetry.logger import telemetry
from world.reference import ReferenceData

from .builder import GenerationContext, build_character
from .character import Character
from .config import GeneratorConfig
from .error_handler import logger
from .options import GenerationOptions


def generate(
    data: ReferenceData,
    area: Optional[str],
    options: Union[GenerationOptions, Mapping[str, Any], None] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    config: Optional[GeneratorConfig] = None,
) -> List[Character]:
    """
    Generate `options.num` independent characters from an area's demographics.

    Args:
        data: Reference data (read only)
        area: Demographic area name. An unknown area still produces
            characters, with race, culture and religion left None.
        options: GenerationOptions, or a mapping parsed leniently
        rng: Random generator to draw from (takes precedence over seed)
        seed: Seed for a fresh random generator, for reproducible batches
        config: Tunable generation numbers (defaults if omitted)

    Returns:
        List of characters (possibly empty when num is 0)
    """
    config = config or GeneratorConfig()
    if not isinstance(options, GenerationOptions):
        options = GenerationOptions.from_dict(options, max_count=config.max_count)
    if rng is None:
        rng = random.Random(seed)

    if area not in data.areas:
        logger.warning(f"Area {area!r} not found in demographics; characters will lack race and culture")

    ctx = GenerationContext(data=data, area=area, options=options, rng=rng, config=config)
    characters = [build_character(ctx) for _ in range(options.num)]

    logger.debug(f"Generated {len(characters)} character(s) for {area!r}")
    telemetry.log_batch(area, options.num, characters, seed)
    return characters
