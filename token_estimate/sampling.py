"""Sampling-based analysis for long texts.

Instead of classifying every code point, classify an evenly spaced,
deterministic subset and scale the counts up to the full length.
"""

import logging

from token_estimate.taxonomy import Taxonomy

logger = logging.getLogger(__name__)


def should_sample(length: int, enabled: bool, threshold: int, sample_size: int) -> bool:
    """True when a text of ``length`` code points should take the sampled path."""
    return enabled and threshold > 0 and sample_size > 0 and length > threshold


def sample_positions(length: int, sample_size: int) -> range:
    """Evenly spaced code-point positions: 0, stride, 2*stride, ...

    At most ``min(sample_size, length)`` positions, all inside the text.
    """
    count = min(sample_size, length)
    if count <= 0:
        return range(0)
    stride = max(1, length // count)
    return range(0, length, stride)[:count]


def sample_stats(text: str, taxonomy: Taxonomy, sample_size: int):
    """Approximate Stats for text from ``sample_size`` evenly spaced code points."""
    length = len(text)
    positions = sample_positions(length, sample_size)
    if not positions:
        return taxonomy.stats_type()

    sampled = taxonomy.count(text[i] for i in positions)
    scale = length / len(positions)
    logger.debug(
        "Sampled %d of %d code points (scale %.3f, taxonomy %s)",
        len(positions),
        length,
        scale,
        taxonomy.name,
    )

    # Round half up; counts are never negative
    scaled = {category: int(n * scale + 0.5) for category, n in sampled.items()}
    return taxonomy.correct(taxonomy.build(scaled))
