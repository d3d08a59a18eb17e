"""Linear-regression token count estimation from character statistics.

A configuration bundles an intercept and one weight per taxonomy category.
The estimate is ``intercept + sum(weight * count)``, rounded half up and
clamped at zero.
"""

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping

from token_estimate.sampling import sample_stats, should_sample
from token_estimate.taxonomy import BASIC, SCRIPT, Taxonomy


@dataclass(frozen=True)
class EstimatorConfig:
    """Named regression preset. Immutable once constructed."""

    name: str
    description: str
    taxonomy: Taxonomy
    weights: Mapping[str, float]
    intercept: float = 0.0

    # Sampling mode for long texts; engages only when both numbers are positive
    enable_sampling: bool = False
    sampling_threshold: int = 0
    sampling_size: int = 0

    def __post_init__(self) -> None:
        expected = set(self.taxonomy.categories)
        given = set(self.weights)
        if given != expected:
            missing = sorted(expected - given)
            unknown = sorted(given - expected)
            raise ValueError(
                f"Weights for preset {self.name!r} do not match taxonomy "
                f"{self.taxonomy.name!r} (missing: {missing}, unknown: {unknown})"
            )
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    def __hash__(self) -> int:
        # weights is a read-only view, which is not hashable itself
        return hash(
            (
                self.name,
                self.description,
                self.taxonomy,
                tuple(sorted(self.weights.items())),
                self.intercept,
                self.enable_sampling,
                self.sampling_threshold,
                self.sampling_size,
            )
        )

    def clone(self, **overrides) -> "EstimatorConfig":
        """Independent copy, optionally with some fields replaced."""
        return replace(self, **overrides)

    def with_sampling(self, threshold: int, sample_size: int) -> "EstimatorConfig":
        """Copy of this preset with sampling enabled.

        threshold: minimum text length (code points) to trigger sampling, e.g. 10000
        sample_size: number of code points to sample, e.g. 1000
        """
        return self.clone(
            enable_sampling=True,
            sampling_threshold=threshold,
            sampling_size=sample_size,
        )

    def analyze(self, text: str):
        return analyze(text, self)

    def estimate(self, text: str) -> int:
        return estimate(text, self)

    def score(self, stats) -> int:
        return score(stats, self)


def analyze(text: str, config: EstimatorConfig):
    """Character statistics for text, sampled when the preset asks for it."""
    if should_sample(
        len(text),
        config.enable_sampling,
        config.sampling_threshold,
        config.sampling_size,
    ):
        return sample_stats(text, config.taxonomy, config.sampling_size)
    return config.taxonomy.classify(text)


def weighted_sum(stats, config: EstimatorConfig) -> float:
    """Raw regression value before rounding and clamping."""
    if not isinstance(stats, config.taxonomy.stats_type):
        raise TypeError(
            f"Preset {config.name!r} expects {config.taxonomy.stats_type.__name__}, "
            f"got {type(stats).__name__}"
        )
    total = config.intercept
    for category in config.taxonomy.categories:
        total += config.weights[category] * getattr(stats, category)
    return total


def score(stats, config: EstimatorConfig) -> int:
    """Estimated token count for pre-computed Stats. Never negative."""
    total = weighted_sum(stats, config)
    if total < 0:
        return 0
    return int(total + 0.5)


def estimate(text: str, config: EstimatorConfig) -> int:
    """Estimated token count for text."""
    return score(analyze(text, config), config)


DEFAULT_ESTIMATOR = EstimatorConfig(
    name="default",
    description="General English/CJK preset (6 categories)",
    taxonomy=BASIC,
    intercept=0.0,
    weights={
        "symbols": 0.488,
        "letters": 0.206,
        "digits": 0.746,
        "cjk": 0.507,
        "spaces": 0.043,
        "other": 1.830,
    },
)

# Trained on Kimi-K2 tokenizer data, ~8.5% average relative error
KIMI_K2_ESTIMATOR = EstimatorConfig(
    name="kimi-k2",
    description="Kimi-K2 tokenizer preset (~8.5% avg error)",
    taxonomy=SCRIPT,
    intercept=0.0,
    weights={
        "symbols": 0.5671194745036742,
        "latin_letters": 0.20601617930567592,
        "latin_extended": 5.87908499852652,
        "digits": 0.8030572147361226,
        "chinese": 0.6627122076124944,
        "japanese": 1.0879350533022305,
        "korean": 1.0509515625240804,
        "russian": 0.5306900990158002,
        "arabic": 0.6352704975749803,
        "spaces": 0.02578661842488973,
    },
)

BUILTIN_PRESETS = (DEFAULT_ESTIMATOR, KIMI_K2_ESTIMATOR)
