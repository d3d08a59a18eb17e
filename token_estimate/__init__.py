"""Fast token count estimation for text from character statistics, plus cost estimation."""

from token_estimate.cost import estimate_cost
from token_estimate.estimator import (
    DEFAULT_ESTIMATOR,
    KIMI_K2_ESTIMATOR,
    EstimatorConfig,
    analyze,
    estimate,
    score,
)
from token_estimate.presets import PresetRegistry, UnknownPresetError
from token_estimate.taxonomy import BASIC, SCRIPT, BasicStats, ScriptStats

__all__ = [
    "BASIC",
    "SCRIPT",
    "BasicStats",
    "ScriptStats",
    "DEFAULT_ESTIMATOR",
    "KIMI_K2_ESTIMATOR",
    "EstimatorConfig",
    "PresetRegistry",
    "UnknownPresetError",
    "analyze",
    "estimate",
    "score",
    "estimate_cost",
]
