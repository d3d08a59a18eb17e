"""Tests for presets, scoring and the estimate/analyze/score round trip."""

from dataclasses import FrozenInstanceError

import pytest

from token_estimate import estimator as est
from token_estimate.estimator import (
    DEFAULT_ESTIMATOR,
    KIMI_K2_ESTIMATOR,
    EstimatorConfig,
    analyze,
    estimate,
    score,
    weighted_sum,
)
from token_estimate.taxonomy import BASIC, BasicStats, ScriptStats

ZERO_BASIC_WEIGHTS = {name: 0.0 for name in BASIC.categories}


class TestEstimate:
    def test_empty_text(self, default_config):
        assert analyze("", default_config) == BasicStats()
        assert estimate("", default_config) == 0

    def test_hello(self, default_config):
        assert estimate("Hello", default_config) == 1

    def test_symbols_and_space(self, default_config):
        # 6 * 0.488 + 0.043 = 2.971
        assert estimate("!@# $%^", default_config) == 3

    def test_long_letters(self, default_config):
        assert estimate("ab" * 1000, default_config) == 412

    @pytest.mark.parametrize(
        ("text", "low", "high"),
        [
            ("Hello, world!", 0, 10),
            ("你好，世界！", 1, 10),
            ("Hello 世界", 0, 10),
            ("Price: $99.99", 1, 15),
            ("The quick brown fox jumps over the lazy dog. This is a test sentence.", 5, 30),
        ],
    )
    def test_reasonable_ranges(self, kimi_config, default_config, text, low, high):
        for config in (kimi_config, default_config):
            assert low <= estimate(text, config) <= high

    def test_kimi_exact_weights(self, kimi_config):
        stats = ScriptStats(latin_letters=10, spaces=2, symbols=1)
        expected = 0.0 + 0.5671194745036742 * 1 + 0.20601617930567592 * 10 + 0.02578661842488973 * 2
        assert weighted_sum(stats, kimi_config) == pytest.approx(expected)
        assert score(stats, kimi_config) == 3

    def test_round_trip(self, default_config, kimi_config):
        text = "Round trip: 東京 Москва القاهرة 2024 - ok?"
        for config in (default_config, kimi_config):
            assert estimate(text, config) == score(analyze(text, config), config)

    def test_analyze_is_idempotent(self, kimi_config):
        text = "Ünïcödé ẞtraße 123 テスト"
        assert analyze(text, kimi_config) == analyze(text, kimi_config)

    def test_methods_delegate(self, default_config):
        assert default_config.estimate("Hello") == estimate("Hello", default_config)
        assert default_config.analyze("Hello") == BasicStats(letters=5)
        assert default_config.score(BasicStats(letters=5)) == 1


class TestScore:
    def test_negative_clamped_to_zero(self):
        config = EstimatorConfig(
            name="negative",
            description="",
            taxonomy=BASIC,
            intercept=-5.0,
            weights=dict(ZERO_BASIC_WEIGHTS, letters=1.0),
        )
        assert weighted_sum(BasicStats(letters=2), config) == -3.0
        assert score(BasicStats(letters=2), config) == 0

    def test_rounds_half_up(self):
        config = EstimatorConfig("half", "", BASIC, ZERO_BASIC_WEIGHTS, intercept=2.5)
        assert score(BasicStats(), config) == 3

    def test_rounds_down_below_half(self):
        config = EstimatorConfig("low", "", BASIC, ZERO_BASIC_WEIGHTS, intercept=0.49)
        assert score(BasicStats(), config) == 0

    def test_external_stats(self, default_config):
        assert score(BasicStats(symbols=6, spaces=1), default_config) == 3

    def test_wrong_stats_shape(self, default_config):
        with pytest.raises(TypeError, match="BasicStats"):
            score(ScriptStats(), default_config)


class TestEstimatorConfig:
    def test_default_has_no_sampling(self, default_config, kimi_config):
        assert not default_config.enable_sampling
        assert not kimi_config.enable_sampling

    def test_rejects_mismatched_weights(self):
        with pytest.raises(ValueError, match="missing"):
            EstimatorConfig("bad", "", BASIC, {"letters": 1.0})

    def test_frozen(self, default_config):
        with pytest.raises(FrozenInstanceError):
            default_config.intercept = 1.0
        with pytest.raises(TypeError):
            default_config.weights["letters"] = 9.0

    def test_weights_copied_from_input(self):
        weights = dict(ZERO_BASIC_WEIGHTS)
        config = EstimatorConfig("copy", "", BASIC, weights)
        weights["letters"] = 100.0
        assert config.weights["letters"] == 0.0

    def test_clone(self, kimi_config):
        cloned = kimi_config.clone()
        assert cloned is not kimi_config
        assert cloned == kimi_config
        assert cloned.estimate("Hello world") == kimi_config.estimate("Hello world")

    def test_hashable_value(self, default_config, kimi_config):
        assert hash(default_config.clone()) == hash(default_config)
        presets = {default_config, kimi_config, kimi_config.clone()}
        assert len(presets) == 2
        assert kimi_config.with_sampling(100, 10) not in presets

    def test_clone_with_override(self, kimi_config):
        renamed = kimi_config.clone(name="kimi-copy")
        assert renamed.name == "kimi-copy"
        assert kimi_config.name == "kimi-k2"
        assert renamed.weights == kimi_config.weights

    def test_with_sampling(self, kimi_config):
        sampled = kimi_config.with_sampling(10000, 1000)
        assert sampled is not kimi_config
        assert sampled.enable_sampling
        assert sampled.sampling_threshold == 10000
        assert sampled.sampling_size == 1000
        assert not kimi_config.enable_sampling

    def test_builtin_constants(self):
        assert DEFAULT_ESTIMATOR.weights["other"] == 1.830
        assert KIMI_K2_ESTIMATOR.weights["latin_extended"] == 5.87908499852652
        assert est.BUILTIN_PRESETS == (DEFAULT_ESTIMATOR, KIMI_K2_ESTIMATOR)


class TestSamplingMode:
    def test_short_text_uses_full_analysis(self, default_config):
        config = default_config.with_sampling(10000, 1000)
        assert analyze("Hello world! 你好世界 123", config) == BasicStats(
            letters=10, symbols=1, spaces=3, cjk=4, digits=3
        )

    def test_long_text_triggers_sampling(self, default_config, monkeypatch):
        calls = []
        original = est.sample_stats

        def spy(text, taxonomy, size):
            calls.append(size)
            return original(text, taxonomy, size)

        monkeypatch.setattr(est, "sample_stats", spy)
        stats = analyze("ab" * 100, default_config.with_sampling(100, 10))
        assert calls == [10]
        assert 180 <= stats.total <= 220

    def test_sampling_accuracy_on_mixed_text(self, default_config, mixed_long_text):
        sampled = estimate(mixed_long_text, default_config.with_sampling(1000, 100))
        full = estimate(mixed_long_text, default_config)
        assert abs(sampled - full) / full <= 0.20

    def test_sample_size_at_least_length_matches_full(self, kimi_config):
        text = "Ça fait 42 ans, naïve façade, 東京 & Москва. " * 4
        sampled = kimi_config.with_sampling(10, len(text))
        assert analyze(text, sampled) == analyze(text, kimi_config)
