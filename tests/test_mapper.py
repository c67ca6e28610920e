"""Tests for the volume-to-parameter mapping."""

import math

import pytest

from beadwheels.audio.mapper import AnimationParameters, AudioParameterMapper, coerce_sample


@pytest.fixture
def mapper():
    return AudioParameterMapper()


class TestCoerceSample:
    @pytest.mark.parametrize("bad", [None, float("nan"), float("inf"), -math.inf, "loud", object()])
    def test_bad_samples_become_silence(self, bad):
        assert coerce_sample(bad) == 0.0

    def test_numeric_passthrough(self):
        assert coerce_sample(0.2) == 0.2
        assert coerce_sample(1) == 1.0


class TestNormalizeLevel:
    def test_half_ceiling(self, mapper):
        assert mapper.normalize_level(0.125) == pytest.approx(0.5)

    def test_clamped(self, mapper):
        assert mapper.normalize_level(0.0) == 0.0
        assert mapper.normalize_level(0.25) == pytest.approx(1.0)
        assert mapper.normalize_level(3.0) == 1.0
        assert mapper.normalize_level(-0.5) == 0.0

    def test_custom_ceiling(self):
        assert AudioParameterMapper(level_ceiling=0.5).normalize_level(0.25) == pytest.approx(0.5)


class TestUpdate:
    def test_half_level_from_rest(self, mapper):
        params = mapper.update(AnimationParameters(), 0.125)
        assert params.normalized_level == pytest.approx(0.5)
        assert params.bead_scale_factor == pytest.approx(1.8)
        assert params.background_scale_factor == pytest.approx(1.6)
        assert params.rotation_angle == pytest.approx(0.135)
        assert params.raw_level == 0.125

    @pytest.mark.parametrize("bad", [float("nan"), None])
    def test_bad_sample_is_silence(self, mapper, bad):
        params = mapper.update(AnimationParameters(), bad)
        assert params.normalized_level == 0.0
        assert params.bead_scale_factor == 1.0
        assert params.background_scale_factor == 1.0
        assert params.rotation_angle == pytest.approx(0.01)

    def test_scales_are_memoryless(self, mapper):
        a = mapper.update(AnimationParameters(), 0.1)
        b = AnimationParameters(rotation_angle=5.0, bead_scale_factor=2.4, background_scale_factor=2.0)
        mapper.update(b, 0.1)
        assert b.bead_scale_factor == a.bead_scale_factor
        assert b.background_scale_factor == a.background_scale_factor
        assert b.normalized_level == a.normalized_level

    def test_rotation_accumulates_without_wrapping(self, mapper):
        params = AnimationParameters()
        for _ in range(100):
            mapper.update(params, 1.0)
        # 100 frames at full level: 100 * (0.01 + 0.25)
        assert params.rotation_angle == pytest.approx(26.0)
        assert params.rotation_angle > 2 * math.pi

    def test_scale_bounds(self, mapper):
        for sample in [0.0, 0.05, 0.2, 0.25, 7.0]:
            params = mapper.update(AnimationParameters(), sample)
            assert 1.0 <= params.bead_scale_factor <= 2.6
            assert 1.0 <= params.background_scale_factor <= 2.2

    def test_returns_same_object(self, mapper):
        params = AnimationParameters()
        assert mapper.update(params, 0.1) is params


class TestAnimationParameters:
    def test_reset(self):
        params = AnimationParameters(rotation_angle=3.2, bead_scale_factor=2.0,
                                     background_scale_factor=1.5, raw_level=0.2,
                                     normalized_level=0.8)
        assert not params.is_at_rest()
        params.reset()
        assert params.is_at_rest()
        assert params.raw_level == 0.0
        assert params.normalized_level == 0.0

    def test_default_is_at_rest(self):
        assert AnimationParameters().is_at_rest()
