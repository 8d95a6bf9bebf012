# -*- coding: utf-8 -*-
"""
Tests for the delay-and-sum beamformer.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import numpy as np
import pytest

from uwbrl.exceptions import (
    DimensionMismatchError,
    InputDomainError,
    InputShapeError,
)
from uwbrl.imaging import (
    DelayAndSumBeamformer,
    DelayMap,
    MapIndex,
    delay_and_sum,
    lerp,
    project_sample,
)

BACKENDS = ['numba', 'numpy']


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture
def time_support():
    """200 samples from 1 ns in 0.1 ns steps."""
    return 1e-9 + 0.1e-9 * np.arange(200)


@pytest.fixture
def random_case(time_support):
    """Random multistatic frame and map with out-of-support delays."""
    rng = np.random.RandomState(11)
    n = time_support.size
    baseband = rng.randn(n, 2, 3) + 1j * rng.randn(n, 2, 3)
    delay = rng.uniform(0.0, 23e-9, size=(4, 3, 5, 2, 3))
    phase_factor = delay * np.exp(1j * 2 * np.pi * 4e9 * delay)
    return baseband, delay, phase_factor


def _pinned_map(time_support, indices, pf_value):
    """Delays pinned to exact time samples, constant phase factor."""
    delay = time_support[np.asarray(indices)]
    return delay, np.full(delay.shape, pf_value, dtype=complex)


# ── Helpers ─────────────────────────────────────────────────────────────


class TestHelpers:
    """lerp and project_sample primitives."""

    def test_lerp_endpoints_exact(self):
        c0, c1 = 0.1 + 0.7j, -3.3 + 2.2j
        assert lerp(c0, c1, 0.0) == c0
        assert lerp(c0, c1, 1.0) == c1

    def test_lerp_midpoint(self):
        assert lerp(2.0, 4.0, 0.25) == pytest.approx(2.5)

    def test_project_sample(self):
        s = np.array([1.0 + 2.0j])
        pf = np.array([3.0 - 4.0j])
        assert project_sample(s, pf)[0] == pytest.approx(
            (s * np.conj(pf)).real[0],
        )
        assert project_sample(s, pf)[0] == pytest.approx(-5.0)


# ── Invariance and exactness ────────────────────────────────────────────


@pytest.mark.parametrize('backend', BACKENDS)
class TestMultistaticProperties:
    """Properties of the multistatic accumulation for both backends."""

    def test_zero_signal(self, backend, time_support, random_case):
        _, delay, pf = random_case
        baseband = np.zeros((time_support.size, 2, 3), dtype=complex)
        out = delay_and_sum(baseband, time_support, delay, pf,
                            backend=backend)
        assert out.shape == (4, 3, 5)
        assert out.dtype == np.float64
        assert np.all(out == 0.0)

    def test_exact_sample(self, backend, time_support):
        rng = np.random.RandomState(5)
        baseband = (rng.randn(time_support.size, 1, 1)
                    + 1j * rng.randn(time_support.size, 1, 1))
        idx = np.array([0, 1, 57, 120, 198, 199]).reshape(6, 1, 1, 1, 1)
        delay, pf_re = _pinned_map(time_support, idx, 1.0)
        _, pf_im = _pinned_map(time_support, idx, 1.0j)

        real = delay_and_sum(baseband, time_support, delay, pf_re,
                             backend=backend)
        imag = delay_and_sum(baseband, time_support, delay, pf_im,
                             backend=backend)
        expected = baseband[idx.ravel(), 0, 0]
        np.testing.assert_array_equal(real.ravel(), expected.real)
        np.testing.assert_array_equal(imag.ravel(), expected.imag)

    def test_clamp_after_last_sample(self, backend, time_support):
        baseband = np.zeros((time_support.size, 1, 1), dtype=complex)
        baseband[-1, 0, 0] = 2.0 - 3.0j
        baseband[-2, 0, 0] = 100.0
        delay = np.array([time_support[-1] + 5e-9, 1.0]).reshape(2, 1, 1, 1, 1)
        pf = np.full(delay.shape, 1.0 + 1.0j)
        out = delay_and_sum(baseband, time_support, delay, pf,
                            backend=backend)
        np.testing.assert_array_equal(out.ravel(), [-1.0, -1.0])

    def test_before_first_sample_uses_first(self, backend, time_support):
        baseband = np.zeros((time_support.size, 1, 1), dtype=complex)
        baseband[0, 0, 0] = 0.5 + 0.25j
        baseband[1, 0, 0] = 100.0
        delay = np.array([0.0, 0.5e-9]).reshape(2, 1, 1, 1, 1)
        pf = np.full(delay.shape, 1.0 + 0.0j)
        out = delay_and_sum(baseband, time_support, delay, pf,
                            backend=backend)
        np.testing.assert_array_equal(out.ravel(), [0.5, 0.5])

    def test_linear_between_samples(self, backend, time_support):
        baseband = np.zeros((time_support.size, 1, 1), dtype=complex)
        baseband[10, 0, 0] = 1.0 + 2.0j
        baseband[11, 0, 0] = 3.0 - 2.0j
        tau = time_support[10] + 0.25 * (time_support[11] - time_support[10])
        delay = np.full((1, 1, 1, 1, 1), tau)
        re = delay_and_sum(baseband, time_support, delay,
                           np.full(delay.shape, 1.0 + 0j), backend=backend)
        im = delay_and_sum(baseband, time_support, delay,
                           np.full(delay.shape, 1.0j), backend=backend)
        assert re.item() == pytest.approx(1.5)
        assert im.item() == pytest.approx(1.0)

    def test_pairs_summed(self, backend, time_support):
        baseband = np.zeros((time_support.size, 2, 3), dtype=complex)
        baseband[3] = np.arange(6).reshape(2, 3)
        delay = np.full((1, 1, 1, 2, 3), time_support[3])
        pf = np.ones(delay.shape, dtype=complex)
        out = delay_and_sum(baseband, time_support, delay, pf,
                            backend=backend)
        assert out.item() == 15.0

    def test_determinism(self, backend, time_support, random_case):
        baseband, delay, pf = random_case
        a = delay_and_sum(baseband, time_support, delay, pf, backend=backend)
        b = delay_and_sum(baseband, time_support, delay, pf, backend=backend)
        np.testing.assert_array_equal(a, b)

    def test_inputs_not_mutated(self, backend, time_support, random_case):
        baseband, delay, pf = random_case
        copies = [baseband.copy(), delay.copy(), pf.copy()]
        delay_and_sum(baseband, time_support, delay, pf, backend=backend)
        for original, copy in zip((baseband, delay, pf), copies):
            np.testing.assert_array_equal(original, copy)


# ── Backend and layout agreement ────────────────────────────────────────


class TestAgreement:
    """Backends and channel layouts produce the same image."""

    def test_backends_agree(self, time_support, random_case):
        baseband, delay, pf = random_case
        a = delay_and_sum(baseband, time_support, delay, pf, backend='numba')
        b = delay_and_sum(baseband, time_support, delay, pf, backend='numpy')
        np.testing.assert_allclose(a, b, rtol=1e-10, atol=1e-22)

    def test_chunking_does_not_change_result(self, time_support, random_case):
        baseband, delay, pf = random_case
        a = delay_and_sum(baseband, time_support, delay, pf,
                          backend='numpy', chunk_size=7)
        b = delay_and_sum(baseband, time_support, delay, pf,
                          backend='numpy', chunk_size=10000)
        np.testing.assert_array_equal(a, b)

    def test_matches_reference_loop(self, time_support, random_case):
        baseband, delay, pf = random_case
        out = delay_and_sum(baseband, time_support, delay, pf,
                            backend='numpy')
        ref = np.zeros(delay.shape[:3])
        n = time_support.size
        for v in np.ndindex(*delay.shape[:3]):
            for t in range(2):
                for r in range(3):
                    tau = delay[v + (t, r)]
                    if tau < time_support[0]:
                        s = baseband[0, t, r]
                    elif tau > time_support[-1]:
                        s = baseband[n - 1, t, r]
                    else:
                        i = min(np.searchsorted(time_support, tau,
                                                side='right') - 1, n - 2)
                        w = ((tau - time_support[i])
                             / (time_support[i + 1] - time_support[i]))
                        s = ((1 - w) * baseband[i, t, r]
                             + w * baseband[i + 1, t, r])
                    ref[v] += (s * np.conj(pf[v + (t, r)])).real
        np.testing.assert_allclose(out, ref, rtol=1e-9, atol=1e-22)

    @pytest.mark.parametrize('backend', BACKENDS)
    def test_flat_layout_follows_map_index(self, backend, time_support):
        # Pair (tx, rx) carries the value 10 * tx + rx + 1 at sample 0
        baseband = np.zeros((time_support.size, 2, 3), dtype=complex)
        for tx in range(2):
            for rx in range(3):
                baseband[0, tx, rx] = 10 * tx + rx + 1
        pf = np.zeros((2, 3, 4, 2, 3), dtype=complex)
        index = MapIndex(ix=1, iy=2, iz=3, tx=1, rx=0)
        pf[index] = 1.0
        dmap = DelayMap(delay=np.zeros(pf.shape), phase_factor=pf)

        image = delay_and_sum(baseband, time_support, dmap.delay,
                              dmap.phase_factor, backend=backend)

        assert dmap.at(index) == (0.0, 1.0 + 0.0j)
        assert image[index.ix, index.iy, index.iz] == 11.0
        image[index.ix, index.iy, index.iz] = 0.0
        assert np.all(image == 0.0)

    @pytest.mark.parametrize('backend', BACKENDS)
    def test_single_channel_matches_one_pair(self, backend, time_support,
                                             random_case):
        baseband, delay, pf = random_case
        one = baseband[:, :1, :1]
        d5, p5 = delay[..., :1, :1], pf[..., :1, :1]
        multi = delay_and_sum(one, time_support, d5, p5, backend=backend)
        single = delay_and_sum(one[:, 0, 0], time_support,
                               d5[..., 0, 0], p5[..., 0, 0], backend=backend)
        np.testing.assert_allclose(single, multi, rtol=1e-12, atol=1e-22)


# ── Single-channel mode ─────────────────────────────────────────────────


class TestSingleChannel:
    """1-D baseband with a 3-D map."""

    def test_exact_sample(self, time_support):
        rng = np.random.RandomState(9)
        baseband = rng.randn(time_support.size) + 1j * rng.randn(time_support.size)
        idx = np.array([0, 42, 199]).reshape(3, 1, 1)
        delay, pf = _pinned_map(time_support, idx, 1.0)
        out = delay_and_sum(baseband, time_support, delay, pf)
        np.testing.assert_array_equal(out.ravel(), baseband[idx.ravel()].real)

    def test_clamps_both_ends(self, time_support):
        baseband = np.zeros(time_support.size, dtype=complex)
        baseband[0] = 1.0
        baseband[-1] = 2.0j
        delay = np.array([0.0, 1.0]).reshape(2, 1, 1)
        pf = np.array([1.0, 1.0j]).reshape(2, 1, 1)
        out = delay_and_sum(baseband, time_support, delay, pf)
        np.testing.assert_array_equal(out.ravel(), [1.0, 2.0])

    def test_zero_signal(self, time_support):
        delay = np.full((3, 3, 3), 5e-9)
        out = delay_and_sum(np.zeros(time_support.size), time_support,
                            delay, delay.astype(complex))
        assert np.all(out == 0.0)


# ── Validation ──────────────────────────────────────────────────────────


class TestValidation:
    """Every contract violation is raised before computation."""

    def test_rank3_map_with_multistatic_baseband(self, time_support):
        baseband = np.zeros((time_support.size, 2, 3), dtype=complex)
        delay = np.zeros((4, 4, 4))
        with pytest.raises(DimensionMismatchError):
            delay_and_sum(baseband, time_support, delay,
                          delay.astype(complex))

    def test_rank5_map_with_single_channel_baseband(self, time_support):
        delay = np.zeros((2, 2, 2, 1, 1))
        with pytest.raises(DimensionMismatchError):
            delay_and_sum(np.zeros(time_support.size), time_support,
                          delay, delay.astype(complex))

    def test_tx_rx_extent_mismatch(self, time_support):
        baseband = np.zeros((time_support.size, 2, 3), dtype=complex)
        delay = np.zeros((2, 2, 2, 3, 2))
        with pytest.raises(DimensionMismatchError, match="tx/rx"):
            delay_and_sum(baseband, time_support, delay,
                          delay.astype(complex))

    def test_phase_factor_shape_mismatch(self, time_support, random_case):
        baseband, delay, pf = random_case
        with pytest.raises(DimensionMismatchError, match="phase factor"):
            delay_and_sum(baseband, time_support, delay, pf[:-1])

    def test_time_support_length(self, time_support, random_case):
        baseband, delay, pf = random_case
        with pytest.raises(InputShapeError, match="time_support"):
            delay_and_sum(baseband, time_support[:-1], delay, pf)

    def test_time_support_not_ascending(self, time_support, random_case):
        baseband, delay, pf = random_case
        with pytest.raises(InputDomainError, match="ascending"):
            delay_and_sum(baseband, time_support[::-1], delay, pf)

    def test_baseband_rank(self, time_support):
        delay = np.zeros((2, 2, 2))
        with pytest.raises(InputShapeError, match="baseband"):
            delay_and_sum(np.zeros((time_support.size, 2)), time_support,
                          delay, delay.astype(complex))

    def test_negative_delay(self, time_support, random_case):
        baseband, delay, pf = random_case
        bad = delay.copy()
        bad[0, 0, 0, 0, 0] = -1e-9
        with pytest.raises(InputDomainError, match="negative"):
            delay_and_sum(baseband, time_support, bad, pf)

    def test_non_finite_delay(self, time_support, random_case):
        baseband, delay, pf = random_case
        bad = delay.copy()
        bad[1, 1, 1, 1, 1] = np.nan
        with pytest.raises(InputDomainError, match="finite"):
            delay_and_sum(baseband, time_support, bad, pf)

    def test_complex_delay(self, time_support, random_case):
        baseband, delay, pf = random_case
        with pytest.raises(InputDomainError, match="real"):
            delay_and_sum(baseband, time_support, delay.astype(complex), pf)

    def test_unknown_backend(self, time_support, random_case):
        baseband, delay, pf = random_case
        with pytest.raises(InputDomainError, match="backend"):
            delay_and_sum(baseband, time_support, delay, pf, backend='gpu')

    @pytest.mark.parametrize('chunk_size', [0, -4, 'abc', 2.5, None, True])
    def test_bad_chunk_size(self, time_support, random_case, chunk_size):
        baseband, delay, pf = random_case
        with pytest.raises(InputDomainError, match="chunk_size"):
            delay_and_sum(baseband, time_support, delay, pf,
                          chunk_size=chunk_size)

    def test_numpy_integer_chunk_size(self, time_support, random_case):
        baseband, delay, pf = random_case
        a = delay_and_sum(baseband, time_support, delay, pf,
                          backend='numpy', chunk_size=np.int64(5))
        b = delay_and_sum(baseband, time_support, delay, pf,
                          backend='numpy')
        np.testing.assert_allclose(a, b, rtol=1e-12, atol=1e-20)


# ── Processor ───────────────────────────────────────────────────────────


class TestDelayAndSumBeamformer:
    """Processor wrapper around delay_and_sum."""

    @pytest.fixture
    def dmap(self, random_case):
        _, delay, pf = random_case
        return DelayMap(delay=delay, phase_factor=pf, frequency=4e9)

    def test_form_image_matches_function(self, time_support, random_case,
                                         dmap):
        baseband, delay, pf = random_case
        image = DelayAndSumBeamformer(backend='numpy').form_image(
            baseband, time_support, dmap,
        )
        ref = delay_and_sum(baseband, time_support, delay, pf,
                            backend='numpy')
        np.testing.assert_array_equal(image, ref)

    def test_runtime_backend_override(self, time_support, random_case, dmap):
        baseband, _, _ = random_case
        bf = DelayAndSumBeamformer()
        a = bf.form_image(baseband, time_support, dmap, backend='numpy')
        b = bf.form_image(baseband, time_support, dmap)
        np.testing.assert_allclose(a, b, rtol=1e-10, atol=1e-22)

    def test_map_reused_across_frames(self, time_support, random_case, dmap):
        baseband, _, _ = random_case
        bf = DelayAndSumBeamformer(backend='numpy')
        first = bf.form_image(baseband, time_support, dmap)
        second = bf.form_image(2.0 * baseband, time_support, dmap)
        np.testing.assert_allclose(second, 2.0 * first, rtol=1e-12)

    def test_progress_callback(self, time_support, random_case, dmap):
        baseband, _, _ = random_case
        seen = []
        DelayAndSumBeamformer(backend='numpy', chunk_size=16).form_image(
            baseband, time_support, dmap, progress_callback=seen.append,
        )
        assert len(seen) == 4
        assert seen == sorted(seen)
        assert seen[-1] == 1.0

    def test_requires_delay_map(self, time_support, random_case):
        baseband, delay, _ = random_case
        with pytest.raises(TypeError, match="DelayMap"):
            DelayAndSumBeamformer().form_image(baseband, time_support, delay)

    def test_invalid_backend_param(self):
        with pytest.raises(InputDomainError, match="not in allowed choices"):
            DelayAndSumBeamformer(backend='gpu')

    def test_version_declared(self):
        assert DelayAndSumBeamformer.__processor_version__ == '1.0.0'
