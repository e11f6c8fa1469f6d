"""
Tests for offline rendering and WAV export of envelope curves.
"""

import numpy as np
import pytest
import soundfile as sf

from src.envelope.envelope_types import ADSRStage
from src.envelope.rendering import RenderedEnvelope, render_cycle
from src.envelope.tension_adsr import TensionADSR

SAMPLE_RATE = 1000


@pytest.fixture
def adsr():
    # 1 kHz keeps stages short: 20/30/40 samples
    engine = TensionADSR(SAMPLE_RATE)
    engine.configure(20, 30, -6, 40, 0.0, 0.0, 0.0)
    return engine


class TestRenderCycle:
    def test_renders_until_idle(self, adsr):
        rendered = render_cycle(
            adsr, 1.0, 100, max_tail_samples=500
        )
        assert adsr.stage is ADSRStage.IDLE
        assert rendered.stages[-1] == ADSRStage.IDLE.value
        assert rendered.values[-1] == 0.0
        assert 100 + 39 <= len(rendered.values) <= 100 + 41
        assert rendered.values.dtype == np.float32
        assert rendered.stages.dtype == np.uint8

    def test_stage_onsets(self, adsr):
        rendered = render_cycle(
            adsr, 1.0, 100, max_tail_samples=500
        )
        onsets = rendered.stage_onsets()
        assert onsets[ADSRStage.ATTACK] == 0
        assert 18 <= onsets[ADSRStage.DECAY] <= 20
        assert 48 <= onsets[ADSRStage.SUSTAIN] <= 51
        assert onsets[ADSRStage.RELEASE] == 100
        assert onsets[ADSRStage.IDLE] == len(rendered.values) - 1

    def test_peak_and_sustain_values(self, adsr):
        rendered = render_cycle(
            adsr, 0.5, 100, max_tail_samples=500
        )
        assert rendered.values.max() == pytest.approx(0.5)
        assert rendered.values[99] == pytest.approx(0.5 * 10 ** (-6 / 20), rel=1e-6)

    def test_small_blocks_give_same_curve(self, adsr):
        other = adsr.clone()
        a = render_cycle(adsr, 1.0, 60, max_tail_samples=200)
        b = render_cycle(
            other, 1.0, 60, max_tail_samples=200, block_size=7
        )
        np.testing.assert_array_equal(a.values, b.values)
        np.testing.assert_array_equal(a.stages, b.stages)

    def test_release_during_attack(self, adsr):
        rendered = render_cycle(
            adsr, 1.0, 10, max_tail_samples=500
        )
        onsets = rendered.stage_onsets()
        assert ADSRStage.DECAY not in onsets
        assert onsets[ADSRStage.RELEASE] == 10
        assert rendered.values[10] < rendered.values[9]

    def test_truncated_tail_warns(self, adsr):
        with pytest.warns(RuntimeWarning, match="truncated"):
            rendered = render_cycle(
                adsr, 1.0, 100, max_tail_samples=10
            )
        assert len(rendered.values) == 110
        assert adsr.stage is ADSRStage.RELEASE

    def test_uses_engine_sample_rate(self):
        engine = TensionADSR(8000)
        engine.configure(5, 5, -6, 5, 0.0, 0.0, 0.0)
        rendered = render_cycle(engine, 1.0, 80, max_tail_samples=200)
        assert rendered.sample_rate == 8000
        assert rendered.duration_s == pytest.approx(len(rendered.values) / 8000)
        assert ADSRStage.IDLE in rendered.stage_onsets()

    def test_prints_summary(self, adsr, capsys):
        render_cycle(adsr, 1.0, 50, max_tail_samples=100)
        assert "[render] Rendered" in capsys.readouterr().out

    def test_rejects_bad_arguments(self, adsr):
        with pytest.raises(ValueError):
            render_cycle(adsr, 1.0, -1, max_tail_samples=10)
        with pytest.raises(ValueError):
            render_cycle(
                adsr, 1.0, 10, max_tail_samples=10, block_size=0
            )


class TestRenderedEnvelope:
    def test_duration(self):
        rendered = RenderedEnvelope(
            np.zeros(500, dtype=np.float32), np.zeros(500, dtype=np.uint8), 1000
        )
        assert rendered.duration_s == pytest.approx(0.5)

    @pytest.mark.parametrize("bit_depth", [16, 24, "float"])
    def test_export_writes_mono_wav(self, adsr, tmp_path, bit_depth):
        rendered = render_cycle(
            adsr, 1.0, 100, max_tail_samples=500
        )
        path = tmp_path / "curve.wav"
        rendered.export(str(path), bit_depth=bit_depth)

        data, sample_rate = sf.read(str(path))
        assert sample_rate == SAMPLE_RATE
        assert data.shape == rendered.values.shape
        np.testing.assert_allclose(data, rendered.values, atol=1e-3)

    def test_export_rejects_unknown_bit_depth(self, adsr, tmp_path):
        rendered = render_cycle(adsr, 1.0, 10, max_tail_samples=100)
        with pytest.raises(ValueError, match="bit depth"):
            rendered.export(str(tmp_path / "curve.wav"), bit_depth=8)
