from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Dict
import warnings

import numpy as np
import soundfile as sf
from tqdm import tqdm

from src.envelope.envelope_types import ADSR, ADSRStage


_SUBTYPES = {16: "PCM_16", 24: "PCM_24", "float": "FLOAT"}


@dataclass(slots=False)
class RenderedEnvelope:
    """
    An envelope rendered offline, one entry per sample.

    values: envelope output after each tick
    stages: ADSRStage value (0/1/2/4/8) after each tick
    """

    values: np.ndarray
    stages: np.ndarray
    sample_rate: int

    @property
    def duration_s(self) -> float:
        return len(self.values) / self.sample_rate

    def stage_onsets(self) -> Dict[ADSRStage, int]:
        onsets: Dict[ADSRStage, int] = {}
        for stage in ADSRStage:
            hits = np.flatnonzero(self.stages == stage.value)
            if hits.size:
                onsets[stage] = int(hits[0])
        return onsets

    def export(self, path, bit_depth=24):
        """
        Write the curve as a mono WAV (useful to inspect shapes in an editor).
        bit_depth: 16, 24 or "float"
        """
        subtype = _SUBTYPES.get(bit_depth)
        if subtype is None:
            raise ValueError(f"Unsupported bit depth: {bit_depth}")
        data = np.clip(self.values, -1.0, 1.0)
        sf.write(path, data, self.sample_rate, format="WAV", subtype=subtype)
        print(f"[render] Wrote {path} ({len(data)} samples).")


def render_cycle(
    adsr: ADSR,
    scale: float,
    gate_samples: int,
    *,
    max_tail_samples: int,
    block_size: int = 512,
    show_progress: bool = False,
) -> RenderedEnvelope:
    """
    Render one note: attack on sample 0, release after `gate_samples` ticks,
    then keep ticking until the envelope is idle or `max_tail_samples` pass.
    The sample rate of the result is the engine's own.
    """
    if gate_samples < 0 or max_tail_samples < 0:
        raise ValueError("gate_samples and max_tail_samples must be >= 0")
    if block_size <= 0:
        raise ValueError("block_size must be positive")

    sample_rate = adsr.sample_rate

    total = gate_samples + max_tail_samples
    values = np.zeros(total, dtype=np.float32)
    stages = np.zeros(total, dtype=np.uint8)

    progress = tqdm(
        total=max(1, math.ceil(total / block_size)),
        desc="Rendering envelope",
        unit="block",
        disable=not show_progress,
    )

    adsr.trigger_attack(scale)
    n = 0
    try:
        while n < total:
            end = min(n + block_size, total)
            for i in range(n, end):
                if i == gate_samples:
                    adsr.trigger_release()
                stage = adsr.tick()
                values[i] = adsr.value
                stages[i] = stage.value
                if i >= gate_samples and stage is ADSRStage.IDLE:
                    end = i + 1
                    break
            n = end
            progress.update(1)
            if n > gate_samples and adsr.get_stage() is ADSRStage.IDLE:
                break
    finally:
        if progress.n < progress.total:
            progress.update(progress.total - progress.n)
        progress.close()

    if adsr.get_stage() is not ADSRStage.IDLE:
        warnings.warn(
            "render_cycle stopped after max_tail_samples before the envelope "
            "reached IDLE; the tail is truncated.",
            RuntimeWarning,
        )

    print(f"[render] Rendered {n} samples ({n / sample_rate:.3f} s).")
    return RenderedEnvelope(values[:n].copy(), stages[:n].copy(), sample_rate)
