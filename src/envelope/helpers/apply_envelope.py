from __future__ import annotations

from typing import Sequence

import numpy as np

from src.envelope.envelope_types import ADSR, AudioBuffer


def apply_envelope(frames: AudioBuffer, adsr: ADSR) -> AudioBuffer:
    """Multiply a block of stereo frames by the envelope, one tick per frame.

    The envelope is advanced by exactly len(frames) samples.
    """
    if not frames:
        return tuple()

    arr = np.asarray(frames, dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError("frames must be a tuple of (L, R) samples")
    envelope = np.asarray(adsr.generate(arr.shape[0]), dtype=float)

    result = arr * envelope[:, np.newaxis]

    return tuple((float(l), float(r)) for l, r in result.tolist())


def modulate(base: float, depth: float, envelope: Sequence[float]) -> np.ndarray:
    """Per-sample parameter curve base + depth * env (e.g. a filter cutoff)."""
    return base + depth * np.asarray(envelope, dtype=float)
