import numpy as np
import sounddevice as sd


def audition(frames, sample_rate=48000, blocking=False):
    """
    Play stereo frames (e.g. the output of apply_envelope) without writing a file.
    frames: sequence of (L, R) samples, clipped to [-1, 1]
    """
    data = np.asarray(frames, dtype=np.float32)
    if data.ndim != 2 or data.shape[1] != 2:
        raise ValueError("frames must be a tuple of (L, R) samples")
    data = np.clip(data, -1.0, 1.0)
    print(f"[playback] Playing {len(data)} frames at {sample_rate} Hz.")
    sd.play(data, sample_rate, blocking=blocking)


def stop():
    sd.stop()
