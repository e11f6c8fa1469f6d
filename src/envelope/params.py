from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from math import isfinite
from typing import Any, Mapping, Tuple
import warnings


@dataclass(frozen=True, slots=True)
class EnvelopeParams:
    """User-facing envelope settings.

    Times are in milliseconds, sustain in decibels (<= 0), tensions in
    [-1, 1] where 0 is (near) linear, positive is slow-start and negative is
    fast-start.
    """

    attack_ms: float = 10.0
    decay_ms: float = 100.0
    sustain_db: float = -6.0
    release_ms: float = 200.0
    tension_attack: float = 0.0
    tension_decay: float = 0.0
    tension_release: float = 0.0

    def as_configure_args(self) -> Tuple[float, ...]:
        return (
            self.attack_ms,
            self.decay_ms,
            self.sustain_db,
            self.release_ms,
            self.tension_attack,
            self.tension_decay,
            self.tension_release,
        )

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "EnvelopeParams":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ValueError(f"Unknown envelope parameter(s): {', '.join(unknown)}")
        return cls(**{name: float(value) for name, value in mapping.items()})


def validate(params: EnvelopeParams, sample_rate: float) -> EnvelopeParams:
    """Check params at the ingestion boundary; the engine itself never does.

    Raises ValueError for anything the engine treats as undefined input and
    warns when a value will be silently clamped.
    """
    if not isfinite(sample_rate) or sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")

    for name, value in params.to_dict().items():
        if not isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")

    for name in ("attack_ms", "decay_ms", "release_ms"):
        value = getattr(params, name)
        if value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}")

    for name in ("tension_attack", "tension_decay", "tension_release"):
        value = getattr(params, name)
        if not -1.0 <= value <= 1.0:
            raise ValueError(f"{name} must be within [-1, 1], got {value}")

    if params.sustain_db > 0:
        warnings.warn(
            f"sustain_db={params.sustain_db} is above 0 dB and will be clamped to 0 dB.",
            RuntimeWarning,
        )

    return params


def validate_scale(scale: float) -> float:
    if not isfinite(scale) or scale <= 0:
        raise ValueError(f"scale must be a positive finite number, got {scale}")
    return scale
