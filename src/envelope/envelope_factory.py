from __future__ import annotations

from typing import Callable

from src.envelope.params import EnvelopeParams, validate
from src.envelope.tension_adsr import TensionADSR


PRESETS: dict[str, EnvelopeParams] = {
    "pluck": EnvelopeParams(
        attack_ms=2.0,
        decay_ms=250.0,
        sustain_db=-40.0,
        release_ms=120.0,
        tension_attack=0.0,
        tension_decay=-0.8,
        tension_release=-0.6,
    ),
    "pad": EnvelopeParams(
        attack_ms=600.0,
        decay_ms=800.0,
        sustain_db=-4.0,
        release_ms=1500.0,
        tension_attack=0.4,
        tension_decay=-0.2,
        tension_release=-0.3,
    ),
    "organ": EnvelopeParams(
        attack_ms=5.0,
        decay_ms=1.0,
        sustain_db=0.0,
        release_ms=15.0,
    ),
    "swell": EnvelopeParams(
        attack_ms=1200.0,
        decay_ms=300.0,
        sustain_db=-2.0,
        release_ms=400.0,
        tension_attack=0.9,
        tension_decay=0.0,
        tension_release=0.5,
    ),
}


def get_preset(name: str) -> EnvelopeParams:
    params = PRESETS.get(name)
    if params is None:
        raise ValueError(f"Unsupported envelope preset: {name}")
    return params


def build_envelope_factory(
    sample_rate: int,
    params: EnvelopeParams | str = EnvelopeParams(),
) -> Callable[[], TensionADSR]:
    """Validate once, then hand out one configured engine per voice."""
    if isinstance(params, str):
        params = get_preset(params)
    validate(params, sample_rate)

    def create_new_adsr() -> TensionADSR:
        return TensionADSR(sample_rate, params)

    return create_new_adsr
