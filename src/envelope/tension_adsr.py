from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from typing import Callable, List, Optional, Tuple
from src.envelope.coefficients import (
    NEUTRAL_TENSION,
    db_to_gain,
    ms_to_samples,
    normalize_tension,
    solve_coefficients,
)
from src.envelope.envelope_types import ADSRStage, Envelope
from src.envelope.params import EnvelopeParams




@dataclass(slots=False)
class TensionADSR:
    """
    Per-voice ADSR whose attack, decay and release curves each have their own
    tension (curve shape) in [-1, 1].

    Driven one sample at a time: trigger_attack on note-on, trigger_release on
    note-off, tick once per output sample and read `value`.

    Preconditions (not checked here, see src.envelope.params.validate):
        sample_rate > 0, scale > 0, tensions within [-1, 1].
    """

    sample_rate: int
    params: InitVar[Optional[EnvelopeParams]] = None

    enter_idle_handlers: List[Callable[[], None]] = field(default_factory=list)

    stage: ADSRStage = ADSRStage.IDLE
    value: float = 0.0
    scale: float = 0.0

    # durations in samples, always >= 1 once configured
    attack_samples: float = 1.0
    decay_samples: float = 1.0
    release_samples: float = 1.0
    sustain_level: float = 1.0

    tension_attack_norm: float = NEUTRAL_TENSION
    tension_decay_norm: float = NEUTRAL_TENSION
    tension_release_norm: float = NEUTRAL_TENSION

    # one-pole coefficients, value = b + c * value
    attack_b: float = 0.0
    attack_c: float = 1.0
    decay_b: float = 0.0
    decay_c: float = 1.0
    release_b: float = 0.0
    release_c: float = 1.0

    _configure_args: Tuple[float, ...] = field(default=(), repr=False)

    def __post_init__(self, params: Optional[EnvelopeParams]) -> None:
        self.apply_params(params if params is not None else EnvelopeParams())

    def configure(
        self,
        attack_ms: float,
        decay_ms: float,
        sustain_db: float,
        release_ms: float,
        tension_attack: float,
        tension_decay: float,
        tension_release: float,
    ) -> None:
        # Coefficients are left alone: a stage already running keeps its shape,
        # the new settings apply from the next trigger.
        self.attack_samples = ms_to_samples(attack_ms, self.sample_rate)
        self.decay_samples = ms_to_samples(decay_ms, self.sample_rate)
        self.release_samples = ms_to_samples(release_ms, self.sample_rate)
        self.sustain_level = db_to_gain(sustain_db)

        # decay and release run downward, so their tension sign flips
        self.tension_attack_norm = normalize_tension(tension_attack)
        self.tension_decay_norm = normalize_tension(-tension_decay)
        self.tension_release_norm = normalize_tension(-tension_release)

        self._configure_args = (
            attack_ms,
            decay_ms,
            sustain_db,
            release_ms,
            tension_attack,
            tension_decay,
            tension_release,
        )

    def apply_params(self, params: EnvelopeParams) -> None:
        self.configure(*params.as_configure_args())

    def register_enter_idle_handler(self, handler: Callable[[], None]) -> None:
        self.enter_idle_handlers.append(handler)

    def clone(self) -> "TensionADSR":
        copy = TensionADSR(self.sample_rate)
        copy.configure(*self._configure_args)
        return copy

    def reset(self) -> None:
        self.stage = ADSRStage.IDLE
        self.value = 0.0

    def trigger_attack(self, scale: float) -> None:
        """Start (or restart) the attack toward `scale` from the current value."""
        self.scale = scale
        self.attack_b, self.attack_c = solve_coefficients(
            0.0,
            scale,
            scale,
            self.attack_samples,
            self.tension_attack_norm,
            1.0,
        )
        self.decay_b, self.decay_c = solve_coefficients(
            scale,
            self.sustain_level * scale,
            (1 - self.sustain_level) * scale,
            self.decay_samples,
            self.tension_decay_norm,
            -1.0,
        )
        self.stage = ADSRStage.ATTACK

    def trigger_release(self) -> None:
        """Release toward zero from wherever the envelope currently is."""
        baseline = max(self.value, self.sustain_level) * self.scale
        self.release_b, self.release_c = solve_coefficients(
            baseline,
            0.0,
            baseline,
            self.release_samples,
            self.tension_release_norm,
            -1.0,
        )
        self.stage = ADSRStage.RELEASE

    def tick(self) -> ADSRStage:
        stage = self.stage

        if stage is ADSRStage.ATTACK:
            self.value = self.attack_b + self.value * self.attack_c
            if self.value >= self.scale:
                self.value = self.scale
                self.stage = ADSRStage.DECAY

        elif stage is ADSRStage.DECAY:
            self.value = self.decay_b + self.value * self.decay_c
            sustain_value = self.sustain_level * self.scale
            if self.value <= sustain_value:
                self.value = sustain_value
                self.stage = ADSRStage.SUSTAIN

        elif stage is ADSRStage.RELEASE:
            self.value = self.release_b + self.value * self.release_c
            if self.value <= 0.0:
                self.value = 0.0
                self.stage = ADSRStage.IDLE
                for handler in self.enter_idle_handlers:
                    handler()

        # SUSTAIN and IDLE hold the current value

        return self.stage

    def generate(self, num_samples: int) -> Envelope:
        out = [0.0] * num_samples
        for k in range(num_samples):
            self.tick()
            out[k] = self.value
        return tuple(out)

    def get_stage(self) -> ADSRStage:
        return self.stage

    def is_active(self) -> bool:
        return self.stage is not ADSRStage.IDLE
