from __future__ import annotations
from typing import Callable, Protocol, Tuple


Envelope = Tuple[float, ...]
StereoFrame = Tuple[float, float]
AudioBuffer = Tuple[StereoFrame, ...]
from enum import Enum


class ADSRStage(Enum):
    # Values match the stage ids voice code branches on, they are not bit flags.
    IDLE = 0
    ATTACK = 1
    DECAY = 2
    SUSTAIN = 4
    RELEASE = 8


class ADSR(Protocol):
    sample_rate: int
    value: float

    def configure(
        self,
        attack_ms: float,
        decay_ms: float,
        sustain_db: float,
        release_ms: float,
        tension_attack: float,
        tension_decay: float,
        tension_release: float,
    ) -> None: ...
    def trigger_attack(self, scale: float) -> None: ...
    def trigger_release(self) -> None: ...
    def tick(self) -> ADSRStage: ...
    def generate(self, num_samples: int) -> Envelope: ...
    def reset(self) -> None: ...
    def register_enter_idle_handler(self, handler: Callable[[], None]) -> None: ...
    def get_stage(self) -> ADSRStage: ...
    def is_active(self) -> bool: ...
    def clone(self) -> "ADSR": ...
