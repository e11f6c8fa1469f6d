import math

from src.envelope.helpers.apply_envelope import apply_envelope
from src.envelope.params import EnvelopeParams
from src.envelope.playback import audition
from src.envelope.tension_adsr import TensionADSR

SAMPLE_RATE = 48_000

# Same note played with attack/decay/release tension swept from
# fast-start (-1) through linear (0) to slow-start (+1)
TENSIONS = (-1.0, -0.5, 0.0, 0.5, 1.0)

frames = []

for tension in TENSIONS:
    adsr = TensionADSR(
        SAMPLE_RATE,
        EnvelopeParams(
            attack_ms=150.0,
            decay_ms=200.0,
            sustain_db=-9.0,
            release_ms=300.0,
            tension_attack=tension,
            tension_decay=tension,
            tension_release=tension,
        ),
    )

    # The caller's own signal path: a plain sine
    dry = []
    for i in range(SAMPLE_RATE):  # 1 second per tension
        t = i / SAMPLE_RATE
        value = 0.5 * math.sin(440 * 2 * math.pi * t)
        dry.append((value, value))

    adsr.trigger_attack(1.0)
    gate = SAMPLE_RATE // 2
    frames.extend(apply_envelope(tuple(dry[:gate]), adsr))
    adsr.trigger_release()  # after 0.5 second
    frames.extend(apply_envelope(tuple(dry[gate:]), adsr))

audition(tuple(frames), SAMPLE_RATE, blocking=True)
