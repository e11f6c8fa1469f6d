import os

from src.envelope.envelope_factory import PRESETS, build_envelope_factory
from src.envelope.rendering import render_cycle

SAMPLE_RATE = 48_000

OUTPUT_DIR = os.path.join("output_files", "envelope_curves")

os.makedirs(OUTPUT_DIR, exist_ok=True)

for name in PRESETS:
    create_new_adsr = build_envelope_factory(SAMPLE_RATE, name)
    rendered = render_cycle(
        create_new_adsr(),
        1.0,
        gate_samples=SAMPLE_RATE,  # hold for one second
        max_tail_samples=4 * SAMPLE_RATE,
        show_progress=True,
    )
    onsets = {stage.name: index for stage, index in rendered.stage_onsets().items()}
    print(f"{name}: {rendered.duration_s:.3f} s, stage onsets {onsets}")
    rendered.export(os.path.join(OUTPUT_DIR, f"{name}.wav"), bit_depth="float")
