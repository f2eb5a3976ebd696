"""
Lissajous curve rendering.

Each animation draws one random relative frequency for the y oscillator and
rotates the phase a little on every frame. Frames are numpy arrays of
palette indices, so encoding is left to :mod:`lissajous.gif`.
"""

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from .gif import EncodeError, encode_animation

log = logging.getLogger(__name__)

# Background first
PALETTE = ((0, 0, 0), (0, 255, 0), (255, 0, 0))
BLACK_INDEX = 0
GREEN_INDEX = 1
RED_INDEX = 2

MAX_FREQ = 3.0      # y oscillator frequency drawn from [0, MAX_FREQ)
PHASE_STEP = 0.1    # radians added per frame


@dataclass
class Animation:
    frames: list = field(default_factory=list)
    delays: list = field(default_factory=list)   # 1/100 s per frame
    loop_count: int = 0
    palette: tuple = PALETTE

    def append(self, frame, delay):
        self.frames.append(frame)
        self.delays.append(delay)


def _sweep(cycles, res):
    """Sample points of t in [0, cycles*2pi)."""
    end = cycles * 2 * math.pi
    if not (res > 0) or not math.isfinite(end) or end <= 0:
        return np.empty(0)
    return np.arange(0.0, end, res)


def render_frame(size, cycles, res, freq, phase):
    """One ``(2*size+1)`` square frame of palette indices."""
    side = max(2 * size + 1, 0)
    img = np.full((side, side), BLACK_INDEX, dtype=np.uint8)

    t = _sweep(cycles, res)
    if side == 0 or t.size == 0:
        return img

    x = np.sin(t) * size
    y = np.sin(t * freq + phase) * size

    # green then red for every t; later points overwrite earlier ones
    cols = size + np.trunc(np.stack([x + 0.5, x + 0.7], axis=1).ravel())
    rows = size + np.trunc(np.stack([y + 0.5, y + 0.7], axis=1).ravel())
    colors = np.tile(np.array([GREEN_INDEX, RED_INDEX], dtype=np.uint8), t.size)

    inside = (cols >= 0) & (cols < side) & (rows >= 0) & (rows < side)
    idx = rows[inside].astype(np.intp) * side + cols[inside].astype(np.intp)

    # keep only the last plot per pixel
    pixels, first = np.unique(idx[::-1], return_index=True)
    img.reshape(-1)[pixels] = colors[inside][::-1][first]
    return img


def render_animation(params, rng=None):
    """
    Build every frame of one animation in memory.

    ``rng`` is a ``numpy.random.Generator``. A fresh one is made per call
    when omitted, so concurrent renders never share random state.
    """
    if rng is None:
        rng = np.random.default_rng()

    freq = rng.random() * MAX_FREQ
    # loop count mirrors the frame count, not 0 (forever)
    anim = Animation(loop_count=params.nframes)
    phase = 0.0

    for _ in range(params.nframes):
        img = render_frame(params.size, params.cycles, params.res, freq, phase)
        phase += PHASE_STEP
        anim.append(img, params.delay)

    return anim


def try_lissajous(out, params, rng=None):
    """Render and encode to ``out``; raises :class:`EncodeError` on failure."""
    anim = render_animation(params, rng)
    encode_animation(anim, out)


def lissajous(out, params, rng=None):
    """Render and encode to ``out``, logging encode failures instead of raising."""
    try:
        try_lissajous(out, params, rng)
    except EncodeError as e:
        log.error("Encoding failed: %s", e)
