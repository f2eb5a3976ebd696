"""Random Lissajous figures, rendered as animated GIFs."""

from .gif import EncodeError, encode_animation
from .params import RenderParams, get_float_param, get_int_param
from .render import PALETTE, Animation, lissajous, render_animation, render_frame, try_lissajous

__version__ = "0.1.0"

__all__ = [
    "Animation",
    "EncodeError",
    "PALETTE",
    "RenderParams",
    "encode_animation",
    "get_float_param",
    "get_int_param",
    "lissajous",
    "render_animation",
    "render_frame",
    "try_lissajous",
]
