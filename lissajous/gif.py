"""
Animated GIF encoding.

Pillow's ``save_all`` folds a frame into the previous one when the two are
identical, which would drop frames from slow or empty animations. The stream
is therefore assembled here from Pillow's GIF building blocks: one global
header, then every frame with its own delay, then the trailer.
"""

import logging

from PIL import GifImagePlugin, Image

log = logging.getLogger(__name__)

TRAILER = b";"


class EncodeError(Exception):
    """The animation could not be encoded or written."""


def _palette_bytes(palette):
    return bytes(c for rgb in palette for c in rgb)


def to_image(frame, palette):
    """numpy array of palette indices -> Pillow "P" image."""
    img = Image.fromarray(frame)
    img.putpalette(_palette_bytes(palette))
    return img


def encode_animation(anim, out):
    """
    Write ``anim`` to the binary stream ``out`` as a GIF89a.

    Nothing is written unless the whole stream encodes.
    """
    if not anim.frames:
        raise EncodeError("must provide at least one frame")
    if len(anim.frames) != len(anim.delays):
        raise EncodeError(
            f"mismatched frame and delay counts: {len(anim.frames)} != {len(anim.delays)}")

    if anim.frames[0].size == 0:
        raise EncodeError(f"empty frame: {anim.frames[0].shape}")

    try:
        images = [to_image(frame, anim.palette) for frame in anim.frames]
        info = {"loop": anim.loop_count, "optimize": False}
        header, _ = GifImagePlugin.getheader(images[0], info=info)
        chunks = list(header)
        for img, delay in zip(images, anim.delays):
            # Pillow takes milliseconds and stores hundredths of a second
            chunks.extend(GifImagePlugin.getdata(img, duration=delay * 10, interlace=False))
        chunks.append(TRAILER)
        data = b"".join(chunks)
    except Exception as e:
        raise EncodeError(str(e)) from e

    try:
        out.write(data)
    except (OSError, ValueError) as e:
        raise EncodeError(f"write failed: {e}") from e

    log.debug("Encoded %d frames, %d bytes", len(images), len(data))
    return len(data)
