import io

from PIL import Image


def decode_gif(data):
    """Open GIF bytes with Pillow and return (image, per-frame durations)."""
    img = Image.open(io.BytesIO(data))
    durations = []
    for i in range(img.n_frames):
        img.seek(i)
        durations.append(img.info.get("duration"))
    img.seek(0)
    return img, durations
