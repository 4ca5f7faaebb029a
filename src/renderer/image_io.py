# renderer/image_io.py
from typing import TextIO
import numpy as np
from PIL import Image

def save_png(image: np.ndarray, path: str) -> None:
    """Write a (height, width, 3) uint8 image to a PNG file."""
    Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(path)

def write_ppm(image: np.ndarray, stream: TextIO) -> None:
    """
    Write the image as plain-text PPM (P3): a header with the size and the
    maximum channel value, then one "r g b" line per pixel, top row first.
    """
    height, width, _ = image.shape
    stream.write("P3\n")
    stream.write(f"{width} {height}\n")
    stream.write("255\n")
    for row in image:
        for r, g, b in row:
            stream.write(f"{r} {g} {b}\n")
