# renderer/tone_mapping.py
import math
import numpy as np
from numba import njit

@njit
def resolve_samples(accumulated, samples):
    """
    Turn a (rows, cols, 3) buffer of summed sample colors into 8-bit RGB:
    average over the sample count, gamma-correct with a square root and
    scale to [0, 255].
    """
    rows, cols, _ = accumulated.shape
    output = np.zeros((rows, cols, 3), dtype=np.uint8)
    for r in range(rows):
        for c in range(cols):
            for k in range(3):
                value = math.sqrt(accumulated[r, c, k] / samples)
                output[r, c, k] = min(255, max(0, int(255.99 * value)))
    return output