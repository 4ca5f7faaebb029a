# renderer/tiles.py
import math
from dataclasses import dataclass
from random import Random
from typing import Iterable, List, Optional, Tuple
import numpy as np
from core.errors import ConfigurationError
from camera.camera import Camera
from geometry.hittable import Hittable
from renderer.integrator import MAX_DEPTH, color
from renderer.tone_mapping import resolve_samples

def compute_tile_grid(tile_count: int, width: int, height: int) -> Tuple[int, int]:
    """
    Split the image into `tile_count` equal tiles laid out as an x-by-y grid.

    y is the factor of tile_count closest (by ratio, in either direction)
    to the row count that would make square tiles; x = tile_count / y.
    Raises ConfigurationError if the grid does not divide the image exactly.
    """
    if tile_count < 1:
        raise ConfigurationError(f"tile count must be positive, got {tile_count}")
    if width < 1 or height < 1:
        raise ConfigurationError(f"image size must be positive, got {width}x{height}")

    aspect = width / height
    y_ideal = max(1, int(math.sqrt(tile_count / aspect) + 0.5))

    best_y = 1
    best_error = math.inf
    for y in range(1, tile_count + 1):
        if tile_count % y != 0:
            continue
        error = y_ideal / y
        if error < 1:
            error = 1 / error
        if error < best_error:
            best_y, best_error = y, error

    x = tile_count // best_y
    if width % x != 0 or height % best_y != 0:
        raise ConfigurationError(
            f"{tile_count} tiles form a {x}x{best_y} grid, which does not "
            f"evenly divide a {width}x{height} image")
    return x, best_y

@dataclass
class Tile:
    """
    A rectangular block of the output image rendered by a single task.
    Offsets are in image pixels with (0, 0) at the top-left corner.
    """
    index: int
    offset_x: int
    offset_y: int
    width: int
    height: int
    pixels: Optional[np.ndarray] = None
    pixels_done: int = 0
    cancelled: bool = False

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

def make_tiles(width: int, height: int, grid_x: int, grid_y: int) -> List[Tile]:
    """Tiles of a grid_x-by-grid_y grid over the image, in row-major order."""
    tile_w = width // grid_x
    tile_h = height // grid_y
    tiles = []
    for j in range(grid_y):
        for i in range(grid_x):
            tiles.append(Tile(index=j * grid_x + i,
                              offset_x=i * tile_w,
                              offset_y=j * tile_h,
                              width=tile_w,
                              height=tile_h))
    return tiles

def render_tile(tile: Tile, world: Hittable, camera: Camera,
                image_width: int, image_height: int, samples: int, rng: Random,
                max_depth: int = MAX_DEPTH, cancel_flag=None) -> Tile:
    """
    Render every pixel of `tile`, row by row, with `samples` jittered camera
    rays per pixel. The cancel flag is checked before each pixel; once it is
    set the remaining pixels stay black and the tile is returned as is.
    """
    accumulated = np.zeros((tile.height, tile.width, 3), dtype=np.float64)

    for row in range(tile.height):
        # Camera v runs bottom to top, image rows top to bottom.
        j = image_height - 1 - (tile.offset_y + row)
        for col in range(tile.width):
            if cancel_flag is not None and cancel_flag.is_set():
                tile.cancelled = True
                break
            i = tile.offset_x + col
            r = g = b = 0.0
            for _ in range(samples):
                u = (i + rng.random()) / image_width
                v = (j + rng.random()) / image_height
                c = color(camera.get_ray(u, v, rng), world, 0, rng, max_depth)
                r += c.x
                g += c.y
                b += c.z
            assert 0.0 <= r <= samples and 0.0 <= g <= samples and 0.0 <= b <= samples, \
                f"pixel ({i}, {j}) accumulated ({r}, {g}, {b}) outside [0, {samples}]"
            accumulated[row, col, 0] = r
            accumulated[row, col, 1] = g
            accumulated[row, col, 2] = b
            tile.pixels_done += 1
        if tile.cancelled:
            break

    tile.pixels = resolve_samples(accumulated, samples)
    return tile

def assemble_tiles(tiles: Iterable[Tile], width: int, height: int) -> np.ndarray:
    """Copy finished tiles into a (height, width, 3) uint8 image."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    covered = 0
    for tile in tiles:
        image[tile.offset_y:tile.offset_y + tile.height,
              tile.offset_x:tile.offset_x + tile.width] = tile.pixels
        covered += tile.pixel_count
    assert covered == width * height, f"tiles cover {covered} pixels, image has {width * height}"
    return image
