# renderer/raytracer.py
import os
import signal
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from multiprocessing.managers import BaseProxy
from multiprocessing.synchronize import Event as ProcessEvent
from random import Random
from typing import List, Optional, Protocol, Tuple
import numpy as np
from core.errors import ConfigurationError
from camera.camera import Camera
from geometry.hittable import Hittable
from renderer.integrator import MAX_DEPTH
from renderer.tiles import Tile, assemble_tiles, compute_tile_grid, make_tiles, render_tile

class ProgressSink(Protocol):
    """Receives per-tile progress as tiles finish."""

    def advance(self, n: int) -> None: ...

    def finish_tile(self) -> None: ...

@dataclass
class RenderSettings:
    """
    Everything about a render except the scene and the camera. Invalid
    combinations raise ConfigurationError on construction.
    """
    width: int
    height: int
    samples_per_pixel: int = 16
    tile_count: int = 1
    max_depth: int = MAX_DEPTH
    workers: Optional[int] = None
    seed: Optional[int] = None
    use_processes: bool = True
    grid: Tuple[int, int] = field(init=False)

    def __post_init__(self):
        if self.samples_per_pixel < 1:
            raise ConfigurationError(f"samples per pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ConfigurationError(f"max depth must not be negative, got {self.max_depth}")
        self.grid = compute_tile_grid(self.tile_count, self.width, self.height)

def make_tile_rng(seed: Optional[int], tile_index: int) -> Random:
    """
    Generator owned by one tile. With a seed, each tile gets its own stable
    stream, so the image does not depend on which worker ran which tile.
    """
    if seed is None:
        return Random()
    return Random(f"{seed}:{tile_index}")

def _run_tile(tile: Tile, world: Hittable, camera: Camera, settings: RenderSettings, cancel_flag) -> Tile:
    rng = make_tile_rng(settings.seed, tile.index)
    return render_tile(tile, world, camera, settings.width, settings.height,
                       settings.samples_per_pixel, rng, settings.max_depth, cancel_flag)

# Set in each worker process by the pool initializer.
_worker_cancel_flag = None

def _init_worker(cancel_flag):
    global _worker_cancel_flag
    # Ctrl-C is handled by the parent, which sets the cancel flag.
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    _worker_cancel_flag = cancel_flag

def _run_tile_in_worker(tile: Tile, world: Hittable, camera: Camera, settings: RenderSettings) -> Tile:
    return _run_tile(tile, world, camera, settings, _worker_cancel_flag)

class Renderer:
    """
    Renders a scene tile by tile on a pool of workers.

    With use_processes the cancel flag must be a multiprocessing.Event (or a
    manager proxy), otherwise render() raises ConfigurationError; with
    threads any object with is_set() works.
    """
    def __init__(self, settings: RenderSettings):
        self.settings = settings
        self.last_tiles: List[Tile] = []

    @property
    def cancelled(self) -> bool:
        """Whether any tile of the last render stopped early."""
        return any(tile.cancelled for tile in self.last_tiles)

    def _check_cancel_flag(self, cancel_flag):
        # Worker processes get a pickled copy of the flag; only these types
        # stay shared with the parent.
        if (self.settings.use_processes and cancel_flag is not None
                and not isinstance(cancel_flag, (ProcessEvent, BaseProxy))):
            raise ConfigurationError(
                "rendering in processes needs a multiprocessing.Event or manager proxy "
                f"as the cancel flag, got {type(cancel_flag).__name__}")

    def _make_executor(self, worker_count: int, cancel_flag) -> Executor:
        if self.settings.use_processes:
            return ProcessPoolExecutor(max_workers=worker_count,
                                       initializer=_init_worker,
                                       initargs=(cancel_flag,))
        return ThreadPoolExecutor(max_workers=worker_count)

    def render(self, world: Hittable, camera: Camera, cancel_flag=None,
               progress: Optional[ProgressSink] = None) -> np.ndarray:
        """
        Returns a (height, width, 3) uint8 image, row 0 at the top. A
        cancelled render still returns an image; unrendered pixels are black.
        """
        settings = self.settings
        self._check_cancel_flag(cancel_flag)
        tiles = make_tiles(settings.width, settings.height, *settings.grid)
        worker_count = min(settings.workers or os.cpu_count() or 1, len(tiles))

        finished: List[Tile] = []
        with self._make_executor(worker_count, cancel_flag) as executor:
            if settings.use_processes:
                futures = [executor.submit(_run_tile_in_worker, tile, world, camera, settings)
                           for tile in tiles]
            else:
                futures = [executor.submit(_run_tile, tile, world, camera, settings, cancel_flag)
                           for tile in tiles]
            try:
                for future in as_completed(futures):
                    tile = future.result()
                    if progress is not None:
                        progress.advance(tile.pixels_done)
                        progress.finish_tile()
                    finished.append(tile)
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

        self.last_tiles = finished
        return assemble_tiles(finished, settings.width, settings.height)

def render(world: Hittable, camera: Camera, width: int, height: int,
           samples_per_pixel: int, tile_count: int, cancel_flag=None,
           progress: Optional[ProgressSink] = None, **options) -> np.ndarray:
    """
    One-shot render. Extra keyword options (max_depth, workers, seed,
    use_processes) are passed to RenderSettings.
    """
    settings = RenderSettings(width, height, samples_per_pixel, tile_count, **options)
    return Renderer(settings).render(world, camera, cancel_flag, progress)
