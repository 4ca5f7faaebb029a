# main.py
import argparse
import multiprocessing
import signal
import sys
import time
from random import Random
from core.vector import Vector3
from core.errors import ConfigurationError
from camera.camera import Camera
from geometry.world import HittableList
from geometry.sphere import Sphere, MovingSphere
from materials.lambertian import Lambertian
from materials.presets import ColorPresets, DielectricPresets, MetalPresets
from renderer.image_io import save_png, write_ppm
from renderer.raytracer import Renderer, RenderSettings

QUALITY_LEVELS = {
    "low": {"samples": 4, "bounces": 8},
    "medium": {"samples": 32, "bounces": 50},
    "high": {"samples": 128, "bounces": 50},
}

SCENES = ("random", "simple")

class ConsoleProgress:
    """Prints the completed percentage each time a tile finishes."""

    def __init__(self, total_pixels: int, total_tiles: int):
        self.total_pixels = total_pixels
        self.total_tiles = total_tiles
        self.pixels = 0
        self.tiles = 0

    def advance(self, n: int) -> None:
        self.pixels += n

    def finish_tile(self) -> None:
        self.tiles += 1
        percent = 100.0 * self.pixels / self.total_pixels
        print(f"Tile {self.tiles}/{self.total_tiles} done ({percent:.1f}% of pixels)")

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tiled Monte Carlo ray tracer")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=200, help="Image height in pixels")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default="medium",
                        help="Samples per pixel and bounce budget preset")
    parser.add_argument("--samples", type=int, default=None, help="Override samples per pixel")
    parser.add_argument("--max-depth", type=int, default=None, help="Override the bounce budget")
    parser.add_argument("--tiles", type=int, default=32, help="Number of tiles to split the image into")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: CPU count)")
    parser.add_argument("--threads", action="store_true", help="Use threads instead of processes")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible renders")
    parser.add_argument("--scene", choices=SCENES, default="random", help="Demo scene to render")
    parser.add_argument("--output", default="render.png", help="Output path (.png or .ppm, '-' for PPM on stdout)")
    parser.add_argument("--preview", action="store_true", help="Show the result in a window")
    return parser.parse_args(argv)

def create_world(name: str, rng: Random) -> HittableList:
    """Builds one of the demo scenes."""
    world = HittableList()

    if name == "simple":
        world.add(Sphere(Vector3(0, -100.5, -1), 100, ColorPresets.matte(ColorPresets.GROUND)))
        world.add(Sphere(Vector3(0, 0, -1), 0.5, ColorPresets.matte(ColorPresets.BLUE)))
        world.add(Sphere(Vector3(1, 0, -1), 0.5, MetalPresets.gold()))
        # Hollow glass bubble: the inner sphere has a negative radius.
        world.add(Sphere(Vector3(-1, 0, -1), 0.5, DielectricPresets.glass()))
        world.add(Sphere(Vector3(-1, 0, -1), -0.45, DielectricPresets.glass()))
        return world

    world.add(Sphere(Vector3(0, -1000, 0), 1000, ColorPresets.matte(ColorPresets.GRAY)))
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                # Diffuse spheres bounce up during the exposure.
                motion = Vector3(0, 0.5 * rng.random(), 0)
                world.add(MovingSphere(Sphere(center, 0.2, ColorPresets.random_matte(rng)), motion))
            elif choose_mat < 0.95:
                world.add(Sphere(center, 0.2, ColorPresets.random_metal(rng)))
            else:
                world.add(Sphere(center, 0.2, DielectricPresets.glass()))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(ColorPresets.BROWN)))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, MetalPresets.mirror()))
    return world

def build_camera(name: str, aspect: float) -> Camera:
    if name == "simple":
        lookfrom = Vector3(3, 3, 2)
        lookat = Vector3(0, 0, -1)
        return Camera(lookfrom, lookat, Vector3(0, 1, 0), 20, aspect,
                      aperture=0.5, focus_dist=(lookfrom - lookat).length())
    return Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0), 20, aspect,
                  aperture=0.1, focus_dist=10.0, time0=0.0, time1=1.0)

def show_preview(image):
    """Displays the image in a window until it is closed or Escape is pressed."""
    import pygame

    pygame.init()
    height, width, _ = image.shape
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption("Ray Tracer Preview")
    # surfarray is indexed [x][y]
    surface = pygame.surfarray.make_surface(image.swapaxes(0, 1))
    clock = pygame.time.Clock()
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
        screen.blit(surface, (0, 0))
        pygame.display.flip()
        clock.tick(30)
    pygame.quit()

def write_output(image, path: str):
    if path == "-":
        write_ppm(image, sys.stdout)
    elif path.lower().endswith(".ppm"):
        with open(path, "w") as f:
            write_ppm(image, f)
    else:
        save_png(image, path)

def main(argv=None) -> int:
    args = parse_args(argv)
    quality = QUALITY_LEVELS[args.quality]
    samples = args.samples if args.samples is not None else quality["samples"]
    max_depth = args.max_depth if args.max_depth is not None else quality["bounces"]
    # Status goes to stderr when the image itself is written to stdout.
    log = sys.stderr if args.output == "-" else sys.stdout

    try:
        settings = RenderSettings(args.width, args.height, samples, args.tiles,
                                  max_depth=max_depth, workers=args.workers,
                                  seed=args.seed, use_processes=not args.threads)
        camera = build_camera(args.scene, args.width / args.height)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    world = create_world(args.scene, Random(args.seed))

    print("\n=== Rendering ===", file=log)
    print(f"Resolution: {args.width}x{args.height}", file=log)
    print(f"Scene: {args.scene} ({len(world)} objects)", file=log)
    print(f"Samples per pixel: {samples}, max bounces: {max_depth}", file=log)
    print(f"Tiles: {args.tiles} ({settings.grid[0]}x{settings.grid[1]} grid)", file=log)

    cancel_flag = multiprocessing.Event()

    def request_stop(signum, frame):
        print("\nStopping after the current pixels...", file=sys.stderr)
        cancel_flag.set()

    previous_handler = signal.signal(signal.SIGINT, request_stop)
    progress = ConsoleProgress(args.width * args.height, args.tiles) if log is sys.stdout else None
    renderer = Renderer(settings)
    start = time.perf_counter()
    try:
        image = renderer.render(world, camera, cancel_flag, progress)
    finally:
        signal.signal(signal.SIGINT, previous_handler)
    elapsed = time.perf_counter() - start

    if renderer.cancelled:
        print(f"Render cancelled after {elapsed:.1f}s; saving partial image", file=log)
    else:
        print(f"Render finished in {elapsed:.1f}s", file=log)

    write_output(image, args.output)
    if args.output != "-":
        print(f"Saved {args.output}", file=log)

    if args.preview:
        show_preview(image)
    return 0

if __name__ == "__main__":
    sys.exit(main())
