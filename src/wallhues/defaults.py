"""Default values for palette extraction.

:author: Shay Hill
:created: 2026-10-02
"""

# Lightness of the achromatic ramp. Shades are evenly spaced from SHADE_MIN_LIGHTNESS
# to SHADE_MAX_LIGHTNESS at zero chroma. Pure black and pure white are avoided so
# that the darkest and lightest pixels in an image still have somewhere to go without
# pulling the end shades to the cube corners.
SHADE_COUNT = 8
SHADE_MIN_LIGHTNESS = 8.0
SHADE_MAX_LIGHTNESS = 92.0


# Hue anchors are spaced 360 / len(HUE_NAMES) degrees apart around the LCh hue circle,
# starting at HUE_OFFSET. Names are approximate. Lab hue angles do not line up with
# rgb hue angles, so "red" here is at 30 degrees, not 0.
HUE_OFFSET = 30.0
HUE_NAMES = ("red", "orange", "yellow", "green", "cyan", "azure", "blue", "magenta")


# Lightness and chroma of each hue anchor. These are chosen so that every default
# color is inside the sRGB gamut. Raise the chroma values and some hues (cyan first)
# will clip when rendered.
BRIGHT_LIGHTNESS = 70.0
BRIGHT_CHROMA = 35.0
DARK_LIGHTNESS = 40.0
DARK_CHROMA = 25.0


# Pixels are accumulated in chunks of this size, one chunk per worker task. Smaller
# chunks spread work more evenly across workers. Larger chunks spend less time
# merging partial results.
CHUNK_SIZE = 2**16


# Worker threads for accumulation. None for one thread per cpu (os.cpu_count()).
MAX_WORKERS: int | None = None


# Image loaders step over pixels to keep the total near this number. Palettes do not
# change perceptibly above a few hundred thousand samples.
MAX_PIXELS = 400_000
