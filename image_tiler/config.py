"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses

# PIP3 modules
import PIL.Image
import PIL.ImageColor
import reportlab.lib.pagesizes

# local repo modules
import image_tiler as imt
import image_tiler.errors


ConfigError = imt.errors.ConfigError

POINTS_PER_INCH = 72.0
MIN_TILES = 2
GRID_COLUMNS = 2

DEFAULT_TILES = 4
DEFAULT_SIZE = "letter300"
DEFAULT_BACKGROUND = "white"
DEFAULT_RESIZE = "contain"
DEFAULT_ALIGN = "center"
DEFAULT_VALIGN = "middle"
DEFAULT_MARGIN = 0
DEFAULT_OUTPUT = "output%d.jpg"
DEFAULT_SCALER = "bilinear"
DEFAULT_QUALITY = 75
DEFAULT_ERROR_POLICY = "abort"

MAX_QUALITY = 95
PROGRESS_BAR_WIDTH = 20

RESIZE_MODES = ("none", "auto", "contain", "cover", "fill")
H_ALIGNS = ("left", "center", "right")
V_ALIGNS = ("top", "middle", "bottom")
ERROR_POLICIES = ("abort", "collect", "skip")
INPUT_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp"}

SCALERS = {
	"nearest": PIL.Image.Resampling.NEAREST,
	"bilinear": PIL.Image.Resampling.BILINEAR,
	"bicubic": PIL.Image.Resampling.BICUBIC,
	"lanczos": PIL.Image.Resampling.LANCZOS,
}

PRESET_DPIS = (72, 200, 300)


#============================================
def letter_size(dpi: int, landscape: bool = False) -> tuple[int, int]:
	"""
	Compute a US letter page size in pixels.

	Args:
		dpi: Pixels per inch.
		landscape: Swap width and height.

	Returns:
		Tuple of (width, height) in pixels.
	"""
	pagesize = reportlab.lib.pagesizes.letter
	if landscape:
		pagesize = reportlab.lib.pagesizes.landscape(pagesize)
	width = int(round(pagesize[0] * dpi / POINTS_PER_INCH))
	height = int(round(pagesize[1] * dpi / POINTS_PER_INCH))
	return (width, height)


#============================================
def build_size_presets() -> dict[str, tuple[int, int]]:
	"""
	Build the named canvas size presets.

	Returns:
		Mapping of preset name to (width, height) in pixels.
	"""
	presets: dict[str, tuple[int, int]] = {}
	for dpi in PRESET_DPIS:
		presets[f"letter{dpi}"] = letter_size(dpi)
		presets[f"hletter{dpi}"] = letter_size(dpi, landscape=True)
	return presets


SIZE_PRESETS = build_size_presets()


@dataclasses.dataclass(frozen=True)
class Format:
	align: str = DEFAULT_ALIGN
	valign: str = DEFAULT_VALIGN
	resize: str = "auto"
	margin: int = DEFAULT_MARGIN


DEFAULT_FORMAT = Format()


@dataclasses.dataclass(frozen=True)
class Page:
	index: int
	images: tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class TileJob:
	background: tuple[int, int, int]
	canvas_size: tuple[int, int]
	tiles: int
	format: Format
	output_pattern: str
	dry_run: bool = False
	scaler: str = DEFAULT_SCALER
	quality: int = DEFAULT_QUALITY
	error_policy: str = DEFAULT_ERROR_POLICY
	debug: bool = False


@dataclasses.dataclass
class PageResult:
	index: int
	output_path: str | None = None
	drawn: list[tuple[str, str]] = dataclasses.field(default_factory=list)
	skipped: list[tuple[str, Exception]] = dataclasses.field(default_factory=list)
	error: Exception | None = None


#============================================
def normalize_tile_count(tiles: int) -> int:
	"""
	Normalize a requested tile count to an even grid size.

	Args:
		tiles: Requested tile count.

	Returns:
		Even tile count, at least MIN_TILES.
	"""
	if tiles < MIN_TILES:
		raise ConfigError(f"tile count must be at least {MIN_TILES}, got {tiles}")
	if tiles % 2 != 0:
		tiles += 1
	return tiles


#============================================
def resolve_size(name: str) -> tuple[int, int]:
	"""
	Look up a named canvas size.

	Args:
		name: Preset name such as "letter300".

	Returns:
		Tuple of (width, height) in pixels.
	"""
	size = SIZE_PRESETS.get(name.strip().lower())
	if size is None:
		choices = ", ".join(sorted(SIZE_PRESETS))
		raise ConfigError(f"unknown size '{name}' (choose from {choices})")
	return size


#============================================
def resolve_color(name: str) -> tuple[int, int, int]:
	"""
	Convert a colour name or hex string to RGB.

	Args:
		name: Colour name like "white" or "#AABBCC".

	Returns:
		Tuple of (r, g, b) in 0-255 range.
	"""
	try:
		rgb = PIL.ImageColor.getrgb(name.strip())
	except ValueError as err:
		raise ConfigError(f"unknown background color '{name}'") from err
	return rgb[:3]


#============================================
def resolve_scaler(name: str) -> PIL.Image.Resampling:
	"""
	Look up the resampling filter for a scaler name.

	Args:
		name: Scaler name.

	Returns:
		Pillow resampling filter.
	"""
	resample = SCALERS.get(name.strip().lower())
	if resample is None:
		choices = ", ".join(SCALERS)
		raise ConfigError(f"unknown scaler '{name}' (choose from {choices})")
	return resample
