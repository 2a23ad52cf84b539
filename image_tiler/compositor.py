"""
Tile compositor: one canvas page split into grid slots.
"""

# Standard Library
import os
import typing

# PIP3 modules
import PIL.Image

# local repo modules
import image_tiler as imt
import image_tiler.config
import image_tiler.errors
import image_tiler.layout


Format = imt.config.Format
Box = imt.layout.Box
DecodeError = imt.errors.DecodeError
InputError = imt.errors.InputError

GRID_COLUMNS = imt.config.GRID_COLUMNS
DEFAULT_SCALER = imt.config.DEFAULT_SCALER
DEFAULT_QUALITY = imt.config.DEFAULT_QUALITY

ImageSource = str | os.PathLike | typing.BinaryIO


#============================================
def source_name(source: ImageSource) -> str:
	"""
	Get a printable name for an image source.

	Args:
		source: Path or binary file object.

	Returns:
		Path string, file object name, or a placeholder.
	"""
	if isinstance(source, (str, os.PathLike)):
		return os.fspath(source)
	name = getattr(source, "name", None)
	if isinstance(name, str):
		return name
	return "<stream>"


#============================================
def decode_image(source: ImageSource) -> tuple[PIL.Image.Image, str]:
	"""
	Decode an image source into an RGB raster.

	Args:
		source: Path or binary file object.

	Returns:
		Tuple of (RGB image, decoder name such as "JPEG").
	"""
	name = source_name(source)
	try:
		with PIL.Image.open(source) as opened:
			decoder = opened.format or ""
			opened.load()
			image = opened.convert("RGB")
	except (PIL.UnidentifiedImageError, PIL.Image.DecompressionBombError) as err:
		raise DecodeError(f"can't decode the image -> {err}", path=name) from err
	except (FileNotFoundError, IsADirectoryError, PermissionError) as err:
		raise InputError(f"can't open image -> {err}", path=name) from err
	except (OSError, ValueError) as err:
		raise DecodeError(f"can't decode the image -> {err}", path=name) from err
	return (image, decoder)


#============================================
def compute_slot_box(canvas_size: tuple[int, int], grid: int, index: int) -> Box:
	"""
	Compute the box for a slot index.

	The canvas is split into two columns and grid / 2 rows, numbered row
	by row: for four slots 0 is top-left, 1 top-right, 2 bottom-left and
	3 bottom-right.

	Args:
		canvas_size: Canvas (width, height).
		grid: Even slot count.
		index: Slot index in [0, grid).

	Returns:
		Box as (left, top, right, bottom).
	"""
	if index < 0 or index >= grid:
		raise IndexError(f"slot index {index} out of range for {grid} slots")
	width, height = canvas_size
	rows = grid // GRID_COLUMNS
	row = index // GRID_COLUMNS
	col = index % GRID_COLUMNS
	left = col * width // GRID_COLUMNS
	right = (col + 1) * width // GRID_COLUMNS
	top = row * height // rows
	bottom = (row + 1) * height // rows
	return (left, top, right, bottom)


class TileCompositor:
	"""
	Owns one canvas and draws images into its slots.

	Args:
		background: Background colour as an RGB tuple or colour name.
		canvas_size: Canvas (width, height) in pixels.
		tiles: Requested slot count; odd values round up to even.
		scaler: Scaler name used when images are resized.
	"""

	def __init__(
		self,
		background: tuple[int, int, int] | str,
		canvas_size: tuple[int, int],
		tiles: int,
		scaler: str = DEFAULT_SCALER,
	) -> None:
		if isinstance(background, str):
			background = imt.config.resolve_color(background)
		imt.config.resolve_scaler(scaler)
		self.background = background
		self.grid = imt.config.normalize_tile_count(tiles)
		self.scaler = scaler
		self.offset = 0
		self.image = PIL.Image.new("RGB", canvas_size, background)

	@property
	def size(self) -> tuple[int, int]:
		return self.image.size

	def getpixel(self, xy: tuple[int, int]) -> tuple[int, int, int]:
		return self.image.getpixel(xy)

	def slot_box(self, index: int) -> Box:
		return compute_slot_box(self.image.size, self.grid, index)

	#============================================
	def draw_at(self, source: ImageSource, index: int, fmt: Format | None = None) -> str:
		"""
		Draw an image into the slot at index.

		The image is decoded, formatted for the slot and pasted over the
		existing canvas pixels, clipped to the slot box. A decode failure
		leaves the canvas untouched.

		Args:
			source: Path or binary file object.
			index: Slot index.
			fmt: Format options, DEFAULT_FORMAT when None.

		Returns:
			Decoder name, e.g. "PNG".
		"""
		box = self.slot_box(index)
		image, decoder = decode_image(source)
		box, image = imt.layout.resolve_format(box, image, fmt, self.scaler)
		x, y, crop_box = imt.layout.compute_placement(box, image.size, fmt)
		if crop_box != (0, 0, image.size[0], image.size[1]):
			image = image.crop(crop_box)
		self.image.paste(image, (x, y))
		return decoder

	#============================================
	def draw(self, source: ImageSource, fmt: Format | None = None) -> tuple[str, bool]:
		"""
		Draw an image into the next free slot.

		Args:
			source: Path or binary file object.
			fmt: Format options.

		Returns:
			Tuple of (decoder name, page full flag). The flag is True when
			the slot just written was the last one.
		"""
		if self.offset >= self.grid:
			raise IndexError(f"all {self.grid} slots are already drawn")
		decoder = self.draw_at(source, self.offset, fmt)
		page_full = self.offset == self.grid - 1
		self.offset += 1
		return (decoder, page_full)

	def save(self, fp: ImageSource, quality: int = DEFAULT_QUALITY) -> None:
		self.image.save(fp, format="JPEG", quality=quality)

	def close(self) -> None:
		self.image.close()
