"""
Slot formatting: margins, resize modes and alignment.
"""

# PIP3 modules
import PIL.Image

# local repo modules
import image_tiler as imt
import image_tiler.config
import image_tiler.errors
import image_tiler.scale


Format = imt.config.Format
GeometryError = imt.errors.GeometryError

DEFAULT_FORMAT = imt.config.DEFAULT_FORMAT
DEFAULT_SCALER = imt.config.DEFAULT_SCALER

Box = tuple[int, int, int, int]


#============================================
def box_size(box: Box) -> tuple[int, int]:
	"""
	Get the width and height of a (left, top, right, bottom) box.
	"""
	return (box[2] - box[0], box[3] - box[1])


#============================================
def shrink_box(box: Box, margin: int) -> Box:
	"""
	Move every edge of a box inward by a margin.

	Args:
		box: Box as (left, top, right, bottom).
		margin: Inset in pixels.

	Returns:
		Shrunk box.
	"""
	if margin < 0:
		raise GeometryError(f"margin must not be negative, got {margin}")
	if margin == 0:
		return box
	shrunk = (box[0] + margin, box[1] + margin, box[2] - margin, box[3] - margin)
	width, height = box_size(shrunk)
	if width <= 0 or height <= 0:
		slot_width, slot_height = box_size(box)
		raise GeometryError(
			f"margin {margin} leaves no room in a {slot_width}x{slot_height} slot"
		)
	return shrunk


#============================================
def compute_align_offset(available: int, size: int, align: str) -> int:
	"""
	Compute an alignment offset.

	Args:
		available: Available dimension.
		size: Image dimension.
		align: Alignment string.

	Returns:
		Offset in pixels, never negative.
	"""
	normalized = align.strip().lower()
	if normalized in ("left", "top"):
		return 0
	if normalized in ("right", "bottom"):
		return max(0, available - size)
	return max(0, (available - size) // 2)


#============================================
def resize_for_box(
	image: PIL.Image.Image,
	box: Box,
	mode: str,
	scaler: str = DEFAULT_SCALER,
) -> PIL.Image.Image:
	"""
	Apply a resize mode to fit an image to a box.

	Args:
		image: Source image.
		box: Target box.
		mode: One of none/auto/contain/cover/fill; unknown modes act as none.
		scaler: Scaler name.

	Returns:
		The source image or a scaled copy.
	"""
	box_width, box_height = box_size(box)
	width, height = image.size
	normalized = mode.strip().lower()
	if normalized == "auto":
		landscape = width > height
		if (landscape and width > box_width) or (not landscape and height > box_height):
			return imt.scale.scale_image(image, box_width, box_height, scaler)
		return image
	if normalized == "contain":
		factor = min(box_width / width, box_height / height)
		return imt.scale.scale_image_by(image, factor, scaler)
	if normalized in ("cover", "fill"):
		factor = max(box_width / width, box_height / height)
		return imt.scale.scale_image_by(image, factor, scaler)
	return image


#============================================
def resolve_format(
	box: Box,
	image: PIL.Image.Image,
	fmt: Format | None = None,
	scaler: str = DEFAULT_SCALER,
) -> tuple[Box, PIL.Image.Image]:
	"""
	Resolve format options for one draw.

	Args:
		box: Slot box.
		image: Decoded image.
		fmt: Format options, DEFAULT_FORMAT when None.
		scaler: Scaler name.

	Returns:
		Tuple of (margin adjusted box, image or scaled image).
	"""
	if fmt is None:
		fmt = DEFAULT_FORMAT
	box = shrink_box(box, fmt.margin)
	image = resize_for_box(image, box, fmt.resize, scaler)
	return (box, image)


#============================================
def compute_placement(
	box: Box,
	image_size: tuple[int, int],
	fmt: Format | None = None,
) -> tuple[int, int, Box]:
	"""
	Position an image inside a box.

	Images smaller than the box are offset by the alignment options. Images
	larger than the box anchor at the box origin and are cropped to it.

	Args:
		box: Target box.
		image_size: Image (width, height).
		fmt: Format options.

	Returns:
		Tuple of (x, y, crop_box) where crop_box is the visible image region.
	"""
	if fmt is None:
		fmt = DEFAULT_FORMAT
	box_width, box_height = box_size(box)
	offset_x = compute_align_offset(box_width, image_size[0], fmt.align)
	offset_y = compute_align_offset(box_height, image_size[1], fmt.valign)
	visible_width = min(image_size[0], box_width - offset_x)
	visible_height = min(image_size[1], box_height - offset_y)
	crop_box = (0, 0, visible_width, visible_height)
	return (box[0] + offset_x, box[1] + offset_y, crop_box)
