"""
Aspect-preserving image scaling.
"""

# PIP3 modules
import PIL.Image

# local repo modules
import image_tiler as imt
import image_tiler.config


DEFAULT_SCALER = imt.config.DEFAULT_SCALER


#============================================
def compute_scale_factor(source: float, target: float) -> float:
	"""
	Compute the factor that maps a source extent onto a target extent.

	Args:
		source: Source extent in pixels.
		target: Target extent in pixels.

	Returns:
		Scale factor, 1.0 when the extents already match.
	"""
	if source == target:
		return 1.0
	return target / source


#============================================
def compute_scaled_size(size: tuple[int, int], factor: float) -> tuple[int, int]:
	"""
	Apply one factor to both axes.

	Args:
		size: Source (width, height).
		factor: Uniform scale factor.

	Returns:
		Scaled (width, height), never smaller than one pixel.
	"""
	width = max(1, int(round(size[0] * factor)))
	height = max(1, int(round(size[1] * factor)))
	return (width, height)


#============================================
def scale_image_by(
	image: PIL.Image.Image,
	factor: float,
	scaler: str = DEFAULT_SCALER,
) -> PIL.Image.Image:
	"""
	Scale an image uniformly by a factor.

	Args:
		image: Source image.
		factor: Uniform scale factor.
		scaler: Scaler name, see config.SCALERS.

	Returns:
		Scaled copy, or the source image when nothing changes.
	"""
	if factor == 1.0:
		return image
	new_size = compute_scaled_size(image.size, factor)
	if new_size == image.size:
		return image
	resample = imt.config.resolve_scaler(scaler)
	return image.resize(new_size, resample=resample)


#============================================
def scale_image(
	image: PIL.Image.Image,
	target_width: int,
	target_height: int,
	scaler: str = DEFAULT_SCALER,
) -> PIL.Image.Image:
	"""
	Scale an image so its longer axis matches the same target axis.

	Landscape images (wider than tall) are matched on width, everything
	else on height. The factor is applied to both axes, so the aspect
	ratio is kept and the result may overflow the other target axis.

	Args:
		image: Source image.
		target_width: Target width in pixels.
		target_height: Target height in pixels.
		scaler: Scaler name.

	Returns:
		Scaled image.
	"""
	width, height = image.size
	if width > height:
		factor = compute_scale_factor(width, target_width)
	else:
		factor = compute_scale_factor(height, target_height)
	return scale_image_by(image, factor, scaler)
