"""
Pytest configuration for local imports and test images.
"""

# Standard Library
import os
import pathlib
import sys

# PIP3 modules
import PIL.Image
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def write_solid_image(
	path: pathlib.Path,
	size: tuple[int, int],
	color: tuple[int, int, int],
	image_format: str = "PNG",
) -> str:
	"""
	Write a single colour image to disk.

	Args:
		path: Output path.
		size: Image (width, height).
		color: RGB colour.
		image_format: Pillow format name.

	Returns:
		Path string.
	"""
	image = PIL.Image.new("RGB", size, color)
	image.save(path, format=image_format)
	return str(path)


#============================================
@pytest.fixture
def image_factory(tmp_path: pathlib.Path):
	"""
	Build solid colour images inside tmp_path.
	"""
	counter = {"next": 0}

	def _make(
		size: tuple[int, int] = (40, 30),
		color: tuple[int, int, int] = (255, 0, 0),
		image_format: str = "PNG",
	) -> str:
		suffix = ".jpg" if image_format == "JPEG" else "." + image_format.lower()
		path = tmp_path / f"input_{counter['next']:03d}{suffix}"
		counter["next"] += 1
		return write_solid_image(path, size, color, image_format)

	return _make
