"""
Split input images into pages.
"""

# Standard Library
import pathlib

# local repo modules
import image_tiler as imt
import image_tiler.config
import image_tiler.errors


Page = imt.config.Page
ConfigError = imt.errors.ConfigError

INPUT_SUFFIXES = imt.config.INPUT_SUFFIXES


#============================================
def gather_image_paths(inputs: list[str]) -> list[str]:
	"""
	Expand input arguments into image paths.

	Files are kept in the given order. Directories expand to their
	supported images, sorted by name.

	Args:
		inputs: File or directory paths.

	Returns:
		List of image paths.
	"""
	paths: list[str] = []
	for entry in inputs:
		path = pathlib.Path(entry).expanduser()
		if path.is_dir():
			found = [
				child for child in path.iterdir()
				if child.is_file() and child.suffix.lower() in INPUT_SUFFIXES
			]
			paths.extend(str(child) for child in sorted(found))
			continue
		paths.append(str(path))
	return paths


#============================================
def partition_images(
	images: list[str],
	group_size: int,
	reverse: bool = False,
) -> list[list[str]]:
	"""
	Split images into groups of group_size.

	The last group absorbs any remainder instead of leaving a short
	trailing group: 9 images in groups of 4 gives sizes [4, 5].

	Args:
		images: Ordered image identifiers.
		group_size: Images per group; odd values round up to even.
		reverse: Reverse the whole sequence first.

	Returns:
		List of groups.
	"""
	group_size = imt.config.normalize_tile_count(group_size)
	total = len(images)
	if total < group_size:
		raise ConfigError(
			f"at least {group_size} images are needed for {group_size} tiles, got {total}"
		)
	ordered = list(images)
	if reverse:
		ordered.reverse()

	count = total // group_size
	groups: list[list[str]] = []
	for index in range(count):
		start = index * group_size
		end = start + group_size
		if index == count - 1:
			end = total
		groups.append(ordered[start:end])
	return groups


#============================================
def build_pages(images: list[str], group_size: int, reverse: bool = False) -> list[Page]:
	"""
	Partition images and number the resulting pages from 0.
	"""
	groups = partition_images(images, group_size, reverse)
	return [Page(index=index, images=tuple(group)) for index, group in enumerate(groups)]


#============================================
def page_tile_count(page: Page, group_size: int) -> int:
	"""
	Get the grid size for a page.

	A page holding an absorbed remainder grows its grid so every image
	gets a slot.

	Args:
		page: Page to lay out.
		group_size: Requested images per page.

	Returns:
		Even slot count.
	"""
	return imt.config.normalize_tile_count(max(group_size, len(page.images)))


#============================================
def check_output_pattern(pattern: str, page_count: int) -> None:
	"""
	Validate an output name pattern for a number of pages.

	Args:
		pattern: Pattern with an optional %d placeholder.
		page_count: Number of pages that will be written.
	"""
	try:
		first = format_output_name(pattern, 0)
		second = format_output_name(pattern, 1)
	except (TypeError, ValueError) as err:
		raise ConfigError(f"invalid output pattern '{pattern}' -> {err}") from err
	if first == second and page_count > 1:
		raise ConfigError(f"output pattern '{pattern}' needs %d to name {page_count} pages")


#============================================
def format_output_name(pattern: str, index: int) -> str:
	"""
	Build the output file name for a page index.

	Args:
		pattern: Pattern like "output%d.jpg".
		index: Page index.

	Returns:
		Output path string.
	"""
	if "%" not in pattern:
		return str(pathlib.Path(pattern))
	name = pattern % index
	return str(pathlib.Path(name))
