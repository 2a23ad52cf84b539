import pathlib

import pytest

import image_tiler.batch
import image_tiler.config
import image_tiler.errors


#============================================
def _names(count: int) -> list[str]:
	"""
	Build placeholder image names.
	"""
	return [f"img{index}.png" for index in range(count)]


#============================================
def test_even_split() -> None:
	"""
	Eight images in groups of four give two full groups.
	"""
	groups = image_tiler.batch.partition_images(_names(8), 4)
	assert [len(group) for group in groups] == [4, 4]
	assert groups[0] == ["img0.png", "img1.png", "img2.png", "img3.png"]


#============================================
def test_last_group_absorbs_remainder() -> None:
	"""
	Nine images in groups of four give sizes 4 and 5.
	"""
	groups = image_tiler.batch.partition_images(_names(9), 4)
	assert [len(group) for group in groups] == [4, 5]
	assert groups[1] == ["img4.png", "img5.png", "img6.png", "img7.png", "img8.png"]


#============================================
def test_partition_sizes_for_many_inputs() -> None:
	"""
	Check group counts and sizes across grid sizes and input lengths.
	"""
	for group_size in (2, 4, 6, 8):
		for total in range(group_size, group_size * 4 + 1):
			groups = image_tiler.batch.partition_images(_names(total), group_size)
			sizes = [len(group) for group in groups]
			assert sum(sizes) == total
			assert len(groups) == total // group_size
			assert all(size == group_size for size in sizes[:-1])
			assert sizes[-1] == group_size + total % group_size
			flattened = [name for group in groups for name in group]
			assert flattened == _names(total)


#============================================
def test_odd_group_size_rounds_up() -> None:
	"""
	A group size of 3 behaves as 4.
	"""
	groups = image_tiler.batch.partition_images(_names(8), 3)
	assert [len(group) for group in groups] == [4, 4]


#============================================
def test_reverse_mirrors_order() -> None:
	"""
	Reversal applies to the whole sequence before partitioning.
	"""
	groups = image_tiler.batch.partition_images(_names(8), 4, reverse=True)
	assert groups[0] == ["img7.png", "img6.png", "img5.png", "img4.png"]
	assert groups[1] == ["img3.png", "img2.png", "img1.png", "img0.png"]


#============================================
def test_too_few_images_rejected() -> None:
	"""
	Fewer images than the group size is a configuration error.
	"""
	with pytest.raises(image_tiler.errors.ConfigError):
		image_tiler.batch.partition_images(_names(3), 4)
	with pytest.raises(image_tiler.errors.ConfigError):
		image_tiler.batch.partition_images(_names(3), 3)


#============================================
def test_group_size_below_minimum_rejected() -> None:
	"""
	Group sizes below two are rejected.
	"""
	with pytest.raises(image_tiler.errors.ConfigError):
		image_tiler.batch.partition_images(_names(4), 1)


#============================================
def test_build_pages_numbers_from_zero() -> None:
	"""
	Pages are indexed in partition order.
	"""
	pages = image_tiler.batch.build_pages(_names(13), 4)
	assert [page.index for page in pages] == [0, 1, 2]
	assert [len(page.images) for page in pages] == [4, 4, 5]
	assert isinstance(pages[0].images, tuple)


#============================================
def test_page_tile_count_grows_for_remainder() -> None:
	"""
	A five image page gets a six slot grid.
	"""
	pages = image_tiler.batch.build_pages(_names(9), 4)
	assert image_tiler.batch.page_tile_count(pages[0], 4) == 4
	assert image_tiler.batch.page_tile_count(pages[1], 4) == 6


#============================================
def test_format_output_name() -> None:
	"""
	The page index replaces %d.
	"""
	assert image_tiler.batch.format_output_name("output%d.jpg", 3) == "output3.jpg"
	assert image_tiler.batch.format_output_name("page-%02d.jpg", 7) == "page-07.jpg"
	assert image_tiler.batch.format_output_name("single.jpg", 0) == "single.jpg"


#============================================
def test_check_output_pattern() -> None:
	"""
	A pattern without a placeholder only works for one page.
	"""
	image_tiler.batch.check_output_pattern("single.jpg", 1)
	image_tiler.batch.check_output_pattern("output%d.jpg", 5)
	with pytest.raises(image_tiler.errors.ConfigError):
		image_tiler.batch.check_output_pattern("single.jpg", 2)
	with pytest.raises(image_tiler.errors.ConfigError):
		image_tiler.batch.check_output_pattern("bad%.jpg", 1)


#============================================
def test_gather_image_paths_expands_directories(tmp_path: pathlib.Path) -> None:
	"""
	Directories expand to sorted supported images; files keep their order.
	"""
	folder = tmp_path / "photos"
	folder.mkdir()
	for name in ("b.png", "a.jpg", "notes.txt", "c.WEBP"):
		(folder / name).write_bytes(b"")
	loose = tmp_path / "z.png"
	loose.write_bytes(b"")

	paths = image_tiler.batch.gather_image_paths([str(loose), str(folder)])
	names = [pathlib.Path(path).name for path in paths]
	assert names == ["z.png", "a.jpg", "b.png", "c.WEBP"]
