"""
Render pages concurrently, one task per page.
"""

# Standard Library
import concurrent.futures
import threading

# local repo modules
import image_tiler as imt
import image_tiler.batch
import image_tiler.compositor
import image_tiler.config
import image_tiler.errors


Page = imt.config.Page
PageResult = imt.config.PageResult
TileJob = imt.config.TileJob
TileCompositor = imt.compositor.TileCompositor

TilerError = imt.errors.TilerError
DecodeError = imt.errors.DecodeError
InputError = imt.errors.InputError
OutputError = imt.errors.OutputError
PageCancelled = imt.errors.PageCancelled

PROGRESS_BAR_WIDTH = imt.config.PROGRESS_BAR_WIDTH


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def write_canvas(compositor: TileCompositor, output_path: str, quality: int) -> None:
	"""
	Encode a finished canvas to a JPEG file.

	Args:
		compositor: Compositor holding the canvas.
		output_path: Output file path.
		quality: JPEG quality.
	"""
	try:
		with open(output_path, "wb") as handle:
			compositor.save(handle, quality)
	except OSError as err:
		raise OutputError(f"can't write the output file -> {err}", path=output_path) from err


class AbortSignal:
	"""
	Lowest failing page index shared by the pages of one run.

	A page stops only when a page with a smaller index has failed, so
	lower pages always run until they finish or fail themselves.
	"""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self.failed_index: int | None = None

	def fail(self, index: int) -> None:
		with self._lock:
			if self.failed_index is None or index < self.failed_index:
				self.failed_index = index

	def cancels(self, index: int) -> bool:
		with self._lock:
			return self.failed_index is not None and index > self.failed_index


#============================================
def check_cancelled(page: Page, abort_signal: AbortSignal | None) -> None:
	"""
	Stop a page when a lower page has already failed.
	"""
	if abort_signal is not None and abort_signal.cancels(page.index):
		raise PageCancelled(f"tiled image #{page.index} cancelled")


#============================================
def render_page(
	page: Page,
	job: TileJob,
	abort_signal: AbortSignal | None = None,
) -> PageResult:
	"""
	Build, fill and encode one page.

	Images are drawn strictly in page order. With the "skip" error policy
	an image that can't be opened or decoded is recorded and the next
	image takes its slot; otherwise the error propagates.

	Args:
		page: Page to render.
		job: Shared job configuration.
		abort_signal: Checked between draws and before writing.

	Returns:
		PageResult.
	"""
	result = PageResult(index=page.index)
	tiles = imt.batch.page_tile_count(page, job.tiles)
	compositor = TileCompositor(job.background, job.canvas_size, tiles, job.scaler)
	if job.debug:
		print(f"Generating tiled image #{page.index} using {list(page.images)}")
	try:
		for image_path in page.images:
			check_cancelled(page, abort_signal)
			if job.debug:
				print(f"Writing image '{image_path}' at tiled image #{page.index}")
			try:
				decoder, _page_full = compositor.draw(image_path, job.format)
			except (DecodeError, InputError) as err:
				if job.error_policy != "skip":
					raise
				print(f"Skipping {err}")
				result.skipped.append((image_path, err))
				continue
			result.drawn.append((image_path, decoder))

		output_path = imt.batch.format_output_name(job.output_pattern, page.index)
		if job.dry_run:
			if job.debug:
				print(f"Tiled image #{page.index} generated, dry run skips '{output_path}'")
			return result
		check_cancelled(page, abort_signal)
		write_canvas(compositor, output_path, job.quality)
		result.output_path = output_path
		if job.debug:
			print(f"Tiled image #{page.index} has been written ('{output_path}')")
	finally:
		compositor.close()
	return result


#============================================
def run_page_task(page: Page, job: TileJob, abort_signal: AbortSignal) -> PageResult:
	"""
	Run one page and capture its error in the result.

	Under the "abort" policy a failure is recorded on the abort signal so
	higher pages stop at their next draw.
	"""
	try:
		return render_page(page, job, abort_signal)
	except TilerError as err:
		if job.error_policy == "abort" and not isinstance(err, PageCancelled):
			abort_signal.fail(page.index)
		return PageResult(index=page.index, error=err)


#============================================
def run_pages(
	pages: list[Page],
	job: TileJob,
	max_workers: int | None = None,
	verbose: bool = False,
) -> list[PageResult]:
	"""
	Render every page concurrently and wait for all of them.

	Args:
		pages: Pages from batch.build_pages.
		job: Shared job configuration.
		max_workers: Thread pool size, executor default when None.
		verbose: Print a progress bar of finished pages.

	Returns:
		Page results ordered by page index. Under the "abort" policy the
		error of the lowest failing page index is raised instead.
	"""
	abort_signal = AbortSignal()
	results: dict[int, PageResult] = {}
	total = len(pages)
	if verbose and total > 0:
		print_progress("Pages", 0, total)
	with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
		futures = [
			executor.submit(run_page_task, page, job, abort_signal)
			for page in pages
		]
		for future in concurrent.futures.as_completed(futures):
			result = future.result()
			results[result.index] = result
			if verbose:
				print_progress("Pages", len(results), total)
	if verbose and total > 0:
		print()

	ordered = [results[page.index] for page in pages]
	if job.error_policy == "abort":
		for result in ordered:
			if result.error is not None and not isinstance(result.error, PageCancelled):
				raise result.error
	return ordered
