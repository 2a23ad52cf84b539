"""
CLI entry points for tiling images onto pages.
"""

# Standard Library
import argparse
import json
import pathlib
import time

# local repo modules
import image_tiler as imt
import image_tiler.batch
import image_tiler.config
import image_tiler.errors
import image_tiler.scheduler


Format = imt.config.Format
TileJob = imt.config.TileJob
PageResult = imt.config.PageResult
TilerError = imt.errors.TilerError
ConfigError = imt.errors.ConfigError

DEFAULT_TILES = imt.config.DEFAULT_TILES
DEFAULT_SIZE = imt.config.DEFAULT_SIZE
DEFAULT_BACKGROUND = imt.config.DEFAULT_BACKGROUND
DEFAULT_RESIZE = imt.config.DEFAULT_RESIZE
DEFAULT_ALIGN = imt.config.DEFAULT_ALIGN
DEFAULT_VALIGN = imt.config.DEFAULT_VALIGN
DEFAULT_MARGIN = imt.config.DEFAULT_MARGIN
DEFAULT_OUTPUT = imt.config.DEFAULT_OUTPUT
DEFAULT_SCALER = imt.config.DEFAULT_SCALER
DEFAULT_QUALITY = imt.config.DEFAULT_QUALITY
DEFAULT_ERROR_POLICY = imt.config.DEFAULT_ERROR_POLICY
MAX_QUALITY = imt.config.MAX_QUALITY


#============================================
def build_job(args: argparse.Namespace) -> TileJob:
	"""
	Build the shared job config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		TileJob.
	"""
	if not 1 <= args.quality <= MAX_QUALITY:
		raise ConfigError(f"quality must be between 1 and {MAX_QUALITY}, got {args.quality}")
	imt.config.resolve_scaler(args.scaler)
	page_format = Format(
		align=args.align,
		valign=args.valign,
		resize=args.resize,
		margin=args.margin,
	)
	job = TileJob(
		background=imt.config.resolve_color(args.bg),
		canvas_size=imt.config.resolve_size(args.size),
		tiles=imt.config.normalize_tile_count(args.tiles),
		format=page_format,
		output_pattern=args.output,
		dry_run=args.dry_run,
		scaler=args.scaler,
		quality=args.quality,
		error_policy=args.errors,
		debug=args.debug,
	)
	return job


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, sys.argv when None.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Tile images onto fixed-size JPEG pages.")
	parser.add_argument("inputs", nargs="+", help="Image files or directories.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument(
		"-o", "--output", dest="output", default=DEFAULT_OUTPUT,
		help="Output file, %%d in the name is replaced by the page number.",
	)
	output_group.add_argument("-s", "--size", dest="size", default=DEFAULT_SIZE, help="Output page size preset.")
	output_group.add_argument("-b", "--bg", dest="bg", default=DEFAULT_BACKGROUND, help="Output background color.")
	output_group.add_argument("-q", "--quality", dest="quality", type=int, default=DEFAULT_QUALITY, help="JPEG quality.")
	output_group.add_argument("-M", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-n", "--tiles", dest="tiles", type=int, default=DEFAULT_TILES, help="Number of tiles per page, at least 2.")
	layout_group.add_argument("-r", "--resize", dest="resize", default=DEFAULT_RESIZE, help="Resizing mode: none, auto, contain or cover.")
	layout_group.add_argument("-a", "--align", dest="align", default=DEFAULT_ALIGN, help="Horizontal alignment.")
	layout_group.add_argument("-A", "--valign", dest="valign", default=DEFAULT_VALIGN, help="Vertical alignment.")
	layout_group.add_argument("-m", "--margin", dest="margin", type=int, default=DEFAULT_MARGIN, help="Slot margin in pixels.")
	layout_group.add_argument(
		"-S", "--scaler", dest="scaler", default=DEFAULT_SCALER,
		choices=sorted(imt.config.SCALERS), help="Resampling filter.",
	)

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-R", "--reverse", dest="reverse", action="store_true", help="Tile the images in reverse order.")
	behavior_group.add_argument("-x", "--dry-run", dest="dry_run", action="store_true", help="Process the images but don't write to disk.")
	behavior_group.add_argument(
		"-e", "--errors", dest="errors", default=DEFAULT_ERROR_POLICY,
		choices=imt.config.ERROR_POLICIES, help="Error policy for failing pages or images.",
	)
	behavior_group.add_argument("-j", "--jobs", dest="jobs", type=int, default=None, help="Pages rendered at once.")
	behavior_group.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Verbose output.")
	behavior_group.add_argument("--debug", dest="debug", action="store_true", help="Enable debugging output.")

	parser.set_defaults(
		reverse=False,
		dry_run=False,
		verbose=False,
		debug=False,
	)

	args = parser.parse_args(argv)
	if args.debug:
		args.verbose = True
	return args


#============================================
def print_options(args: argparse.Namespace, job: TileJob) -> None:
	"""
	Print the options used for the run.

	Args:
		args: Parsed argparse namespace.
		job: Job config.
	"""
	print("Used options:")
	if args.reverse:
		print("  Reverse mode: true")
	if job.dry_run:
		print("  Dry run: true")
	print(f"  Name: {job.output_pattern}")
	print(f"  Size: {args.size} ({job.canvas_size[0]}x{job.canvas_size[1]})")
	print(f"  Background color: {args.bg}")
	print(f"  Tiles: {job.tiles}")
	print(f"    Resize mode: {job.format.resize}")
	print(f"    Alignment: {job.format.align}")
	print(f"    Vertical alignment: {job.format.valign}")
	print(f"    Margin: {job.format.margin}")
	print(f"    Scaler: {job.scaler}")
	print(f"  Error policy: {job.error_policy}")


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	results: list[PageResult],
	job: TileJob,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		results: Page results.
		job: Job config.
	"""
	pages = []
	for result in results:
		pages.append(
			{
				"index": result.index,
				"output": result.output_path,
				"images": [path for path, _decoder in result.drawn],
				"decoders": [decoder for _path, decoder in result.drawn],
				"skipped": {path: str(err) for path, err in result.skipped},
				"error": str(result.error) if result.error is not None else None,
			}
		)
	data = {
		"pages": pages,
		"layout": {
			"canvas_width": job.canvas_size[0],
			"canvas_height": job.canvas_size[1],
			"background": list(job.background),
			"tiles": job.tiles,
			"resize": job.format.resize,
			"align": job.format.align,
			"valign": job.format.valign,
			"margin": job.format.margin,
			"scaler": job.scaler,
			"quality": job.quality,
		},
		"dry_run": job.dry_run,
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)


#============================================
def run_pipeline(args: argparse.Namespace) -> list[PageResult]:
	"""
	Run the full pipeline from input images to tiled pages.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Page results ordered by page index.
	"""
	start_time = time.perf_counter()
	job = build_job(args)
	images = imt.batch.gather_image_paths(args.inputs)
	pages = imt.batch.build_pages(images, job.tiles, args.reverse)
	imt.batch.check_output_pattern(job.output_pattern, len(pages))
	if args.verbose:
		print(f"Images found: {len(images)}")
		print(f"Pages to generate: {len(pages)}")

	results = imt.scheduler.run_pages(pages, job, args.jobs, verbose=args.verbose)

	if args.manifest_path:
		write_manifest(pathlib.Path(args.manifest_path), results, job)

	if args.verbose:
		print_options(args, job)
		total_time = time.perf_counter() - start_time
		written = sum(1 for result in results if result.error is None)
		print(f"\n{written} files generated from {len(images)} images in {total_time:.2f}s")
		if args.manifest_path:
			print(f"Manifest written: {args.manifest_path}")
	return results


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		results = run_pipeline(args)
	except TilerError as err:
		raise SystemExit(str(err)) from err
	failed = [result for result in results if result.error is not None]
	if failed:
		for result in failed:
			print(f"Tiled image #{result.index} failed: {result.error}")
		raise SystemExit(f"{len(failed)} of {len(results)} tiled images failed")
