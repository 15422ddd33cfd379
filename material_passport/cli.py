"""
CLI entry point for rendering component labels.
"""

# Standard Library
import argparse
import json
import logging
import pathlib
import sys
import time

# local repo modules
import material_passport as mp
import material_passport.config
import material_passport.errors
import material_passport.records
import material_passport.render


LabelConfig = mp.config.LabelConfig
LabelError = mp.errors.LabelError

DEFAULT_LOGO_PATH = mp.config.DEFAULT_LOGO_PATH


#============================================
def build_config(args: argparse.Namespace) -> LabelConfig:
	"""
	Build label config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		LabelConfig.
	"""
	if args.font_dir is not None:
		font_set = mp.config.inter_font_set(pathlib.Path(args.font_dir))
	else:
		font_set = mp.config.default_font_set()
	logo_path = DEFAULT_LOGO_PATH
	if args.logo_path is not None:
		logo_path = pathlib.Path(args.logo_path)
	return LabelConfig(font_set=font_set, logo_path=logo_path)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render a Material Passport component label PDF.")
	parser.add_argument("input_path", help="JSON file with component, order and suppliers records.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")

	asset_group = parser.add_argument_group("Assets")
	asset_group.add_argument("-f", "--font-dir", dest="font_dir", default=None, help="Directory holding the Inter fonts.")
	asset_group.add_argument("-l", "--logo", dest="logo_path", default=None, help="Brand mark SVG path.")

	qr_group = parser.add_argument_group("QR code")
	qr_group.add_argument(
		"-b",
		"--base-url",
		dest="base_url",
		default=None,
		help="Site root used to generate a QR code when the component has none.",
	)

	parser.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Log debug detail.")
	parser.set_defaults(verbose=False)

	args = parser.parse_args(argv)
	return args


#============================================
def load_records(path: pathlib.Path) -> tuple[dict, dict | None, list[dict | None]]:
	"""
	Load component, order and supplier records from a JSON file.

	Args:
		path: JSON file path.

	Returns:
		Tuple of (component, order, suppliers).
	"""
	with path.open("r", encoding="utf-8") as handle:
		data = json.load(handle)
	component = data.get("component") or {}
	order = data.get("order")
	suppliers = data.get("suppliers") or []
	return (component, order, suppliers)


#============================================
def run(args: argparse.Namespace) -> int:
	"""
	Render one label from records on disk.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Process exit code.
	"""
	input_path = pathlib.Path(args.input_path)
	output_path = pathlib.Path(args.output_path)
	print("Material Passport label")
	print(f"Input: {input_path}")
	print(f"Output PDF: {output_path}")

	start_time = time.perf_counter()
	component, order, suppliers = load_records(input_path)
	try:
		label_input = mp.records.build_label_input(
			component,
			order,
			suppliers,
			base_url=args.base_url,
		)
	except LabelError as error:
		print(f"Cannot build label: {error}")
		return 1
	print(f"Component: {label_input.uid}")
	print(f"Suppliers: {len(label_input.suppliers)}")

	config = build_config(args)
	partial_path = output_path.with_name(output_path.name + ".part")
	with partial_path.open("wb") as handle:
		result = mp.render.write_label_to_stream(label_input, handle, config)
	if not result.ok:
		partial_path.unlink(missing_ok=True)
		print(f"Failed to generate label: {result.error}")
		return 1
	partial_path.replace(output_path)

	summary = mp.render.read_label_summary(output_path.read_bytes())
	total_time = time.perf_counter() - start_time
	print(f"Pages written: {summary.pages}")
	print(f"Page size: {summary.page_width:.1f} x {summary.page_height:.1f} PS")
	print(f"Timing: total={total_time:.2f}s")
	return 0


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	level = logging.DEBUG if args.verbose else logging.WARNING
	logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
	return run(args)


if __name__ == "__main__":
	sys.exit(main())
