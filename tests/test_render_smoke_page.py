import io

import fitz
import PIL.Image

import material_passport as mp
import material_passport.config
import material_passport.records
import material_passport.render


DPI = 150
INK_THRESHOLD = 240
QR_INK_RATIO_MIN = 0.15
MARGIN_RATIO_LIMIT = 0.001


#============================================
def _render_pdf_first_page(data: bytes) -> PIL.Image.Image:
	"""
	Render the first page of a PDF to an image.

	Args:
		data: PDF bytes.

	Returns:
		PIL image.
	"""
	document = fitz.open(stream=data, filetype="pdf")
	page = document[0]
	scale = DPI / 72.0
	matrix = fitz.Matrix(scale, scale)
	pixmap = page.get_pixmap(matrix=matrix, alpha=False)
	image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	document.close()
	return image


#============================================
def _count_ink_ratio(gray: PIL.Image.Image, threshold: int) -> float:
	"""
	Compute the ink ratio for a grayscale region.

	Args:
		gray: Grayscale image region.
		threshold: Pixel intensity threshold.

	Returns:
		Ink ratio.
	"""
	pixels = list(gray.getdata())
	if not pixels:
		return 0.0
	ink = sum(1 for value in pixels if value < threshold)
	return ink / len(pixels)


#============================================
def _crop_points(gray: PIL.Image.Image, x0: float, top: float, x1: float, bottom: float) -> PIL.Image.Image:
	"""
	Crop a region given in top-down page points.
	"""
	scale = DPI / 72.0
	box = (
		int(round(x0 * scale)),
		int(round(top * scale)),
		int(round(x1 * scale)),
		int(round(bottom * scale)),
	)
	return gray.crop(box)


#============================================
def test_rendered_label_regions(long_supplier_input: mp.records.LabelInput) -> None:
	"""
	Smoke test ink placement on the rendered page.
	"""
	sink = io.BytesIO()
	layout = mp.render.render_label(long_supplier_input, sink)
	image = _render_pdf_first_page(sink.getvalue())
	gray = image.convert("L")

	qr = mp.render.elements_with_role(layout, "qr")[0]
	qr_region = _crop_points(gray, qr.x, qr.top, qr.x + qr.width, qr.bottom)
	assert _count_ink_ratio(qr_region, INK_THRESHOLD) > QR_INK_RATIO_MIN

	bottom_margin = mp.config.Y_MARGIN - 2.0
	strip = _crop_points(
		gray,
		0.0,
		layout.page_height - bottom_margin,
		layout.page_width,
		layout.page_height,
	)
	assert _count_ink_ratio(strip, INK_THRESHOLD) <= MARGIN_RATIO_LIMIT

	supplier = mp.render.elements_with_role(layout, "supplier_name")[-1]
	supplier_region = _crop_points(gray, supplier.x, supplier.top, supplier.x + supplier.width, supplier.bottom)
	assert _count_ink_ratio(supplier_region, INK_THRESHOLD) > 0.0
