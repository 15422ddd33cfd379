"""
Label layout planning and PDF rendering.
"""

# Standard Library
import dataclasses
import io
import logging
import typing

# PIP3 modules
import PIL.Image
import pypdf
import reportlab.graphics.renderPDF
import reportlab.graphics.shapes
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import material_passport as mp
import material_passport.assets
import material_passport.config
import material_passport.errors
import material_passport.layout
import material_passport.records


LabelConfig = mp.config.LabelConfig
LabelFonts = mp.assets.LabelFonts
LabelInput = mp.records.LabelInput
LayoutCursor = mp.layout.LayoutCursor
Drawing = reportlab.graphics.shapes.Drawing
LabelError = mp.errors.LabelError
LayoutOverflowError = mp.errors.LayoutOverflowError
RenderFailure = mp.errors.RenderFailure

PAGE_SIZE = mp.config.PAGE_SIZE
CENTRAL_COLUMN_WIDTH = mp.config.CENTRAL_COLUMN_WIDTH
X_MARGIN = mp.config.X_MARGIN
Y_MARGIN = mp.config.Y_MARGIN
LOGO_HEIGHT = mp.config.LOGO_HEIGHT
MINOR_GAP = mp.config.MINOR_GAP
MEDIUM_GAP = mp.config.MEDIUM_GAP
MAJOR_GAP = mp.config.MAJOR_GAP
HEADING_FONT_SIZE = mp.config.HEADING_FONT_SIZE
ORDER_REF_MAX_FONT_SIZE = mp.config.ORDER_REF_MAX_FONT_SIZE
ROW_FONT_SIZE = mp.config.ROW_FONT_SIZE
SUPPLIER_NAME_FONT_SIZE = mp.config.SUPPLIER_NAME_FONT_SIZE
SUPPLIER_LOCATION_FONT_SIZE = mp.config.SUPPLIER_LOCATION_FONT_SIZE
RULE_THICKNESS = mp.config.RULE_THICKNESS
DOCUMENT_SUBJECT = mp.config.DOCUMENT_SUBJECT
WEIGHT_LABEL = mp.config.WEIGHT_LABEL
DATE_LABEL = mp.config.DATE_LABEL
PRODUCED_BY_LABEL = mp.config.PRODUCED_BY_LABEL

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class PlacedElement:
	kind: str
	role: str
	x: float
	top: float
	width: float
	height: float
	lines: list[str] = dataclasses.field(default_factory=list)
	font_name: str = ""
	font_size: float = 0.0
	align: str = "LEFT"

	@property
	def bottom(self) -> float:
		return self.top + self.height


@dataclasses.dataclass
class LabelLayout:
	page_width: float
	page_height: float
	elements: list[PlacedElement]


@dataclasses.dataclass
class RenderResult:
	ok: bool
	error: LabelError | None = None
	layout: LabelLayout | None = None


@dataclasses.dataclass
class LabelSummary:
	pages: int
	page_width: float
	page_height: float
	title: str | None
	author: str | None


#============================================
def elements_with_role(layout: LabelLayout, role: str) -> list[PlacedElement]:
	return [element for element in layout.elements if element.role == role]


#============================================
def content_bottom(layout: LabelLayout) -> float:
	"""
	Lowest edge reached by any placed element.

	Args:
		layout: Planned label layout.

	Returns:
		Bottom edge in points from the top of the page.
	"""
	if not layout.elements:
		return 0.0
	return max(element.bottom for element in layout.elements)


#============================================
def place_text(
	role: str,
	lines: list[str],
	font_name: str,
	font_size: float,
	top: float,
	x: float,
	width: float,
	align: str,
) -> PlacedElement:
	"""
	Measure a block of text lines and place it inside a horizontal span.

	The element box is shrunk to the widest line and aligned within
	the span [x, x + width].

	Args:
		role: Element role.
		lines: Text lines, already wrapped.
		font_name: Registered font name.
		font_size: Font size in points.
		top: Top edge in points from the top of the page.
		x: Left edge of the span.
		width: Width of the span.
		align: "LEFT", "CENTER" or "RIGHT".

	Returns:
		PlacedElement.
	"""
	text_width = max(mp.layout.text_width(line, font_name, font_size) for line in lines)
	if align == "CENTER":
		box_x = x + (width - text_width) / 2.0
	elif align == "RIGHT":
		box_x = x + width - text_width
	else:
		box_x = x
	return PlacedElement(
		kind="text",
		role=role,
		x=box_x,
		top=top,
		width=text_width,
		height=mp.layout.block_height(len(lines), font_name, font_size),
		lines=list(lines),
		font_name=font_name,
		font_size=font_size,
		align=align,
	)


#============================================
def place_row(
	elements: list[PlacedElement],
	cursor: LayoutCursor,
	role: str,
	label: str,
	value: str,
	label_font: str,
	value_font: str,
	page_width: float,
) -> None:
	"""
	Place a "label: value" row, label on the left margin and value right-aligned.

	Args:
		elements: Output element list.
		cursor: Layout cursor, advanced past the row.
		role: Row role prefix, e.g. "weight".
		label: Label text.
		value: Value text.
		label_font: Font for the label.
		value_font: Font for the value.
		page_width: Page width in points.
	"""
	content_width = page_width - 2.0 * X_MARGIN
	top = cursor.current_y()
	label_element = place_text(
		f"{role}_label", [label], label_font, ROW_FONT_SIZE, top, X_MARGIN, content_width, "LEFT",
	)
	value_element = place_text(
		f"{role}_value", [value], value_font, ROW_FONT_SIZE, top, X_MARGIN, content_width, "RIGHT",
	)
	elements.append(label_element)
	elements.append(value_element)
	cursor.advance(max(label_element.height, value_element.height), MINOR_GAP)


#============================================
def plan_label(
	label_input: LabelInput,
	fonts: LabelFonts,
	logo: Drawing,
	config: LabelConfig,
) -> LabelLayout:
	"""
	Measure and place every element of the label, top to bottom.

	Each step advances the cursor by the measured height of what it
	placed, so variable length text never overlaps what follows.

	Args:
		label_input: Validated label input.
		fonts: Registered fonts.
		logo: Parsed brand mark.
		config: Label configuration.

	Returns:
		LabelLayout.
	"""
	page_width, page_height = PAGE_SIZE
	content_width = page_width - 2.0 * X_MARGIN
	column_x = (page_width - CENTRAL_COLUMN_WIDTH) / 2.0
	cursor = LayoutCursor(Y_MARGIN)
	elements: list[PlacedElement] = []

	heading = place_text(
		"heading", [label_input.uid], fonts.thin, HEADING_FONT_SIZE,
		cursor.current_y(), 0.0, page_width, "CENTER",
	)
	elements.append(heading)
	cursor.advance(heading.height, -MEDIUM_GAP)

	# the QR image carries its own quiet zone, so neighbours may tuck into it
	elements.append(
		PlacedElement(
			kind="qr",
			role="qr",
			x=column_x,
			top=cursor.current_y(),
			width=CENTRAL_COLUMN_WIDTH,
			height=CENTRAL_COLUMN_WIDTH,
		)
	)
	cursor.advance(CENTRAL_COLUMN_WIDTH, -MEDIUM_GAP)

	logo_width = logo.width * LOGO_HEIGHT / logo.height
	elements.append(
		PlacedElement(
			kind="logo",
			role="logo",
			x=(page_width - logo_width) / 2.0,
			top=cursor.current_y(),
			width=logo_width,
			height=LOGO_HEIGHT,
		)
	)
	# artwork in the brand mark ends well above the bottom of its viewBox
	cursor.advance(LOGO_HEIGHT, -MAJOR_GAP)

	order_font_size = mp.layout.fit_font_size(
		label_input.order_reference,
		fonts.regular,
		CENTRAL_COLUMN_WIDTH,
		ORDER_REF_MAX_FONT_SIZE,
		config.min_font_size,
	)
	order_reference = place_text(
		"order_reference", [label_input.order_reference], fonts.regular, order_font_size,
		cursor.current_y(), column_x, CENTRAL_COLUMN_WIDTH, "CENTER",
	)
	elements.append(order_reference)
	cursor.advance(order_reference.height, MEDIUM_GAP)

	elements.append(
		PlacedElement(
			kind="rule",
			role="separator",
			x=X_MARGIN,
			top=cursor.current_y(),
			width=content_width,
			height=0.0,
		)
	)
	cursor.advance(0.0, MEDIUM_GAP)

	if label_input.mass_kg is not None:
		place_row(
			elements, cursor, "weight", WEIGHT_LABEL,
			mp.records.format_mass(label_input.mass_kg),
			fonts.regular, fonts.regular, page_width,
		)
	place_row(
		elements, cursor, "date", DATE_LABEL,
		mp.records.format_epoch_date(label_input.produced_at_epoch_seconds),
		fonts.regular, fonts.regular, page_width,
	)

	produced_by = place_text(
		"produced_by_label", [PRODUCED_BY_LABEL], fonts.regular, ROW_FONT_SIZE,
		cursor.current_y(), X_MARGIN, content_width, "LEFT",
	)
	elements.append(produced_by)
	cursor.advance(produced_by.height, MINOR_GAP)

	for supplier in label_input.suppliers:
		name_lines = mp.layout.wrap_text(supplier.name, fonts.bold, SUPPLIER_NAME_FONT_SIZE, content_width)
		name = place_text(
			"supplier_name", name_lines, fonts.bold, SUPPLIER_NAME_FONT_SIZE,
			cursor.current_y(), X_MARGIN, content_width, "RIGHT",
		)
		elements.append(name)
		cursor.advance(name.height, MINOR_GAP)

		location_lines = mp.layout.wrap_text(
			supplier.location, fonts.regular, SUPPLIER_LOCATION_FONT_SIZE, content_width,
		)
		location = place_text(
			"supplier_location", location_lines, fonts.regular, SUPPLIER_LOCATION_FONT_SIZE,
			cursor.current_y(), X_MARGIN, content_width, "RIGHT",
		)
		elements.append(location)
		cursor.advance(location.height, MEDIUM_GAP)

	layout = LabelLayout(page_width=page_width, page_height=page_height, elements=elements)
	bottom_limit = page_height - Y_MARGIN
	bottom = content_bottom(layout)
	if bottom > bottom_limit:
		raise LayoutOverflowError(
			f"Label for component {label_input.uid} needs {bottom:.1f} PS of height "
			f"but only {bottom_limit:.1f} PS fit on the page "
			f"({len(label_input.suppliers)} suppliers)"
		)
	for element in elements:
		if element.x < 0.0 or element.x + element.width > page_width:
			raise LayoutOverflowError(
				f"Label for component {label_input.uid}: {element.role} spans "
				f"{element.x:.1f} to {element.x + element.width:.1f} PS, "
				f"outside the {page_width:.1f} PS page width"
			)
	return layout


#============================================
def draw_text_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: PlacedElement,
	page_height: float,
) -> None:
	"""
	Draw a placed text block onto the PDF canvas.

	Args:
		pdf: ReportLab canvas.
		element: Text element.
		page_height: Page height, to flip top-down positions.
	"""
	pdf.setFillColorRGB(0.0, 0.0, 0.0)
	pdf.setFont(element.font_name, element.font_size)
	ascent = mp.layout.font_ascent(element.font_name, element.font_size)
	leading = mp.layout.compute_leading(element.font_size)
	for index, line in enumerate(element.lines):
		baseline_y = page_height - (element.top + ascent + index * leading)
		if element.align == "CENTER":
			pdf.drawCentredString(element.x + element.width / 2.0, baseline_y, line)
		elif element.align == "RIGHT":
			pdf.drawRightString(element.x + element.width, baseline_y, line)
		else:
			pdf.drawString(element.x, baseline_y, line)


#============================================
def draw_image_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: PlacedElement,
	image_reader: reportlab.lib.utils.ImageReader,
	page_height: float,
) -> None:
	"""
	Draw an image that covers the element box, clipped to the box.

	Args:
		pdf: ReportLab canvas.
		element: Image element.
		image_reader: ImageReader instance.
		page_height: Page height, to flip top-down positions.
	"""
	image_width, image_height = image_reader.getSize()
	box_x = element.x
	box_y = page_height - element.bottom
	scale = max(element.width / image_width, element.height / image_height)
	draw_width = image_width * scale
	draw_height = image_height * scale
	pdf.saveState()
	clip = pdf.beginPath()
	clip.rect(box_x, box_y, element.width, element.height)
	pdf.clipPath(clip, stroke=0, fill=0)
	pdf.drawImage(
		image_reader,
		box_x + (element.width - draw_width) / 2.0,
		box_y + (element.height - draw_height) / 2.0,
		width=draw_width,
		height=draw_height,
		mask=None,
		preserveAspectRatio=False,
		anchor="sw",
	)
	pdf.restoreState()


#============================================
def draw_logo(
	pdf: reportlab.pdfgen.canvas.Canvas,
	logo: reportlab.graphics.shapes.Drawing,
	x: float,
	y: float,
	height: float,
) -> None:
	"""
	Draw the brand mark scaled to a height.

	Args:
		pdf: ReportLab canvas.
		logo: Brand mark drawing.
		x: Left edge in PDF coordinates.
		y: Bottom edge in PDF coordinates.
		height: Target height in points.
	"""
	scale = height / logo.height
	pdf.saveState()
	pdf.translate(x, y)
	pdf.scale(scale, scale)
	reportlab.graphics.renderPDF.draw(logo, pdf, 0, 0)
	pdf.restoreState()



#============================================
def draw_layout(
	pdf: reportlab.pdfgen.canvas.Canvas,
	layout: LabelLayout,
	qr_reader: reportlab.lib.utils.ImageReader,
	logo: Drawing,
) -> None:
	"""
	Draw every planned element onto the PDF canvas.

	Args:
		pdf: ReportLab canvas.
		layout: Planned label layout.
		qr_reader: QR code image.
		logo: Parsed brand mark.
	"""
	page_height = layout.page_height
	for element in layout.elements:
		if element.kind == "text":
			draw_text_element(pdf, element, page_height)
			continue
		if element.kind == "qr":
			draw_image_element(pdf, element, qr_reader, page_height)
			continue
		if element.kind == "logo":
			draw_logo(pdf, logo, element.x, page_height - element.bottom, element.height)
			continue
		if element.kind == "rule":
			rule_y = page_height - element.top
			pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
			pdf.setLineWidth(RULE_THICKNESS)
			pdf.line(element.x, rule_y, element.x + element.width, rule_y)
			continue


#============================================
def load_qr_image(data: bytes) -> reportlab.lib.utils.ImageReader:
	"""
	Decode QR PNG bytes into an ImageReader.

	Args:
		data: Raster image bytes.

	Returns:
		ImageReader instance.
	"""
	image = PIL.Image.open(io.BytesIO(data))
	image.load()
	return reportlab.lib.utils.ImageReader(image.convert("RGB"))


#============================================
def render_label(
	label_input: LabelInput,
	sink: typing.BinaryIO,
	config: LabelConfig | None = None,
) -> LabelLayout:
	"""
	Render a single-page label PDF into a writable byte stream.

	Missing data, assets and overflow are detected before anything is
	written to the sink.

	Args:
		label_input: Label input.
		sink: Writable binary stream.
		config: Optional label configuration.

	Returns:
		The LabelLayout that was drawn.
	"""
	mp.records.validate_label_input(label_input)
	if config is None:
		config = mp.config.build_default_config()

	uid = label_input.uid
	try:
		fonts = mp.assets.load_fonts(config.font_set)
		logo = mp.assets.load_logo(config.logo_path)
		layout = plan_label(label_input, fonts, logo, config)
		qr_reader = load_qr_image(label_input.qr_image)

		logger.debug("Writing content for component %s", uid)
		pdf = reportlab.pdfgen.canvas.Canvas(
			sink,
			pagesize=(layout.page_width, layout.page_height),
			invariant=1,
		)
		pdf.setTitle(uid)
		pdf.setAuthor(config.author)
		pdf.setSubject(DOCUMENT_SUBJECT)
		pdf.setCreator(config.author)
		draw_layout(pdf, layout, qr_reader, logo)
		pdf.save()
	except LabelError:
		raise
	except Exception as error:
		raise RenderFailure(f"Failed to render label for component {uid}") from error
	logger.debug("Finished label for component %s", uid)
	return layout


#============================================
def write_label_to_stream(
	label_input: LabelInput,
	sink: typing.BinaryIO,
	config: LabelConfig | None = None,
) -> RenderResult:
	"""
	Render a label and report success or failure instead of raising.

	A failed result means whatever reached the sink must be discarded.

	Args:
		label_input: Label input.
		sink: Writable binary stream.
		config: Optional label configuration.

	Returns:
		RenderResult.
	"""
	logger.info("Generating pdf for component %s", label_input.uid)
	try:
		layout = render_label(label_input, sink, config)
	except LabelError as error:
		logger.exception("Failed to generate pdf for component %s", label_input.uid)
		return RenderResult(ok=False, error=error)
	return RenderResult(ok=True, layout=layout)


#============================================
def read_label_summary(data: bytes) -> LabelSummary:
	"""
	Read page count, page size and metadata back from a label PDF.

	Args:
		data: PDF bytes.

	Returns:
		LabelSummary.
	"""
	reader = pypdf.PdfReader(io.BytesIO(data))
	metadata = reader.metadata
	title = None
	author = None
	if metadata is not None:
		title = metadata.title
		author = metadata.author
	page_width = 0.0
	page_height = 0.0
	if reader.pages:
		box = reader.pages[0].mediabox
		page_width = float(box.width)
		page_height = float(box.height)
	return LabelSummary(
		pages=len(reader.pages),
		page_width=page_width,
		page_height=page_height,
		title=title,
		author=author,
	)
