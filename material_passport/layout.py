"""
Layout primitives: the vertical cursor, text measurement and font fitting.
"""

# Standard Library
import logging

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import material_passport as mp
import material_passport.config


LEADING_FACTOR = mp.config.LEADING_FACTOR
MIN_FONT_SIZE = mp.config.MIN_FONT_SIZE

logger = logging.getLogger(__name__)


class LayoutCursor:
	"""
	Next unused vertical position on the page, measured down from the top edge.
	"""

	def __init__(self, start_y: float = 0.0) -> None:
		self._y = start_y

	def advance(self, delta_height: float, gap: float = 0.0) -> None:
		self._y += delta_height + gap

	def current_y(self) -> float:
		return self._y


#============================================
def text_width(text: str, font_name: str, font_size: float) -> float:
	"""
	Measure the rendered width of a string.

	Args:
		text: Text content.
		font_name: Registered font name.
		font_size: Font size in points.

	Returns:
		Width in points.
	"""
	return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size)


#============================================
def font_ascent(font_name: str, font_size: float) -> float:
	"""
	Ascent above the baseline for a font at a size.

	Args:
		font_name: Registered font name.
		font_size: Font size in points.

	Returns:
		Ascent in points.
	"""
	return reportlab.pdfbase.pdfmetrics.getAscent(font_name) * font_size / 1000.0


#============================================
def line_height(font_name: str, font_size: float) -> float:
	"""
	Height of a single line of text, from ascender to descender.

	Args:
		font_name: Registered font name.
		font_size: Font size in points.

	Returns:
		Line height in points.
	"""
	ascent = reportlab.pdfbase.pdfmetrics.getAscent(font_name)
	descent = reportlab.pdfbase.pdfmetrics.getDescent(font_name)
	return (ascent - descent) * font_size / 1000.0


#============================================
def compute_leading(font_size: float) -> float:
	return font_size * LEADING_FACTOR


#============================================
def split_long_word(word: str, font_name: str, font_size: float, max_width: float) -> list[str]:
	"""
	Break a word wider than max_width at character boundaries.

	Args:
		word: Word without whitespace.
		font_name: Registered font name.
		font_size: Font size in points.
		max_width: Maximum piece width in points.

	Returns:
		Pieces that each fit max_width, except a single glyph wider than it.
	"""
	pieces: list[str] = []
	current = ""
	for char in word:
		candidate = current + char
		if current and text_width(candidate, font_name, font_size) > max_width:
			pieces.append(current)
			current = char
			continue
		current = candidate
	if current:
		pieces.append(current)
	return pieces


#============================================
def wrap_text(text: str, font_name: str, font_size: float, max_width: float) -> list[str]:
	"""
	Split text into lines that fit a width.

	Lines break on whitespace; a word that alone is wider than the
	width starts a new line and is broken between characters.

	Args:
		text: Text content.
		font_name: Registered font name.
		font_size: Font size in points.
		max_width: Maximum line width in points.

	Returns:
		Wrapped lines; a single empty line for empty text.
	"""
	words = text.split()
	if not words:
		return [""]
	lines: list[str] = []
	current = ""
	for word in words:
		if text_width(word, font_name, font_size) > max_width:
			if current:
				lines.append(current)
			pieces = split_long_word(word, font_name, font_size, max_width)
			lines.extend(pieces[:-1])
			current = pieces[-1]
			continue
		candidate = word if not current else f"{current} {word}"
		if not current or text_width(candidate, font_name, font_size) <= max_width:
			current = candidate
			continue
		lines.append(current)
		current = word
	if current:
		lines.append(current)
	return lines


#============================================
def block_height(line_count: int, font_name: str, font_size: float) -> float:
	"""
	Height of a block of wrapped lines.

	Args:
		line_count: Number of lines.
		font_name: Registered font name.
		font_size: Font size in points.

	Returns:
		Block height in points.
	"""
	if line_count <= 0:
		return 0.0
	return line_height(font_name, font_size) + compute_leading(font_size) * (line_count - 1)


#============================================
def fit_font_size(
	text: str,
	font_name: str,
	max_width: float,
	max_font_size: int,
	min_font_size: int = MIN_FONT_SIZE,
) -> int:
	"""
	Find the largest integer font size at which text fits a width.

	Sizes are tried one point at a time from max_font_size down. When
	nothing down to min_font_size fits, min_font_size is returned.

	Args:
		text: Text content.
		font_name: Registered font name.
		max_width: Target width in points.
		max_font_size: Largest size to consider.
		min_font_size: Smallest size to return.

	Returns:
		Font size in points.
	"""
	min_font_size = max(1, min_font_size)
	font_size = max(int(max_font_size), min_font_size)
	while font_size > min_font_size and text_width(text, font_name, font_size) > max_width:
		font_size -= 1
	if text_width(text, font_name, font_size) > max_width:
		logger.warning(
			"Text '%s' does not fit width %.1f even at minimum font size %d",
			text,
			max_width,
			font_size,
		)
	else:
		logger.debug("Text '%s' fits width %.1f at font size %d", text, max_width, font_size)
	return font_size
