"""
Font and logo asset resolution for label rendering.
"""

# Standard Library
import dataclasses
import logging
import pathlib

# PIP3 modules
import defusedxml.ElementTree
import reportlab.graphics.shapes
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts
import svglib.svglib

# local repo modules
import material_passport as mp
import material_passport.config
import material_passport.errors


FontSet = mp.config.FontSet
AssetUnavailableError = mp.errors.AssetUnavailableError

FONT_ROLES = mp.config.FONT_ROLES

logger = logging.getLogger(__name__)

# registered font name by resolved file path and role, filled once per process
_registered_fonts: dict[tuple[str, str], str] = {}


@dataclasses.dataclass(frozen=True)
class LabelFonts:
	regular: str
	bold: str
	semibold: str
	thin: str


#============================================
def sanitize_token(value: str) -> str:
	"""
	Sanitize a string for use in a PDF font name.

	Args:
		value: Input string.

	Returns:
		Sanitized string.
	"""
	result: list[str] = []
	for char in value:
		if char.isalnum():
			result.append(char)
		else:
			result.append("-")
	sanitized = "".join(result).strip("-")
	if not sanitized:
		return "font"
	return sanitized


#============================================
def register_font(role: str, path: pathlib.Path) -> str:
	"""
	Register a TrueType font with reportlab, once per file and role.

	Args:
		role: Font role such as "regular" or "thin".
		path: TrueType font file.

	Returns:
		Registered font name.
	"""
	resolved = pathlib.Path(path).resolve()
	key = (str(resolved), role)
	if key in _registered_fonts:
		return _registered_fonts[key]
	if not resolved.is_file():
		raise AssetUnavailableError(f"Font file for role '{role}' not found: {resolved}")
	font_name = f"MP-{role}-{sanitize_token(resolved.stem)}"
	if font_name in _registered_fonts.values():
		# same file name in another directory
		font_name = f"{font_name}-{len(_registered_fonts)}"
	try:
		font = reportlab.pdfbase.ttfonts.TTFont(font_name, str(resolved))
	except (OSError, reportlab.pdfbase.ttfonts.TTFError) as error:
		raise AssetUnavailableError(f"Failed to load font for role '{role}' from {resolved}") from error
	reportlab.pdfbase.pdfmetrics.registerFont(font)
	_registered_fonts[key] = font_name
	logger.debug("Registered font %s from %s", font_name, resolved)
	return font_name


#============================================
def load_fonts(font_set: FontSet) -> LabelFonts:
	"""
	Register every font in a font set.

	Args:
		font_set: Font files by role.

	Returns:
		LabelFonts with registered font names.
	"""
	names = {role: register_font(role, getattr(font_set, role)) for role in FONT_ROLES}
	return LabelFonts(**names)


#============================================
def load_logo(path: pathlib.Path) -> reportlab.graphics.shapes.Drawing:
	"""
	Read and convert the brand mark SVG into a reportlab drawing.

	The file is parsed strictly with defusedxml first; svglib recovers
	from broken markup silently, so malformed files are caught here.

	Args:
		path: SVG file path.

	Returns:
		Drawing in the SVG's own units.
	"""
	path = pathlib.Path(path)
	try:
		data = path.read_bytes()
	except OSError as error:
		raise AssetUnavailableError(f"Logo asset could not be read: {path}") from error
	try:
		root = defusedxml.ElementTree.fromstring(data)
	except (ValueError, SyntaxError) as error:
		raise AssetUnavailableError(f"Logo asset could not be parsed: {path}") from error
	tag = root.tag.rsplit("}", 1)[-1] if isinstance(root.tag, str) else ""
	if tag != "svg":
		raise AssetUnavailableError(f"Logo asset is not an SVG document: {path}")
	drawing = svglib.svglib.svg2rlg(str(path))
	if drawing is None or drawing.width <= 0 or drawing.height <= 0:
		raise AssetUnavailableError(f"Logo asset has no drawable size: {path}")
	logger.debug("Loaded logo %s at %.1f x %.1f", path, drawing.width, drawing.height)
	return drawing

