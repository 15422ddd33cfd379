"""
Shared configuration and constants for label rendering.
"""

# Standard Library
import dataclasses
import os
import pathlib

# PIP3 modules
import reportlab
import reportlab.lib.pagesizes


PAGE_SIZE = reportlab.lib.pagesizes.A6

CENTRAL_COLUMN_WIDTH = 160.0
X_MARGIN = 70.0
Y_MARGIN = 20.0
LOGO_HEIGHT = 50.0
MINOR_GAP = 2.0
MEDIUM_GAP = 5.0
MAJOR_GAP = 10.0

HEADING_FONT_SIZE = 24.0
ORDER_REF_MAX_FONT_SIZE = 15
ROW_FONT_SIZE = 11.0
SUPPLIER_NAME_FONT_SIZE = 11.0
SUPPLIER_LOCATION_FONT_SIZE = 9.0
MIN_FONT_SIZE = 6
LEADING_FACTOR = 1.2
RULE_THICKNESS = 0.75

DOCUMENT_AUTHOR = "Material Passport"
DOCUMENT_SUBJECT = "Component label"

WEIGHT_LABEL = "WEIGHT:"
DATE_LABEL = "DATE:"
PRODUCED_BY_LABEL = "PRODUCED BY:"

FONT_ROLES = ("regular", "bold", "semibold", "thin")

DATA_DIR = pathlib.Path(__file__).resolve().parent / "data"
DEFAULT_LOGO_PATH = DATA_DIR / "brand_mark.svg"
REPORTLAB_FONTS_DIR = pathlib.Path(os.path.dirname(reportlab.__file__)) / "fonts"

INTER_FONT_FILES = {
	"regular": "Inter-VariableFont_opsz,wght.ttf",
	"bold": "Inter_18pt-Bold.ttf",
	"semibold": "Inter_24pt-SemiBold.ttf",
	"thin": "Inter_24pt-Thin.ttf",
}
VERA_FONT_FILES = {
	"regular": "Vera.ttf",
	"bold": "VeraBd.ttf",
	"semibold": "VeraBd.ttf",
	"thin": "Vera.ttf",
}


@dataclasses.dataclass(frozen=True)
class FontSet:
	regular: pathlib.Path
	bold: pathlib.Path
	semibold: pathlib.Path
	thin: pathlib.Path


@dataclasses.dataclass(frozen=True)
class LabelConfig:
	font_set: FontSet
	logo_path: pathlib.Path
	author: str = DOCUMENT_AUTHOR
	min_font_size: int = MIN_FONT_SIZE


#============================================
def font_set_from_directory(font_dir: pathlib.Path, file_names: dict[str, str]) -> FontSet:
	"""
	Build a font set from a directory and a role to file name mapping.

	Args:
		font_dir: Directory holding the font files.
		file_names: File name for each font role.

	Returns:
		FontSet.
	"""
	paths = {role: pathlib.Path(font_dir) / file_names[role] for role in FONT_ROLES}
	return FontSet(**paths)


#============================================
def default_font_set() -> FontSet:
	"""
	Font set built from the Vera family bundled with reportlab.

	Returns:
		FontSet.
	"""
	return font_set_from_directory(REPORTLAB_FONTS_DIR, VERA_FONT_FILES)


#============================================
def inter_font_set(font_dir: pathlib.Path) -> FontSet:
	"""
	Font set for the Inter family stored in a directory.

	Args:
		font_dir: Directory holding the Inter font files.

	Returns:
		FontSet.
	"""
	return font_set_from_directory(font_dir, INTER_FONT_FILES)


#============================================
def build_default_config() -> LabelConfig:
	"""
	Build the default label configuration.

	Returns:
		LabelConfig.
	"""
	return LabelConfig(
		font_set=default_font_set(),
		logo_path=DEFAULT_LOGO_PATH,
	)
