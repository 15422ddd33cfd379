"""
QR code generation for component labels.
"""

# Standard Library
import io
import urllib.parse

# PIP3 modules
import PIL.Image
import qrcode
import qrcode.constants


# labels on components get dirty or damaged, so use the highest error correction
ERROR_CORRECTION = qrcode.constants.ERROR_CORRECT_H
QR_BOX_SIZE = 10
QR_BORDER = 2
PASSPORT_PATH = "passport"


#============================================
def build_component_url(base_url: str, uid: str) -> str:
	"""
	Build the public passport URL for a component.

	Args:
		base_url: Site root, e.g. "https://example.org".
		uid: Component unique identifier.

	Returns:
		URL string.
	"""
	root = base_url.rstrip("/")
	return f"{root}/{PASSPORT_PATH}/{urllib.parse.quote(uid, safe='')}"


#============================================
def make_qr_image(text: str) -> PIL.Image.Image:
	"""
	Encode text as a black on white QR image.

	Args:
		text: Text to encode.

	Returns:
		RGB PIL image.
	"""
	code = qrcode.QRCode(
		version=None,
		error_correction=ERROR_CORRECTION,
		box_size=QR_BOX_SIZE,
		border=QR_BORDER,
	)
	code.add_data(text)
	code.make(fit=True)
	image = code.make_image(fill_color="black", back_color="white")
	if not isinstance(image, PIL.Image.Image):
		image = image.get_image()
	return image.convert("RGB")


#============================================
def make_qr_png(text: str) -> bytes:
	"""
	Encode text as a PNG QR image.

	Args:
		text: Text to encode.

	Returns:
		PNG bytes.
	"""
	buffer = io.BytesIO()
	make_qr_image(text).save(buffer, format="PNG")
	return buffer.getvalue()
