"""
Label input model and translation from Airtable-style records.
"""

# Standard Library
import base64
import binascii
import dataclasses
import datetime
import logging

# local repo modules
import material_passport as mp
import material_passport.errors
import material_passport.qr


MissingDataError = mp.errors.MissingDataError

DATA_URL_PREFIX = "data:"

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Supplier:
	name: str
	location: str


@dataclasses.dataclass(frozen=True)
class LabelInput:
	uid: str
	order_reference: str
	qr_image: bytes
	mass_kg: float | None
	produced_at_epoch_seconds: float
	suppliers: tuple[Supplier, ...]


#============================================
def validate_label_input(label_input: LabelInput) -> None:
	"""
	Check that every value required for a label is present.

	Args:
		label_input: Label input to check.
	"""
	if not label_input.uid:
		raise MissingDataError("Component has no UID")
	if not label_input.order_reference:
		raise MissingDataError(f"No order reference for component {label_input.uid}")
	if not label_input.qr_image:
		raise MissingDataError(f"No QR image available for component {label_input.uid}")
	if not label_input.suppliers:
		raise MissingDataError(
			f"No suppliers for order {label_input.order_reference} of component {label_input.uid}"
		)


#============================================
def format_mass(mass_kg: float) -> str:
	"""
	Format a mass for the weight row.

	Args:
		mass_kg: Mass in kilograms.

	Returns:
		Text like "12 kg" or "12.5 kg".
	"""
	value = float(mass_kg)
	if value.is_integer():
		return f"{int(value)} kg"
	return f"{value} kg"


#============================================
def format_epoch_date(epoch_seconds: float) -> str:
	"""
	Format seconds since the Unix epoch as a UTC ISO date.

	Args:
		epoch_seconds: Seconds since epoch.

	Returns:
		Date string "YYYY-MM-DD".
	"""
	moment = datetime.datetime.fromtimestamp(epoch_seconds, tz=datetime.timezone.utc)
	return moment.date().isoformat()


#============================================
def decode_data_url(value: str) -> bytes:
	"""
	Decode a base64 data URL such as "data:image/png;base64,...".

	Args:
		value: Data URL or bare base64 string.

	Returns:
		Decoded bytes.
	"""
	payload = value.strip()
	if payload.startswith(DATA_URL_PREFIX):
		header, _, payload = payload.partition(",")
		if ";base64" not in header:
			raise MissingDataError(f"QR data URL is not base64 encoded: {header}")
	try:
		return base64.b64decode(payload, validate=True)
	except (binascii.Error, ValueError) as error:
		raise MissingDataError("QR data URL could not be decoded") from error


#============================================
def first_value(record: dict, key: str):
	"""
	Read a field that Airtable may return as a single-item list.

	Args:
		record: Record fields.
		key: Field name.

	Returns:
		Field value, first item for lists, or None.
	"""
	value = record.get(key)
	if isinstance(value, list):
		if not value:
			return None
		return value[0]
	return value


#============================================
def build_supplier(record: dict) -> Supplier:
	"""
	Build a Supplier from a supplier record.

	Args:
		record: Supplier record fields.

	Returns:
		Supplier.
	"""
	name = first_value(record, "supplierName") or ""
	location = first_value(record, "location") or ""
	return Supplier(name=str(name).strip(), location=str(location).strip())


#============================================
def build_label_input(
	component: dict,
	order: dict | None,
	suppliers: list[dict | None],
	qr_image: bytes | None = None,
	base_url: str | None = None,
) -> LabelInput:
	"""
	Translate component, order and supplier records into a LabelInput.

	The QR image is taken from qr_image, then from the component's stored
	base64 QR field, then generated from base_url when given.

	Args:
		component: Component record fields.
		order: Order record fields, or None when it could not be fetched.
		suppliers: Supplier records; None entries are skipped.
		qr_image: Optional PNG bytes for the QR code.
		base_url: Optional site root used to generate a QR code.

	Returns:
		Validated LabelInput.
	"""
	uid = str(first_value(component, "componentUid") or "").strip()
	if not uid:
		raise MissingDataError("Component record has no componentUid")
	if not order:
		raise MissingDataError(f"Failed to fetch order for component {uid}")
	order_reference = str(first_value(order, "orderRef") or "").strip()

	if qr_image is None:
		stored_qr = first_value(component, "qrCodeBase64")
		if stored_qr:
			qr_image = decode_data_url(str(stored_qr))
		elif base_url:
			url = mp.qr.build_component_url(base_url, uid)
			logger.debug("Generating QR code for %s", url)
			qr_image = mp.qr.make_qr_png(url)
	if not qr_image:
		raise MissingDataError(f"No QR data image passed in, or otherwise available on component {uid}")

	supplier_list = tuple(build_supplier(record) for record in suppliers if record)
	if not supplier_list:
		raise MissingDataError(f"Failed to fetch supplier(s) for order {order_reference}")

	mass = first_value(component, "totalMass")
	mass_kg = None
	if mass is not None and mass != "":
		try:
			mass_kg = float(mass)
		except (TypeError, ValueError) as error:
			raise MissingDataError(f"Mass on component {uid} is not a number: {mass!r}") from error

	created_at = first_value(component, "createdAt")
	if created_at is None:
		raise MissingDataError(f"No creation time on component {uid}")
	try:
		produced_at = float(created_at)
	except (TypeError, ValueError) as error:
		raise MissingDataError(f"Creation time on component {uid} is not a number: {created_at!r}") from error

	label_input = LabelInput(
		uid=uid,
		order_reference=order_reference,
		qr_image=qr_image,
		mass_kg=mass_kg,
		produced_at_epoch_seconds=produced_at,
		suppliers=supplier_list,
	)
	validate_label_input(label_input)
	return label_input
