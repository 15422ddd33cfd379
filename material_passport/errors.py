"""
Exceptions raised while building and rendering labels.
"""


class LabelError(Exception):
	"""
	Base class for label generation failures.
	"""


class MissingDataError(LabelError):
	"""
	A required upstream value (order, QR image, suppliers) is absent.
	"""


class AssetUnavailableError(LabelError):
	"""
	A font or logo asset could not be loaded.
	"""


class LayoutOverflowError(LabelError):
	"""
	The planned content does not fit on the single label page.
	"""


class RenderFailure(LabelError):
	"""
	Any other failure while composing or writing the document.
	"""
