"""
Pytest configuration for local imports and shared label fixtures.
"""

# Standard Library
import dataclasses
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

# local repo modules
import material_passport as mp  # noqa: E402
import material_passport.qr  # noqa: E402
import material_passport.records  # noqa: E402


MINIMAL_UID = "MP-000001"
MINIMAL_ORDER_REF = "ABC123"
MINIMAL_EPOCH = 1700000000


#============================================
@pytest.fixture(scope="session")
def qr_png() -> bytes:
	"""
	PNG QR code for the minimal component.
	"""
	return mp.qr.make_qr_png(f"https://passport.example.org/passport/{MINIMAL_UID}")


#============================================
@pytest.fixture
def minimal_input(qr_png: bytes) -> mp.records.LabelInput:
	"""
	Smallest valid label input: one supplier and a mass.
	"""
	return mp.records.LabelInput(
		uid=MINIMAL_UID,
		order_reference=MINIMAL_ORDER_REF,
		qr_image=qr_png,
		mass_kg=12.5,
		produced_at_epoch_seconds=MINIMAL_EPOCH,
		suppliers=(mp.records.Supplier(name="Acme Fabrication", location="Leeds, UK"),),
	)


#============================================
@pytest.fixture
def long_supplier_input(minimal_input: mp.records.LabelInput) -> mp.records.LabelInput:
	"""
	Label input with two suppliers whose names wrap onto a second line.
	"""
	suppliers = (
		mp.records.Supplier(name="Northern Timber Engineering Ltd", location="Leeds, UK"),
		mp.records.Supplier(name="Highland Modular Fabrication Co", location="Inverness, Scotland"),
	)
	return dataclasses.replace(minimal_input, suppliers=suppliers)
