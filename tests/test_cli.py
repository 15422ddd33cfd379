import base64
import json
import pathlib

import material_passport as mp
import material_passport.cli
import material_passport.render


#============================================
def write_records(path: pathlib.Path, qr_png: bytes, suppliers: list) -> None:
	"""
	Write a records JSON file for the CLI.
	"""
	encoded = base64.b64encode(qr_png).decode("ascii")
	data = {
		"component": {
			"componentUid": "MP-000001",
			"qrCodeBase64": f"data:image/png;base64,{encoded}",
			"totalMass": 12.5,
			"createdAt": 1700000000,
		},
		"order": {"orderRef": "ABC123"},
		"suppliers": suppliers,
	}
	path.write_text(json.dumps(data), encoding="utf-8")


#============================================
def test_cli_writes_label(tmp_path: pathlib.Path, qr_png: bytes) -> None:
	"""
	The CLI renders a label PDF from a records file.
	"""
	input_path = tmp_path / "records.json"
	output_path = tmp_path / "label.pdf"
	write_records(input_path, qr_png, [{"supplierName": "Acme Fabrication", "location": "Leeds, UK"}])
	exit_code = mp.cli.main([str(input_path), "-o", str(output_path)])
	assert exit_code == 0
	summary = mp.render.read_label_summary(output_path.read_bytes())
	assert summary.pages == 1
	assert summary.title == "MP-000001"
	assert not (tmp_path / "label.pdf.part").exists()


#============================================
def test_cli_missing_suppliers_fails(tmp_path: pathlib.Path, qr_png: bytes) -> None:
	"""
	Missing suppliers exit non-zero without writing output.
	"""
	input_path = tmp_path / "records.json"
	output_path = tmp_path / "label.pdf"
	write_records(input_path, qr_png, [])
	exit_code = mp.cli.main([str(input_path), "-o", str(output_path)])
	assert exit_code == 1
	assert not output_path.exists()


#============================================
def test_cli_overflow_leaves_no_partial_file(tmp_path: pathlib.Path, qr_png: bytes) -> None:
	"""
	A label that cannot fit exits non-zero and removes the partial file.
	"""
	input_path = tmp_path / "records.json"
	output_path = tmp_path / "label.pdf"
	suppliers = [
		{"supplierName": f"Supplier {index}", "location": "Leeds, UK"}
		for index in range(8)
	]
	write_records(input_path, qr_png, suppliers)
	exit_code = mp.cli.main([str(input_path), "-o", str(output_path)])
	assert exit_code == 1
	assert not output_path.exists()
	assert not (tmp_path / "label.pdf.part").exists()


#============================================
def test_cli_bad_mass_fails(tmp_path: pathlib.Path, qr_png: bytes) -> None:
	"""
	A non-numeric mass exits non-zero without writing output.
	"""
	input_path = tmp_path / "records.json"
	output_path = tmp_path / "label.pdf"
	write_records(input_path, qr_png, [{"supplierName": "Acme Fabrication", "location": "Leeds, UK"}])
	data = json.loads(input_path.read_text(encoding="utf-8"))
	data["component"]["totalMass"] = "n/a"
	input_path.write_text(json.dumps(data), encoding="utf-8")
	exit_code = mp.cli.main([str(input_path), "-o", str(output_path)])
	assert exit_code == 1
	assert not output_path.exists()
