import pytest

from model.header_mapping import detect_header, resolve_columns, HeaderMapping, DEFAULT_HEADER

@pytest.mark.parametrize("first_row", [
  ["id", "nombre", "asistencia"],
  ["  ID ", "Participante", "Estado"],
  ["Codigo", "NOMBRE", ""],
  ["x", "y", " Asistencia  "],
])
def test_header_detected_from_known_tokens(first_row):
  rows = [first_row, ["1", "Ana", ""]]
  has_header, labels = detect_header(rows)
  assert has_header is True
  assert labels == [cell.strip().lower() for cell in first_row]

@pytest.mark.parametrize("first_row", [
  ["42", "Ada Lovelace", ""],
  ["identifier", "full name", "attended"],
  [],
])
def test_no_header_uses_default_labels(first_row):
  has_header, labels = detect_header([first_row, ["43", "Grace", "SI"]])
  assert has_header is False
  assert labels == DEFAULT_HEADER

def test_empty_roster_has_no_header():
  assert detect_header([]) == (False, DEFAULT_HEADER)

def test_default_mapping_is_positional():
  assert resolve_columns(DEFAULT_HEADER) == HeaderMapping(0, 1, 2)
  assert resolve_columns([]) == HeaderMapping(0, 1, 2)

def test_columns_resolved_by_label_in_any_order():
  mapping = resolve_columns(["Asistencia", "Participante", "ID", "email"])
  assert mapping.id_column == 2
  assert mapping.name_column == 1
  assert mapping.attendance_column == 0

def test_name_label_priority():
  # "name" ranks above "full name" regardless of column order
  mapping = resolve_columns(["full name", "name", "id"])
  assert mapping.name_column == 1

  mapping = resolve_columns(["id", "Nombre y Apellido", "asistencia"])
  assert mapping.name_column == 1

  mapping = resolve_columns(["id", "fullname", "nombres", "asistencia"])
  assert mapping.name_column == 2

def test_unmatched_labels_fall_back_to_positions():
  mapping = resolve_columns(["id", "email", "telefono"])
  assert mapping == HeaderMapping(0, 1, 2)

def test_short_rows_read_as_empty_strings():
  mapping = HeaderMapping(0, 1, 2)
  row = [" 7 "]
  assert mapping.identifier(row) == "7"
  assert mapping.name(row) == ""
  assert mapping.attendance(row) == ""
