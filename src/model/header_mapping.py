ID_LABEL = "id"
NAME_LABEL = "nombre"
ATTENDANCE_LABEL = "asistencia"

HEADER_TOKENS = (ID_LABEL, NAME_LABEL, ATTENDANCE_LABEL)
DEFAULT_HEADER = [ID_LABEL, NAME_LABEL, ATTENDANCE_LABEL]

# checked in this order; the first label present wins
NAME_LABELS = (
  "nombre",
  "nombres",
  "participante",
  "name",
  "nombre y apellido",
  "fullname",
  "full name",
)

DEFAULT_ID_COLUMN = 0
DEFAULT_NAME_COLUMN = 1
DEFAULT_ATTENDANCE_COLUMN = 2

def normalize_label(cell):
  if cell is None:
    return ""
  return str(cell).strip().lower()

def detect_header(rows):
  """Returns (has_header, labels). The first row counts as a header when any of
  its cells reads id, nombre or asistencia once trimmed and lowercased."""
  if not rows:
    return False, list(DEFAULT_HEADER)

  labels = [normalize_label(cell) for cell in rows[0]]
  if any(token in labels for token in HEADER_TOKENS):
    return True, labels

  return False, list(DEFAULT_HEADER)

class HeaderMapping:
  """Column indices for the three roster fields, resolved once per read."""

  def __init__(self, id_column=DEFAULT_ID_COLUMN, name_column=DEFAULT_NAME_COLUMN, attendance_column=DEFAULT_ATTENDANCE_COLUMN):
    self.id_column = id_column
    self.name_column = name_column
    self.attendance_column = attendance_column

  @classmethod
  def resolve(cls, labels):
    labels = [normalize_label(label) for label in labels]

    id_column = labels.index(ID_LABEL) if ID_LABEL in labels else DEFAULT_ID_COLUMN
    attendance_column = labels.index(ATTENDANCE_LABEL) if ATTENDANCE_LABEL in labels else DEFAULT_ATTENDANCE_COLUMN

    name_column = DEFAULT_NAME_COLUMN
    for candidate in NAME_LABELS:
      if candidate in labels:
        name_column = labels.index(candidate)
        break

    return cls(id_column, name_column, attendance_column)

  def cell(self, row, column):
    # the Sheets API drops trailing empty cells, so short rows are normal
    if column < len(row) and row[column] is not None:
      return str(row[column])
    return ""

  def identifier(self, row):
    return self.cell(row, self.id_column).strip()

  def name(self, row):
    return self.cell(row, self.name_column)

  def attendance(self, row):
    return self.cell(row, self.attendance_column)

  def __eq__(self, other):
    if not isinstance(other, HeaderMapping):
      return NotImplemented
    return self.as_tuple() == other.as_tuple()

  def __hash__(self):
    return hash(self.as_tuple())

  def as_tuple(self):
    return (self.id_column, self.name_column, self.attendance_column)

  def __repr__(self):
    return f"HeaderMapping(id={self.id_column}, name={self.name_column}, attendance={self.attendance_column})"

def resolve_columns(labels):
  return HeaderMapping.resolve(labels)
