ATTENDANCE_TOKEN = "SI"

def is_attendance_marked(value):
  return str(value or "").strip().lower() == ATTENDANCE_TOKEN.lower()

def display_name_for(name, identifier):
  name = str(name or "").strip()
  if name:
    return name
  return f"ID {identifier}"

class Participant:
  """One roster row, rebuilt on every read. row_location is the 1-based row in
  the backing store; only the roster and its store should interpret it."""

  def __init__(self, identifier, name, attendance_value, row_location):
    self.identifier = identifier
    self.name = name
    self.attendance_value = attendance_value
    self.row_location = row_location

  @property
  def display_name(self):
    return display_name_for(self.name, self.identifier)

  @property
  def attendance_marked(self):
    return is_attendance_marked(self.attendance_value)

  def web_info(self):
    return {
      "identifier": self.identifier,
      "name": self.name,
      "display_name": self.display_name,
      "attendance_marked": self.attendance_marked,
    }

  def __repr__(self):
    return f"Participant({self.identifier!r}, {self.display_name!r}, marked={self.attendance_marked}, row={self.row_location})"
