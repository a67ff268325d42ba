from model.header_mapping import detect_header, HeaderMapping
from model.participant import Participant, ATTENDANCE_TOKEN
from model.errors import InvalidInput, ParticipantNotFound
from log.logger import log

class RosterSnapshot:
  """One read of the store: the raw rows plus the header decision and column mapping derived from them."""

  def __init__(self, rows):
    self.rows = rows
    self.has_header, self.labels = detect_header(rows)
    self.mapping = HeaderMapping.resolve(self.labels)

  def first_data_row(self):
    # store rows are 1-based; a header pushes the data down one row
    return 2 if self.has_header else 1

  def data_rows(self):
    return self.rows[1:] if self.has_header else self.rows

  def participants(self):
    first = self.first_data_row()
    for offset, row in enumerate(self.data_rows()):
      yield Participant(
        self.mapping.identifier(row),
        self.mapping.name(row),
        self.mapping.attendance(row),
        first + offset,
      )

class AttendanceResult:
  def __init__(self, participant, already_marked):
    self.participant = participant
    self.already_marked = already_marked

  def web_info(self):
    return {
      "identifier": self.participant.identifier,
      "display_name": self.participant.display_name,
      "already_marked": self.already_marked,
    }

class Roster:
  """Participant lookups and attendance marking over a RosterStore. Nothing is
  cached; every call re-reads the store."""

  def __init__(self, store):
    self.store = store

  def snapshot(self):
    return RosterSnapshot(self.store.read_all_rows())

  def find_by_identifier(self, identifier):
    identifier = self.clean_identifier(identifier)
    return self.find_in(self.snapshot(), identifier)

  def find_in(self, snapshot, identifier):
    identifier = self.clean_identifier(identifier)
    for participant in snapshot.participants():
      # duplicate IDs: the first row wins, later rows are shadowed
      if participant.identifier == identifier:
        return participant
    raise ParticipantNotFound(identifier)

  def confirm_attendance(self, identifier):
    identifier = self.clean_identifier(identifier)
    snapshot = self.snapshot()
    participant = self.find_in(snapshot, identifier)

    if participant.attendance_marked:
      log.debug(f"Attendance for {identifier} already marked at row {participant.row_location}")
      return AttendanceResult(participant, True)

    self.store.update_cell(participant.row_location, snapshot.mapping.attendance_column, ATTENDANCE_TOKEN)
    participant.attendance_value = ATTENDANCE_TOKEN
    log.info(f"Marked attendance for {identifier} ({participant.display_name}) at row {participant.row_location}")
    return AttendanceResult(participant, False)

  def list_all(self):
    return list(self.snapshot().participants())

  def clean_identifier(self, identifier):
    cleaned = str(identifier if identifier is not None else "").strip()
    if not cleaned:
      raise InvalidInput("Missing participant id")
    return cleaned
