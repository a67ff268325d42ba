import csv

from model.errors import InvalidLocation

class RosterStore:
  """Tabular store behind the roster. Rows are 1-based (row 1 is the first row
  in the store, header or not); columns are 0-based indices."""

  def read_all_rows(self):
    raise NotImplementedError

  def update_cell(self, row, column, value):
    raise NotImplementedError

  def check_location(self, row, column):
    if not isinstance(row, int) or row < 1:
      raise InvalidLocation(f"Row must be a positive 1-based index, got {row!r}", {"row": row, "column": column})
    if not isinstance(column, int) or column < 0:
      raise InvalidLocation(f"Column must be a non-negative index, got {column!r}", {"row": row, "column": column})

class MemoryRosterStore(RosterStore):
  """Keeps the roster in a list of lists. Used offline and in tests; counts
  reads and records every write."""

  def __init__(self, rows=None):
    self.rows = [list(row) for row in (rows or [])]
    self.reads = 0
    self.writes = []

  @classmethod
  def from_csv(cls, path, encoding="utf-8-sig"):
    with open(path, newline="", encoding=encoding) as f:
      return cls([row for row in csv.reader(f)])

  def read_all_rows(self):
    self.reads += 1
    return [list(row) for row in self.rows]

  def update_cell(self, row, column, value):
    self.check_location(row, column)
    if row > len(self.rows):
      raise InvalidLocation(f"Row {row} is past the end of the roster ({len(self.rows)} rows)", {"row": row, "column": column})

    target = self.rows[row - 1]
    if column >= len(target):
      target.extend([""] * (column - len(target) + 1))
    target[column] = value
    self.writes.append((row, column, value))
    return True
