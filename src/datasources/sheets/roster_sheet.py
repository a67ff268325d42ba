import httplib2
from googleapiclient.errors import HttpError
from google.auth.exceptions import GoogleAuthError

from datasources.roster_store import RosterStore
from integrations.google_api import read_sheet_data, update_sheet_cell, authenticate_service_account
from model.errors import StoreUnavailable, InvalidLocation
from log.logger import log

class SheetRosterStore(RosterStore):
  """Roster kept in one worksheet of a Google spreadsheet."""

  def __init__(self, spreadsheet_id, sheet_name=None, service=None, service_account_file=None):
    self.spreadsheet_id = spreadsheet_id
    self.sheet_name = sheet_name
    self._service = service
    self.service_account_file = service_account_file

  @classmethod
  def from_secrets(cls):
    from util.secrets import secret
    return cls(
      secret("roster_spreadsheet_id"),
      sheet_name=secret("roster_sheet_name", None),
      service_account_file=secret("google_service_account_file", None),
    )

  def service(self):
    if self._service is None:
      try:
        self._service = authenticate_service_account(self.service_account_file)
      except (GoogleAuthError, OSError, ValueError) as exc:
        raise StoreUnavailable(f"Unable to authenticate with Google: {exc}") from exc
    return self._service

  def describe(self):
    return f"{self.spreadsheet_id}/{self.sheet_name or '(first sheet)'}"

  def read_all_rows(self):
    try:
      rows = read_sheet_data(self.service(), self.spreadsheet_id, self.sheet_name)
    except HttpError as exc:
      raise StoreUnavailable(f"Google Sheets rejected read of {self.describe()}: HTTP {exc.resp.status}") from exc
    except (TimeoutError, OSError, httplib2.HttpLib2Error, GoogleAuthError) as exc:
      raise StoreUnavailable(f"Unable to read roster {self.describe()}: {exc}") from exc

    log.trace(f"Read {len(rows)} rows from roster {self.describe()}")
    return [[("" if cell is None else str(cell)) for cell in row] for row in rows]

  def update_cell(self, row, column, value):
    self.check_location(row, column)
    try:
      update_sheet_cell(self.service(), self.spreadsheet_id, self.sheet_name, row, column, value)
    except HttpError as exc:
      if exc.resp.status == 400:
        raise InvalidLocation(f"Google Sheets rejected cell row={row} column={column} in {self.describe()}", {"row": row, "column": column}) from exc
      raise StoreUnavailable(f"Google Sheets rejected write to {self.describe()}: HTTP {exc.resp.status}") from exc
    except (TimeoutError, OSError, httplib2.HttpLib2Error, GoogleAuthError) as exc:
      raise StoreUnavailable(f"Unable to write roster {self.describe()}: {exc}") from exc
    return True
