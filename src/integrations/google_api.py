from googleapiclient.discovery import build
from google.oauth2.service_account import Credentials

from log.logger import log

"""Provides helper methods for dealing with the Google Sheets API."""

SCOPES = [
  'https://www.googleapis.com/auth/spreadsheets'
]

READ_RANGE = "A1:ZZ"

# Authenticate with the service account
def authenticate_service_account(service_account_file=None):
  if service_account_file is None:
    service_account_file = "google_service_account.json"
  creds = Credentials.from_service_account_file(service_account_file, scopes=SCOPES)
  return {
    'sheets': build('sheets', 'v4', credentials=creds, cache_discovery=False)
  }

def column_letter(column_index):
  """0 -> A, 25 -> Z, 26 -> AA."""
  if column_index < 0:
    raise ValueError(f"Column index must be non-negative, got {column_index}")

  letters = ""
  n = column_index + 1
  while n > 0:
    n, remainder = divmod(n - 1, 26)
    letters = chr(ord('A') + remainder) + letters
  return letters

def quote_sheet_name(sheet_name):
  if sheet_name is None:
    return None
  if sheet_name.replace("_", "").isalnum():
    return sheet_name
  return "'" + sheet_name.replace("'", "''") + "'"

def a1_range(sheet_name, cells):
  quoted = quote_sheet_name(sheet_name)
  return f"{quoted}!{cells}" if quoted else cells

def cell_reference(sheet_name, row, column_index):
  return a1_range(sheet_name, f"{column_letter(column_index)}{row}")

def read_sheet_data(service, file, sheet_name=None):
  range_name = a1_range(sheet_name, READ_RANGE)
  log.debug(f"Reading range {range_name} of file id {file}")

  result = service['sheets'].spreadsheets().values().get(
    spreadsheetId=file,
    range=range_name
  ).execute()

  # Return empty list if no data
  if 'values' not in result:
    return []

  return result['values']

def update_sheet_cell(service, file, sheet_name, row, column_index, value):
  range_name = cell_reference(sheet_name, row, column_index)
  log.debug(f"Writing {value!r} to {range_name} of file id {file}")

  return service['sheets'].spreadsheets().values().update(
    spreadsheetId=file,
    range=range_name,
    valueInputOption='RAW',
    body={'values': [[value]]}
  ).execute()
