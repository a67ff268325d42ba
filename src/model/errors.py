"""Error taxonomy for the check-in desk.

InvalidInput and ParticipantNotFound are expected outcomes of ordinary
requests. StoreUnavailable, InvalidLocation and EncodingFailure are infrastructure faults.
AssetMissing is recovered locally by the renderer and never reaches a caller.
"""

class CheckinError(Exception):
  status = 500

  def __init__(self, message=None, data=None):
    self.message = message
    self.data = data
    super().__init__(message)

class InvalidInput(CheckinError):
  """A request is missing its identifier, or it is blank."""
  status = 400

class ParticipantNotFound(CheckinError):
  """No roster row matches the requested identifier."""
  status = 404

  def __init__(self, identifier):
    self.identifier = identifier
    super().__init__(f"Participant {identifier!r} not found", {"identifier": identifier})

class StoreUnavailable(CheckinError):
  """The roster store could not be read or written (network, credentials, quota)."""
  status = 503

class InvalidLocation(CheckinError):
  """A cell write addressed a row or column the store does not accept. The address
  is computed from the roster mapping, so this is a server fault."""
  status = 500

class AssetMissing(CheckinError):
  """An optional asset (the logo) is absent or cannot be decoded."""
  status = 404

class EncodingFailure(CheckinError):
  """The QR code or the final image could not be encoded."""
  status = 500
