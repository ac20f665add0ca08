# services/exceptions.py
"""
Service-layer errors. main.py maps each one to an HTTP status:

     NotFoundError      -> 404
     ConflictError      -> 409
     ValueError         -> 400
     TierRequiredError  -> 403
"""


class NotFoundError(ValueError):
     """A record does not exist or is not visible to the caller."""


class ConflictError(ValueError):
     """The request collides with existing data (duplicates, double booking)."""


class TierRequiredError(PermissionError):
     """The landlord's subscription plan does not include the feature."""
