"""
congregations/exceptions.py

Error taxonomy for the registry. Store, validators and the assignment
coordinator raise these; views turn them into JSON responses.
"""


class RegistryError(Exception):
    status = 400

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def as_dict(self):
        return {"error": self.message, **self.details}


class NotFound(RegistryError):
    """Requested id does not exist."""
    status = 404


class ValidationConflict(RegistryError):
    """A referential rule or a field rule was violated by the input."""
    status = 400


class DeleteConflict(RegistryError):
    """Deletion blocked because other records still point at the target."""
    status = 409


class PartialAssignmentFailure(RegistryError):
    """
    A dependent record update failed after the primary write.
    The surrounding transaction is rolled back before this reaches the caller.
    """
    status = 500
