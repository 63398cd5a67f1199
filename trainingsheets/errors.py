"""Error taxonomy raised by the composition engine.

Services raise these and never log or build responses; the HTTP layer in
``trainingsheets.main`` maps each class to a status code.
"""


class TrainingSheetsError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrainingSheetsError):
    """Malformed or missing input. ``field`` names the offending input."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ReferenceNotFoundError(TrainingSheetsError):
    """A nested foreign-key target does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} with id {entity_id} does not exist")
        self.entity = entity
        self.entity_id = entity_id


class NotFoundError(TrainingSheetsError):
    """The primary subject of a read, update or delete does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: int | str | None = None):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(TrainingSheetsError):
    status_code = 409


class StorageError(TrainingSheetsError):
    """Persistence or file storage failure. Never retried."""

    status_code = 500
