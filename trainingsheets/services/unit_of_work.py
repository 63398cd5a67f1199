from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from trainingsheets.errors import ConflictError, StorageError


class UnitOfWork:
    """Transactional boundary for a composite write.

    Everything added to the session inside the ``with`` block is committed
    together on a clean exit. Any exception rolls the whole block back, so a
    parent row is never left behind without the children it was created with.
    Use ``session.flush()`` inside the block to obtain generated ids.
    """

    def __init__(self, session: Session):
        self.session = session

    def __enter__(self) -> Session:
        return self.session

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            try:
                self.session.commit()
            except IntegrityError as err:
                self.session.rollback()
                raise ConflictError("Write conflicts with an existing record") from err
            except SQLAlchemyError as err:
                self.session.rollback()
                raise StorageError("Failed to commit changes") from err
            return False

        self.session.rollback()
        if isinstance(exc, IntegrityError):
            raise ConflictError("Write conflicts with an existing record") from exc
        if isinstance(exc, SQLAlchemyError):
            raise StorageError("Failed to write changes") from exc
        return False
