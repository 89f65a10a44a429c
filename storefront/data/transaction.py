# storefront/data/transaction.py
from contextlib import contextmanager

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import StoreError, Conflict, Internal, InvalidArgument
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def atomic(db: Session, action: str):
    """
    One commit for everything written inside the block, or none of it.

    Domain errors roll back and propagate unchanged; database failures roll
    back and surface as Internal, constraint violations as Conflict and
    out-of-range values as InvalidArgument.
    """
    try:
        yield
        db.commit()
    except StoreError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"{action} rejected by a constraint: {e.orig}")
        raise Conflict(f"{action} conflicts with a concurrent change") from e
    except DataError as e:
        db.rollback()
        logger.warning(f"{action} rejected by the database: {e.orig}")
        raise InvalidArgument(f"{action}: value out of range") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{action} failed, rolled back: {e}")
        raise Internal(f"{action} failed") from e
