# app/shared/database/transaction.py
from contextlib import contextmanager
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from app.core.exceptions import ConflictError, InternalError

logger = logging.getLogger(__name__)

@contextmanager
def unit_of_work(db: Session, operation: str):
    """
    Agrupa varias escrituras en una sola transacción.

    Confirma al salir del bloque; ante cualquier error hace rollback.
    Violaciones de unicidad se convierten en ConflictError y los demás
    errores de base de datos en InternalError; el resto
    (errores HTTP de validación incluidos) se propagan sin cambios.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"⚠️ Conflicto de integridad en '{operation}': {e.orig}")
        raise ConflictError(f"El registro ya existe ({operation})")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"❌ Error en '{operation}', cambios revertidos: {e}")
        raise InternalError(f"Error de base de datos en {operation}")
    except Exception:
        db.rollback()
        raise
