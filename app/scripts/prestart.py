# app/scripts/prestart.py
# Espera a que la base de datos acepte conexiones antes de arrancar la API
import logging
import sys
import time

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.db.session import Database

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

max_tries = 60
wait_seconds = 2


def main() -> int:
    db = Database.from_settings(settings).open()
    db_uri_censored = make_url(settings.DATABASE_URI).render_as_string(hide_password=True)
    logger.info(f"Esperando a la base de datos en: {db_uri_censored}")

    try:
        for i in range(1, max_tries + 1):
            try:
                db.ping()
                logger.info("Conexión a la base de datos establecida")
                return 0
            except SQLAlchemyError as e:
                logger.warning(f"Intento {i}/{max_tries}: Base de datos no está lista. Reintentando...")
                logger.debug(f"Error de conexión: {e}")
                time.sleep(wait_seconds)
    finally:
        db.close()

    logger.error("No se pudo conectar a la base de datos después de varios intentos. Saliendo.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
