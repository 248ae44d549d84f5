# app/scripts/hash_password.py
# Genera el hash bcrypt para la variable de entorno ADMIN_PASSWORD
import getpass
import sys

from app.core.security import get_password_hash


def main() -> int:
    password = getpass.getpass("Contraseña del administrador: ")
    if not password:
        print("La contraseña no puede estar vacía", file=sys.stderr)
        return 1
    if password != getpass.getpass("Repite la contraseña: "):
        print("Las contraseñas no coinciden", file=sys.stderr)
        return 1
    print(get_password_hash(password))
    return 0


if __name__ == "__main__":
    sys.exit(main())
