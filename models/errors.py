# backend/models/errors.py

class UserValidationError(Exception):
    """El payload de registro no trae todos los campos obligatorios."""

    def __init__(self, message: str = "Missing required fields"):
        super().__init__(message)
        self.message = message


class StorageError(Exception):
    """Fallo al escribir o leer del almacenamiento de usuarios."""
