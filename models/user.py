# backend/models/user.py
from pydantic import BaseModel, field_validator
from typing import Optional, Union

from models.errors import UserValidationError

REQUIRED_FIELDS = ("email", "password", "firstName", "lastName")


class User(BaseModel):
    firstName: Optional[str] = ""
    lastName: Optional[str] = ""
    email: Optional[str] = ""
    password: Optional[str] = ""

    @field_validator("firstName", "lastName", "email", "password", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        # null se trata igual que un campo ausente
        return "" if value is None else value


class StoredUser(User):
    # int en memoria, ObjectId (hex) en Mongo
    id: Union[int, str]


# ------------------------------------------------------------
# 🔹 Validación de campos obligatorios
# ------------------------------------------------------------
def validate_user(user: User) -> None:
    """Rechaza el usuario si algún campo obligatorio está vacío."""
    if any(getattr(user, field) == "" for field in REQUIRED_FIELDS):
        raise UserValidationError()
