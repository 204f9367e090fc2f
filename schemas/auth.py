import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr, Field, SecretStr, constr

# English letters, digits and the usual keyboard symbols
_PASSWORD_CHARS = re.compile(r"^[A-Za-z0-9!@#$%^&*()_\-+=\[\]{};:'\",.<>/?|`~]+$")


def validate_password(v: SecretStr) -> SecretStr:
    password = v.get_secret_value()
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")
    if not _PASSWORD_CHARS.fullmatch(password):
        raise ValueError("Password may contain only English letters, digits and special symbols, without spaces")
    return v


ValidatePassword = Annotated[SecretStr, AfterValidator(validate_password)]
Username = constr(strip_whitespace=True, min_length=3, max_length=50)


class RegisterIn(BaseModel):
    email: EmailStr
    username: Username
    password: ValidatePassword
    native_language: constr(strip_whitespace=True, min_length=1, max_length=50) = "English"


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class UserOut(BaseModel):
    id: int
    email: EmailStr
    username: str
