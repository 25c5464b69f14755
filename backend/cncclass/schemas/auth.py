"""
Schémas Pydantic pour l'inscription et la connexion.
"""

from pydantic import BaseModel, EmailStr, field_validator

from cncclass.schemas.profile import ProfileResponse

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # limite de bcrypt


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str
    display_name: str

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Le mot de passe doit contenir au moins {MIN_PASSWORD_LENGTH} caractères.")
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Le mot de passe ne peut pas dépasser {MAX_PASSWORD_BYTES} octets.")
        return v

    @field_validator("display_name")
    @classmethod
    def display_name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom affiché ne peut pas être vide.")
        return v.strip()


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    profile: ProfileResponse
