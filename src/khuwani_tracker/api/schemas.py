"""Pydantic models for request bodies."""

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(_CamelModel):
    """Organizer registration form."""

    email: str
    password: str
    confirm_password: str = Field(alias="confirmPassword")


class LoginRequest(_CamelModel):
    """Organizer login form."""

    email: str
    password: str


class CreateKhuwaniRequest(_CamelModel):
    """New khuwani form."""

    marhoom_name: str = Field(alias="marhoomName")


class ClaimRequest(_CamelModel):
    """Body shared by claim and unclaim."""

    quran_number: int = Field(alias="quranNumber", strict=True)
    sipara_number: int = Field(alias="siparaNumber", strict=True)
    participant_name: str = Field(alias="participantName")
