"""Data models for quiz questions."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class Option(BaseModel):
    """A lettered answer choice."""
    model_config = ConfigDict(frozen=True)

    letter: str = Field(pattern=r"^[A-Z]$")
    text: str

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("option text must not be empty")
        return value


class Question(BaseModel):
    """A quiz question; free-text when it has no options."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    stem: str
    options: tuple[Option, ...] = Field(default=(), description="Options in document order")

    @field_validator("stem")
    @classmethod
    def _stem_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("question stem must not be empty")
        return value

    @computed_field
    @property
    def type(self) -> Literal["choice", "text"]:
        return "choice" if self.options else "text"
