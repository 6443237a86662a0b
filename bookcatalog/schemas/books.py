"""Schemas for catalog input."""

from pydantic import BaseModel, ConfigDict, Field


class BookCreate(BaseModel):
    """
    Fields submitted by the add-book form.

    Only ``title`` is known; any other string fields are accepted and kept
    as extra attributes of the book.
    """

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=1024)

    def extra_fields(self) -> dict[str, str]:
        """Submitted fields other than title, with empty values dropped."""
        extras = self.model_extra or {}
        return {
            str(key): str(value).strip()
            for key, value in extras.items()
            if value is not None and str(value).strip()
        }
