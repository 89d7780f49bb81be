"""
Pydantic models for reference values.

A reference value is a named numeric reference (for example the price of
an ounce of gold) with a description and an image URL.  The same shape
is used for the persisted file, request bodies and responses.  Fields
that are missing from a payload, or explicitly ``null``, take their zero
value and unknown fields are ignored.  ``reference`` must be a JSON
number; strings and booleans are rejected.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class _ZeroValueModel(BaseModel):
    """Base model that treats ``null`` fields as absent."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ReferenceValue(_ZeroValueModel):
    """A stored reference value.  The ``id`` is chosen by the client."""

    id: str = Field("", examples=["x1"])
    name: str = Field("", examples=["Gold"])
    reference: float = Field(0.0, strict=True, examples=[1900.5])
    description: str = Field("", examples=["Price per troy ounce in USD"])
    image_url: str = Field("", examples=["https://example.com/gold.png"])

    model_config = ConfigDict(extra="ignore", frozen=True)


class ReferenceValueUpdate(_ZeroValueModel):
    """Payload for replacing the mutable fields of a reference value.

    An ``id`` in the body is accepted but ignored; the id from the URL
    path identifies the record.
    """

    id: str | None = Field(None, examples=["ignored"])
    name: str = Field("", examples=["Gold"])
    reference: float = Field(0.0, strict=True, examples=[1950.0])
    description: str = Field("", examples=["Price per troy ounce in USD"])
    image_url: str = Field("", examples=["https://example.com/gold.png"])

    def mutable_fields(self) -> dict:
        """Return name, reference, description and image_url as a dict."""
        return self.model_dump(exclude={"id"})


# Codec for the backing file, which holds a JSON array of reference values.
ReferenceValueList = TypeAdapter(List[ReferenceValue])
