"""Wire models for the ingestion backend's read endpoints.

Every model here is produced by the backend and is never edited on the
client, so all of them are frozen.  Unknown fields in a payload are
ignored, which keeps the dashboard working when the backend adds fields.

``Document`` is a tagged union on ``doc_type``: a ``"text"`` document
carries ``content`` while a ``"triplet"`` document carries a
head / relation / tail fact.  Pydantic picks the right class from the tag.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Namespace(BaseModel):
    """A named partition of ingested documents."""

    model_config = ConfigDict(frozen=True)

    name: str
    count: int = Field(default=0, ge=0, description="Documents stored under this namespace.")


class Stats(BaseModel):
    """Aggregate corpus counters.  Always replaced as a whole, never merged."""

    model_config = ConfigDict(frozen=True)

    total_documents: int = Field(default=0, ge=0)
    vectorized: int = Field(default=0, ge=0)


class _DocumentBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    namespace: str
    # Kept as the backend's ISO-8601 string; parsed only when formatted.
    timestamp: str = ""


class TextDocument(_DocumentBase):
    """Free-text document as pasted by an operator."""

    doc_type: Literal["text"] = "text"
    content: str = ""


class TripletDocument(_DocumentBase):
    """Document expressing one head → relation → tail fact."""

    doc_type: Literal["triplet"] = "triplet"
    head: str = ""
    relation: str = ""
    tail: str = ""


Document = Annotated[Union[TextDocument, TripletDocument], Field(discriminator="doc_type")]

# Reused adapters; building a TypeAdapter is not free.
NAMESPACE_LIST = TypeAdapter(list[Namespace])
DOCUMENT_LIST = TypeAdapter(list[Document])
