"""Input document schema: the JSON exported by the DI graph scanner."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from di_lens.models import EdgeKind

logger = logging.getLogger(__name__)


class DocumentError(ValueError):
    """Raised when an input document cannot be read or fails validation."""


class TypeEntry(BaseModel):
    id: str
    module: Optional[str] = None
    package: Optional[str] = None


class ProviderEntry(BaseModel):
    id: str
    type: str
    owner: str
    module: Optional[str] = None
    requires: list[str]


class ConsumerEntry(BaseModel):
    id: str
    needs: str
    owner: str
    module: Optional[str] = None


class EdgeEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    kind: EdgeKind


class DocumentMetrics(BaseModel):
    """Advisory counts shipped by the scanner. Never trusted by the builder."""
    model_config = ConfigDict(populate_by_name=True)

    generated_at: Optional[str] = Field(default=None, alias="generatedAt")
    module_count: Optional[float] = Field(default=None, alias="moduleCount")
    node_count: Optional[float] = Field(default=None, alias="nodeCount")
    edge_count: Optional[float] = Field(default=None, alias="edgeCount")


class GraphDocument(BaseModel):
    types: list[TypeEntry]
    providers: list[ProviderEntry]
    consumers: list[ConsumerEntry]
    edges: list[EdgeEntry]
    metrics: Optional[DocumentMetrics] = None


def parse_document(data: Any) -> GraphDocument:
    """Validate a decoded JSON value against the document schema."""
    try:
        return GraphDocument.model_validate(data)
    except ValidationError as e:
        raise DocumentError(f"Invalid graph document: {e}") from e


def load_document(path: Path | str) -> GraphDocument:
    """Read and validate a graph document from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DocumentError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DocumentError(f"{path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise DocumentError(f"{path} is not valid JSON: {e}") from e

    document = parse_document(data)
    logger.debug(
        "Loaded %s: %d types, %d providers, %d consumers, %d edges",
        path, len(document.types), len(document.providers),
        len(document.consumers), len(document.edges),
    )
    return document
