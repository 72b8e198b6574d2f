"""Response assembly and serialization for the launcher."""

from __future__ import annotations

import sys
from typing import TextIO

import typer
from pydantic_core import PydanticSerializationError

from alfredzed.core.items import Item, Response, no_results_item
from alfredzed.core.result import SerializationError


def build_response(items: list[Item]) -> Response:
    """Wrap ``items``, substituting the placeholder when nothing matched."""
    if not items:
        return Response(items=[no_results_item()])
    return Response(items=list(items))


def render_response(response: Response) -> str:
    """Compact JSON for ``response``; unset ``valid`` flags are omitted."""
    try:
        return response.model_dump_json(exclude_none=True)
    except PydanticSerializationError as exc:
        raise SerializationError("Cannot encode response", context={"error": str(exc)}) from exc


def write_response(response: Response, stream: TextIO | None = None) -> None:
    payload = render_response(response)
    try:
        typer.echo(payload, file=stream or sys.stdout, nl=False)
    except (OSError, ValueError) as exc:
        raise SerializationError("Cannot write response", context={"error": str(exc)}) from exc


__all__ = ["build_response", "render_response", "write_response"]
