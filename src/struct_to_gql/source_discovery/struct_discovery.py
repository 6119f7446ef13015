"""Discover struct types declared in a Go source file."""

from __future__ import annotations

import logging
from pathlib import Path

from struct_to_gql.type_catalog import DiscoveredType

from .discovery_errors import NoStructsFoundError, SourceReadError
from .go_declarations import parse_go_source
from .type_resolution import resolve_struct_types

_LOGGER = logging.getLogger(__name__)


def discover_structs(source_path: Path | str) -> list[DiscoveredType]:
    """Return the struct types declared at package level in a Go source file.

    Args:
      source_path: Path of the `.go` file to scan.

    Returns:
      The discovered structs sorted by name, fields in declaration order.

    Raises:
      SourceReadError: If the file cannot be read.
      SourceSyntaxError: If the file is not valid Go syntax.
      TypeCheckError: If a declared type references an unknown or invalid type.
      NoStructsFoundError: If the file declares no struct type.
    """
    path = Path(source_path)
    _LOGGER.info("Finding structs in the provided file %s", path)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"failed to read the file {path}: {exc}") from exc

    source_file = parse_go_source(source, filename=str(path))
    discovered = resolve_struct_types(source_file)
    if not discovered:
        raise NoStructsFoundError(f"no structs found in {path}")

    _LOGGER.info(
        "Found %d structs in package %s: %s",
        len(discovered),
        source_file.package,
        ", ".join(struct.name for struct in discovered),
    )
    return discovered
