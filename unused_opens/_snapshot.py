"""Load analysis snapshots: a source file with its parse tree and symbol uses.

A snapshot is a JSON document produced by whatever parsed and type-checked
the file::

    {
      "source": "module M\\nopen System\\n...",
      "parsed_input": {
        "kind": "impl",
        "modules": [
          {"long_id": ["M"], "range": [1, 0, 9, 0], "decls": [
            {"kind": "open", "long_id": ["System"], "range": [2, 0, 2, 11]}
          ]}
        ]
      },
      "symbol_uses": [
        {"range": [4, 4, 4, 18], "is_from_definition": false,
         "symbol": {"kind": "value", "full_name": "System.Console.WriteLine",
                    "declaring_entity": {...}}}
      ]
    }

`source_file` (relative to the snapshot) may be given instead of `source`.
Ranges are `[start_line, start_column, end_line, end_column]`, lines 1-based.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from typing import Optional

from unused_opens._data import ActivePatternCaseSymbol
from unused_opens._data import ActivePatternSymbol
from unused_opens._data import Decl
from unused_opens._data import Entity
from unused_opens._data import EntitySymbol
from unused_opens._data import FieldSymbol
from unused_opens._data import ModuleOrNamespace
from unused_opens._data import NestedModuleDecl
from unused_opens._data import OpenDecl
from unused_opens._data import OperatorSymbol
from unused_opens._data import OtherDecl
from unused_opens._data import OtherSymbol
from unused_opens._data import ParameterSymbol
from unused_opens._data import ParsedInput
from unused_opens._data import Range
from unused_opens._data import Snapshot
from unused_opens._data import Symbol
from unused_opens._data import SymbolUse
from unused_opens._data import UnionCaseSymbol
from unused_opens._data import ValueSymbol

_SINGLE_NAME_KINDS = {
    "field": FieldSymbol,
    "value": ValueSymbol,
    "operator": OperatorSymbol,
    "active_pattern": ActivePatternSymbol,
    "active_pattern_case": ActivePatternCaseSymbol,
    "union_case": UnionCaseSymbol,
    "parameter": ParameterSymbol,
}


class SnapshotError(ValueError):
    """The snapshot document doesn't have the expected shape."""


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise SnapshotError(f"{where}: missing '{key}'") from None


def _object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SnapshotError(f"{where}: must be an object, got {value!r}")
    return value


def _list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise SnapshotError(f"{where}: must be a list, got {value!r}")
    return value


def _string(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise SnapshotError(f"{where}: must be a string, got {value!r}")
    return value


def _optional_string(value: Any, where: str) -> Optional[str]:
    if value is None:
        return None
    return _string(value, where)


def _strings(value: Any, where: str) -> tuple[str, ...]:
    return tuple(
        _string(item, f"{where}[{i}]") for i, item in enumerate(_list(value, where))
    )


def _parse_range(value: Any, where: str) -> Range:
    if (
        not isinstance(value, list)
        or len(value) != 4
        or not all(isinstance(v, int) for v in value)
    ):
        raise SnapshotError(f"{where}: range must be 4 integers, got {value!r}")
    return Range.of(*value)


def _parse_long_id(value: Any, where: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(value.split("."))
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise SnapshotError(f"{where}: bad identifier {value!r}")


def _parse_decl(value: Any, where: str) -> Decl:
    data = _object(value, where)
    kind = _require(data, "kind", where)
    range_ = _parse_range(_require(data, "range", where), where)

    if kind == "open":
        return OpenDecl(
            long_id=_parse_long_id(_require(data, "long_id", where), where),
            range=range_,
        )
    if kind == "nested_module":
        return NestedModuleDecl(
            long_id=_parse_long_id(_require(data, "long_id", where), where),
            decls=_parse_decls(data.get("decls", []), where),
            range=range_,
        )
    return OtherDecl(kind=str(kind), range=range_)


def _parse_decls(items: Any, where: str) -> tuple[Decl, ...]:
    return tuple(
        _parse_decl(item, f"{where}.decls[{i}]")
        for i, item in enumerate(_list(items, f"{where}.decls"))
    )


def _parse_module(value: Any, where: str) -> ModuleOrNamespace:
    data = _object(value, where)
    return ModuleOrNamespace(
        long_id=_parse_long_id(_require(data, "long_id", where), where),
        decls=_parse_decls(data.get("decls", []), where),
        range=_parse_range(_require(data, "range", where), where),
    )


def _parse_parsed_input(value: Any) -> ParsedInput:
    where = "parsed_input"
    data = _object(value, where)
    if data.get("kind", "impl") == "sig":
        return ParsedInput(is_signature=True)

    modules = _list(_require(data, "modules", where), f"{where}.modules")
    return ParsedInput(
        modules=tuple(
            _parse_module(item, f"{where}.modules[{i}]")
            for i, item in enumerate(modules)
        ),
    )


def _parse_entity(value: Any, where: str) -> Optional[Entity]:
    if value is None:
        return None
    data = _object(value, where)
    return Entity(
        qualified_name=_optional_string(
            _require(data, "qualified_name", where), f"{where}.qualified_name",
        ),
        logical_name=_optional_string(
            _require(data, "logical_name", where), f"{where}.logical_name",
        ),
        access_path=_optional_string(
            _require(data, "access_path", where), f"{where}.access_path",
        ),
        display_name=_optional_string(
            _require(data, "display_name", where), f"{where}.display_name",
        ),
        full_name=_optional_string(data.get("full_name"), f"{where}.full_name"),
        full_display_name=_optional_string(
            data.get("full_display_name"), f"{where}.full_display_name",
        ),
        is_module=bool(data.get("is_module", False)),
        is_namespace=bool(data.get("is_namespace", False)),
        has_module_suffix=bool(data.get("has_module_suffix", False)),
        namespace=_optional_string(data.get("namespace"), f"{where}.namespace"),
        compilation_paths=_strings(
            data.get("compilation_paths", []), f"{where}.compilation_paths",
        ),
    )


def _parse_symbol(value: Any, where: str) -> Symbol:
    data = _object(value, where)
    kind = _require(data, "kind", where)

    if kind == "entity":
        entity = _parse_entity(_require(data, "entity", where), f"{where}.entity")
        if entity is None:
            raise SnapshotError(f"{where}: entity symbol without an entity")
        return EntitySymbol(
            entity=entity,
            clean_full_names=_strings(
                data.get("clean_full_names", []), f"{where}.clean_full_names",
            ),
        )

    symbol_cls = _SINGLE_NAME_KINDS.get(kind)
    if symbol_cls is not None:
        return symbol_cls(
            full_name=_string(
                _require(data, "full_name", where), f"{where}.full_name",
            ),
            declaring_entity=_parse_entity(
                data.get("declaring_entity"), f"{where}.declaring_entity",
            ),
        )

    return OtherSymbol(kind=str(kind))


def _parse_symbol_use(value: Any, where: str) -> SymbolUse:
    data = _object(value, where)
    return SymbolUse(
        symbol=_parse_symbol(_require(data, "symbol", where), f"{where}.symbol"),
        range=_parse_range(_require(data, "range", where), where),
        is_from_definition=bool(data.get("is_from_definition", False)),
    )


def snapshot_from_dict(
    data: dict[str, Any], base_dir: Optional[Path] = None,
) -> Snapshot:
    """Build a snapshot from its decoded JSON document."""
    if not isinstance(data, dict):
        raise SnapshotError("snapshot must be a JSON object")

    source_name = "<source>"
    if "source" in data:
        source = _string(data["source"], "source")
    elif "source_file" in data:
        source_file = _string(data["source_file"], "source_file")
        source_path = (base_dir or Path.cwd()) / source_file
        source = source_path.read_text(encoding="utf-8")
        source_name = str(source_path)
    else:
        raise SnapshotError("snapshot: missing 'source' or 'source_file'")

    symbol_uses = [
        _parse_symbol_use(item, f"symbol_uses[{i}]")
        for i, item in enumerate(
            _list(data.get("symbol_uses", []), "symbol_uses"),
        )
    ]

    parsed_input = _parse_parsed_input(_require(data, "parsed_input", "snapshot"))

    return Snapshot(
        source=source,
        parsed_input=parsed_input,
        symbol_uses=symbol_uses,
        source_name=source_name,
    )


def load_snapshot(path: Path) -> Snapshot:
    """Read a snapshot file.

    Raises:
        OSError, UnicodeDecodeError: The snapshot or its source can't be read.
        SnapshotError: The document is not valid JSON or is malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SnapshotError(f"invalid JSON: {e}") from e

    snapshot = snapshot_from_dict(data, base_dir=path.parent)
    if snapshot.source_name == "<source>":
        snapshot.source_name = str(path)
    return snapshot
