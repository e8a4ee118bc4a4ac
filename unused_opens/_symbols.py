"""Work out which namespaces each symbol use may depend on."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from unused_opens._data import ActivePatternCaseSymbol
from unused_opens._data import ActivePatternSymbol
from unused_opens._data import Entity
from unused_opens._data import EntitySymbol
from unused_opens._data import FieldSymbol
from unused_opens._data import NamespaceUse
from unused_opens._data import OperatorSymbol
from unused_opens._data import ParameterSymbol
from unused_opens._data import SymbolUse
from unused_opens._data import UnionCaseSymbol
from unused_opens._data import ValueSymbol
from unused_opens._quick_parse import get_complete_identifier_island
from unused_opens._quick_parse import get_partial_long_name

# Symbol kinds that resolve to a single full name plus an optional entity
_SINGLE_NAME_SYMBOLS = (
    FieldSymbol,
    ValueSymbol,
    OperatorSymbol,
    ActivePatternSymbol,
    ActivePatternCaseSymbol,
    UnionCaseSymbol,
    ParameterSymbol,
)


def _line_of(lines: Sequence[str], symbol_use: SymbolUse) -> str:
    index = symbol_use.range.start.line - 1
    if 0 <= index < len(lines):
        return lines[index]
    return ""


def symbol_is_fully_qualified(
    lines: Sequence[str], symbol_use: SymbolUse, full_name: str,
) -> bool:
    """Check if the symbol use is written out exactly as `full_name`."""
    line = _line_of(lines, symbol_use)
    island = get_complete_identifier_island(line, symbol_use.range.end.column)
    return island == full_name


def get_part_namespace(symbol_use: SymbolUse, full_name: str) -> Optional[str]:
    """Strip the identifier written at the symbol use from its full name.

    Given a symbol use written as `Text.ISegment` and a full name of
    `MonoDevelop.Core.Text.ISegment`, returns `MonoDevelop.Core`.
    """
    length = symbol_use.range.end.column - symbol_use.range.start.column
    length_diff = len(full_name) - length - 2
    # Operators and the like can't be matched against their full name
    if length_diff <= 0 or length_diff > len(full_name) - 1:
        return None
    return full_name[:length_diff + 1]


def get_auto_open_access_path(ent: Entity) -> Optional[str]:
    """Guess the path an entity inside an auto-opened module is reachable by.

    Qualified names look like `Some.Namespace+AutoOpenedModule+Entity`. There
    is no way to ask an entity for its enclosing entity, so this is an
    approximation: it assumes everything before the first `+` is accessible,
    which holds for `Some.Namespace` but misses
    `Some.Namespace.AutoOpenedModule`.
    """
    if ent.full_name is None or not ent.qualified_name:
        return None
    if not ent.is_namespace and "+" in ent.qualified_name:
        return ent.qualified_name[:ent.qualified_name.index("+")]
    return None


def entity_namespace(ent: Optional[Entity]) -> list[Optional[str]]:
    """Namespaces and modules `ent` could have been brought in scope by."""
    if ent is None:
        return []

    if ent.is_module:
        names: list[Optional[str]] = [
            ent.qualified_name,
            ent.logical_name,
            ent.access_path,
            ent.full_name,
            ent.display_name,
            ent.full_display_name,
        ]
        if ent.has_module_suffix and ent.access_path and ent.display_name:
            names.append(f"{ent.access_path}.{ent.display_name}")
        return names

    return [
        ent.namespace,
        ent.access_path,
        get_auto_open_access_path(ent),
        *ent.compilation_paths,
    ]


def _full_names_and_entity(
    symbol_use: SymbolUse,
) -> Optional[tuple[Sequence[str], Optional[Entity]]]:
    symbol = symbol_use.symbol
    if isinstance(symbol, EntitySymbol):
        return symbol.clean_full_names, symbol.entity
    if isinstance(symbol, ParameterSymbol) and symbol.declaring_entity is None:
        # Only parameters of a type with a definition are of interest
        return None
    if isinstance(symbol, _SINGLE_NAME_SYMBOLS):
        return [symbol.full_name], symbol.declaring_entity
    return None


def get_possible_namespaces(
    lines: Sequence[str], symbol_use: SymbolUse,
) -> list[str]:
    """All namespaces an open statement could have supplied to `symbol_use`."""
    resolved = _full_names_and_entity(symbol_use)
    if resolved is None:
        return []

    full_names, declaring_entity = resolved
    # Written out in full, no open statement is needed
    if any(
        symbol_is_fully_qualified(lines, symbol_use, name)
        for name in full_names
    ):
        return []

    candidates = [get_part_namespace(symbol_use, name) for name in full_names]
    candidates.extend(entity_namespace(declaring_entity))
    return [ns for ns in candidates if ns]


def _is_important(symbol_use: SymbolUse) -> bool:
    if symbol_use.is_from_definition:
        return False
    symbol = symbol_use.symbol
    return not (isinstance(symbol, EntitySymbol) and symbol.entity.is_namespace)


def get_namespaces_in_use(
    lines: Sequence[str], symbol_uses: Sequence[SymbolUse],
) -> list[NamespaceUse]:
    """Compute the namespace uses for every relevant symbol use in a file."""
    namespaces_in_use: list[NamespaceUse] = []

    for symbol_use in symbol_uses:
        if not _is_important(symbol_use):
            continue

        line = _line_of(lines, symbol_use)
        qualifying_idents, _ = get_partial_long_name(
            line, symbol_use.range.end.column,
        )
        qualifier = ".".join(qualifying_idents)

        idents: dict[str, None] = {}
        for ns in dict.fromkeys(get_possible_namespaces(lines, symbol_use)):
            if not qualifier:
                idents[ns] = None
            elif ns == qualifier:
                # Fully written out relative to this namespace
                continue
            elif ns.endswith("." + qualifier):
                # `Text.ISegment` from `Core.Text` needs `Core` opened
                prefix = ns[:len(ns) - len(qualifier) - 1]
                if prefix:
                    idents[prefix] = None

        namespaces_in_use.extend(
            NamespaceUse(ident=ident, location=symbol_use.range)
            for ident in idents
        )

    return namespaces_in_use
