from __future__ import annotations

from collections.abc import Sequence

from unused_opens._ast_helpers import get_open_statements
from unused_opens._data import NamespaceUse
from unused_opens._data import OpenStatement
from unused_opens._data import ParsedInput
from unused_opens._data import Range
from unused_opens._data import SymbolUse
from unused_opens._quick_parse import split_lines
from unused_opens._symbols import get_namespaces_in_use


def filter_unused_opens(
    open_statements: Sequence[OpenStatement],
    namespaces_in_use: Sequence[NamespaceUse],
) -> list[OpenStatement]:
    """Pick the open statements nothing depends on.

    Statements must be in document order: an open statement is also unused
    when an identical one was already seen in this or an enclosing module,
    whether or not that earlier one turned out to be used.
    """
    unused: list[OpenStatement] = []
    seen: list[OpenStatement] = []

    for stmt in open_statements:
        not_used_anywhere = not any(
            stmt.module_range.contains(nsu.location)
            and nsu.ident in stmt.all_possible_idents
            for nsu in namespaces_in_use
        )
        already_seen = any(
            seen_stmt.module_range.contains(stmt.module_range)
            and seen_stmt.literal_ident == stmt.literal_ident
            for seen_stmt in seen
        )
        if not_used_anywhere or already_seen:
            unused.append(stmt)
        seen.append(stmt)

    return unused


def find_unused_opens(
    source: str,
    parsed_input: ParsedInput,
    symbol_uses: Sequence[SymbolUse],
) -> list[OpenStatement]:
    """Find all unused open statements in a parsed and checked file."""
    open_statements = get_open_statements(parsed_input)
    if not open_statements:
        return []

    lines = split_lines(source)
    namespaces_in_use = get_namespaces_in_use(lines, symbol_uses)
    return filter_unused_opens(open_statements, namespaces_in_use)


def get_unused_opens(
    source: str,
    parsed_input: ParsedInput,
    symbol_uses: Sequence[SymbolUse],
) -> list[Range]:
    """Ranges of all unused open statements, in document order."""
    unused = find_unused_opens(source, parsed_input, symbol_uses)
    return [stmt.range for stmt in unused]
