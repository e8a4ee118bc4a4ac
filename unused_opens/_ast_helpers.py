from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator

from unused_opens._data import Decl
from unused_opens._data import NestedModuleDecl
from unused_opens._data import OpenDecl
from unused_opens._data import OpenStatement
from unused_opens._data import ParsedInput
from unused_opens._data import Range


def _visit_decls(
    parent: tuple[str, ...],
    decls: Iterable[Decl],
    module_range: Range,
) -> Iterator[OpenStatement]:
    """Yield open statements of `decls` and their nested modules, in order."""
    for decl in decls:
        if isinstance(decl, OpenDecl):
            literal_ident = ".".join(decl.long_id)
            idents = {literal_ident}
            # `open N.M` can open the N.M module nested in the parent as well
            if parent:
                idents.add(".".join(parent + tuple(decl.long_id)))

            yield OpenStatement(
                literal_ident=literal_ident,
                all_possible_idents=frozenset(idents),
                range=decl.range,
                module_range=module_range,
            )

        elif isinstance(decl, NestedModuleDecl):
            yield from _visit_decls(
                parent + tuple(decl.long_id), decl.decls, decl.range,
            )

        # Other declarations can't contain open statements


def get_open_statements(parsed_input: ParsedInput) -> list[OpenStatement]:
    """Collect all open statements of a file in document order."""
    if parsed_input.is_signature:
        return []

    statements: list[OpenStatement] = []
    for module in parsed_input.modules:
        statements.extend(
            _visit_decls(tuple(module.long_id), module.decls, module.range),
        )
    return statements
