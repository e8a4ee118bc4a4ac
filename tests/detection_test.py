"""Tests for unused open detection."""
from __future__ import annotations

import pytest

from unused_opens import Entity
from unused_opens import EntitySymbol
from unused_opens import ModuleOrNamespace
from unused_opens import NamespaceUse
from unused_opens import NestedModuleDecl
from unused_opens import OpenDecl
from unused_opens import OpenStatement
from unused_opens import OtherDecl
from unused_opens import ParsedInput
from unused_opens import Range
from unused_opens import SymbolUse
from unused_opens import filter_unused_opens
from unused_opens import find_unused_opens
from unused_opens import get_unused_opens
from unused_opens._data import ValueSymbol

CONSOLE = Entity(
    qualified_name='System.Console',
    logical_name='Console',
    access_path='System',
    display_name='Console',
    full_name='System.Console',
    namespace='System',
)

STRING_BUILDER = Entity(
    qualified_name='System.Text.StringBuilder',
    logical_name='StringBuilder',
    access_path='System.Text',
    display_name='StringBuilder',
    full_name='System.Text.StringBuilder',
    namespace='System.Text',
)


def _open(ident: str, line: int, col: int = 0) -> OpenDecl:
    return OpenDecl(
        tuple(ident.split('.')),
        Range.of(line, col, line, col + len('open ') + len(ident)),
    )


def _console_use(line: int, col: int = 0) -> SymbolUse:
    return SymbolUse(
        EntitySymbol(CONSOLE, ('System.Console',)),
        Range.of(line, col, line, col + len('Console')),
    )


def _unused_idents(source, parsed, symbol_uses) -> list[str]:
    return [s.literal_ident for s in find_unused_opens(source, parsed, symbol_uses)]


# =============================================================================
# End to end
# =============================================================================


def test_no_open_statements():
    source = 'module M\nlet x = 1\n'
    module = ModuleOrNamespace(
        ('M',), (OtherDecl('let', Range.of(2, 0, 2, 9)),), Range.of(1, 0, 2, 9),
    )

    assert get_unused_opens(source, ParsedInput(modules=(module,)), []) == []


def test_open_used_by_unqualified_type():
    source = (
        'module M\n'
        'open System.Text\n'
        'let sb = StringBuilder()\n'
    )
    module = ModuleOrNamespace(
        ('M',), (_open('System.Text', 2),), Range.of(1, 0, 3, 24),
    )
    use = SymbolUse(
        EntitySymbol(STRING_BUILDER, ('System.Text.StringBuilder',)),
        Range.of(3, 9, 3, 22),
    )

    assert get_unused_opens(source, ParsedInput(modules=(module,)), [use]) == []


def test_open_used_through_enclosing_module_path():
    source = (
        'module Parent\n'
        'module Nested =\n'
        '    open Helpers\n'
        '    let x = run ()\n'
    )
    nested = NestedModuleDecl(
        ('Nested',),
        (_open('Helpers', 3, 4), OtherDecl('let', Range.of(4, 4, 4, 18))),
        Range.of(2, 0, 4, 18),
    )
    module = ModuleOrNamespace(('Parent',), (nested,), Range.of(1, 0, 4, 18))
    use = SymbolUse(ValueSymbol('Parent.Nested.Helpers.run'), Range.of(4, 12, 4, 15))

    assert get_unused_opens(source, ParsedInput(modules=(module,)), [use]) == []


def test_redundant_open_in_nested_module_without_usage():
    source = (
        'module M\n'
        'open System\n'
        'Console.WriteLine "hi"\n'
        'module Inner =\n'
        '    open System\n'
        '    let x = 1\n'
    )
    inner = NestedModuleDecl(
        ('Inner',), (_open('System', 5, 4),), Range.of(4, 0, 6, 13),
    )
    module = ModuleOrNamespace(
        ('M',), (_open('System', 2), inner), Range.of(1, 0, 6, 13),
    )

    unused = get_unused_opens(
        source, ParsedInput(modules=(module,)), [_console_use(3)],
    )

    assert unused == [Range.of(5, 4, 5, 15)]


def test_redundant_open_in_nested_module_with_usage():
    source = (
        'module M\n'
        'open System\n'
        'module Inner =\n'
        '    open System\n'
        '    Console.WriteLine()\n'
    )
    inner = NestedModuleDecl(
        ('Inner',), (_open('System', 4, 4),), Range.of(3, 0, 5, 23),
    )
    module = ModuleOrNamespace(
        ('M',), (_open('System', 2), inner), Range.of(1, 0, 5, 23),
    )

    unused = get_unused_opens(
        source, ParsedInput(modules=(module,)), [_console_use(5, 4)],
    )

    assert unused == [Range.of(4, 4, 4, 15)]


def test_same_open_in_sibling_modules():
    source = (
        'module M\n'
        'module A =\n'
        '    open System\n'
        '    Console.WriteLine()\n'
        'module B =\n'
        '    open System\n'
        '    Console.WriteLine()\n'
    )
    a = NestedModuleDecl(('A',), (_open('System', 3, 4),), Range.of(2, 0, 4, 23))
    b = NestedModuleDecl(('B',), (_open('System', 6, 4),), Range.of(5, 0, 7, 23))
    module = ModuleOrNamespace(('M',), (a, b), Range.of(1, 0, 7, 23))

    unused = get_unused_opens(
        source,
        ParsedInput(modules=(module,)),
        [_console_use(4, 4), _console_use(7, 4)],
    )

    assert unused == []


def test_open_without_any_references():
    source = (
        'module M\n'
        'open Microsoft.FSharp.Collections\n'
        'let x = 1\n'
    )
    module = ModuleOrNamespace(
        ('M',),
        (
            _open('Microsoft.FSharp.Collections', 2),
            OtherDecl('let', Range.of(3, 0, 3, 9)),
        ),
        Range.of(1, 0, 3, 9),
    )

    unused = get_unused_opens(source, ParsedInput(modules=(module,)), [])

    assert unused == [Range.of(2, 0, 2, 33)]


@pytest.mark.parametrize(
    ('opens', 'expected'),
    (
        pytest.param(
            ('Namespace.Text',),
            ['Namespace.Text'],
            id='open of the written qualifier is unused',
        ),
        pytest.param(
            ('Namespace', 'Namespace.Text'),
            ['Namespace.Text'],
            id='open of the remaining prefix is used',
        ),
    ),
)
def test_partially_qualified_reference(opens, expected):
    source = (
        'module M\n'
        + ''.join(f'open {ident}\n' for ident in opens)
        + 'let f (s: Text.ISegment) = s\n'
    )
    line = len(opens) + 2
    module = ModuleOrNamespace(
        ('M',),
        tuple(_open(ident, i + 2) for i, ident in enumerate(opens)),
        Range.of(1, 0, line, 28),
    )
    segment = Entity(
        qualified_name='Namespace.Text.ISegment',
        logical_name='ISegment',
        access_path='Namespace.Text',
        display_name='ISegment',
        full_name='Namespace.Text.ISegment',
        namespace='Namespace.Text',
    )
    use = SymbolUse(
        EntitySymbol(segment, ('Namespace.Text.ISegment',)),
        Range.of(line, 10, line, 23),
    )

    parsed = ParsedInput(modules=(module,))
    assert _unused_idents(source, parsed, [use]) == expected


def test_fully_qualified_reference_does_not_use_open():
    source = (
        'module M\n'
        'open System.Text\n'
        'let sb = System.Text.StringBuilder()\n'
    )
    module = ModuleOrNamespace(
        ('M',), (_open('System.Text', 2),), Range.of(1, 0, 3, 36),
    )
    use = SymbolUse(
        EntitySymbol(STRING_BUILDER, ('System.Text.StringBuilder',)),
        Range.of(3, 9, 3, 34),
    )

    unused = get_unused_opens(source, ParsedInput(modules=(module,)), [use])

    assert unused == [Range.of(2, 0, 2, 16)]


def test_usage_outside_module_does_not_count():
    source = (
        'module A\n'
        'open System\n'
        'module B\n'
        'Console.WriteLine()\n'
    )
    a = ModuleOrNamespace(('A',), (_open('System', 2),), Range.of(1, 0, 2, 11))
    b = ModuleOrNamespace(('B',), (), Range.of(3, 0, 4, 19))

    unused = get_unused_opens(
        source, ParsedInput(modules=(a, b)), [_console_use(4)],
    )

    assert unused == [Range.of(2, 0, 2, 11)]


def test_results_are_stable():
    source = (
        'module M\n'
        'open System\n'
        'open System.IO\n'
        'Console.WriteLine()\n'
    )
    module = ModuleOrNamespace(
        ('M',), (_open('System', 2), _open('System.IO', 3)), Range.of(1, 0, 4, 19),
    )
    parsed = ParsedInput(modules=(module,))
    symbol_uses = [_console_use(4)]

    first = get_unused_opens(source, parsed, symbol_uses)
    second = get_unused_opens(source, parsed, symbol_uses)

    assert first == second == [Range.of(3, 0, 3, 14)]


# =============================================================================
# filter_unused_opens
# =============================================================================


def _stmt(ident: str, line: int, module_range: Range, *extra: str) -> OpenStatement:
    return OpenStatement(
        literal_ident=ident,
        all_possible_idents=frozenset({ident, *extra}),
        range=Range.of(line, 0, line, 5 + len(ident)),
        module_range=module_range,
    )


OUTER = Range.of(1, 0, 20, 0)
INNER = Range.of(5, 0, 10, 0)


def test_filter_keeps_document_order():
    statements = [_stmt('B', 2, OUTER), _stmt('A', 3, OUTER)]

    assert filter_unused_opens(statements, []) == statements


def test_filter_inner_duplicate_of_unused_outer_open():
    outer = _stmt('System', 2, OUTER)
    inner = _stmt('System', 6, INNER)

    assert filter_unused_opens([outer, inner], []) == [outer, inner]


def test_filter_inner_duplicate_of_used_outer_open():
    outer = _stmt('System', 2, OUTER)
    inner = _stmt('System', 6, INNER)
    usage = NamespaceUse('System', Range.of(7, 4, 7, 11))

    assert filter_unused_opens([outer, inner], [usage]) == [inner]


def test_filter_outer_open_after_inner_is_not_redundant():
    inner = _stmt('System', 6, INNER)
    later = _stmt('System', 15, Range.of(12, 0, 20, 0))
    usages = [
        NamespaceUse('System', Range.of(7, 4, 7, 11)),
        NamespaceUse('System', Range.of(16, 4, 16, 11)),
    ]

    assert filter_unused_opens([inner, later], usages) == []


def test_filter_matches_any_possible_ident():
    stmt = _stmt('Text', 2, OUTER, 'Parent.Text')
    usage = NamespaceUse('Parent.Text', Range.of(3, 0, 3, 5))

    assert filter_unused_opens([stmt], [usage]) == []


def test_filter_ignores_usage_outside_scope():
    stmt = _stmt('System', 6, INNER)
    usage = NamespaceUse('System', Range.of(12, 0, 12, 7))

    assert filter_unused_opens([stmt], [usage]) == [stmt]


def test_form_feed_does_not_shift_lines():
    source = (
        'module M\n'
        'open System.Text // \x0c note\n'
        'let sb = System.Text.StringBuilder()\n'
    )
    module = ModuleOrNamespace(
        ('M',), (_open('System.Text', 2),), Range.of(1, 0, 3, 36),
    )
    use = SymbolUse(
        EntitySymbol(STRING_BUILDER, ('System.Text.StringBuilder',)),
        Range.of(3, 9, 3, 34),
    )

    unused = get_unused_opens(source, ParsedInput(modules=(module,)), [use])

    assert unused == [Range.of(2, 0, 2, 16)]
