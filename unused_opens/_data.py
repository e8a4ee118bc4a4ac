from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Optional
from typing import Union

# =============================================================================
# Source locations
# =============================================================================


@dataclass(frozen=True, order=True)
class Position:
    """A point in a source file."""

    line: int  # 1-based
    column: int  # 0-based


@dataclass(frozen=True)
class Range:
    """A span of source text between two positions."""

    start: Position
    end: Position

    @classmethod
    def of(
        cls, start_line: int, start_col: int, end_line: int, end_col: int,
    ) -> Range:
        return cls(Position(start_line, start_col), Position(end_line, end_col))

    def contains(self, other: Range) -> bool:
        return self.start <= other.start and other.end <= self.end


# =============================================================================
# Analysis results
# =============================================================================


@dataclass(frozen=True)
class OpenStatement:
    """Information about an open statement."""

    # Namespace or module identifier as it appears in code
    literal_ident: str
    # Every identifier the statement could denote, including the literal one
    all_possible_idents: frozenset[str]
    range: Range  # The open statement itself
    module_range: Range  # Enclosing module or namespace, where the open is visible


@dataclass(frozen=True)
class NamespaceUse:
    """A namespace some symbol use may have needed an open statement for."""

    ident: str
    location: Range


# =============================================================================
# Syntax tree
# =============================================================================


@dataclass(frozen=True)
class OpenDecl:
    long_id: tuple[str, ...]
    range: Range


@dataclass(frozen=True)
class NestedModuleDecl:
    long_id: tuple[str, ...]
    decls: tuple[Decl, ...]
    range: Range


@dataclass(frozen=True)
class OtherDecl:
    """Any declaration the analysis doesn't look into (let, type, ...)."""

    kind: str
    range: Range


Decl = Union[OpenDecl, NestedModuleDecl, OtherDecl]


@dataclass(frozen=True)
class ModuleOrNamespace:
    """A top-level `module X` or `namespace X` of a file."""

    long_id: tuple[str, ...]
    decls: tuple[Decl, ...]
    range: Range


@dataclass(frozen=True)
class ParsedInput:
    modules: tuple[ModuleOrNamespace, ...] = ()
    is_signature: bool = False  # .fsi files carry no opens worth reporting


# =============================================================================
# Resolved symbols
# =============================================================================


@dataclass(frozen=True)
class Entity:
    """A resolved module, namespace or type."""

    # Any of the names may be None when the checker couldn't provide it
    qualified_name: Optional[str]  # e.g. "Some.Namespace+AutoOpenedModule+Entity"
    logical_name: Optional[str]
    access_path: Optional[str]
    display_name: Optional[str]
    full_name: Optional[str] = None  # None when the full name can't be obtained
    full_display_name: Optional[str] = None
    is_module: bool = False
    is_namespace: bool = False
    has_module_suffix: bool = False  # compiled as `XModule` to avoid a clash
    namespace: Optional[str] = None
    compilation_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class EntitySymbol:
    entity: Entity
    clean_full_names: tuple[str, ...]


@dataclass(frozen=True)
class FieldSymbol:
    full_name: str
    declaring_entity: Optional[Entity] = None


@dataclass(frozen=True)
class ValueSymbol:
    """A function, value or member."""

    full_name: str
    declaring_entity: Optional[Entity] = None


@dataclass(frozen=True)
class OperatorSymbol:
    full_name: str
    declaring_entity: Optional[Entity] = None


@dataclass(frozen=True)
class ActivePatternSymbol:
    full_name: str
    declaring_entity: Optional[Entity] = None


@dataclass(frozen=True)
class ActivePatternCaseSymbol:
    full_name: str
    declaring_entity: Optional[Entity] = None  # enclosing entity of the group


@dataclass(frozen=True)
class UnionCaseSymbol:
    full_name: str
    declaring_entity: Optional[Entity] = None  # the union type definition


@dataclass(frozen=True)
class ParameterSymbol:
    full_name: str
    declaring_entity: Optional[Entity] = None  # None if the type has no definition


@dataclass(frozen=True)
class OtherSymbol:
    """Generic parameters, static parameters and the like."""

    kind: str


Symbol = Union[
    EntitySymbol,
    FieldSymbol,
    ValueSymbol,
    OperatorSymbol,
    ActivePatternSymbol,
    ActivePatternCaseSymbol,
    UnionCaseSymbol,
    ParameterSymbol,
    OtherSymbol,
]


@dataclass(frozen=True)
class SymbolUse:
    """A single resolved reference to a symbol in the file."""

    symbol: Symbol
    range: Range
    is_from_definition: bool = False


# =============================================================================
# Host-side types
# =============================================================================


@dataclass
class Settings:
    """User settings controlling the analysis."""

    unused_opens: bool = True


@dataclass
class Snapshot:
    """Everything one analysis pass needs for a single file."""

    source: str
    parsed_input: ParsedInput
    symbol_uses: list[SymbolUse] = field(default_factory=list)
    source_name: str = "<source>"
