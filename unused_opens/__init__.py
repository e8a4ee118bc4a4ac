from __future__ import annotations

from unused_opens._ast_helpers import get_open_statements
from unused_opens._data import Entity
from unused_opens._data import EntitySymbol
from unused_opens._data import ModuleOrNamespace
from unused_opens._data import NamespaceUse
from unused_opens._data import NestedModuleDecl
from unused_opens._data import OpenDecl
from unused_opens._data import OpenStatement
from unused_opens._data import OtherDecl
from unused_opens._data import ParsedInput
from unused_opens._data import Position
from unused_opens._data import Range
from unused_opens._data import Settings
from unused_opens._data import Snapshot
from unused_opens._data import SymbolUse
from unused_opens._detection import filter_unused_opens
from unused_opens._detection import find_unused_opens
from unused_opens._detection import get_unused_opens
from unused_opens._diagnostics import Diagnostic
from unused_opens._diagnostics import analyze_snapshot
from unused_opens._diagnostics import get_unused_open_ranges
from unused_opens._main import check_file
from unused_opens._main import collect_snapshot_files
from unused_opens._main import main
from unused_opens._snapshot import SnapshotError
from unused_opens._snapshot import load_snapshot
from unused_opens._snapshot import snapshot_from_dict
from unused_opens._symbols import get_namespaces_in_use

__all__ = [
    # Data types
    "Position",
    "Range",
    "OpenStatement",
    "NamespaceUse",
    "ParsedInput",
    "ModuleOrNamespace",
    "NestedModuleDecl",
    "OpenDecl",
    "OtherDecl",
    "Entity",
    "EntitySymbol",
    "SymbolUse",
    # Analysis
    "get_open_statements",
    "get_namespaces_in_use",
    "filter_unused_opens",
    "find_unused_opens",
    "get_unused_opens",
    # Host
    "Settings",
    "Snapshot",
    "SnapshotError",
    "load_snapshot",
    "snapshot_from_dict",
    "Diagnostic",
    "analyze_snapshot",
    "get_unused_open_ranges",
    # CLI
    "check_file",
    "collect_snapshot_files",
    "main",
]
