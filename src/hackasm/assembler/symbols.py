"""
Hack Symbol Table
=================

Maps symbol names to addresses. A fresh table already holds the predefined
symbols (R0..R15, SP, LCL, ARG, THIS, THAT, SCREEN, KBD); labels are added
during pass 1 and variables during pass 2.

Lookup is by exact, case-sensitive name. Absence is reported as None,
never as a sentinel address, because 0 is a perfectly good address (R0, SP).
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from hackasm.errors import AddressOutOfRangeError, SourceLocation
from hackasm.cpu import MAX_SYMBOL_ADDRESS, PREDEFINED_SYMBOLS

logger = logging.getLogger(__name__)

DEFAULT_RESERVED_CAPACITY = 128


class SymbolKind(Enum):
    """How a symbol entered the table."""
    PREDEFINED = auto()
    LABEL = auto()
    VARIABLE = auto()


@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name
        address: Bound address (0..32766)
        kind: Predefined register/IO name, label, or variable
        location: Where a label was declared (None otherwise)
    """
    name: str
    address: int
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Name to address mapping, pre-seeded with the predefined symbols.

    Usage:
        table = SymbolTable()
        table.add_entry("LOOP", 4, SymbolKind.LABEL)
        table.get_address("LOOP")    # 4
        table.get_address("nope")    # None
    """

    def __init__(self, reserved_capacity: int = DEFAULT_RESERVED_CAPACITY):
        """
        Create a table holding only the predefined symbols.

        Args:
            reserved_capacity: Expected number of user symbols. Advisory only;
                the table grows without limit.
        """
        self.reserved_capacity = reserved_capacity
        self._entries: dict[str, Symbol] = {}
        for name, address in PREDEFINED_SYMBOLS.items():
            self.add_entry(name, address, SymbolKind.PREDEFINED)

    def contains(self, name: str) -> bool:
        """True if name is bound."""
        return name in self._entries

    def get_address(self, name: str) -> Optional[int]:
        """Return the address bound to name, or None if it is not bound."""
        entry = self._entries.get(name)
        return entry.address if entry is not None else None

    def get(self, name: str) -> Optional[Symbol]:
        """Return the full entry for name, or None."""
        return self._entries.get(name)

    def add_entry(
        self,
        name: str,
        address: int,
        kind: SymbolKind = SymbolKind.LABEL,
        location: Optional[SourceLocation] = None,
    ) -> None:
        """
        Bind name to address, overwriting the address of an existing entry.

        Args:
            name: Symbol name
            address: Address in 0..32766
            kind: Kind recorded for a new entry (existing entries keep theirs)
            location: Declaration location for a new entry

        Raises:
            AddressOutOfRangeError: If address is out of range; the table is
                left unmodified
        """
        if address < 0 or address > MAX_SYMBOL_ADDRESS:
            raise AddressOutOfRangeError(name, address, MAX_SYMBOL_ADDRESS)

        existing = self._entries.get(name)
        if existing is not None:
            logger.debug(f"Rebinding '{name}' from {existing.address} to {address}")
            existing.address = address
        else:
            self._entries[name] = Symbol(name, address, kind, location)

    def symbols(self, kind: Optional[SymbolKind] = None) -> list[Symbol]:
        """Return entries in insertion order, optionally filtered by kind."""
        return [sym for sym in self._entries.values() if kind is None or sym.kind == kind]

    def as_dict(self) -> dict[str, int]:
        """Return a plain name -> address dictionary."""
        return {name: sym.address for name, sym in self._entries.items()}

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(list(self._entries.values()))
