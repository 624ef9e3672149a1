"""Capability records and the registry that maps identifiers to them."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

from .schema import ArgumentShape


class CapabilityKind(Enum):
    TOOL = "tool"
    RESOURCE = "resource"
    PROMPT = "prompt"


@dataclass(frozen=True)
class Capability:
    """Immutable binding of an identifier to a validated handler.

    For resources the identifier is the resource URI and ``title`` is the
    display name; ``mime_type`` only applies to resources.
    """

    kind: CapabilityKind
    identifier: str
    description: str
    arguments: ArgumentShape
    handler: Callable
    title: Optional[str] = None
    mime_type: Optional[str] = None


class CapabilityNotFoundError(LookupError):
    def __init__(self, kind: CapabilityKind, identifier: str):
        super().__init__(f"{kind.value} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class DuplicateCapabilityError(ValueError):
    def __init__(self, kind: CapabilityKind, identifier: str):
        super().__init__(f"{kind.value} already registered: {identifier}")
        self.kind = kind
        self.identifier = identifier


class RegistryFrozenError(RuntimeError):
    pass


class CapabilityView:
    """Restartable view over the records of one kind, in registration order."""

    def __init__(self, entries: Dict[str, Capability]):
        self._entries = entries

    def __iter__(self) -> Iterator[Capability]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __repr__(self) -> str:
        return f"CapabilityView({list(self._entries)!r})"


class Registry:
    """Mapping from (kind, identifier) to capability records.

    Registration happens at startup. Duplicate (kind, identifier) pairs are
    rejected, and once the registry is frozen it is read-only, so it can be
    shared between request workers without locking.
    """

    def __init__(self):
        self._entries: Dict[CapabilityKind, Dict[str, Capability]] = {
            kind: {} for kind in CapabilityKind
        }
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Registry":
        self._frozen = True
        return self

    def register(self, record: Capability) -> Capability:
        """Add a capability record.

        Args:
            record: Record to add

        Returns:
            The registered record

        Raises:
            DuplicateCapabilityError: If the (kind, identifier) pair is taken
            RegistryFrozenError: If the registry has been frozen
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {record.kind.value} {record.identifier!r}: registry is frozen"
            )
        entries = self._entries[record.kind]
        if record.identifier in entries:
            raise DuplicateCapabilityError(record.kind, record.identifier)
        entries[record.identifier] = record
        return record

    def lookup(self, kind: CapabilityKind, identifier: str) -> Capability:
        """Return the record registered under (kind, identifier).

        Raises:
            CapabilityNotFoundError: If nothing is registered there
        """
        try:
            return self._entries[kind][identifier]
        except KeyError:
            raise CapabilityNotFoundError(kind, identifier) from None

    def get(self, kind: CapabilityKind, identifier: str) -> Optional[Capability]:
        return self._entries[kind].get(identifier)

    def list(self, kind: CapabilityKind) -> CapabilityView:
        return CapabilityView(self._entries[kind])

    def identifiers(self, kind: CapabilityKind) -> List[str]:
        return list(self._entries[kind])

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{kind.value}s={len(self._entries[kind])}" for kind in CapabilityKind
        )
        return f"Registry({counts})"
