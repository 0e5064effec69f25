"""Error taxonomy shared by the codec, registry and repository."""


class SchematicError(Exception):
    """Base class for schematic failures."""


class FormatError(SchematicError):
    """Raised when a byte stream is not a readable schematic."""


class CapacityError(SchematicError):
    """Raised when a schematic cannot be represented by the binary format."""


class RegistryError(SchematicError):
    """Raised when a structure-type registry document is malformed."""


class UnknownTypeWarning(UserWarning):
    """Issued when a stored structure name is missing from the registry."""
