"""
Error types

Every failure while generating bindings is fatal for the whole run; these
exceptions carry enough context to name the offending input.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import TypeRep


class GenerationError(Exception):
    """Base class for all generation failures"""


class ConfigError(GenerationError):
    """Malformed configuration file"""


class MetadataError(GenerationError):
    """Malformed API description"""


class UnregisteredNamespaceError(GenerationError):
    """A namespace has no prefix configured"""

    def __init__(self, namespace: str):
        super().__init__(f'no prefix defined for namespace {namespace!r}')
        self.namespace = namespace


class MalformedIdentifierError(GenerationError):
    """A name cannot be turned into an identifier"""


class UnknownConversionError(GenerationError):
    """No conversion rule covers a pair of representations"""

    def __init__(self, source: 'TypeRep', target: 'TypeRep'):
        super().__init__(
            f"don't know how to convert {source.describe()} to {target.describe()}")
        self.source = source
        self.target = target


class UnclassifiedEntityError(GenerationError):
    """An API entity of a kind the generator cannot emit"""

    def __init__(self, name, entity):
        super().__init__(f"can't generate code for {name}: {entity!r}")
        self.name = name
        self.entity = entity
