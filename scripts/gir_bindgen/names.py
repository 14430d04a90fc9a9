"""
Identifier resolution

Turns qualified names into Python identifiers using the configured
namespace prefixes and name overrides.

Examples (namespace Foo with prefix 'foo'):
    Foo.bar_baz -> fooBarBaz (value style)
    Foo.bar_baz -> FooBarBaz (type style)
    Foo.bar__baz -> fooBar_Baz
"""

from enum import Enum
import keyword

from .config import Config
from .errors import MalformedIdentifierError, UnregisteredNamespaceError
from .ir import QualifiedName

# Names the generated wrapper bodies bind themselves
RESERVED_NAMES = frozenset(keyword.kwlist) | {'result', 'ctypes', 'type'}


class Style(Enum):
    VALUE = 'value'  # lowerCamel: functions, constants
    TYPE = 'type'    # UpperCamel: classes, aliases


def escape_reserved(word: str) -> str:
    """Append an underscore to reserved words"""
    if word in RESERVED_NAMES:
        return word + '_'
    return word


def uc_first(word: str) -> str:
    if not word:
        raise MalformedIdentifierError('uc_first: empty string')
    return word[0].upper() + word[1:]


def get_prefix(namespace: str, config: Config) -> str:
    """Get the configured prefix for a namespace"""
    try:
        return config.prefixes[namespace]
    except KeyError:
        raise UnregisteredNamespaceError(namespace) from None


def resolve(name: QualifiedName, style: Style, config: Config) -> str:
    """Resolve a qualified name to an identifier in the given style"""
    override = config.names.get(name.name)
    if override is not None:
        return override

    if not name.name:
        raise MalformedIdentifierError(f'empty local name in namespace {name.namespace!r}')

    tokens = escape_reserved(name.name).split('_')
    prefix = get_prefix(name.namespace, config)
    if prefix:
        tokens.insert(0, prefix)

    if style is Style.VALUE:
        head, *rest = tokens
        return (head.lower() or '_') + ''.join(_token(t) for t in rest)
    return ''.join(_token(t) for t in tokens)


def lower_name(name: QualifiedName, config: Config) -> str:
    return resolve(name, Style.VALUE, config)


def upper_name(name: QualifiedName, config: Config) -> str:
    return resolve(name, Style.TYPE, config)


def _token(word: str) -> str:
    # Empty tokens come from doubled underscores
    return uc_first(word) if word else '_'


class NameSupply:
    """Hands out fresh binding names for a wrapper body

    Every intermediate value gets its own name, the original name with
    underscores appended, so earlier values stay inspectable.
    """

    def __init__(self, taken=()):
        self._taken: set[str] = set(taken)

    def reserve(self, name: str) -> str:
        self._taken.add(name)
        return name

    def fresh(self, base: str) -> str:
        candidate = base + '_'
        while candidate in self._taken:
            candidate += '_'
        return self.reserve(candidate)
