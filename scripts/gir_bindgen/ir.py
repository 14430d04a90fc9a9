"""
IR (Intermediate Representation) module

Represents the API surface of one introspected namespace: qualified names,
native types, callables and the entities of a module.

The JSON dump read by `Registry.load` looks like this:

    {
      "namespace": "Foo",
      "entities": [
        {"kind": "constant", "name": "MAX", "type": "int32", "value": 16},
        {"kind": "function", "name": "bar_baz", "symbol": "foo_bar_baz",
         "args": [{"name": "flag", "type": "boolean"},
                  {"name": "count", "type": "int32", "direction": "out"}],
         "return": "void", "may_return_null": false},
        {"kind": "enum", "name": "color", "members": [["red", 0], ["green", 1]]},
        {"kind": "flags", "name": "mode", "members": [["read", 1], ["write", 2]]},
        {"kind": "struct", "name": "Point", "fields": ["x", "y"]},
        {"kind": "callback", "name": "Notify", "args": [], "return": "void"},
        {"kind": "union", "name": "Value"}
      ]
    }

Types are either a basic type name ("int32", "utf8", ...), the string
"error", or an object: {"array": T}, {"glist": T}, {"gslist": T},
{"ghash": [K, V]} or {"interface": "Namespace.Name"}.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Union as TypingUnion
import json

from .errors import MetadataError


@dataclass(frozen=True)
class QualifiedName:
    """A symbol within a namespace"""
    namespace: str
    name: str

    def __str__(self) -> str:
        return f'{self.namespace}.{self.name}'

    @classmethod
    def parse(cls, text: str, namespace: str = '') -> 'QualifiedName':
        """Parse 'Ns.name', falling back to the given namespace"""
        if '.' in text:
            ns, _, name = text.partition('.')
            return cls(ns, name)
        return cls(namespace, text)


class Basic(Enum):
    """Basic (non-composite) native types"""
    VOID = 'void'
    BOOLEAN = 'boolean'
    INT8 = 'int8'
    UINT8 = 'uint8'
    INT16 = 'int16'
    UINT16 = 'uint16'
    INT32 = 'int32'
    UINT32 = 'uint32'
    INT64 = 'int64'
    UINT64 = 'uint64'
    INT = 'int'
    UINT = 'uint'
    LONG = 'long'
    ULONG = 'ulong'
    SSIZE = 'ssize'
    SIZE = 'size'
    FLOAT = 'float'
    DOUBLE = 'double'
    UNICHAR = 'unichar'
    GTYPE = 'gtype'
    UTF8 = 'utf8'
    FILENAME = 'filename'


@dataclass(frozen=True)
class BasicType:
    kind: Basic


@dataclass(frozen=True)
class ArrayType:
    elem: 'NativeType'


@dataclass(frozen=True)
class GListType:
    elem: 'NativeType'


@dataclass(frozen=True)
class GSListType:
    elem: 'NativeType'


@dataclass(frozen=True)
class GHashType:
    key: 'NativeType'
    value: 'NativeType'


@dataclass(frozen=True)
class ErrorType:
    pass


@dataclass(frozen=True)
class InterfaceType:
    """Reference to another API entity"""
    name: QualifiedName


NativeType = TypingUnion[BasicType, ArrayType, GListType, GSListType,
                         GHashType, ErrorType, InterfaceType]

VOID = BasicType(Basic.VOID)


class Direction(Enum):
    IN = 'in'
    OUT = 'out'
    INOUT = 'inout'


@dataclass(frozen=True)
class Arg:
    """Callable argument"""
    name: str
    type: NativeType
    direction: Direction = Direction.IN


@dataclass(frozen=True)
class Callable:
    """Signature shared by functions and callbacks"""
    args: tuple[Arg, ...] = ()
    return_type: NativeType = VOID
    return_may_be_null: bool = False

    @property
    def in_args(self) -> list[Arg]:
        """Arguments the wrapper takes from its caller"""
        return [a for a in self.args if a.direction != Direction.OUT]

    @property
    def out_args(self) -> list[Arg]:
        """Arguments whose values the wrapper hands back"""
        return [a for a in self.args if a.direction != Direction.IN]


@dataclass(frozen=True)
class Constant:
    value: Any
    type: NativeType


@dataclass(frozen=True)
class Function:
    symbol: str
    callable: Callable


@dataclass(frozen=True)
class Enumeration:
    members: tuple[tuple[str, int], ...] = ()


@dataclass(frozen=True)
class Flags:
    enumeration: Enumeration


@dataclass(frozen=True)
class Struct:
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class Callback:
    callable: Callable


@dataclass(frozen=True)
class Union:
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class UnsupportedEntity:
    """An entity kind present in the metadata but not modelled here"""
    kind: str


ApiEntity = TypingUnion[Constant, Function, Enumeration, Flags, Struct,
                        Callback, Union, UnsupportedEntity]


@dataclass
class Registry:
    """All entities of one module, in declaration order"""
    namespace: str
    entities: dict[QualifiedName, ApiEntity] = field(default_factory=dict)
    library: str = ''  # shared library to load, found by namespace when empty

    @classmethod
    def load(cls, json_path: str) -> 'Registry':
        """Load a registry from a JSON file"""
        with open(json_path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise MetadataError(f'{json_path}: {e}') from e
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Registry':
        """Create a registry from a dictionary"""
        if not isinstance(data, dict) or 'namespace' not in data:
            raise MetadataError('API description must be an object with a "namespace"')
        namespace = data['namespace']
        registry = cls(namespace=namespace, library=data.get('library', ''))

        for decl in data.get('entities', []):
            if not isinstance(decl, dict):
                raise MetadataError(f'entity must be an object: {decl!r}')
            name = QualifiedName(decl.get('namespace', namespace), _required(decl, 'name'))
            registry.add(name, cls._parse_entity(decl, namespace))

        return registry

    @classmethod
    def combine(cls, registries: list['Registry']) -> 'Registry':
        """Registry spanning several modules, for cross-namespace lookups"""
        combined = cls(namespace='')
        for registry in registries:
            combined.entities.update(registry.entities)
        return combined

    def add(self, name: QualifiedName, entity: ApiEntity):
        """Register an entity"""
        self.entities[name] = entity

    def lookup(self, name: QualifiedName) -> Optional[ApiEntity]:
        """Get entity by qualified name"""
        return self.entities.get(name)

    def is_enum(self, name: QualifiedName) -> bool:
        return isinstance(self.lookup(name), Enumeration)

    def is_flags(self, name: QualifiedName) -> bool:
        return isinstance(self.lookup(name), Flags)

    def is_scalar(self, name: QualifiedName) -> bool:
        return self.is_enum(name) or self.is_flags(name)

    def __iter__(self) -> Iterator[tuple[QualifiedName, ApiEntity]]:
        return iter(self.entities.items())

    def __len__(self) -> int:
        return len(self.entities)

    @classmethod
    def _parse_entity(cls, decl: dict, namespace: str) -> ApiEntity:
        """Parse one entity declaration"""
        kind = decl.get('kind')

        if kind == 'constant':
            return Constant(value=decl.get('value'),
                            type=parse_type(_required(decl, 'type'), namespace))

        elif kind == 'function':
            return Function(symbol=decl.get('symbol', decl['name']),
                            callable=cls._parse_callable(decl, namespace))

        elif kind == 'enum':
            return cls._parse_enum(decl)

        elif kind == 'flags':
            return Flags(cls._parse_enum(decl))

        elif kind == 'struct':
            return Struct(fields=tuple(decl.get('fields', [])))

        elif kind == 'callback':
            return Callback(cls._parse_callable(decl, namespace))

        elif kind == 'union':
            return Union(fields=tuple(decl.get('fields', [])))

        return UnsupportedEntity(kind=str(kind))

    @staticmethod
    def _parse_enum(decl: dict) -> Enumeration:
        """Parse enum members, given as [name, value] pairs"""
        members = []
        for item in decl.get('members', []):
            try:
                name, value = item
                members.append((str(name), int(value)))
            except (TypeError, ValueError):
                raise MetadataError(
                    f"bad member {item!r} in {decl.get('name')!r}, expected [name, value]") from None
        return Enumeration(members=tuple(members))

    @staticmethod
    def _parse_callable(decl: dict, namespace: str) -> Callable:
        """Parse function or callback signature"""
        args = []
        for a in decl.get('args', []):
            if not isinstance(a, dict):
                raise MetadataError(f"argument of {decl.get('name')!r} must be an object: {a!r}")
            try:
                direction = Direction(a.get('direction', 'in'))
            except ValueError:
                raise MetadataError(
                    f"bad direction {a.get('direction')!r} for argument {a.get('name')!r}") from None
            args.append(Arg(name=_required(a, 'name'),
                            type=parse_type(_required(a, 'type'), namespace),
                            direction=direction))
        return Callable(
            args=tuple(args),
            return_type=parse_type(decl.get('return', 'void'), namespace),
            return_may_be_null=bool(decl.get('may_return_null', False)),
        )


def parse_type(spec, namespace: str = '') -> NativeType:
    """Parse a JSON type description"""
    if isinstance(spec, str):
        if spec == 'error':
            return ErrorType()
        try:
            return BasicType(Basic(spec))
        except ValueError:
            raise MetadataError(f'unknown basic type {spec!r}') from None

    if isinstance(spec, dict) and len(spec) == 1:
        (kind, inner), = spec.items()
        if kind == 'array':
            return ArrayType(parse_type(inner, namespace))
        elif kind == 'glist':
            return GListType(parse_type(inner, namespace))
        elif kind == 'gslist':
            return GSListType(parse_type(inner, namespace))
        elif kind == 'ghash':
            if not isinstance(inner, list) or len(inner) != 2:
                raise MetadataError(f'ghash needs [key, value] types, got {inner!r}')
            key, value = inner
            return GHashType(parse_type(key, namespace), parse_type(value, namespace))
        elif kind == 'interface':
            return InterfaceType(QualifiedName.parse(inner, namespace))

    raise MetadataError(f'malformed type {spec!r}')


def _required(decl: dict, key: str):
    try:
        return decl[key]
    except KeyError:
        raise MetadataError(f'missing "{key}" in {decl!r}') from None
