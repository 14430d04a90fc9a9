"""
Type mapping module

Maps native types to the representation used across the ctypes call
boundary and to the Python annotation exposed to callers.
"""

from dataclasses import dataclass, field
from typing import Optional

from .config import Config
from .ir import (
    Arg, ArrayType, Basic, BasicType, Direction, ErrorType, GHashType,
    GListType, GSListType, InterfaceType, NativeType, QualifiedName, Registry, VOID,
)
from .names import Style, resolve


@dataclass(frozen=True)
class TypeRep:
    """Printable type descriptor

    `ctype` is the ctypes spelling used in foreign declarations. It does not
    take part in equality: two representations are equal when they carry the
    same Python value shape.
    """
    name: str
    args: tuple['TypeRep', ...] = ()
    ctype: Optional[str] = field(default=None, compare=False)

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}[{', '.join(str(a) for a in self.args)}]"

    def describe(self) -> str:
        """Annotation plus ctypes spelling, for error messages"""
        if self.ctype and self.ctype != self.name:
            return f'{self} ({self.ctype})'
        return str(self)

    @property
    def is_unit(self) -> bool:
        return self.name == 'None' and not self.args

    def ptr(self, ctype: Optional[str] = None) -> 'TypeRep':
        return TypeRep('Ptr', (self,), ctype or f'ctypes.POINTER({self.ctype})')

    def foreign(self) -> 'TypeRep':
        """Mark a native result as coming from a blocking foreign call"""
        return TypeRep('Foreign', (self,), self.ctype)

    def optional(self) -> 'TypeRep':
        return TypeRep('Optional', (self,))


def tuple_of(items: list[TypeRep]) -> TypeRep:
    return TypeRep('tuple', tuple(items))


UNIT = TypeRep('None', ctype='None')

# Enum and flag values cross the boundary as machine words
WORD = TypeRep('int', ctype='ctypes.c_uint')

OPAQUE_CTYPE = 'ctypes.c_void_p'

# `void` arguments (gpointer) pass an address through untouched
GPOINTER = TypeRep('int', ctype=OPAQUE_CTYPE)

NATIVE_BASIC = {
    Basic.VOID: UNIT,
    Basic.BOOLEAN: TypeRep('int', ctype='ctypes.c_int'),
    Basic.INT8: TypeRep('int', ctype='ctypes.c_int8'),
    Basic.UINT8: TypeRep('int', ctype='ctypes.c_uint8'),
    Basic.INT16: TypeRep('int', ctype='ctypes.c_int16'),
    Basic.UINT16: TypeRep('int', ctype='ctypes.c_uint16'),
    Basic.INT32: TypeRep('int', ctype='ctypes.c_int32'),
    Basic.UINT32: TypeRep('int', ctype='ctypes.c_uint32'),
    Basic.INT64: TypeRep('int', ctype='ctypes.c_int64'),
    Basic.UINT64: TypeRep('int', ctype='ctypes.c_uint64'),
    Basic.INT: TypeRep('int', ctype='ctypes.c_int'),
    Basic.UINT: TypeRep('int', ctype='ctypes.c_uint'),
    Basic.LONG: TypeRep('int', ctype='ctypes.c_long'),
    Basic.ULONG: TypeRep('int', ctype='ctypes.c_ulong'),
    Basic.SSIZE: TypeRep('int', ctype='ctypes.c_ssize_t'),
    Basic.SIZE: TypeRep('int', ctype='ctypes.c_size_t'),
    Basic.FLOAT: TypeRep('float', ctype='ctypes.c_float'),
    Basic.DOUBLE: TypeRep('float', ctype='ctypes.c_double'),
    Basic.UNICHAR: TypeRep('int', ctype='ctypes.c_uint32'),
    Basic.GTYPE: TypeRep('int', ctype='ctypes.c_size_t'),
    Basic.UTF8: TypeRep('bytes', ctype='ctypes.c_char_p'),
    Basic.FILENAME: TypeRep('bytes', ctype='ctypes.c_char_p'),
}

HIGH_BASIC = {
    Basic.VOID: TypeRep('None'),
    Basic.BOOLEAN: TypeRep('bool'),
    Basic.FLOAT: TypeRep('float'),
    Basic.DOUBLE: TypeRep('float'),
    Basic.UNICHAR: TypeRep('str'),
    Basic.GTYPE: TypeRep('GType'),
    Basic.UTF8: TypeRep('str'),
    Basic.FILENAME: TypeRep('str'),
}


@dataclass(frozen=True)
class ResolvedType:
    """Interface reference after its namespace has been replaced by a prefix"""
    name: str
    ref: QualifiedName


@dataclass(frozen=True)
class UntypedPointer:
    """Argument declared as `void`, which in argument position means gpointer"""


class TypeMapper:
    """Maps native types to native and high-level representations"""

    def __init__(self, registry: Registry, config: Config):
        self.registry = registry
        self.config = config

    def map_prefixes(self, t):
        """Rewrite every interface reference to its prefixed type name"""
        if isinstance(t, ArrayType):
            return ArrayType(self.map_prefixes(t.elem))
        elif isinstance(t, GListType):
            return GListType(self.map_prefixes(t.elem))
        elif isinstance(t, GSListType):
            return GSListType(self.map_prefixes(t.elem))
        elif isinstance(t, GHashType):
            return GHashType(self.map_prefixes(t.key), self.map_prefixes(t.value))
        elif isinstance(t, InterfaceType):
            return ResolvedType(resolve(t.name, Style.TYPE, self.config), t.name)
        return t

    def is_scalar(self, t: NativeType) -> bool:
        """Check if type is an enum or flags, passed as a machine word"""
        if not isinstance(t, InterfaceType):
            return False
        return self.registry.is_scalar(t.name)

    def arg_type(self, arg: Arg):
        """Type of an argument slot, with `void` read as an untyped pointer"""
        if arg.type == VOID:
            return UntypedPointer()
        return arg.type

    def native_repr(self, t: NativeType) -> TypeRep:
        """Representation across the foreign call boundary"""
        return self._native(self.map_prefixes(t))

    def high_repr(self, t: NativeType) -> TypeRep:
        """Representation exposed to callers of the bindings"""
        return self._high(self.map_prefixes(t))

    def arg_native_repr(self, arg: Arg) -> TypeRep:
        """Native representation of an argument slot"""
        native = self.native_repr(self.arg_type(arg))
        if arg.direction == Direction.IN:
            return native
        return native.ptr()

    def _native(self, t) -> TypeRep:
        if isinstance(t, BasicType):
            return NATIVE_BASIC[t.kind]
        elif isinstance(t, ArrayType):
            return TypeRep('GArray', (self._native(t.elem),), OPAQUE_CTYPE)
        elif isinstance(t, GListType):
            return TypeRep('GList', (self._native(t.elem),), OPAQUE_CTYPE)
        elif isinstance(t, GSListType):
            return TypeRep('GSList', (self._native(t.elem),), OPAQUE_CTYPE)
        elif isinstance(t, GHashType):
            return TypeRep('GHashTable', (self._native(t.key), self._native(t.value)),
                           OPAQUE_CTYPE)
        elif isinstance(t, ErrorType):
            return TypeRep('GError').ptr(OPAQUE_CTYPE)
        elif isinstance(t, UntypedPointer):
            return GPOINTER
        elif isinstance(t, ResolvedType):
            if self.is_scalar(InterfaceType(t.ref)):
                return WORD
            return TypeRep(t.name).ptr(OPAQUE_CTYPE)
        raise TypeError(f'not a native type: {t!r}')

    def _high(self, t) -> TypeRep:
        if isinstance(t, BasicType):
            return HIGH_BASIC.get(t.kind, TypeRep('int'))
        elif isinstance(t, (ArrayType, GListType, GSListType)):
            return TypeRep('list', (self._high(t.elem),))
        elif isinstance(t, GHashType):
            return TypeRep('dict', (self._high(t.key), self._high(t.value)))
        elif isinstance(t, ErrorType):
            return TypeRep('GError')
        elif isinstance(t, UntypedPointer):
            return GPOINTER
        elif isinstance(t, ResolvedType):
            return TypeRep(t.name)
        raise TypeError(f'not a native type: {t!r}')
