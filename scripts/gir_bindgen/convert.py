"""
Marshalling module

Derives the conversion steps between high-level values and the values
passed across the ctypes boundary. Rules are tried in a fixed order and
the first match wins:

    1. identity        representations are equal
    2. enumeration     IntEnum <-> ordinal
    3. flags           plain int both ways
    4. pointer-unwrap  handle class <-> the pointer it wraps
    5. table           the named primitive conversions below

Any other pairing raises UnknownConversionError.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .errors import UnknownConversionError
from .ir import Arg, InterfaceType, NativeType
from .names import escape_reserved

if TYPE_CHECKING:
    from .types import TypeMapper, TypeRep


class Rule(Enum):
    IDENTITY = 'identity'
    ENUMERATION = 'enumeration'
    FLAGS = 'flags'
    POINTER_UNWRAP = 'pointer-unwrap'
    TABLE = 'table'


class Flow(Enum):
    TO_NATIVE = 'to-native'
    FROM_NATIVE = 'from-native'


@dataclass(frozen=True)
class Conversion:
    """One conversion step, binding `target` from `source`

    `allocates` marks steps that copy into freshly allocated memory.
    """
    target: str
    source: str
    template: str
    rule: Rule
    allocates: bool = False

    @property
    def expr(self) -> str:
        return self.template.format(self.source)

    def render(self) -> str:
        return f'{self.target} = {self.expr}'


# (high, native) -> (template, allocates)
TO_NATIVE = {
    ('str', 'bytes'): ("{}.encode('utf-8')", True),
    ('GType', 'int'): ('int({})', False),
    ('bool', 'int'): ('int({})', False),
    ('str', 'int'): ('ord({})', False),
}

# (native, high) -> (template, allocates)
FROM_NATIVE = {
    ('bytes', 'str'): ("{}.decode('utf-8')", True),
    ('int', 'GType'): ('GType({})', False),
    ('int', 'bool'): ('{} != 0', False),
    ('int', 'str'): ('chr({})', False),
}


class Marshaller:
    """Builds conversion steps for arguments and results"""

    def __init__(self, mapper: 'TypeMapper'):
        self.mapper = mapper

    def h_to_f(self, arg: Arg, target: str) -> list[Conversion]:
        """Steps turning the caller's value of `arg` into its native value"""
        t = self.mapper.arg_type(arg)
        return self.convert(t, target, escape_reserved(arg.name), Flow.TO_NATIVE)

    def f_to_h(self, t: NativeType, target: str, source: str) -> list[Conversion]:
        """Steps turning the native value in `source` into a high-level value"""
        return self.convert(t, target, source, Flow.FROM_NATIVE)

    def rule_for(self, t: NativeType, flow: Flow = Flow.TO_NATIVE) -> Rule:
        """Get the rule that converts values of this type"""
        high = self.mapper.high_repr(t)
        native = self.mapper.native_repr(t)

        if high == native:
            return Rule.IDENTITY
        if isinstance(t, InterfaceType):
            if self.mapper.registry.is_enum(t.name):
                return Rule.ENUMERATION
            if self.mapper.registry.is_flags(t.name):
                return Rule.FLAGS
        if high.ptr() == native:
            return Rule.POINTER_UNWRAP
        if _table_key(flow, high, native) in _TABLES[flow]:
            return Rule.TABLE

        if flow is Flow.TO_NATIVE:
            raise UnknownConversionError(high, native)
        raise UnknownConversionError(native, high)

    def convert(self, t: NativeType, target: str, source: str, flow: Flow) -> list[Conversion]:
        high = self.mapper.high_repr(t)
        native = self.mapper.native_repr(t)
        rule = self.rule_for(t, flow)
        to_native = flow is Flow.TO_NATIVE
        allocates = False

        if rule is Rule.IDENTITY:
            template = '{}'
        elif rule is Rule.ENUMERATION:
            template = '{}.value' if to_native else f'{high}({{}})'
        elif rule is Rule.FLAGS:
            template = 'int({})'
        elif rule is Rule.POINTER_UNWRAP:
            template = '{}.ptr' if to_native else f'{high}({{}})'
        else:
            template, allocates = _TABLES[flow][_table_key(flow, high, native)]

        return [Conversion(target, source, template, rule, allocates)]


_TABLES = {Flow.TO_NATIVE: TO_NATIVE, Flow.FROM_NATIVE: FROM_NATIVE}


def _table_key(flow: Flow, high: 'TypeRep', native: 'TypeRep') -> tuple[str, str]:
    if flow is Flow.TO_NATIVE:
        return str(high), str(native)
    return str(native), str(high)
