"""
gir_bindgen - Python ctypes binding generation for introspected C libraries

Reads a JSON description of a library's API surface (constants, functions,
enumerations, flags, structures, callbacks, unions) and generates a Python
module with ctypes declarations and safe wrapper functions.
"""

from .ir import (
    QualifiedName, Basic, BasicType, ArrayType, GListType, GSListType, GHashType,
    ErrorType, InterfaceType, Direction, Arg, Callable,
    Constant, Function, Enumeration, Flags, Struct, Callback, Union,
    UnsupportedEntity, Registry, parse_type,
)
from .config import Config
from .errors import (
    GenerationError, ConfigError, MetadataError, UnregisteredNamespaceError,
    MalformedIdentifierError, UnknownConversionError, UnclassifiedEntityError,
)
from .names import Style, resolve, lower_name, upper_name, escape_reserved, NameSupply
from .types import TypeRep, TypeMapper
from .convert import Rule, Conversion, Marshaller
from .codegen import CodeGen
from .func import FuncGenerator, FunctionBinding, NativeDeclaration, Wrapper
from .const import ConstGenerator
from .enum import EnumGenerator
from .struct import StructGenerator
from .callback import CallbackGenerator
from .generator import Generator

__all__ = [
    'QualifiedName', 'Basic', 'BasicType', 'ArrayType', 'GListType', 'GSListType',
    'GHashType', 'ErrorType', 'InterfaceType', 'Direction', 'Arg', 'Callable',
    'Constant', 'Function', 'Enumeration', 'Flags', 'Struct', 'Callback', 'Union',
    'UnsupportedEntity', 'Registry', 'parse_type',
    'Config',
    'GenerationError', 'ConfigError', 'MetadataError', 'UnregisteredNamespaceError',
    'MalformedIdentifierError', 'UnknownConversionError', 'UnclassifiedEntityError',
    'Style', 'resolve', 'lower_name', 'upper_name', 'escape_reserved', 'NameSupply',
    'TypeRep', 'TypeMapper',
    'Rule', 'Conversion', 'Marshaller',
    'CodeGen',
    'FuncGenerator', 'FunctionBinding', 'NativeDeclaration', 'Wrapper',
    'ConstGenerator',
    'EnumGenerator',
    'StructGenerator',
    'CallbackGenerator',
    'Generator',
]
