"""
Main generator module

Orchestrates all components to generate complete Python ctypes bindings.
"""

import os
from typing import Optional

from .callback import CallbackGenerator
from .codegen import CodeGen
from .config import Config
from .const import ConstGenerator
from .convert import Marshaller
from .enum import EnumGenerator
from .errors import UnclassifiedEntityError
from .func import FuncGenerator
from .ir import (
    ApiEntity, Callback, Constant, Enumeration, Flags, Function,
    QualifiedName, Registry, Struct, Union,
)
from .struct import StructGenerator
from .types import TypeMapper

# Placeholder entities emitted by the scanner for empty namespaces
DUMMY_DECL = 'dummy_decl'

PREAMBLE = '''\
from __future__ import annotations

import ctypes
import ctypes.util
import enum
from typing import NewType, Optional

_lib = ctypes.CDLL({library})

GType = NewType('GType', int)


def _foreign(symbol, restype, argtypes):
    """Declare the prototype of a native symbol

    Calls go through ctypes.CDLL, which releases the GIL for the
    duration of each foreign call.
    """
    func = getattr(_lib, symbol)
    func.restype = restype
    func.argtypes = argtypes
    return func


class _Handle:
    """Wraps a pointer to a native object"""
    __slots__ = ('ptr',)

    def __init__(self, ptr):
        self.ptr = ptr

    def __eq__(self, other):
        return type(other) is type(self) and other.ptr == self.ptr

    def __hash__(self):
        return hash((type(self), self.ptr))

    def __repr__(self):
        return f'{{type(self).__name__}}({{self.ptr!r}})'


class GError(_Handle):
    __slots__ = ()
'''


class Generator:
    """Main binding generator"""

    def __init__(self, config: Config, output_root: str = '.'):
        self.config = config
        self.output_root = output_root
        self._ignores: set[str] = set()

    def configure(self, config: Config):
        """Overlay additional prefixes and name overrides"""
        self.config = self.config.merged(config)

    def ignore(self, *names: str):
        """Add symbols to skip, by local or qualified name"""
        self._ignores.update(names)

    def is_ignored(self, name: QualifiedName) -> bool:
        return name.name == DUMMY_DECL or name.name in self._ignores or str(name) in self._ignores

    def prepare(self):
        """Prepare output directory"""
        print('=== Generating Python bindings:')
        os.makedirs(self.output_root, exist_ok=True)

    def generate_all(self, registries: list[Registry]) -> list[str]:
        """Generate bindings for all modules, returning the written paths"""
        self.prepare()
        known = Registry.combine(registries)
        return [self.generate_module(registry, known) for registry in registries]

    def generate_module(self, registry: Registry, known: Optional[Registry] = None) -> str:
        """Generate and write bindings for a single module"""
        path = os.path.join(self.output_root, f'{module_file_name(registry.namespace)}.py')
        print(f'  {registry.namespace} => {path}')

        # Nothing is written unless the whole module generated
        source = self.module_source(registry, known)
        write_if_changed(path, source)
        return path

    def module_source(self, registry: Registry, known: Optional[Registry] = None) -> str:
        """Generate module text

        Foreign declarations come first, then every other fragment in
        declaration order.
        """
        mapper = TypeMapper(known if known is not None else registry, self.config)
        decls = CodeGen()
        body = CodeGen()
        generators = _Generators(mapper, self.config)

        for name, entity in registry:
            if self.is_ignored(name):
                continue
            fragment = CodeGen()
            self.generate_code(name, entity, generators, decls, fragment)
            body.extend(fragment)
            body.blank()
            body.blank()

        gen = CodeGen()
        gen.line(f'# Generated bindings for {registry.namespace}, do not edit.')
        gen.raw(PREAMBLE.format(library=library_expr(registry)))
        if not decls.is_empty():
            gen.blank()
            gen.blank()
            gen.extend(decls)
        gen.blank()
        gen.blank()
        gen.extend(body)
        return gen.output().rstrip('\n') + '\n'

    def generate_code(self, name: QualifiedName, entity: ApiEntity, generators: '_Generators',
                      decls: CodeGen, gen: CodeGen):
        """Generate the fragment for one entity"""
        if isinstance(entity, Constant):
            generators.const.generate(name, entity, gen)
        elif isinstance(entity, Function):
            generators.func.generate(name, entity, decls, gen)
        elif isinstance(entity, Enumeration):
            generators.enum.generate(name, entity, gen)
        elif isinstance(entity, Flags):
            generators.enum.generate_flags(name, entity, gen)
        elif isinstance(entity, Callback):
            generators.callback.generate(name, entity, gen)
        elif isinstance(entity, Struct):
            generators.struct.generate(name, entity, gen)
        elif isinstance(entity, Union):
            generators.struct.generate(name, entity, gen, kind='union')
        else:
            raise UnclassifiedEntityError(name, entity)


class _Generators:
    """Per-module emitters sharing one type mapper"""

    def __init__(self, mapper: TypeMapper, config: Config):
        self.const = ConstGenerator(mapper, config)
        self.func = FuncGenerator(mapper, Marshaller(mapper), config)
        self.enum = EnumGenerator(config)
        self.struct = StructGenerator(config)
        self.callback = CallbackGenerator(config)


def module_file_name(namespace: str) -> str:
    return namespace.lower().replace('.', '_')


def library_expr(registry: Registry) -> str:
    """Expression locating the shared library of a module"""
    if registry.library:
        return repr(registry.library)
    return f'ctypes.util.find_library({registry.namespace.lower()!r})'


def write_if_changed(path: str, content: str) -> bool:
    """Write file unless it already has this content"""
    if os.path.exists(path):
        with open(path, 'r', encoding='utf-8') as f:
            if f.read() == content:
                return False
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        f.write(content)
    return True
