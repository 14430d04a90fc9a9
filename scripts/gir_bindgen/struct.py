"""
Struct binding generation module

Structures and unions are exposed as opaque handles wrapping the native
pointer; fields are not bound.
"""

from typing import TYPE_CHECKING, Union

from .codegen import CodeGen
from .names import upper_name

if TYPE_CHECKING:
    from .config import Config
    from .ir import QualifiedName, Struct, Union as UnionEntity


class StructGenerator:
    """Generates handle classes for structs and unions"""

    def __init__(self, config: 'Config'):
        self.config = config

    def generate(self, name: 'QualifiedName', struct: Union['Struct', 'UnionEntity'], gen: CodeGen,
                 kind: str = 'struct'):
        gen.line(f'# {kind} {name.name}')
        with gen.block(f'class {upper_name(name, self.config)}(_Handle):'):
            gen.line('__slots__ = ()')
