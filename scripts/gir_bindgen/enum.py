"""
Enum binding generation module

Generates IntEnum classes for enumerations and integer aliases for
flag sets.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen
from .ir import QualifiedName
from .names import upper_name

if TYPE_CHECKING:
    from .config import Config
    from .ir import Enumeration, Flags


class EnumGenerator:
    """Generates enumeration and flag bindings"""

    def __init__(self, config: 'Config'):
        self.config = config

    def member_name(self, name: QualifiedName, member: str) -> str:
        """Get class-level name of an enum member"""
        return upper_name(QualifiedName(name.namespace, f'{name.name}_{member}'), self.config)

    def generate(self, name: QualifiedName, enum: 'Enumeration', gen: CodeGen):
        """Generate an IntEnum class"""
        gen.line(f'# enum {name.name}')
        with gen.block(f'class {upper_name(name, self.config)}(enum.IntEnum):'):
            if not enum.members:
                gen.line('pass')
            # Repeated values become aliases of the first member
            for member, value in enum.members:
                gen.line(f'{self.member_name(name, member)} = {value}')

    def generate_flags(self, name: QualifiedName, flags: 'Flags', gen: CodeGen):
        """Generate a flags alias with one constant per member

        Flag values stay plain integers, combined with the usual bit operators.
        """
        type_name = upper_name(name, self.config)
        gen.line(f'# flags {name.name}')
        gen.line(f'{type_name} = int')
        for member, value in flags.enumeration.members:
            gen.line(f'{self.member_name(name, member)}: {type_name} = {value}')
