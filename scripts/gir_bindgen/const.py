"""
Constant binding generation module
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen, py_literal
from .names import lower_name

if TYPE_CHECKING:
    from .config import Config
    from .ir import Constant, QualifiedName
    from .types import TypeMapper


class ConstGenerator:
    """Generates annotated module-level constants"""

    def __init__(self, mapper: 'TypeMapper', config: 'Config'):
        self.mapper = mapper
        self.config = config

    def generate(self, name: 'QualifiedName', const: 'Constant', gen: CodeGen):
        const_name = lower_name(name, self.config)
        high = self.mapper.high_repr(const.type)
        gen.line(f'# constant {name.name}')
        gen.line(f'{const_name}: {high} = {py_literal(const.value)}')
