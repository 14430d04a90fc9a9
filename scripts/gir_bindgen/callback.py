"""
Callback binding generation module

Callbacks are exposed as handles wrapping a native function pointer. Python
callables are not converted into native callbacks, so functions taking a
callback can only be passed a handle obtained from the library itself.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen
from .names import upper_name

if TYPE_CHECKING:
    from .config import Config
    from .ir import Callback, QualifiedName


class CallbackGenerator:
    """Generates callback handle classes"""

    def __init__(self, config: 'Config'):
        self.config = config

    def generate(self, name: 'QualifiedName', callback: 'Callback', gen: CodeGen):
        type_name = upper_name(name, self.config)
        gen.line(f'# callback {type_name}')
        with gen.block(f'class {type_name}(_Handle):'):
            gen.line('__slots__ = ()')
