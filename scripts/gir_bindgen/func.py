"""
Function binding generation module

Generates a foreign declaration and a Python wrapper for each native
function. The wrapper body is straight-line code:

    1. convert each `in` argument to its native value, allocate storage
       for each `out`/`inout` argument
    2. call the native symbol
    3. convert the result, then read back and convert each output
    4. return the aggregate (see `FuncGenerator.result_type`)

Output storage is a ctypes object local to the wrapper frame, so it is
released on every exit path, including a failing conversion.
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING, Union

from .codegen import CodeGen, pad_to
from .convert import Conversion
from .ir import Arg, Callable, Direction, Function, QualifiedName
from .names import NameSupply, escape_reserved, lower_name
from .types import OPAQUE_CTYPE, TypeRep, tuple_of

if TYPE_CHECKING:
    from .config import Config
    from .convert import Marshaller
    from .types import TypeMapper

UNMANAGED_NOTE = ('Pointer results are unmanaged handles: ownership transfer is '
                  'not tracked, the caller must keep the native object alive.')


def foreign_binding(symbol: str) -> str:
    """Module-level name of the ctypes prototype for a symbol"""
    return f'_{symbol}'


@dataclass
class NativeDeclaration:
    """ctypes prototype for a native symbol"""
    symbol: str
    args: list[tuple[str, TypeRep]]
    restype: TypeRep  # wrapped with TypeRep.foreign()

    def render(self, gen: CodeGen):
        head = f'{foreign_binding(self.symbol)} = _foreign({self.symbol!r}, {self.restype.ctype}, ['
        if not self.args:
            gen.line(head + '])')
            return
        with gen.block(head, '])'):
            for name, rep in self.args:
                gen.line(pad_to(40, f'{rep.ctype},') + f'# {name}')


@dataclass
class Storage:
    """Native storage allocated for an out/inout argument"""
    arg: Arg
    name: str
    ctype: str
    initial: Optional[str] = None

    def render(self) -> str:
        return f"{self.name} = {self.ctype}({self.initial or ''})"


@dataclass
class Peek:
    """Read the native value back out of its storage"""
    target: str
    storage: Storage

    def render(self) -> str:
        return f'{self.target} = {self.storage.name}.value'


@dataclass
class Wrapper:
    """Python function wrapping a foreign declaration"""
    name: str
    params: list[tuple[str, TypeRep]]
    result: TypeRep
    in_steps: list[Conversion] = field(default_factory=list)
    storage: list[Storage] = field(default_factory=list)
    call: str = ''
    null_check: bool = False
    out_steps: list[Union[Conversion, Peek]] = field(default_factory=list)
    returns: Optional[str] = None
    doc: Optional[str] = None

    def render(self, gen: CodeGen):
        params = ', '.join(f'{n}: {t}' for n, t in self.params)
        with gen.block(f'def {self.name}({params}) -> {self.result}:'):
            if self.doc:
                gen.line(f'"""{self.doc}"""')
            for step in self.in_steps:
                gen.line(step.render())
            for slot in self.storage:
                gen.line(slot.render())
            gen.line(self.call)
            if self.null_check:
                with gen.block('if result is None:'):
                    gen.line('return None')
            for step in self.out_steps:
                gen.line(step.render())
            if self.returns is not None:
                gen.line(f'return {self.returns}')


@dataclass
class FunctionBinding:
    declaration: NativeDeclaration
    wrapper: Wrapper


class FuncGenerator:
    """Generates function wrapper bindings"""

    def __init__(self, mapper: 'TypeMapper', marshaller: 'Marshaller', config: 'Config'):
        self.mapper = mapper
        self.marshaller = marshaller
        self.config = config

    def generate(self, name: QualifiedName, func: Function, decls: CodeGen, gen: CodeGen):
        """Generate the declaration into `decls` and the wrapper into `gen`"""
        binding = self.build(name, func.symbol, func.callable)
        decls.line(f'# function {func.symbol}')
        binding.declaration.render(decls)
        gen.line(f'# function {func.symbol}')
        binding.wrapper.render(gen)

    def build(self, name: QualifiedName, symbol: str, callable: Callable) -> FunctionBinding:
        return FunctionBinding(self.declaration(symbol, callable),
                               self.wrapper(name, symbol, callable))

    def declaration(self, symbol: str, callable: Callable) -> NativeDeclaration:
        args = [(a.name, self.mapper.arg_native_repr(a)) for a in callable.args]
        restype = self.mapper.native_repr(callable.return_type).foreign()
        return NativeDeclaration(symbol, args, restype)

    def result_type(self, callable: Callable) -> TypeRep:
        """Aggregate type returned by the wrapper

        (unit, no outputs) -> None, (unit, outputs) -> tuple of outputs,
        (value, no outputs) -> value, (value, outputs) -> tuple of both.
        """
        ret = self.mapper.high_repr(callable.return_type)
        outs = [self.mapper.high_repr(self.mapper.arg_type(a)) for a in callable.out_args]
        if not outs:
            aggregate = ret
        elif ret.is_unit:
            aggregate = tuple_of(outs)
        else:
            aggregate = tuple_of([ret] + outs)
        if self._null_checked(callable):
            return aggregate.optional()
        return aggregate

    def wrapper(self, name: QualifiedName, symbol: str, callable: Callable) -> Wrapper:
        arg_names = {a: escape_reserved(a.name) for a in callable.args}
        supply = NameSupply(taken=arg_names.values())
        supply.reserve('result')

        wrapper = Wrapper(
            name=lower_name(name, self.config),
            params=[(arg_names[a], self.mapper.high_repr(self.mapper.arg_type(a)))
                    for a in callable.in_args],
            result=self.result_type(callable),
            null_check=self._null_checked(callable),
        )

        actuals = []
        slots: dict[Arg, Storage] = {}
        for arg in callable.args:
            if arg.direction == Direction.IN:
                steps = self.marshaller.h_to_f(arg, supply.fresh(arg_names[arg]))
                wrapper.in_steps.extend(steps)
                actuals.append(steps[-1].target)
                continue

            initial = None
            if arg.direction == Direction.INOUT:
                steps = self.marshaller.h_to_f(arg, supply.fresh(arg_names[arg]))
                wrapper.in_steps.extend(steps)
                initial = steps[-1].target
            native = self.mapper.native_repr(self.mapper.arg_type(arg))
            slot = Storage(arg, supply.fresh(arg_names[arg]), native.ctype, initial)
            wrapper.storage.append(slot)
            slots[arg] = slot
            actuals.append(f'ctypes.byref({slot.name})')

        wrapper.call = f"result = {foreign_binding(symbol)}({', '.join(actuals)})"

        result_steps = self.marshaller.f_to_h(callable.return_type, supply.fresh('result'), 'result')
        wrapper.out_steps.extend(result_steps)

        outputs = []
        for arg in callable.out_args:
            peek = Peek(supply.fresh(arg_names[arg]), slots[arg])
            wrapper.out_steps.append(peek)
            steps = self.marshaller.f_to_h(self.mapper.arg_type(arg), supply.fresh(arg_names[arg]),
                                           peek.target)
            wrapper.out_steps.extend(steps)
            outputs.append(steps[-1].target)

        wrapper.returns = self._aggregate(callable, result_steps[-1].target, outputs)

        if self._has_pointer_output(callable):
            wrapper.doc = UNMANAGED_NOTE
        return wrapper

    def _aggregate(self, callable: Callable, result: str, outputs: list[str]) -> Optional[str]:
        """Return expression matching `result_type`"""
        if self.mapper.high_repr(callable.return_type).is_unit:
            if not outputs:
                return None
            values = outputs
        else:
            if not outputs:
                return result
            values = [result] + outputs
        if len(values) == 1:
            return f'({values[0]},)'
        return f"({', '.join(values)})"

    def _null_checked(self, callable: Callable) -> bool:
        # Void calls always return None
        if self.mapper.high_repr(callable.return_type).is_unit:
            return False
        return callable.return_may_be_null

    def _has_pointer_output(self, callable: Callable) -> bool:
        types = [callable.return_type] + [self.mapper.arg_type(a) for a in callable.out_args]
        return any(self.mapper.native_repr(t).ctype == OPAQUE_CTYPE for t in types)
