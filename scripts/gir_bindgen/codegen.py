"""
Code generation utilities

Provides helpers for generating Python code.
"""

from typing import Optional


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = '    '  # 4 spaces

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def raw(self, text: str):
        """Add raw text without indentation processing"""
        self._lines.append(text)

    def blank(self):
        self._lines.append('')

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: Optional[str] = None):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def extend(self, other: 'CodeGen'):
        """Append another buffer at the current indentation"""
        for text in other._lines:
            self.line(text)

    def is_empty(self) -> bool:
        return not self._lines

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines)


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: Optional[str]):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        if self._footer is not None:
            self._gen.line(self._footer)


def pad_to(n: int, text: str) -> str:
    """Pad text with spaces to at least n characters"""
    return text.ljust(n)


def py_literal(value) -> str:
    """Render a constant value as a Python literal"""
    if value is None:
        return 'None'
    return repr(value)
