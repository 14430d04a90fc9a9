"""Shared fixtures for the generator tests"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SCRIPTS_ROOT = REPO_ROOT / "scripts"
if str(SCRIPTS_ROOT) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_ROOT))

from gir_bindgen.config import Config
from gir_bindgen.ir import (
    Basic, BasicType, Enumeration, Flags, InterfaceType, QualifiedName, Registry, Struct,
)

CONFIG = Config(prefixes={"Foo": "foo"})

COLOR = QualifiedName("Foo", "Color")
MODE = QualifiedName("Foo", "Mode")
POINT = QualifiedName("Foo", "Point")

INT32 = BasicType(Basic.INT32)
DOUBLE = BasicType(Basic.DOUBLE)
BOOLEAN = BasicType(Basic.BOOLEAN)
UTF8 = BasicType(Basic.UTF8)
GTYPE = BasicType(Basic.GTYPE)
UNICHAR = BasicType(Basic.UNICHAR)


def make_registry() -> Registry:
    registry = Registry(namespace="Foo")
    registry.add(COLOR, Enumeration(members=(("red", 0), ("green", 1), ("blue", 2))))
    registry.add(MODE, Flags(Enumeration(members=(("read", 1), ("write", 2)))))
    registry.add(POINT, Struct(fields=("x", "y")))
    return registry


def iface(name: QualifiedName) -> InterfaceType:
    return InterfaceType(name)
