#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


# Flag constants
class FConst:
    """Slot flag constants."""
    Public = 0x00000001
    Private = 0x00000002
    Ctor = 0x00000100
    Static = 0x00000800
    ClassMethod = 0x00001000
    Synthetic = 0x00100000


def _mangle_prefix(cls):
    """Prefix CPython prepends to ``__name`` members declared in cls."""
    stripped = cls.__name__.lstrip("_")
    if not stripped:
        return None
    return f"_{stripped}"


def demangle(cls, name):
    """Map a stored member name back to the name written in the class body.

    Returns a tuple ``(source_name, storage_name)``.
    """
    prefix = _mangle_prefix(cls)
    if prefix is not None and name.startswith(prefix + "__"):
        source = name[len(prefix):]
        if not source.endswith("__"):
            return source, name
    return name, name


def mangle(cls, name):
    """Map a name as written in the class body to its storage name."""
    prefix = _mangle_prefix(cls)
    if prefix is not None and name.startswith("__") and not name.endswith("__"):
        return prefix + name
    return name


def visibility(name):
    """Leading underscore means non-public; dunder names stay public."""
    if name.startswith("__") and name.endswith("__"):
        return FConst.Public
    return FConst.Private if name.startswith("_") else FConst.Public


class Slot(Obj):
    """Base class for Field and Method reflection.

    Every slot carries its own accessibility flag. The flag lives on this
    descriptor instance only; descriptors are never shared or cached, so
    granting access on one never leaks to another caller.
    """

    def __init__(self, parent=None, name="", flags=0):
        self._parent = parent
        self._name = name
        self._flags = flags
        self._accessible = False

    def parent(self):
        """Get declaring type."""
        return self._parent

    def name(self):
        """Get slot name."""
        return self._name

    def flags(self):
        """Get raw flags value."""
        return self._flags

    def qname(self):
        """Get qualified name (Type.slotName)."""
        if self._parent is not None:
            return f"{self._parent.qname()}.{self._name}"
        return self._name

    def is_field(self):
        return False

    def is_method(self):
        return False

    def is_ctor(self):
        return (self._flags & FConst.Ctor) != 0

    def is_public(self):
        return (self._flags & FConst.Public) != 0

    def is_private(self):
        return (self._flags & FConst.Private) != 0

    def is_static(self):
        return (self._flags & FConst.Static) != 0

    def is_synthetic(self):
        return (self._flags & FConst.Synthetic) != 0

    def is_accessible(self):
        """Return true if access checks are currently suppressed."""
        return self._accessible

    def set_accessible(self, flag):
        """Suppress (or restore) visibility checks for this descriptor.

        Raises PermissionError when the declaring type belongs to the
        interpreter core, whose members may not be opened up.
        """
        if flag and self._parent is not None:
            cls = self._parent.py_class()
            if cls.__module__ == "builtins":
                raise PermissionError(f"Cannot make {self.qname()} accessible")
        self._accessible = bool(flag)

    def check_access(self):
        """Raise PermissionError if this slot is non-public and not accessible."""
        if not self.is_public() and not self._accessible:
            raise PermissionError(f"{self.qname()} is not accessible")

    def equals(self, that):
        if not isinstance(that, Slot) or type(that) is not type(self):
            return False
        return self._parent == that._parent and self._name == that._name

    def hash(self):
        return hash((self._parent, self._name))

    def to_str(self):
        return self.qname()
