#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Slot import Slot, FConst


class Method(Slot):
    """Method reflection - represents a method or constructor declared on a class.

    Methods are created by Type.methods() and Type.ctors(). A constructor
    is a Method flagged FConst.Ctor; invoking it calls the declaring class.
    """

    def __init__(self, parent=None, name="", flags=0, returns=object, params=None, func=None):
        """Create a Method reflection object.

        Args:
            parent: Declaring Type
            name: Method name as written in the class body
            flags: Slot flags (FConst values)
            returns: Declared return annotation
            params: List of Param objects (receiver excluded)
            func: Underlying Python function
        """
        super().__init__(parent, name, flags)
        self._returns = returns
        self._params = params if params is not None else []
        self._func = func

    def is_method(self):
        return True

    def is_class_method(self):
        return (self._flags & FConst.ClassMethod) != 0

    def returns(self):
        """Get declared return type."""
        return self._returns

    def params(self):
        """Get parameter list (receiver excluded)."""
        return list(self._params)

    def signature(self):
        """Get the ordered parameter-type signature as a tuple."""
        return tuple(p.type() for p in self._params)

    def func(self):
        """Get the underlying Python function (None for implicit constructors)."""
        return self._func

    def call(self, *args):
        """Call a constructor or static method with variable args."""
        return self.call_on(None, args)

    def call_on(self, target, args=None):
        """Call method on a specific target object.

        Args:
            target: Object to call method on (None for constructors and
                static methods)
            args: List of arguments (NOT including target)
        """
        self.check_access()
        args = list(args) if args is not None else []
        cls = self._parent.py_class()

        if self.is_ctor():
            return cls(*args)

        if self.is_static():
            return self._func(*args)

        if self.is_class_method():
            owner = type(target) if target is not None else cls
            return self._func(owner, *args)

        if target is None:
            raise TypeError(f"Instance method {self.qname()} requires target object")
        if not isinstance(target, cls):
            raise TypeError(
                f"{type(target).__qualname__} is not an instance of declaring type {self._parent.qname()}")
        return self._func(target, *args)

    def to_str(self):
        sig = ", ".join(p.to_str() for p in self._params)
        return f"{self.qname()}({sig})"
