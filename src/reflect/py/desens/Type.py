#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import dataclasses
import importlib
import inspect
import types
import typing

from .Field import Field
from .Method import Method
from .Obj import Obj
from .Param import Param
from .Slot import FConst, demangle, mangle, visibility


_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)

# constructors, plus the compiler generated annotation hook
_NOT_METHODS = ("__init__", "__new__", "__annotate__", "__annotate_func__")


class Type(Obj):
    """Type class - reflection over one Python class.

    Nothing is cached here. Each call to fields(), ctors() or methods()
    re-reads the live class and returns brand new descriptors, so every
    caller owns the accessibility flags of the slots it gets back.
    """

    def __init__(self, cls):
        self._cls = cls

    @staticmethod
    def of(cls):
        """Wrap a Python class (or copy another Type)"""
        if isinstance(cls, Type):
            return Type(cls._cls)
        if not isinstance(cls, type):
            raise TypeError(f"Not a class: {cls!r}")
        return Type(cls)

    @staticmethod
    def find(qname, checked=True):
        """Find type by qname of the form 'module::Qualname'.

        Args:
            qname: Qualified type name, e.g. 'app.model::Account.Inner'
            checked: If True, raise LookupError if not found

        Returns:
            Type instance or None
        """
        module_name, sep, path = qname.partition("::")
        cls = None
        if sep and module_name and path:
            try:
                cls = importlib.import_module(module_name)
                for part in path.split("."):
                    cls = getattr(cls, part)
            except (ImportError, AttributeError):
                cls = None
        if not isinstance(cls, type):
            if checked:
                raise LookupError(f"Unknown type: {qname}")
            return None
        return Type(cls)

    def name(self):
        return self._cls.__name__

    def qname(self):
        return f"{self._cls.__module__}::{self._cls.__qualname__}"

    def py_class(self):
        """Return the wrapped Python class"""
        return self._cls

    def is_root(self):
        """Return true if this is the universal root type (object)"""
        return self._cls is object

    def base(self):
        """Return the next type in the method resolution order, None for the root"""
        mro = self._cls.__mro__
        if len(mro) < 2:
            return None
        return Type(mro[1])

    def inheritance(self):
        """Return the resolution order from this type to the root (inclusive)."""
        return [Type(c) for c in self._cls.__mro__]

    def fits(self, that):
        """Return true if this type is that type or a subtype of it"""
        return issubclass(self._cls, Type.of(that)._cls)

    #################################################################
    # Fields
    #################################################################

    def fields(self):
        """Return the fields declared directly on this type.

        Annotated names come first in declaration order, followed by
        unannotated names from this class's own ``__slots__``.
        """
        cls = self._cls
        result = []
        seen = set()

        for key, ann in self._annotations().items():
            if Type._is_init_var(ann):
                continue
            is_static, ann = Type._unwrap_class_var(ann)
            name, storage = demangle(cls, key)
            flags = visibility(name)
            if is_static:
                flags |= FConst.Static
            result.append(Field(self, name, flags, ann, storage))
            seen.add(storage)

        for slot_name in self._own_slots():
            storage = mangle(cls, slot_name)
            if storage in seen:
                continue
            result.append(Field(self, slot_name, visibility(slot_name), object, storage))
            seen.add(storage)

        return result

    def field(self, name, checked=True):
        """Find a field declared directly on this type by name.

        Args:
            name: Field name to find
            checked: If True, raise LookupError if not found

        Returns:
            Field instance or None (if checked=False and not found)
        """
        for f in self.fields():
            if f.name() == name:
                return f
        if checked:
            raise LookupError(f"{self.qname()}.{name}")
        return None

    def _annotations(self):
        try:
            return inspect.get_annotations(self._cls, eval_str=True)
        except (NameError, SyntaxError, TypeError, AttributeError):
            # unresolvable forward reference; keep the raw strings
            return inspect.get_annotations(self._cls)

    def _own_slots(self):
        slots = self._cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        return [s for s in slots if s not in ("__dict__", "__weakref__")]

    @staticmethod
    def _is_init_var(ann):
        if ann is dataclasses.InitVar or isinstance(ann, dataclasses.InitVar):
            return True
        return isinstance(ann, str) and ann.split("[")[0].endswith("InitVar")

    @staticmethod
    def _unwrap_class_var(ann):
        """Return (is_static, declared_type) for an annotation."""
        if ann is typing.ClassVar:
            return True, object
        if typing.get_origin(ann) is typing.ClassVar:
            args = typing.get_args(ann)
            return True, args[0] if args else object
        if isinstance(ann, str) and ann.split("[")[0].endswith("ClassVar"):
            return True, ann
        return False, ann

    #################################################################
    # Constructors and methods
    #################################################################

    def ctors(self):
        """Return the constructors declared directly on this type.

        That is the class's own ``__init__``, or an implicit no-arg
        constructor when nothing in the resolution order defines
        ``__init__`` or ``__new__``. A class that inherits ``__init__``, or
        is built by ``__new__`` alone, declares no constructor.
        """
        cls = self._cls
        init = cls.__dict__.get("__init__")
        if isinstance(init, types.FunctionType):
            params, _ = Type._signature(init, 1)
            return [Method(self, "__init__", FConst.Ctor | FConst.Public, cls, params, init)]
        if cls.__init__ is object.__init__ and cls.__new__ is object.__new__:
            flags = FConst.Ctor | FConst.Public | FConst.Synthetic
            return [Method(self, "__init__", flags, cls, [], None)]
        return []

    def ctor(self, params=(), checked=True):
        """Find the declared constructor with exactly the given parameter types.

        Args:
            params: Sequence of parameter types (classes, typing forms or Types)
            checked: If True, raise LookupError if not found
        """
        want = Type._normalize(params)
        for c in self.ctors():
            if c.signature() == want:
                return c
        if checked:
            raise LookupError(f"{self.qname()}.__init__{Type._sig_str(want)}")
        return None

    def methods(self):
        """Return the methods declared directly on this type"""
        cls = self._cls
        result = []
        for key, raw in list(cls.__dict__.items()):
            if key in _NOT_METHODS:
                continue
            if isinstance(raw, staticmethod):
                func, flags, receiver = raw.__func__, FConst.Static, 0
            elif isinstance(raw, classmethod):
                func, flags, receiver = raw.__func__, FConst.ClassMethod, 1
            elif isinstance(raw, types.FunctionType):
                func, flags, receiver = raw, 0, 1
            else:
                continue
            if not isinstance(func, types.FunctionType):
                continue
            name, _ = demangle(cls, key)
            params, returns = Type._signature(func, receiver)
            result.append(Method(self, name, flags | visibility(name), returns, params, func))
        return result

    def method(self, name, params=(), checked=True):
        """Find a declared method by name and exact parameter types.

        Args:
            name: Method name as written in the class body
            params: Sequence of parameter types (classes, typing forms or Types)
            checked: If True, raise LookupError if not found

        Returns:
            Method instance or None (if checked=False and not found)
        """
        want = Type._normalize(params)
        for m in self.methods():
            if m.name() == name and m.signature() == want:
                return m
        if checked:
            raise LookupError(f"{self.qname()}.{name}{Type._sig_str(want)}")
        return None

    @staticmethod
    def _signature(func, receiver):
        """Build (params, returns) for a Python function.

        The first ``receiver`` positional parameters (self/cls) are dropped.
        Varargs and keyword-only parameters are not part of the signature.
        """
        try:
            sig = inspect.signature(func)
        except (TypeError, ValueError):
            return [], object
        try:
            hints = typing.get_type_hints(func)
        except (NameError, SyntaxError, TypeError, AttributeError):
            hints = {}

        positional = [p for p in sig.parameters.values() if p.kind in _POSITIONAL]
        params = []
        for p in positional[receiver:]:
            if p.name in hints:
                t = hints[p.name]
            elif p.annotation is not inspect.Parameter.empty:
                t = p.annotation
            else:
                t = object
            params.append(Param(p.name, t, p.default is not inspect.Parameter.empty))

        if "return" in hints:
            returns = hints["return"]
        elif sig.return_annotation is not inspect.Signature.empty:
            returns = sig.return_annotation
        else:
            returns = object
        return params, returns

    @staticmethod
    def _normalize(params):
        return tuple(p.py_class() if isinstance(p, Type) else p for p in params)

    @staticmethod
    def _sig_str(sig):
        return "(" + ", ".join(getattr(t, "__qualname__", str(t)) for t in sig) + ")"

    #################################################################
    # Obj
    #################################################################

    def equals(self, that):
        return isinstance(that, Type) and self._cls is that._cls

    def hash(self):
        return hash(self._cls)

    def to_str(self):
        return self.qname()

