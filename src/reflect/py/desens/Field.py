#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import types

from .Slot import Slot


class Field(Slot):
    """Field reflection - represents one field declared on a Python class.

    Fields are created by Type.fields() from the class's own annotations
    and ``__slots__``. The raw accessors below work on the storage
    location itself:

    - slot fields go through the class's member descriptor
    - instance fields go through the instance ``__dict__``
    - static (``ClassVar``) fields go through the declaring class dict

    so properties, ``__getattribute__``/``__setattr__`` overrides and frozen
    dataclasses never intercept a read or write.
    """

    def __init__(self, parent=None, name="", flags=0, type_=object, storage=None):
        """Create a Field reflection object.

        Args:
            parent: Declaring Type
            name: Field name as written in the class body
            flags: Slot flags (FConst values)
            type_: Declared annotation
            storage: Attribute name the value is stored under (mangled name)
        """
        super().__init__(parent, name, flags)
        self._type = type_
        self._storage = storage if storage is not None else name

    def is_field(self):
        return True

    def type(self):
        """Get declared field type (the raw annotation)."""
        return self._type

    def storage_name(self):
        """Get the attribute name the value lives under."""
        return self._storage

    def _member(self):
        """Return the slot member descriptor for this field, if any."""
        member = self._parent.py_class().__dict__.get(self._storage)
        if isinstance(member, types.MemberDescriptorType):
            return member
        return None

    def _check_target(self, obj):
        cls = self._parent.py_class()
        if not isinstance(obj, cls):
            raise TypeError(
                f"{type(obj).__qualname__} is not an instance of declaring type {self._parent.qname()}")

    def get(self, obj):
        """Get field value from object.

        Args:
            obj: Object to read from (ignored for static fields)

        Returns:
            Stored value; an unset field reads as its class-level
            default, or None
        """
        self.check_access()
        cls = self._parent.py_class()

        if self.is_static():
            return cls.__dict__.get(self._storage)

        self._check_target(obj)

        member = self._member()
        if member is not None:
            try:
                return member.__get__(obj, type(obj))
            except AttributeError:
                return None

        d = object.__getattribute__(obj, "__dict__")
        if self._storage in d:
            return d[self._storage]
        return cls.__dict__.get(self._storage)

    def set_(self, obj, val):
        """Set field value on object.

        Args:
            obj: Object to write to (ignored for static fields)
            val: Value to store
        """
        self.check_access()
        cls = self._parent.py_class()

        if self.is_static():
            type.__setattr__(cls, self._storage, val)
            return

        self._check_target(obj)

        member = self._member()
        if member is not None:
            member.__set__(obj, val)
            return

        object.__getattribute__(obj, "__dict__")[self._storage] = val
