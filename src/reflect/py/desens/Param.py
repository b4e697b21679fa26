#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Param(Obj):
    """Method parameter metadata for reflection.

    Represents a single positional parameter of a method or constructor:
    - name: Parameter name
    - type: Declared annotation (``object`` when unannotated)
    - has_default: Whether parameter has a default value
    """

    def __init__(self, name, param_type=object, has_default=False):
        self._name = name
        self._type = param_type
        self._has_default = has_default

    def name(self):
        """Get parameter name."""
        return self._name

    def type(self):
        """Get declared parameter type."""
        return self._type

    def has_default(self):
        """Check if parameter has a default value."""
        return self._has_default

    def equals(self, that):
        if not isinstance(that, Param):
            return False
        return self._name == that._name and self._type == that._type

    def hash(self):
        return hash(self._name)

    def to_str(self):
        t = self._type
        return f"{getattr(t, '__qualname__', t)} {self._name}"
