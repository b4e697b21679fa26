#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Array(Obj):
    """
    Fixed size array of a runtime element type.
    Primitive element types default to their zero value, everything
    else defaults to None.
    """

    # Zero values for primitive element types
    _DEFAULTS = {
        bool: False,
        int: 0,
        float: 0.0,
        complex: 0j,
    }

    def __init__(self, of, size):
        self._of = of
        self._arr = [Array.default_of(of)] * int(size)

    @staticmethod
    def default_of(of):
        """Get the default element value for the given element type."""
        return Array._DEFAULTS.get(of)

    @staticmethod
    def is_primitive(of):
        return of in Array._DEFAULTS

    def of(self):
        """Get element type."""
        return self._of

    def size(self):
        """Get number of elements in the array."""
        return len(self._arr)

    def get(self, index):
        """Get the element at the given index."""
        return self._arr[self._index(index)]

    def set(self, index, val):
        """Set the element at the given index.

        Raises TypeError if val is not an instance of the element type;
        None is only storable for non-primitive element types.
        """
        if val is None:
            if Array.is_primitive(self._of):
                raise TypeError(f"Cannot store None in {self.to_str()}")
        elif not isinstance(val, self._of):
            raise TypeError(f"Cannot store {type(val).__qualname__} in {self.to_str()}")
        self._arr[self._index(index)] = val

    def _index(self, index):
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Array index must be int, not {type(index).__qualname__}")
        if index < 0 or index >= len(self._arr):
            raise IndexError(f"Index {index} out of range for {self.to_str()}")
        return index

    def to_list(self):
        """Return a copy of the elements as a Python list."""
        return list(self._arr)

    def __len__(self):
        return len(self._arr)

    def __getitem__(self, index):
        return self.get(index)

    def __setitem__(self, index, val):
        self.set(index, val)

    def __iter__(self):
        return iter(self._arr)

    def equals(self, that):
        if not isinstance(that, Array):
            return False
        return self._of is that._of and self._arr == that._arr

    # mutable, so unhashable like list
    __hash__ = None

    def to_str(self):
        return f"{self._of.__qualname__}[{len(self._arr)}]"
