#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

class Obj:
    """Base class for all reflection descriptors"""

    def equals(self, that):
        return self is that

    def hash(self):
        return id(self)

    def to_str(self):
        return f"{type(self).__name__}@{id(self):x}"

    def __eq__(self, other):
        return self.equals(other)

    def __hash__(self):
        return self.hash()

    def __str__(self):
        return self.to_str()

    def __repr__(self):
        return self.to_str()
