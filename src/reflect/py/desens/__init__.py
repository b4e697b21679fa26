#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

# desens reflection core - Python implementation

# Base types
from .Obj import Obj

# Reflection
from .Type import Type
from .Slot import Slot, FConst
from .Field import Field
from .Method import Method
from .Param import Param
from .Array import Array

# Facade
from .ReflectUtil import ReflectUtil

# Errors
from .Err import (
    ReflectErr,
    AccessFailure,
    ResolutionFailure,
    InvocationFailure,
    AllocationFailure,
    NullErr,
)
