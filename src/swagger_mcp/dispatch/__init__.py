"""Request dispatch against operations declared in the interface document."""

from .dispatcher import RequestDispatcher, expand_template, origin_of, stringify_param
from .request import RequestDescriptor

__all__ = ["RequestDescriptor", "RequestDispatcher", "expand_template", "origin_of", "stringify_param"]
