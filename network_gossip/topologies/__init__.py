"""
Network topology implementations package.
"""

from .lattice import Lattice, build_lattice
from .random import Random
from .smallworld import SmallWorld
from .scalefree import ScaleFree

__all__ = [
    'Lattice',
    'Random',
    'SmallWorld',
    'ScaleFree',
    'build_lattice'
]
