"""Numerical Phantoms"""

from mrrd.phantoms.RectanglePhantom import RectanglePhantom

__all__ = ["RectanglePhantom"]
