"""Explore and fit generalized logistic growth curves with stable chart axes."""

__all__ = (
    "axes",
    "curves",
    "data",
    "fitting",
    "guestimate",
    "nice",
    "stabilizer",
)
__version__ = "0.1.0"


from growthscope import (
    axes,
    curves,
    data,
    fitting,
    guestimate,
    nice,
    stabilizer,
)
