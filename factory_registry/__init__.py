from .registry import Factory, FactoryRegistry, instantiate

__all__ = [
    "Factory",
    "FactoryRegistry",
    "instantiate",
]
