"""Route group exports."""

from . import drivers, health, packages, reports, routes, warehouses

__all__ = ["warehouses", "drivers", "routes", "packages", "reports", "health"]
