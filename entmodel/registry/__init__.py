"""Registry — explicit name-to-shape lookup.

Relations normally hold direct class references. The registry exists for
the places that only have an entity name to go on, such as shape
declarations loaded from YAML.
"""

from entmodel.registry.shape_registry import ShapeRegistry

__all__ = ["ShapeRegistry"]
