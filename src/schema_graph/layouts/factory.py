"""
Layout factory for creating layout algorithms by name
"""
from typing import Union

from schema_graph.core.config import LayoutConfig
from schema_graph.layouts.base import BaseLayout
from schema_graph.layouts.circular import CircularLayout
from schema_graph.layouts.force import ForceDirectedLayout
from schema_graph.layouts.grid import GridLayout
from schema_graph.layouts.hierarchical import HierarchicalLayout
from schema_graph.layouts.modular import ModularLayout
from schema_graph.models.layout import LayoutType


class LayoutFactory:
    """Factory for creating layout algorithms"""

    _layouts = {
        LayoutType.GRID.value: GridLayout,
        LayoutType.HIERARCHICAL.value: HierarchicalLayout,
        LayoutType.CIRCULAR.value: CircularLayout,
        LayoutType.MODULAR.value: ModularLayout,
        LayoutType.FORCE.value: ForceDirectedLayout,
    }

    @classmethod
    def create_layout(cls, layout_type: Union[str, LayoutType], config: LayoutConfig) -> BaseLayout:
        """
        Create a layout algorithm based on type

        Args:
            layout_type: Layout name (grid, hierarchical, circular, modular, force)
            config: Layout configuration

        Returns:
            Layout instance

        Raises:
            ValueError: If layout type is not supported
        """
        if isinstance(layout_type, LayoutType):
            layout_type = layout_type.value
        layout_type_lower = layout_type.lower()

        if layout_type_lower not in cls._layouts:
            raise ValueError(
                f"Unsupported layout type: {layout_type}. "
                f"Supported types: {', '.join(cls._layouts.keys())}"
            )

        layout_class = cls._layouts[layout_type_lower]
        return layout_class(config)

    @classmethod
    def get_supported_types(cls) -> list:
        """Get list of supported layout types"""
        return list(cls._layouts.keys())
