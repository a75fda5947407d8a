"""
Unit tests for layout algorithms
"""
import random

import pytest

from schema_graph.core.config import LayoutConfig
from schema_graph.layouts.circular import CircularLayout
from schema_graph.layouts.factory import LayoutFactory
from schema_graph.layouts.force import ForceDirectedLayout
from schema_graph.layouts.grid import GridLayout
from schema_graph.layouts.hierarchical import HierarchicalLayout
from schema_graph.layouts.modular import ModularLayout
from schema_graph.models.layout import LayoutType, Position
from schema_graph.models.schema import Relationship, Table


def make_tables(*names):
    return [Table(name=name) for name in names]


def xy(position):
    return position.x, position.y


def make_relationship(index, from_table, to_table):
    return Relationship(
        id=f"{from_table}-{to_table}-{index}",
        from_table=from_table,
        to_table=to_table,
        from_column=f"{to_table}_id",
        to_column="id"
    )


class TestGridLayout:
    """Test GridLayout"""

    def test_positions(self, layout_config, sample_tables):
        """Test grid cells with parity offsets"""
        positions = GridLayout(layout_config).compute(sample_tables, [])

        assert positions == {
            'users': Position(100, 100),
            'orders': Position(550, 140),
            'products': Position(1000, 100),
            'order_items': Position(160, 550),
        }

    def test_at_least_two_columns(self, layout_config):
        """Test small schemas still use two columns"""
        positions = GridLayout(layout_config).compute(make_tables('a', 'b'), [])

        assert positions['a'].y == positions['b'].y - 40
        assert positions['b'].x == 550

    def test_empty(self, layout_config):
        """Test no tables"""
        assert GridLayout(layout_config).compute([], []) == {}


class TestHierarchicalLayout:
    """Test HierarchicalLayout"""

    def test_referenced_table_below_referencing(self, layout_config):
        """Test a -> b places b at a greater y"""
        tables = make_tables('a', 'b')
        positions = HierarchicalLayout(layout_config).compute(tables, [make_relationship(0, 'a', 'b')])

        assert positions['b'].y > positions['a'].y
        assert positions['a'].x == positions['b'].x

    def test_referenced_tables_on_top(self):
        """Test the flipped level order"""
        config = LayoutConfig(referenced_tables_on_top=True)
        tables = make_tables('a', 'b')
        positions = HierarchicalLayout(config).compute(tables, [make_relationship(0, 'a', 'b')])

        assert positions['b'].y < positions['a'].y

    def test_levels(self, layout_config, sample_tables, sample_relationships):
        """Test dependency levels"""
        levels = HierarchicalLayout(layout_config).compute_levels(sample_tables, sample_relationships)

        assert levels == [['users', 'products'], ['orders'], ['order_items']]

    def test_positions(self, layout_config, sample_tables, sample_relationships):
        """Test levels are centred and spaced by 1.2 x spacing"""
        positions = HierarchicalLayout(layout_config).compute(sample_tables, sample_relationships)

        assert xy(positions['order_items']) == pytest.approx((1060, 100))
        assert xy(positions['orders']) == pytest.approx((1060, 640))
        assert xy(positions['users']) == pytest.approx((835, 1180))
        assert xy(positions['products']) == pytest.approx((1285, 1180))

    def test_cycle_placed_on_one_level(self, layout_config):
        """Test cycles are broken by placing the remainder together"""
        tables = make_tables('a', 'b', 'c')
        relationships = [make_relationship(0, 'a', 'b'), make_relationship(1, 'b', 'a')]

        levels = HierarchicalLayout(layout_config).compute_levels(tables, relationships)

        assert levels == [['c'], ['a', 'b']]

    def test_self_and_dangling_references_ignored(self, layout_config):
        """Test self references and unknown targets add no dependency"""
        tables = make_tables('a', 'b')
        relationships = [make_relationship(0, 'a', 'a'), make_relationship(1, 'b', 'missing')]

        levels = HierarchicalLayout(layout_config).compute_levels(tables, relationships)

        assert levels == [['a', 'b']]

    def test_duplicate_names_share_a_node(self, layout_config):
        """Test repeated table names are placed once"""
        positions = HierarchicalLayout(layout_config).compute(make_tables('t', 't'), [])

        assert list(positions) == ['t']


class TestCircularLayout:
    """Test CircularLayout"""

    def test_single_table_centred(self, layout_config):
        """Test one table sits at the viewport centre"""
        positions = CircularLayout(layout_config).compute(make_tables('a'), [])

        assert positions == {'a': Position(960, 540)}

    def test_rings(self, layout_config, sample_tables, sample_relationships):
        """Test most connected tables form the inner ring"""
        positions = CircularLayout(layout_config).compute(sample_tables, sample_relationships)

        # inner radius max(200, 360), outer radius max(400, 675)
        assert positions['orders'].x == pytest.approx(1320)
        assert positions['orders'].y == pytest.approx(540)
        assert positions['order_items'].x == pytest.approx(600)
        assert positions['users'].x == pytest.approx(1635)
        assert positions['products'].x == pytest.approx(285)
        assert positions['products'].y == pytest.approx(540)

    def test_minimum_radii(self):
        """Test small spacing keeps the minimum radii"""
        config = LayoutConfig(spacing=100)
        positions = CircularLayout(config).compute(make_tables('a', 'b'), [])

        assert positions['a'].x == pytest.approx(960 + 200)
        assert positions['b'].x == pytest.approx(960 + 400)


class TestModularLayout:
    """Test ModularLayout"""

    @pytest.mark.parametrize('name,group', [
        ('user_accounts', 'user'),
        ('user', 'user'),
        ('orders', 'orders'),
        ('_tmp', 'misc'),
    ])
    def test_group_name(self, name, group):
        """Test prefix grouping"""
        assert ModularLayout.group_name(name) == group

    def test_positions(self, layout_config):
        """Test groups on a grid with sub-grids inside"""
        tables = make_tables('user_accounts', 'user_roles', 'order_items', 'orders', 'audit')

        positions = ModularLayout(layout_config).compute(tables, [])

        assert xy(positions['user_accounts']) == pytest.approx((100, 100))
        assert xy(positions['user_roles']) == pytest.approx((460, 100))
        assert xy(positions['order_items']) == pytest.approx((1225, 100))
        assert xy(positions['orders']) == pytest.approx((100, 1225))
        assert xy(positions['audit']) == pytest.approx((1225, 1225))


class TestForceDirectedLayout:
    """Test ForceDirectedLayout"""

    def test_seeded_runs_match(self, sample_tables, sample_relationships):
        """Test the same seed gives the same positions"""
        config = LayoutConfig(seed=7, force_iterations=50)

        first = ForceDirectedLayout(config).compute(sample_tables, sample_relationships)
        second = ForceDirectedLayout(config).compute(sample_tables, sample_relationships)

        assert first == second

    def test_injected_random_source(self, layout_config, sample_tables, sample_relationships):
        """Test an injected generator drives the start positions"""
        first = ForceDirectedLayout(layout_config, rng=random.Random(3)).compute(sample_tables, sample_relationships)
        second = ForceDirectedLayout(layout_config, rng=random.Random(3)).compute(sample_tables, sample_relationships)

        assert first == second

    def test_positions_clamped_to_viewport(self, sample_tables, sample_relationships):
        """Test every position stays inside the padded viewport"""
        config = LayoutConfig(seed=1, spacing=800)

        positions = ForceDirectedLayout(config).compute(sample_tables, sample_relationships)

        assert set(positions) == {table.name for table in sample_tables}
        for pos in positions.values():
            assert 100 <= pos.x <= 1920 - 100
            assert 100 <= pos.y <= 1080 - 100

    def test_start_positions_in_central_area(self, layout_config, sample_tables):
        """Test random starts fall inside the central 80% of the viewport"""
        positions = ForceDirectedLayout(layout_config, rng=random.Random(0)).initial_positions(sample_tables)

        for pos in positions.values():
            assert 192 <= pos.x <= 1728
            assert 108 <= pos.y <= 972

    def test_empty(self, layout_config):
        """Test no tables"""
        assert ForceDirectedLayout(layout_config).compute([], []) == {}


class TestLayoutFactory:
    """Test LayoutFactory"""

    @pytest.mark.parametrize('layout_type,expected', [
        ('grid', GridLayout),
        ('HIERARCHICAL', HierarchicalLayout),
        (LayoutType.CIRCULAR, CircularLayout),
        ('modular', ModularLayout),
        ('force', ForceDirectedLayout),
    ])
    def test_create_layout(self, layout_config, layout_type, expected):
        """Test creating each layout"""
        layout = LayoutFactory.create_layout(layout_type, layout_config)

        assert isinstance(layout, expected)
        assert layout.config is layout_config

    def test_unsupported_layout(self, layout_config):
        """Test unknown layout name"""
        with pytest.raises(ValueError, match="Unsupported layout type"):
            LayoutFactory.create_layout('spiral', layout_config)

    def test_supported_types(self):
        """Test listing layout names"""
        assert LayoutFactory.get_supported_types() == ['grid', 'hierarchical', 'circular', 'modular', 'force']
