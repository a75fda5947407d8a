"""
Unit tests for data models
"""
import pytest

from schema_graph.models.layout import ConnectionPoint, Position, Side, positions_to_dict
from schema_graph.models.schema import Column, ForeignKey, Index, Relationship, Schema, Table


class TestTable:
    """Test Table model"""

    def test_create_table(self):
        """Test creating a table"""
        table = Table(
            name='users',
            columns=[
                Column(name='id', type='INTEGER', nullable=False),
                Column(name='name', type='VARCHAR(100)', nullable=False)
            ],
            primary_keys=['id']
        )

        assert table.name == 'users'
        assert len(table.columns) == 2
        assert table.primary_keys == ['id']
        assert table.foreign_keys == []
        assert table.indexes == []

    def test_get_column_case_insensitive(self):
        """Test getting column by name ignores case"""
        table = Table(name='users', columns=[Column(name='Email', type='TEXT')])

        assert table.get_column('email') is table.columns[0]
        assert table.get_column('missing') is None

    def test_add_column_ignores_duplicates(self):
        """Test adding a column that already exists"""
        table = Table(name='users', columns=[Column(name='id', type='INTEGER')])

        table.add_column(Column(name='ID', type='BIGINT'))
        table.add_column(Column(name='name', type='TEXT'))

        assert [col.name for col in table.columns] == ['id', 'name']

    def test_add_primary_key_ignores_repeats(self):
        """Test primary key list keeps one entry per column"""
        table = Table(name='t')

        table.add_primary_key('id')
        table.add_primary_key('id')

        assert table.primary_keys == ['id']

    def test_primary_key_flag_is_derived(self):
        """Test primary key flags follow the primary key list"""
        table = Table(
            name='order_items',
            columns=[
                Column(name='order_id', type='INTEGER'),
                Column(name='product_id', type='INTEGER'),
                Column(name='quantity', type='INTEGER')
            ]
        )
        assert not any(col.is_primary for col in table.columns)

        table.add_primary_key('order_id')
        table.add_primary_key('product_id')

        assert table.get_column('order_id').is_primary is True
        assert table.get_column('product_id').is_primary is True
        assert table.get_column('quantity').is_primary is False

    def test_foreign_key_flag_is_derived(self):
        """Test foreign key flags follow the foreign key list"""
        table = Table(name='orders', columns=[Column(name='user_id', type='INTEGER')])
        assert table.columns[0].is_foreign is False

        table.add_foreign_key(ForeignKey('USER_ID', 'users', 'id'))

        assert table.columns[0].is_foreign is True

    def test_detached_column_has_no_key_flags(self):
        """Test a column outside a table reports no keys"""
        column = Column(name='id', type='INTEGER')

        assert column.is_primary is False
        assert column.is_foreign is False

    def test_to_dict(self):
        """Test converting table to dictionary"""
        table = Table(
            name='orders',
            columns=[Column(name='id', type='INTEGER'), Column(name='user_id', type='INTEGER')],
            primary_keys=['id'],
            foreign_keys=[ForeignKey('user_id', 'users', 'id')],
            indexes=[Index(name='idx_user', columns=['user_id'])]
        )

        table_dict = table.to_dict()

        assert table_dict['name'] == 'orders'
        assert table_dict['columns'][0] == {
            'name': 'id', 'type': 'INTEGER', 'nullable': True,
            'is_primary': True, 'is_foreign': False
        }
        assert table_dict['columns'][1]['is_foreign'] is True
        assert table_dict['foreign_keys'] == [
            {'column': 'user_id', 'referenced_table': 'users', 'referenced_column': 'id'}
        ]
        assert table_dict['indexes'][0]['type'] == 'BTREE'


class TestSchema:
    """Test Schema model"""

    def test_empty_schema(self):
        """Test default schema is empty"""
        schema = Schema()

        assert schema.is_empty is True
        assert schema.to_dict() == {'tables': [], 'relationships': []}

    def test_get_table(self):
        """Test finding a table by name"""
        schema = Schema(tables=[Table(name='Users')])

        assert schema.get_table('users').name == 'Users'
        assert schema.get_table('orders') is None
        assert schema.table_names() == ['Users']

    def test_relationship_to_dict(self):
        """Test relationship serialization uses from/to keys"""
        rel = Relationship(id='orders-users-0', from_table='orders', to_table='users',
                           from_column='user_id', to_column='id')

        assert rel.to_dict() == {
            'id': 'orders-users-0',
            'from': 'orders',
            'to': 'users',
            'from_column': 'user_id',
            'to_column': 'id'
        }


class TestLayoutModels:
    """Test layout models"""

    def test_position_copy_is_independent(self):
        """Test copying a position"""
        pos = Position(1.0, 2.0)
        clone = pos.copy()
        clone.x = 5.0

        assert pos.x == 1.0
        assert clone == Position(5.0, 2.0)

    def test_positions_to_dict(self):
        """Test serializing a position map"""
        assert positions_to_dict({'a': Position(1, 2)}) == {'a': {'x': 1, 'y': 2}}

    def test_connection_handles(self):
        """Test handle names combine node id, role and side"""
        conn = ConnectionPoint('orders', 'users', Side.RIGHT, Side.LEFT)

        assert conn.source_handle == 'orders-source-right'
        assert conn.target_handle == 'users-target-left'
        assert conn.to_dict()['source_side'] == 'right'

    @pytest.mark.parametrize('side', ['top', 'left', 'right', 'bottom'])
    def test_side_values(self, side):
        """Test every side name maps to a Side"""
        assert Side(side).value == side
