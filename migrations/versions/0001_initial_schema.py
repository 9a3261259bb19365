"""initial schema: employees, plans, field sales, shifts, payroll

Revision ID: 0001_initial
Revises:
Create Date: 2025-11-03 10:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.Column('full_name', sa.String(length=128), nullable=True),
        sa.Column('role', sa.String(length=32), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    op.create_table(
        'commission_plan',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('brackets_json', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index('ix_commission_plan_role', 'commission_plan', ['role'], unique=False)

    op.create_table(
        'employee',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=True),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('commission_plan_id', sa.Integer(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(['commission_plan_id'], ['commission_plan.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_employee_type', 'employee', ['type'], unique=False)

    op.create_table(
        'menu_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=180), nullable=False),
        sa.Column('price_sell', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('unit', sa.String(length=32), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_menu_item_name', 'menu_item', ['name'], unique=False)

    op.create_table(
        'field_dispatch',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('waiter_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('qty_dispatched', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('price_each', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['item_id'], ['menu_item.id']),
        sa.ForeignKeyConstraint(['waiter_id'], ['employee.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_field_dispatch_waiter_id', 'field_dispatch', ['waiter_id'], unique=False)
    op.create_index('ix_field_dispatch_date', 'field_dispatch', ['date'], unique=False)

    op.create_table(
        'field_return',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('dispatch_id', sa.Integer(), nullable=False),
        sa.Column('qty_returned', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('loss_qty', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('cash_collected', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('note', sa.String(length=200), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['dispatch_id'], ['field_dispatch.id']),
        sa.PrimaryKeyConstraint('id'),
        # one return per dispatch
        sa.UniqueConstraint('dispatch_id'),
    )

    op.create_table(
        'salary_deduction',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('reason', sa.String(length=16), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('note', sa.String(length=300), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['employee_id'], ['employee.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_salary_deduction_employee_id', 'salary_deduction', ['employee_id'], unique=False)
    op.create_index('ix_salary_deduction_date', 'salary_deduction', ['date'], unique=False)

    op.create_table(
        'payroll_run',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('period_year', sa.Integer(), nullable=False),
        sa.Column('period_month', sa.Integer(), nullable=False),
        sa.Column('run_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('period_year', 'period_month', name='uq_payroll_period'),
    )

    op.create_table(
        'payroll_line',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('payroll_run_id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('gross', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('deductions_applied', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('carry_forward', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('net_pay', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('note', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(['employee_id'], ['employee.id']),
        sa.ForeignKeyConstraint(['payroll_run_id'], ['payroll_run.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payroll_line_payroll_run_id', 'payroll_line', ['payroll_run_id'], unique=False)
    op.create_index('ix_payroll_line_employee_id', 'payroll_line', ['employee_id'], unique=False)

    op.create_table(
        'shift',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('waiter_type', sa.String(length=16), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('opened_at', sa.DateTime(), nullable=False),
        sa.Column('closed_at', sa.DateTime(), nullable=True),
        sa.Column('net_sales', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['employee_id'], ['employee.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shift_employee_id', 'shift', ['employee_id'], unique=False)
    op.create_index('ix_shift_date', 'shift', ['date'], unique=False)

    op.create_table(
        'shift_cashup',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('shift_id', sa.Integer(), nullable=False),
        sa.Column('snapshot', sa.JSON(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('submitted_by', sa.String(length=128), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['shift_id'], ['shift.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('shift_id'),
    )
    op.create_index('ix_shift_cashup_created_at', 'shift_cashup', ['created_at'], unique=False)


def downgrade():
    op.drop_index('ix_shift_cashup_created_at', table_name='shift_cashup')
    op.drop_table('shift_cashup')
    op.drop_index('ix_shift_date', table_name='shift')
    op.drop_index('ix_shift_employee_id', table_name='shift')
    op.drop_table('shift')
    op.drop_index('ix_payroll_line_employee_id', table_name='payroll_line')
    op.drop_index('ix_payroll_line_payroll_run_id', table_name='payroll_line')
    op.drop_table('payroll_line')
    op.drop_table('payroll_run')
    op.drop_index('ix_salary_deduction_date', table_name='salary_deduction')
    op.drop_index('ix_salary_deduction_employee_id', table_name='salary_deduction')
    op.drop_table('salary_deduction')
    op.drop_table('field_return')
    op.drop_index('ix_field_dispatch_date', table_name='field_dispatch')
    op.drop_index('ix_field_dispatch_waiter_id', table_name='field_dispatch')
    op.drop_table('field_dispatch')
    op.drop_index('ix_menu_item_name', table_name='menu_item')
    op.drop_table('menu_item')
    op.drop_index('ix_employee_type', table_name='employee')
    op.drop_table('employee')
    op.drop_index('ix_commission_plan_role', table_name='commission_plan')
    op.drop_table('commission_plan')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
