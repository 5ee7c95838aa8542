"""create poem table

Revision ID: 5c2a9e1d7b40
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a9e1d7b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'poem' in set(insp.get_table_names()):
        return
    op.create_table(
        'poem',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('author', sa.String(length=128), nullable=False),
        sa.Column('upper_verse', sa.Text(), nullable=False),
        sa.Column('lower_verse', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade():
    op.drop_table('poem')
