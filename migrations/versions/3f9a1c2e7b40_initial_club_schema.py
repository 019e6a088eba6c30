"""initial club schema

Revision ID: 3f9a1c2e7b40
Revises: 
Create Date: 2026-10-19 10:12:41.118204

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f9a1c2e7b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('sessions',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('title', sa.String(length=200), nullable=False),
    sa.Column('start_time', sa.DateTime(), nullable=False),
    sa.Column('spaces', sa.Integer(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('registrations',
    sa.Column('session_id', sa.Integer(), nullable=False),
    sa.Column('warwick_id', sa.Integer(), autoincrement=False, nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.ForeignKeyConstraint(['session_id'], ['sessions.id'], ),
    sa.PrimaryKeyConstraint('session_id', 'warwick_id')
    )
    op.create_table('attendances',
    sa.Column('session_id', sa.Integer(), nullable=False),
    sa.Column('warwick_id', sa.Integer(), autoincrement=False, nullable=False),
    sa.ForeignKeyConstraint(['session_id'], ['sessions.id'], ),
    sa.PrimaryKeyConstraint('session_id', 'warwick_id')
    )
    op.create_table('personal_bests',
    sa.Column('warwick_id', sa.Integer(), autoincrement=False, nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.Column('squat', sa.Float(), nullable=True),
    sa.Column('bench', sa.Float(), nullable=True),
    sa.Column('deadlift', sa.Float(), nullable=True),
    sa.Column('snatch', sa.Float(), nullable=True),
    sa.Column('clean_and_jerk', sa.Float(), nullable=True),
    sa.Column('show_pl', sa.Boolean(), nullable=False),
    sa.Column('show_wl', sa.Boolean(), nullable=False),
    sa.PrimaryKeyConstraint('warwick_id')
    )
    op.create_table('exec_positions',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('title', sa.String(length=200), nullable=False),
    sa.Column('num_winners', sa.Integer(), nullable=False),
    sa.Column('open', sa.Boolean(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('candidates',
    sa.Column('warwick_id', sa.Integer(), autoincrement=False, nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.Column('elected', sa.Boolean(), nullable=False),
    sa.PrimaryKeyConstraint('warwick_id')
    )
    op.create_table('nominations',
    sa.Column('position_id', sa.Integer(), nullable=False),
    sa.Column('warwick_id', sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(['position_id'], ['exec_positions.id'], ),
    sa.ForeignKeyConstraint(['warwick_id'], ['candidates.warwick_id'], ),
    sa.PrimaryKeyConstraint('position_id', 'warwick_id')
    )
    op.create_table('votes',
    sa.Column('voter_id', sa.Integer(), autoincrement=False, nullable=False),
    sa.Column('position_id', sa.Integer(), nullable=False),
    sa.Column('candidate_id', sa.Integer(), nullable=False),
    sa.Column('rank', sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(['candidate_id'], ['candidates.warwick_id'], ),
    sa.ForeignKeyConstraint(['position_id'], ['exec_positions.id'], ),
    sa.PrimaryKeyConstraint('voter_id', 'position_id', 'candidate_id'),
    sa.UniqueConstraint('voter_id', 'position_id', 'rank', name='uq_votes_voter_position_rank')
    )


def downgrade():
    op.drop_table('votes')
    op.drop_table('nominations')
    op.drop_table('candidates')
    op.drop_table('exec_positions')
    op.drop_table('personal_bests')
    op.drop_table('attendances')
    op.drop_table('registrations')
    op.drop_table('sessions')
