"""initial tables

Revision ID: 4f2a9c81d3e5
Revises:
Create Date: 2026-02-03 10:12:44.318207

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4f2a9c81d3e5'
down_revision = None
branch_labels = None
depends_on = None


def _listing_columns():
    """Descriptive columns shared by submissions and clubs."""
    return [
        sa.Column('distance', sa.String(length=50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('pace', sa.String(length=10), nullable=False),
        sa.Column('terrain', sa.String(length=10), nullable=True),
        sa.Column('beginner_friendly', sa.Boolean(), nullable=False),
        sa.Column('dog_friendly', sa.Boolean(), nullable=False),
        sa.Column('female_only', sa.Boolean(), nullable=False),
        sa.Column('post_run', sa.String(length=255), nullable=True),
        sa.Column('instagram', sa.String(length=100), nullable=True),
        sa.Column('website', sa.String(length=255), nullable=True),
    ]


def upgrade():
    op.create_table('submissions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('area', sa.String(length=100), nullable=False),
        sa.Column('day', sa.String(length=20), nullable=False),
        sa.Column('time', sa.String(length=20), nullable=False),
        sa.Column('meeting_point', sa.Text(), nullable=False),
        *_listing_columns(),
        sa.Column('submitter_email', sa.String(length=255), nullable=False),
        sa.Column('submitter_name', sa.String(length=200), nullable=True),
        sa.Column('sessions', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_submissions'))
    )
    op.create_index(op.f('ix_submissions_status'), 'submissions', ['status'], unique=False)

    op.create_table('clubs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('area', sa.String(length=100), nullable=True),
        sa.Column('lat', sa.Float(), nullable=True),
        sa.Column('lng', sa.Float(), nullable=True),
        sa.Column('day', sa.String(length=20), nullable=True),
        sa.Column('time', sa.String(length=20), nullable=True),
        sa.Column('meeting_point', sa.Text(), nullable=True),
        *_listing_columns(),
        sa.Column('contact_email', sa.String(length=255), nullable=True),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('owner_email', sa.String(length=255), nullable=True),
        sa.Column('owner_name', sa.String(length=200), nullable=True),
        sa.Column('claimed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_clubs'))
    )
    op.create_index(op.f('ix_clubs_name'), 'clubs', ['name'], unique=False)
    op.create_index(op.f('ix_clubs_city'), 'clubs', ['city'], unique=False)
    op.create_index(op.f('ix_clubs_owner_email'), 'clubs', ['owner_email'], unique=False)

    op.create_table('sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=True),
        sa.Column('club_name', sa.String(length=200), nullable=False),
        sa.Column('day', sa.String(length=20), nullable=False),
        sa.Column('time', sa.String(length=20), nullable=False),
        sa.Column('distance', sa.String(length=50), nullable=True),
        sa.Column('meeting_point', sa.Text(), nullable=True),
        sa.Column('session_type', sa.String(length=30), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], name=op.f('fk_sessions_club_id_clubs')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_sessions'))
    )
    op.create_index(op.f('ix_sessions_club_id'), 'sessions', ['club_id'], unique=False)
    op.create_index(op.f('ix_sessions_club_name'), 'sessions', ['club_name'], unique=False)

    op.create_table('club_claims',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=False),
        sa.Column('claimant_email', sa.String(length=255), nullable=False),
        sa.Column('claimant_name', sa.String(length=200), nullable=True),
        sa.Column('verification_method', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('instagram_code', sa.String(length=10), nullable=True),
        sa.Column('rejected_reason', sa.Text(), nullable=True),
        sa.Column('token_expires_at', sa.DateTime(), nullable=True),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], name=op.f('fk_club_claims_club_id_clubs')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_club_claims'))
    )
    op.create_index(op.f('ix_club_claims_club_id'), 'club_claims', ['club_id'], unique=False)
    op.create_index(op.f('ix_club_claims_status'), 'club_claims', ['status'], unique=False)

    op.create_table('owner_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_email', sa.String(length=255), nullable=False),
        sa.Column('token_hash', sa.String(length=64), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_owner_sessions'))
    )
    op.create_index(op.f('ix_owner_sessions_owner_email'), 'owner_sessions', ['owner_email'], unique=False)
    op.create_index(op.f('ix_owner_sessions_token_hash'), 'owner_sessions', ['token_hash'], unique=False)

    op.create_table('attendance',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=True),
        sa.Column('club_name', sa.String(length=200), nullable=False),
        sa.Column('session_date', sa.Date(), nullable=False),
        sa.Column('visitor_id', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], name=op.f('fk_attendance_club_id_clubs')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_attendance'))
    )
    op.create_index(op.f('ix_attendance_club_id'), 'attendance', ['club_id'], unique=False)
    op.create_index(op.f('ix_attendance_club_name'), 'attendance', ['club_name'], unique=False)


def downgrade():
    op.drop_table('attendance')
    op.drop_table('owner_sessions')
    op.drop_table('club_claims')
    op.drop_table('sessions')
    op.drop_table('clubs')
    op.drop_table('submissions')
