"""Initial schema for events, races, results and users

Revision ID: 001
Revises:
Create Date: 2025-09-01 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _keys():
    return [
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('short_id', sa.String(length=10), nullable=False),
    ]


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _lookup_table(name: str, name_length: int) -> None:
    op.create_table(name,
        *_keys(),
        sa.Column('name', sa.String(length=name_length), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id'),
        sa.UniqueConstraint('name')
    )


def upgrade() -> None:
    # Lookup tables
    _lookup_table('roles', 32)
    _lookup_table('cyclist_genders', 16)
    _lookup_table('race_categories', 32)
    _lookup_table('race_category_genders', 16)
    _lookup_table('race_category_lengths', 16)

    op.create_table('race_rankings',
        *_keys(),
        sa.Column('name', sa.String(length=16), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('ranking_points',
        *_keys(),
        sa.Column('race_ranking_id', sa.String(length=36), nullable=False),
        sa.Column('place', sa.Integer(), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['race_ranking_id'], ['race_rankings.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id'),
        sa.UniqueConstraint('race_ranking_id', 'place', name='uq_ranking_points_ranking_place')
    )

    # Users and organizations
    op.create_table('users',
        *_keys(),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('display_name', sa.String(length=200), nullable=True),
        sa.Column('auth_user_id', sa.String(length=36), nullable=True),
        sa.Column('role_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('auth_user_id')
    )

    op.create_table('cyclists',
        *_keys(),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('born_year', sa.Integer(), nullable=True),
        sa.Column('gender_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['gender_id'], ['cyclist_genders.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table('organizations',
        *_keys(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('state', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id')
    )
    op.create_index('idx_organizations_name', 'organizations', ['name'])

    op.create_table('organizers',
        *_keys(),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('organization_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table('organization_invitations',
        *_keys(),
        sa.Column('organization_id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('invited_owner_name', sa.String(length=200), nullable=False),
        sa.Column('retry_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('last_invitation_sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id')
    )
    op.create_index('idx_organization_invitations_email_status', 'organization_invitations', ['email', 'status'])

    # Events, races and results
    op.create_table('events',
        *_keys(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('event_status', sa.String(length=20), server_default='DRAFT', nullable=False),
        sa.Column('is_public_visible', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('organization_id', sa.String(length=36), nullable=True),
        sa.Column('created_by', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id')
    )
    op.create_index('idx_events_status_year', 'events', ['event_status', 'year'])
    op.create_index('idx_events_organization', 'events', ['organization_id'])

    op.create_table('event_supported_categories',
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('race_category_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['race_category_id'], ['race_categories.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('event_id', 'race_category_id')
    )
    op.create_table('event_supported_genders',
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('race_category_gender_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['race_category_gender_id'], ['race_category_genders.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('event_id', 'race_category_gender_id')
    )
    op.create_table('event_supported_lengths',
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('race_category_length_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['race_category_length_id'], ['race_category_lengths.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('event_id', 'race_category_length_id')
    )

    op.create_table('races',
        *_keys(),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_public_visible', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('race_category_id', sa.String(length=36), nullable=False),
        sa.Column('race_category_gender_id', sa.String(length=36), nullable=False),
        sa.Column('race_category_length_id', sa.String(length=36), nullable=False),
        sa.Column('race_ranking_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['race_category_id'], ['race_categories.id'], ),
        sa.ForeignKeyConstraint(['race_category_gender_id'], ['race_category_genders.id'], ),
        sa.ForeignKeyConstraint(['race_category_length_id'], ['race_category_lengths.id'], ),
        sa.ForeignKeyConstraint(['race_ranking_id'], ['race_rankings.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id'),
        sa.UniqueConstraint(
            'event_id', 'race_category_id', 'race_category_gender_id', 'race_category_length_id',
            name='uq_races_event_category_gender_length'
        )
    )

    op.create_table('race_results',
        *_keys(),
        sa.Column('race_id', sa.String(length=36), nullable=False),
        sa.Column('cyclist_id', sa.String(length=36), nullable=False),
        sa.Column('place', sa.Integer(), nullable=False),
        sa.Column('time', sa.String(length=16), nullable=True),
        sa.Column('ranking_point_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['race_id'], ['races.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['cyclist_id'], ['cyclists.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['ranking_point_id'], ['ranking_points.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_id')
    )
    op.create_index('idx_race_results_race_place', 'race_results', ['race_id', 'place'])
    op.create_index('idx_race_results_cyclist', 'race_results', ['cyclist_id'])


def downgrade() -> None:
    op.drop_index('idx_race_results_cyclist', table_name='race_results')
    op.drop_index('idx_race_results_race_place', table_name='race_results')
    op.drop_table('race_results')
    op.drop_table('races')
    op.drop_table('event_supported_lengths')
    op.drop_table('event_supported_genders')
    op.drop_table('event_supported_categories')
    op.drop_index('idx_events_organization', table_name='events')
    op.drop_index('idx_events_status_year', table_name='events')
    op.drop_table('events')
    op.drop_index('idx_organization_invitations_email_status', table_name='organization_invitations')
    op.drop_table('organization_invitations')
    op.drop_table('organizers')
    op.drop_table('organizations')
    op.drop_table('cyclists')
    op.drop_table('users')
    op.drop_table('ranking_points')
    op.drop_table('race_rankings')
    for name in ('race_category_lengths', 'race_category_genders', 'race_categories', 'cyclist_genders', 'roles'):
        op.drop_table(name)
