"""Add complete_organizer_owner_setup() procedure

Revision ID: 002
Revises: 001
Create Date: 2025-09-08 12:00:00.000000

"""
from alembic import op

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


# Raises P0002 (no_data_found) when the email has no pending invitation and
# 28000 when the invited organization no longer exists. Returns public keys.
CREATE_FUNCTION = """
CREATE OR REPLACE FUNCTION complete_organizer_owner_setup(
    p_auth_user_id TEXT,
    p_first_name TEXT,
    p_last_name TEXT,
    p_invitation_email TEXT
)
RETURNS TABLE (success BOOLEAN, organization_id TEXT, user_id TEXT)
LANGUAGE plpgsql
AS $$
#variable_conflict use_column
DECLARE
    v_invitation organization_invitations%ROWTYPE;
    v_organization organizations%ROWTYPE;
    v_user users%ROWTYPE;
    v_role_id TEXT;
BEGIN
    SELECT * INTO v_invitation
    FROM organization_invitations
    WHERE email = p_invitation_email AND status = 'pending'
    ORDER BY created_at DESC
    LIMIT 1
    FOR UPDATE;

    IF NOT FOUND THEN
        RAISE EXCEPTION 'No pending invitation found for email: %', p_invitation_email
            USING ERRCODE = 'P0002';
    END IF;

    SELECT * INTO v_organization
    FROM organizations
    WHERE id = v_invitation.organization_id
    FOR UPDATE;

    IF NOT FOUND THEN
        RAISE EXCEPTION 'Organization not found for invitation'
            USING ERRCODE = '28000';
    END IF;

    SELECT id INTO v_role_id FROM roles WHERE name = 'ORGANIZER_OWNER';

    UPDATE users
    SET first_name = p_first_name,
        last_name = p_last_name,
        role_id = v_role_id,
        updated_at = now()
    WHERE auth_user_id = p_auth_user_id
    RETURNING * INTO v_user;

    IF NOT FOUND THEN
        RAISE EXCEPTION 'No user linked to auth user %', p_auth_user_id;
    END IF;

    INSERT INTO organizers (id, short_id, user_id, organization_id, created_at, updated_at)
    VALUES (gen_random_uuid()::text, substr(md5(random()::text), 1, 10), v_user.id, v_organization.id, now(), now())
    ON CONFLICT (user_id) DO UPDATE
    SET organization_id = EXCLUDED.organization_id, updated_at = now();

    UPDATE organization_invitations
    SET status = 'accepted', updated_at = now()
    WHERE id = v_invitation.id;

    UPDATE organizations
    SET state = 'ACTIVE', updated_at = now()
    WHERE id = v_organization.id;

    RETURN QUERY SELECT true, v_organization.short_id::text, v_user.short_id::text;
END;
$$;
"""


def upgrade() -> None:
    op.execute(CREATE_FUNCTION)


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS complete_organizer_owner_setup(TEXT, TEXT, TEXT, TEXT)")
