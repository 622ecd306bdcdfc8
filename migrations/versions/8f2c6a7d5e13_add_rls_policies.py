"""add_rls_policies

Revision ID: 8f2c6a7d5e13
Revises: 4b7d1e0a9c21
Create Date: 2026-03-02 09:41:07.662180

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8f2c6a7d5e13"
down_revision: str | Sequence[str] | None = "4b7d1e0a9c21"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# table -> owner column
OWNED_TABLES = {
    "profiles": "id",
    "posts": "user_id",
    "likes": "user_id",
    "comments": "user_id",
}


def upgrade() -> None:
    """Add Row Level Security policies for the social tables.

    Every member may read every row. Writes are limited to the row owner.
    Likes have no UPDATE policy: a like is created or removed, never edited.
    The API enforces the same rules in its session flush hook, so these
    policies matter for direct Supabase client connections.
    """
    for table in OWNED_TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    for table, owner in OWNED_TABLES.items():
        op.execute(f"""
            CREATE POLICY {table}_select ON {table}
                FOR SELECT USING (true);
        """)
        op.execute(f"""
            CREATE POLICY {table}_insert ON {table}
                FOR INSERT WITH CHECK ({owner} = (SELECT auth.uid()));
        """)
        if table != "likes":
            op.execute(f"""
                CREATE POLICY {table}_update ON {table}
                    FOR UPDATE USING ({owner} = (SELECT auth.uid()))
                    WITH CHECK ({owner} = (SELECT auth.uid()));
            """)
        op.execute(f"""
            CREATE POLICY {table}_delete ON {table}
                FOR DELETE USING ({owner} = (SELECT auth.uid()));
        """)


def downgrade() -> None:
    """Remove the RLS policies and disable RLS."""
    for table in OWNED_TABLES:
        for action in ("select", "insert", "update", "delete"):
            op.execute(f"DROP POLICY IF EXISTS {table}_{action} ON {table};")
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")
