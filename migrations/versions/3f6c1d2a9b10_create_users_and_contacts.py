"""Create users and contacts tables."""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f6c1d2a9b10"
down_revision = None
branch_labels = None
depends_on = None


SUBSCRIPTION_ENUM = "subscription_tier"


def upgrade() -> None:
    """Create the users and contacts tables."""

    subscription_tier = sa.Enum("starter", "pro", "business", name=SUBSCRIPTION_ENUM)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "subscription",
            subscription_tier,
            nullable=False,
            server_default=sa.text("'starter'"),
        ),
        sa.Column("avatar_url", sa.String(length=512), nullable=True),
        sa.Column("verify", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verification_token", sa.String(length=64), nullable=True),
        sa.Column("token", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index(
        "ix_users_verification_token", "users", ["verification_token"], unique=True
    )

    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("favorite", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "owner_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_contacts_owner_id", "contacts", ["owner_id"])


def downgrade() -> None:
    """Drop the users and contacts tables."""

    op.drop_index("ix_contacts_owner_id", table_name="contacts")
    op.drop_table("contacts")

    op.drop_index("ix_users_verification_token", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    sa.Enum(name=SUBSCRIPTION_ENUM).drop(op.get_bind(), checkfirst=True)
