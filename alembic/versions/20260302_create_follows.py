"""create follows table"""
from alembic import op
import sqlalchemy as sa

revision = "20260302_create_follows"
down_revision = "20260301_create_users_and_api_keys"
branch_labels = None
depends_on = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "follows" in inspector.get_table_names():
        return

    op.create_table(
        "follows",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("target_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "accepted", "rejected", name="follow_status"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "target_id", name="uq_follows_pair"),
    )
    op.create_index("ix_follows_user_id", "follows", ["user_id"], unique=False)
    op.create_index("ix_follows_target_id", "follows", ["target_id"], unique=False)
    op.create_index("ix_follows_target_status", "follows", ["target_id", "status"], unique=False)


def downgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "follows" not in inspector.get_table_names():
        return

    op.drop_index("ix_follows_target_status", table_name="follows")
    op.drop_index("ix_follows_target_id", table_name="follows")
    op.drop_index("ix_follows_user_id", table_name="follows")
    op.drop_table("follows")
    sa.Enum(name="follow_status").drop(bind, checkfirst=True)
