"""create users, reports and rewards tables"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "initial_20261019"
down_revision = None
branch_labels = None
depends_on = None


USER_ROLES = ("citizen", "verifier", "admin")
REPORT_CATEGORIES = ("dumping", "segregation", "composting")
REPORT_STATUSES = ("pending", "verified", "rejected")


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("role", sa.Enum(*USER_ROLES, name="user_role"), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("zone", sa.String(length=120), nullable=True),
        sa.Column("green_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_zone", "users", ["zone"])

    op.create_table(
        "reports",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("category", sa.Enum(*REPORT_CATEGORIES, name="report_category"), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*REPORT_STATUSES, name="report_status"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("verified_by", sa.String(length=36), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_reports_user_id", "reports", ["user_id"])

    op.create_table(
        "rewards",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("cost", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
    )


def downgrade():
    op.drop_table("rewards")
    op.drop_index("ix_reports_user_id", table_name="reports")
    op.drop_table("reports")
    op.drop_index("ix_users_zone", table_name="users")
    op.drop_table("users")
    sa.Enum(name="report_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="report_category").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="user_role").drop(op.get_bind(), checkfirst=True)
