"""create_initial_tables

Revision ID: 4e2a9c1d7b30
Revises:
Create Date: 2026-10-18 10:12:41.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4e2a9c1d7b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role = sa.Enum("ADMIN", "MANAGER", "USER", name="userrole")
court_status = sa.Enum("AVAILABLE", "BOOKED", "MAINTENANCE", name="courtstatus")
booking_status = sa.Enum(
    "PENDING", "CONFIRMED", "CANCELLED", "COMPLETED", name="bookingstatus"
)
payment_status = sa.Enum("UNPAID", "PAID", "REFUNDED", name="paymentstatus")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("hashed_password", sa.String(), nullable=True),
        sa.Column("role", user_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_name", "users", ["name"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "venues",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_venues_id", "venues", ["id"])

    op.create_table(
        "court_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("description", sa.String(), nullable=True),
    )
    op.create_index("ix_court_types_id", "court_types", ["id"])

    op.create_table(
        "courts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("code", sa.String(length=20), nullable=False, unique=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", court_status, nullable=False),
        sa.Column("is_indoor", sa.Boolean(), nullable=True),
        sa.Column("venue_id", sa.Integer(), sa.ForeignKey("venues.id"), nullable=False),
        sa.Column(
            "type_id", sa.Integer(), sa.ForeignKey("court_types.id"), nullable=False
        ),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    # Parent/child courts sharing physical space; a child has one parent
    op.create_table(
        "court_mappings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "parent_court_id",
            sa.Integer(),
            sa.ForeignKey("courts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "child_court_id",
            sa.Integer(),
            sa.ForeignKey("courts.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("position", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "parent_court_id", "child_court_id", name="uq_court_mapping_pair"
        ),
    )
    op.create_index("ix_court_mappings_id", "court_mappings", ["id"])
    op.create_index(
        "ix_court_mappings_parent_court_id", "court_mappings", ["parent_court_id"]
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("court_id", sa.Integer(), sa.ForeignKey("courts.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", booking_status, nullable=False),
        sa.Column("payment_status", payment_status, nullable=False),
        sa.Column("payment_method", sa.String(length=20), nullable=True),
        sa.Column("renter_name", sa.String(length=255), nullable=False),
        sa.Column("renter_email", sa.String(length=255), nullable=True),
        sa.Column("renter_phone", sa.String(length=20), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("booking_code", sa.String(length=50), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_court_id", "bookings", ["court_id"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_date", "bookings", ["date"])

    # Only one active booking per court, date and start hour
    op.execute("""
        CREATE UNIQUE INDEX IF NOT EXISTS uq_active_booking_per_court_slot
        ON bookings (court_id, date, start_time)
        WHERE status IN ('PENDING', 'CONFIRMED');
    """)

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=True),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_notifications_id", "notifications", ["id"])
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("notifications")
    op.execute("DROP INDEX IF EXISTS uq_active_booking_per_court_slot;")
    op.drop_table("bookings")
    op.drop_table("court_mappings")
    op.drop_table("courts")
    op.drop_table("court_types")
    op.drop_table("venues")
    op.drop_table("users")
    for enum_type in (payment_status, booking_status, court_status, user_role):
        enum_type.drop(op.get_bind(), checkfirst=True)
