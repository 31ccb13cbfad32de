"""initial handling portal schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17

"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("company_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("phone_number", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("role", sa.String(length=30), nullable=False, server_default="Agent"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("saldo", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("handling_discount_kind", sa.String(length=20), nullable=True),
        sa.Column("handling_discount_value", sa.Integer(), nullable=True),
        sa.Column("handling_discount_cap", sa.Integer(), nullable=True),
        sa.Column("handling_discount_amount", sa.Integer(), nullable=True),
        sa.Column("handling_discount_active", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("handling_discount_is_percentage", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("total_after_discount", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"], unique=False)

    op.create_table(
        "agent_users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("company_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("phone_number", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("ktp_url", sa.String(length=1024), nullable=True),
        sa.Column("nib_url", sa.String(length=1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_agent_users_email", "agent_users", ["email"], unique=False)

    op.create_table(
        "memberships",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("discount_percentage", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.create_index("ix_memberships_user_id", "memberships", ["user_id"], unique=False)

    op.create_table(
        "airport_handling_services",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("service_type", sa.String(length=80), nullable=False),
        sa.Column("category", sa.String(length=80), nullable=False),
        sa.Column("trip_type", sa.String(length=40), nullable=False),
        sa.Column("sell_price", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("additional", sa.Integer(), nullable=True),
    )
    op.create_index("ix_airport_handling_services_service_type", "airport_handling_services", ["service_type"], unique=False)
    op.create_index("ix_airport_handling_services_category", "airport_handling_services", ["category"], unique=False)

    op.create_table(
        "payment_methods",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("bank_name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("account_holder", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("account_number", sa.String(length=60), nullable=False, server_default=""),
        sa.Column("type", sa.String(length=20), nullable=False, server_default="manual"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )

    op.create_table(
        "countries",
        sa.Column("code", sa.String(length=3), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
    )
    op.create_table(
        "cities",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("country_code", sa.String(length=3), nullable=False),
    )
    op.create_index("ix_cities_country_code", "cities", ["country_code"], unique=False)
    op.create_table(
        "locations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("city_id", sa.String(length=36), nullable=False),
    )
    op.create_index("ix_locations_city_id", "locations", ["city_id"], unique=False)

    op.create_table(
        "handling_bookings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("code_booking", sa.String(length=40), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("category", sa.String(length=60), nullable=False, server_default="Handling Group"),
        sa.Column("customer_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("customer_email", sa.String(length=320), nullable=False, server_default=""),
        sa.Column("customer_phone", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("company_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("travel_type", sa.String(length=60), nullable=False, server_default=""),
        sa.Column("pickup_area", sa.String(length=200), nullable=True),
        sa.Column("dropoff_area", sa.String(length=200), nullable=True),
        sa.Column("passenger_area", sa.String(length=200), nullable=True),
        sa.Column("flight_number", sa.String(length=30), nullable=False, server_default=""),
        sa.Column("pickup_date", sa.String(length=10), nullable=False, server_default=""),
        sa.Column("pickup_time", sa.String(length=5), nullable=False, server_default=""),
        sa.Column("passengers", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("additional_notes", sa.Text(), nullable=True),
        sa.Column("price", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("harga_asli", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_price", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("member_discount", sa.Float(), nullable=True),
        sa.Column("user_discount", sa.Integer(), nullable=True),
        sa.Column("bagasi_tambahan", sa.String(length=60), nullable=True),
        sa.Column("payment_method", sa.String(length=20), nullable=False, server_default=""),
        sa.Column("payment_id", sa.String(length=36), nullable=True),
        sa.Column("bank_name", sa.String(length=120), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("payment_status", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_handling_bookings_code_booking", "handling_bookings", ["code_booking"], unique=True)
    op.create_index("ix_handling_bookings_user_id", "handling_bookings", ["user_id"], unique=False)

    op.create_table(
        "payments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("booking_id", sa.String(length=36), nullable=False),
        sa.Column("code_booking", sa.String(length=40), nullable=False),
        sa.Column("payment_method", sa.String(length=20), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("paid_amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("payment_status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("bank_name", sa.String(length=120), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_payments_user_id", "payments", ["user_id"], unique=False)
    op.create_index("ix_payments_booking_id", "payments", ["booking_id"], unique=False)
    op.create_index("ix_payments_code_booking", "payments", ["code_booking"], unique=False)

    op.create_table(
        "payment_bookings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("booking_id", sa.String(length=36), nullable=False),
        sa.Column("code_booking", sa.String(length=40), nullable=False),
        sa.Column("booking_type", sa.String(length=20), nullable=False, server_default="handling"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_payment_bookings_booking_id", "payment_bookings", ["booking_id"], unique=False)

    op.create_table(
        "histori_transaksi",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("code_booking", sa.String(length=40), nullable=True),
        sa.Column("nominal", sa.Integer(), nullable=False),
        sa.Column("saldo_akhir", sa.Integer(), nullable=False),
        sa.Column("keterangan", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("jenis_transaksi", sa.String(length=60), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=True),
        sa.Column("trans_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_histori_transaksi_user_id", "histori_transaksi", ["user_id"], unique=False)

    op.create_table(
        "topup_requests",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("reference_no", sa.String(length=40), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("sender_name", sa.String(length=200), nullable=False),
        sa.Column("sender_bank", sa.String(length=120), nullable=False),
        sa.Column("sender_account", sa.String(length=60), nullable=False),
        sa.Column("payment_method", sa.String(length=20), nullable=False),
        sa.Column("bank_name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("destination_account", sa.String(length=60), nullable=False, server_default=""),
        sa.Column("account_holder_received", sa.String(length=200), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("proof_url", sa.String(length=1024), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("request_by_role", sa.String(length=30), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_topup_requests_user_id", "topup_requests", ["user_id"], unique=False)
    op.create_index("ix_topup_requests_reference_no", "topup_requests", ["reference_no"], unique=True)


def downgrade() -> None:
    for table in (
        "topup_requests", "histori_transaksi", "payment_bookings", "payments", "handling_bookings",
        "locations", "cities", "countries", "payment_methods", "airport_handling_services",
        "memberships", "agent_users", "users",
    ):
        op.drop_table(table)
