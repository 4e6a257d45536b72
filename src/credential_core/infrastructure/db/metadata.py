"""SQLAlchemy metadata definitions for credential tables."""

from __future__ import annotations

import sqlalchemy as sa

metadata = sa.MetaData()
sqlite_bigint = sa.BigInteger().with_variant(sa.Integer(), "sqlite")

credentials = sa.Table(
    "credentials",
    metadata,
    sa.Column("id", sqlite_bigint, primary_key=True, autoincrement=True),
    sa.Column("user_id", sa.Text(), nullable=False),
    sa.Column("salt", sa.LargeBinary(), nullable=False),
    sa.Column("digest", sa.LargeBinary(), nullable=False),
    sa.Column("parameters_version", sa.Integer(), nullable=False),
    sa.Column("time_cost", sa.Integer(), nullable=False),
    sa.Column("memory_cost", sa.Integer(), nullable=False),
    sa.Column("parallelism", sa.Integer(), nullable=False),
    sa.Column("output_len", sa.Integer(), nullable=False),
    sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    ),
    sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    ),
    sa.UniqueConstraint("user_id", name="uq_credentials_user_id"),
    sa.CheckConstraint("parameters_version >= 1", name="ck_credentials_parameters_version"),
)
