"""Record Argon2id cost parameters on every credential row."""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "0002_credential_kdf_parameters"
down_revision = "0001_credentials"
branch_labels = None
depends_on = None

# Rows written before this revision were all derived with version 1 parameters.
_VERSION_ONE_COLUMNS = (
    ("time_cost", "1"),
    ("memory_cost", "65536"),
    ("parallelism", "4"),
    ("output_len", "32"),
)


def upgrade() -> None:
    """Add per-row KDF parameter columns backfilled with version 1 values."""

    with op.batch_alter_table("credentials") as batch_op:
        for name, value in _VERSION_ONE_COLUMNS:
            batch_op.add_column(
                sa.Column(name, sa.Integer(), nullable=False, server_default=sa.text(value))
            )

    with op.batch_alter_table("credentials") as batch_op:
        for name, _ in _VERSION_ONE_COLUMNS:
            batch_op.alter_column(name, server_default=None)


def downgrade() -> None:
    """Drop per-row KDF parameter columns."""

    with op.batch_alter_table("credentials") as batch_op:
        for name, _ in reversed(_VERSION_ONE_COLUMNS):
            batch_op.drop_column(name)
