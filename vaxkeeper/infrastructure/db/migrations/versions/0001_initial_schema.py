"""Initial patient and vaccination_record tables"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "patient",
        sa.Column("patient_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("gender", sa.Text(), nullable=False),
        sa.CheckConstraint("gender in ('Male','Female','Other')", name="ck_patient_gender"),
    )

    op.create_table(
        "vaccination_record",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "patient_id",
            sa.Integer(),
            sa.ForeignKey(
                "patient.patient_id",
                name="fk_vaccination_record_patient_id_patient",
                ondelete="CASCADE",
            ),
            nullable=False,
        ),
        sa.Column("vaccine_name", sa.Text(), nullable=False),
        sa.Column("manufacturer", sa.Text(), nullable=False),
        sa.Column("booster_due_date", sa.Date(), nullable=False),
    )

    op.create_index(
        "ix_vaccination_record_patient_id", "vaccination_record", ["patient_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_vaccination_record_patient_id", table_name="vaccination_record")
    op.drop_table("vaccination_record")
    op.drop_table("patient")
