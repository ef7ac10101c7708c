"""biomarker taxonomy schema

Revision ID: 0001_taxonomy_schema
Revises:
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001_taxonomy_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "biomarker_categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_biomarker_categories_name", "biomarker_categories", ["name"], unique=True)

    op.create_table(
        "data_sources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("organization", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_data_sources_name", "data_sources", ["name"], unique=True)

    op.create_table(
        "biomarker_definitions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column("is_dependent", sa.Boolean(), nullable=False),
        sa.Column("normal_range_min", sa.Float(), nullable=False),
        sa.Column("normal_range_max", sa.Float(), nullable=False),
        sa.Column("aliases", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("normal_range_min <= normal_range_max", name="ck_biomarker_definitions_normal_range"),
        sa.ForeignKeyConstraint(["category_id"], ["biomarker_categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_biomarker_definitions_category_id", "biomarker_definitions", ["category_id"], unique=False)
    op.create_index("ix_biomarker_definitions_code", "biomarker_definitions", ["code"], unique=True)

    op.create_table(
        "score_weights",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("biomarker_id", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("weight >= 0 AND weight <= 1", name="ck_score_weights_weight_unit_interval"),
        sa.ForeignKeyConstraint(["biomarker_id"], ["biomarker_definitions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_score_weights_biomarker_id", "score_weights", ["biomarker_id"], unique=True)

    op.create_table(
        "health_index_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("overall_score", sa.Float(), nullable=False),
        sa.Column("physical_score", sa.Float(), nullable=True),
        sa.Column("blood_score", sa.Float(), nullable=True),
        sa.Column("wellness_score", sa.Float(), nullable=True),
        sa.Column("source", sa.String(length=100), nullable=True),
        sa.Column("recorded_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("overall_score >= 0 AND overall_score <= 100", name="ck_health_index_records_overall"),
        sa.CheckConstraint("physical_score >= 0 AND physical_score <= 100", name="ck_health_index_records_physical"),
        sa.CheckConstraint("blood_score >= 0 AND blood_score <= 100", name="ck_health_index_records_blood"),
        sa.CheckConstraint("wellness_score >= 0 AND wellness_score <= 100", name="ck_health_index_records_wellness"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_health_index_records_recorded_at", "health_index_records", ["recorded_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_health_index_records_recorded_at", table_name="health_index_records")
    op.drop_table("health_index_records")

    op.drop_index("ix_score_weights_biomarker_id", table_name="score_weights")
    op.drop_table("score_weights")

    op.drop_index("ix_biomarker_definitions_code", table_name="biomarker_definitions")
    op.drop_index("ix_biomarker_definitions_category_id", table_name="biomarker_definitions")
    op.drop_table("biomarker_definitions")

    op.drop_index("ix_data_sources_name", table_name="data_sources")
    op.drop_table("data_sources")

    op.drop_index("ix_biomarker_categories_name", table_name="biomarker_categories")
    op.drop_table("biomarker_categories")
