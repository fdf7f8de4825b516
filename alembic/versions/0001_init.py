"""init content tables

Revision ID: 0001_init
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    ]


def upgrade() -> None:
    # Content kinds table
    op.create_table(
        "content_kinds",
        *_base_columns(),
        sa.Column("machine_name", sa.String(), nullable=False),
        sa.Column("label", sa.String(), nullable=False),
    )
    op.create_index("ix_content_kinds_machine_name", "content_kinds", ["machine_name"], unique=True)

    # Content records table
    op.create_table(
        "content_records",
        *_base_columns(),
        sa.Column("kind", sa.String(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("summary_value", sa.Text(), nullable=True),
        sa.Column("summary_format", sa.String(), nullable=True),
        sa.Column("body_value", sa.Text(), nullable=True),
        sa.Column("body_summary", sa.Text(), nullable=True),
        sa.Column("body_format", sa.String(), nullable=True),
        sa.Column("image_file_id", sa.String(), nullable=True),
        sa.Column("image_alt", sa.String(), nullable=True),
        sa.Column("date", sa.String(), nullable=True),
        sa.Column("date_end", sa.String(), nullable=True),
    )
    op.create_index("ix_content_records_kind", "content_records", ["kind"])
    op.create_index("ix_content_records_status", "content_records", ["status"])
    op.create_index("ix_content_records_date", "content_records", ["date"])

    # Taxonomy terms table
    op.create_table(
        "taxonomy_terms",
        *_base_columns(),
        sa.Column("vocabulary", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("weight", sa.Integer(), nullable=False, server_default=sa.text("0")),
    )
    op.create_index("ix_taxonomy_terms_vocabulary", "taxonomy_terms", ["vocabulary"])

    # Content record <-> term references
    op.create_table(
        "content_record_terms",
        *_base_columns(),
        sa.Column("record_id", sa.String(), nullable=False),
        sa.Column("term_id", sa.String(), nullable=False),
        sa.Column("delta", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.UniqueConstraint("record_id", "term_id"),
    )
    op.create_index("ix_content_record_terms_record_id", "content_record_terms", ["record_id"])
    op.create_index("ix_content_record_terms_term_id", "content_record_terms", ["term_id"])

    # Files table
    op.create_table(
        "files",
        *_base_columns(),
        sa.Column("uri", sa.Text(), nullable=False),
        sa.Column("filename", sa.String(), nullable=True),
        sa.Column("mime_type", sa.String(), nullable=True),
    )

    # Image styles table
    op.create_table(
        "image_styles",
        *_base_columns(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("label", sa.String(), nullable=False),
    )
    op.create_index("ix_image_styles_name", "image_styles", ["name"], unique=True)


def downgrade() -> None:
    # Drop all tables in reverse order
    op.drop_table("image_styles")
    op.drop_table("files")
    op.drop_table("content_record_terms")
    op.drop_table("taxonomy_terms")
    op.drop_table("content_records")
    op.drop_table("content_kinds")
