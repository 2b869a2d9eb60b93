"""initial schema: regions, locations, workouts"""

from alembic import op
import sqlalchemy as sa


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    ]


def upgrade() -> None:
    op.create_table(
        "regions",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("region_name", sa.String(length=160), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("hero_title", sa.String(length=200), nullable=True),
        sa.Column("hero_subtitle", sa.String(length=300), nullable=True),
        sa.Column("region_city", sa.String(length=120), nullable=True),
        sa.Column("region_state", sa.String(length=60), nullable=True),
        sa.Column("region_facebook", sa.String(length=500), nullable=True),
        sa.Column("region_instagram", sa.String(length=500), nullable=True),
        sa.Column("region_linkedin", sa.String(length=500), nullable=True),
        sa.Column("region_x_twitter", sa.String(length=500), nullable=True),
        sa.Column("region_map_lat", sa.Float(), nullable=True),
        sa.Column("region_map_lon", sa.Float(), nullable=True),
        sa.Column("region_map_zoom", sa.Integer(), nullable=True),
        sa.Column("region_map_embed_link", sa.Text(), nullable=True),
        sa.Column("region_logo_url", sa.String(length=500), nullable=True),
        sa.Column("region_hero_img_url", sa.String(length=500), nullable=True),
        sa.Column("contact_form_url", sa.String(length=500), nullable=True),
        sa.Column("fng_form_url", sa.String(length=500), nullable=True),
        sa.Column("singleton", sa.Integer(), nullable=False, server_default="1", unique=True),
        *_timestamps(),
    )

    op.create_table(
        "locations",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("name", sa.String(length=160), nullable=False, unique=True),
        sa.Column("map_link", sa.String(length=500), nullable=False),
        sa.Column("address", sa.String(length=300), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("q", sa.String(length=120), nullable=True),
        sa.Column("embed_map_link", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.Column("pax_image_url", sa.String(length=500), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "workouts",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("location_id", sa.String(length=32), nullable=False),
        sa.Column("style", sa.String(length=80), nullable=True),
        sa.Column("day", sa.String(length=80), nullable=False),
        sa.Column("time", sa.String(length=40), nullable=False),
        sa.Column("q", sa.String(length=120), nullable=True),
        sa.Column("avg_attendance", sa.String(length=20), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_workouts_location_id", "workouts", ["location_id"])


def downgrade() -> None:
    op.drop_index("ix_workouts_location_id", table_name="workouts")
    for t in ["workouts", "locations", "regions"]:
        op.drop_table(t)
