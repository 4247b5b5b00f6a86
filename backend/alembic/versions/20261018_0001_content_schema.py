"""Content platform tables: blogs, courses, users, newsletter, contact and images."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def _flag(name: str, default: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.Boolean(),
        nullable=False,
        server_default=sa.true() if default else sa.false(),
    )


def upgrade() -> None:
    op.create_table(
        "blogs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("author_name", sa.String(length=255), nullable=True),
        sa.Column("author_email", sa.String(length=255), nullable=True),
        sa.Column("keywords", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        sa.Column("banner_url", sa.String(length=500), nullable=True),
        _flag("is_popular"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("short_description", sa.Text(), nullable=True),
        sa.Column("reading_time", sa.Integer(), nullable=True),
        sa.Column("image_alt_text", sa.String(length=255), nullable=True),
        sa.Column("image_caption", sa.String(length=500), nullable=True),
        sa.Column("publish_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("visibility", sa.String(length=20), nullable=False, server_default="private"),
        sa.Column("seo_title", sa.String(length=255), nullable=True),
        sa.Column("seo_description", sa.Text(), nullable=True),
        sa.Column("focus_keyword", sa.String(length=255), nullable=True),
        sa.Column("canonical_url", sa.String(length=500), nullable=True),
        sa.Column("meta_robots", sa.String(length=100), nullable=True),
        _flag("allow_comments", default=True),
        _flag("show_on_homepage"),
        _flag("is_sticky"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("blogs_category_status_idx", "blogs", ["category_id", "status"])
    op.create_index("blogs_created_at_idx", "blogs", ["created_at"])

    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("short_description", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("outcomes", sa.Text(), nullable=True),
        sa.Column("faqs", sa.Text(), nullable=True),
        sa.Column("language", sa.String(length=100), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("sub_category_id", sa.Integer(), nullable=True),
        sa.Column("section", sa.Text(), nullable=True),
        sa.Column("requirements", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        _flag("discount_flag"),
        sa.Column("discounted_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("level", sa.String(length=50), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("thumbnail", sa.String(length=500), nullable=True),
        sa.Column("video_url", sa.String(length=500), nullable=True),
        _timestamp("date_added"),
        _timestamp("last_modified"),
        sa.Column("course_type", sa.String(length=50), nullable=True),
        _flag("is_top_course"),
        _flag("is_admin"),
        sa.Column("status", sa.String(length=50), nullable=False, server_default="active"),
        sa.Column("course_overview_provider", sa.String(length=50), nullable=True),
        sa.Column("meta_keywords", sa.Text(), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        _flag("is_free_course"),
        _flag("multi_instructor"),
        _flag("enable_drip_content"),
        sa.Column("creator", sa.Integer(), nullable=True),
        sa.Column("expiry_period", sa.Integer(), nullable=True),
        sa.Column("upcoming_image_thumbnail", sa.String(length=500), nullable=True),
        sa.Column("publish_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("courses_category_idx", "courses", ["category_id"])
    op.create_index("courses_status_level_idx", "courses", ["status", "level"])

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("profile_image_url", sa.String(length=500), nullable=True),
        sa.Column("biography", sa.Text(), nullable=True),
        sa.Column("linkedin_url", sa.String(length=500), nullable=True),
        sa.Column("github_url", sa.String(length=500), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="STUDENT"),
        _flag("is_instructor"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="ACTIVE"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("phone"),
    )
    op.create_index("users_role_status_idx", "users", ["role", "status"])

    op.create_table(
        "newsletter_subscribers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "contact_messages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("country_code", sa.String(length=10), nullable=True),
        sa.Column("phone_number", sa.String(length=30), nullable=True),
        sa.Column("interest_topic", sa.String(length=255), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        _flag("agreed_to_terms", default=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="new"),
        _timestamp("created_at"),
    )
    op.create_index("contact_messages_status_idx", "contact_messages", ["status"])

    op.create_table(
        "images",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("cloudinary_id", sa.String(length=255), nullable=False),
        sa.Column("url", sa.String(length=500), nullable=True),
        sa.Column("secure_url", sa.String(length=500), nullable=False),
        sa.Column("public_id", sa.String(length=255), nullable=False),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("format", sa.String(length=20), nullable=True),
        sa.Column("size", sa.Integer(), nullable=True),
        sa.Column("folder", sa.String(length=255), nullable=False, server_default="biomed"),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("images_cloudinary_id_idx", "images", ["cloudinary_id"])
    op.create_index("images_folder_idx", "images", ["folder"])


def downgrade() -> None:
    op.drop_index("images_folder_idx", table_name="images")
    op.drop_index("images_cloudinary_id_idx", table_name="images")
    op.drop_table("images")
    op.drop_index("contact_messages_status_idx", table_name="contact_messages")
    op.drop_table("contact_messages")
    op.drop_table("newsletter_subscribers")
    op.drop_index("users_role_status_idx", table_name="users")
    op.drop_table("users")
    op.drop_index("courses_status_level_idx", table_name="courses")
    op.drop_index("courses_category_idx", table_name="courses")
    op.drop_table("courses")
    op.drop_index("blogs_created_at_idx", table_name="blogs")
    op.drop_index("blogs_category_status_idx", table_name="blogs")
    op.drop_table("blogs")
