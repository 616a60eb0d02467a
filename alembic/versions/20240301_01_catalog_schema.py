"""
Catalog schema.

- `actors`, `films`, `users` with BIGINT surrogate keys.
- `film_actor` association; both foreign keys cascade on delete.
- Constraint names follow `filmoteka.db.base_class.NAMING_CONVENTION`.
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic.
revision = "20240301_01_catalog_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- actors ---
    op.create_table(
        "actors",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("sex", sa.String(length=16), nullable=False),
        sa.Column("birthday", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_actors"),
    )

    # --- films ---
    op.create_table(
        "films",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=False),
        sa.Column("publish_date", sa.Date(), nullable=False),
        sa.Column("rating", sa.SmallInteger(), nullable=False),
        sa.CheckConstraint("rating >= 0 AND rating <= 10", name="ck_films_rating_range"),
        sa.PrimaryKeyConstraint("id", name="pk_films"),
    )
    op.create_index("ix_films_name", "films", ["name"])

    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("login", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("login", name="uq_users_login"),
    )

    # --- film_actor ---
    op.create_table(
        "film_actor",
        sa.Column("film_id", sa.BigInteger(), nullable=False),
        sa.Column("actor_id", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["film_id"], ["films.id"], name="fk_film_actor_film_id_films", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["actor_id"], ["actors.id"], name="fk_film_actor_actor_id_actors", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("film_id", "actor_id", name="pk_film_actor"),
    )
    op.create_index("ix_film_actor_actor_id", "film_actor", ["actor_id"])


def downgrade() -> None:
    op.drop_index("ix_film_actor_actor_id", table_name="film_actor")
    op.drop_table("film_actor")
    op.drop_table("users")
    op.drop_index("ix_films_name", table_name="films")
    op.drop_table("films")
    op.drop_table("actors")
