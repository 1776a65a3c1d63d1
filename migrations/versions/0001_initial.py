"""Создаёт таблицы вставок и токенов."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# Идентификаторы миграции
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Создаёт таблицы pastes и tokens."""
    op.create_table(
        "pastes",
        sa.Column("id", sa.String(length=255), primary_key=True),
        sa.Column("content", sa.LargeBinary(), nullable=False),
        sa.Column("is_persistent", sa.Boolean(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    # Индексы для периодической очистки просроченных вставок
    op.create_index("ix_pastes_is_persistent", "pastes", ["is_persistent"])
    op.create_index("ix_pastes_expires_at", "pastes", ["expires_at"])

    op.create_table(
        "tokens",
        sa.Column("token", sa.String(length=255), primary_key=True),
    )


def downgrade() -> None:
    """Удаляет таблицы pastes и tokens."""
    op.drop_table("tokens")
    op.drop_index("ix_pastes_expires_at", table_name="pastes")
    op.drop_index("ix_pastes_is_persistent", table_name="pastes")
    op.drop_table("pastes")
