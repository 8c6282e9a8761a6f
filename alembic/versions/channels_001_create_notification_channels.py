"""create notification_channels table

Revision ID: channels_001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'channels_001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'notification_channels',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('channel_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('importance', sa.Integer(), nullable=False),
        sa.Column('vibration_pattern', sa.JSON(), nullable=False),
        sa.Column('lights_enabled', sa.Boolean(), nullable=True),
        sa.Column('vibration_enabled', sa.Boolean(), nullable=True),
        sa.Column('sound_uri', sa.String(), nullable=False),
        sa.Column('audio_usage', sa.Integer(), nullable=False),
        sa.Column('audio_content_type', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_notification_channels_channel_id', 'notification_channels', ['channel_id'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_notification_channels_channel_id', table_name='notification_channels')
    op.drop_table('notification_channels')
