"""canvases, shapes and user cursors"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

shape_type = sa.Enum("rectangle", "square", "triangle", name="shape_type")


def upgrade() -> None:
    op.create_table(
        "canvases",
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "shapes",
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("canvas_id", sa.Integer(), nullable=False),
        sa.Column("type", shape_type, nullable=False),
        sa.Column("x", sa.Numeric(10, 2), nullable=False),
        sa.Column("y", sa.Numeric(10, 2), nullable=False),
        sa.Column("width", sa.Numeric(10, 2), nullable=False),
        sa.Column("height", sa.Numeric(10, 2), nullable=False),
        sa.Column("color", sa.String(length=7), nullable=False),
        sa.Column("z_index", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["canvas_id"], ["canvases.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shapes_canvas_id", "shapes", ["canvas_id"], unique=False)
    op.create_index("ix_shapes_canvas_z", "shapes", ["canvas_id", "z_index"], unique=False)

    op.create_table(
        "user_cursors",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("canvas_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("user_name", sa.Text(), nullable=False),
        sa.Column("x", sa.Numeric(10, 2), nullable=False),
        sa.Column("y", sa.Numeric(10, 2), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["canvas_id"], ["canvases.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_user_cursors_canvas_user",
        "user_cursors",
        ["canvas_id", "user_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_user_cursors_canvas_user", table_name="user_cursors")
    op.drop_table("user_cursors")
    op.drop_index("ix_shapes_canvas_z", table_name="shapes")
    op.drop_index("ix_shapes_canvas_id", table_name="shapes")
    op.drop_table("shapes")
    op.drop_table("canvases")
    shape_type.drop(op.get_bind(), checkfirst=True)
