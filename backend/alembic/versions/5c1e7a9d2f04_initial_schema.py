"""Initial schema: employees, projects, membership and objectives

Revision ID: 5c1e7a9d2f04
Revises:
Create Date: 2026-02-03

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c1e7a9d2f04"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("first_name", sa.String(length=256), nullable=False),
        sa.Column("last_name", sa.String(length=256), nullable=False),
        sa.Column("patronymic", sa.String(length=256), nullable=True),
        sa.Column("mail", sa.String(length=256), nullable=False),
        sa.Column("user_id", sa.String(length=450), nullable=True),
    )
    op.create_index("ix_employees_last_name", "employees", ["last_name"], unique=False)
    op.create_index("ix_employees_user_id", "employees", ["user_id"], unique=False)

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("customer_name", sa.String(length=256), nullable=False),
        sa.Column("executor_name", sa.String(length=256), nullable=False),
        sa.Column("director_id", sa.Uuid(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["director_id"], ["employees.id"], ondelete="RESTRICT"),
    )
    op.create_index("ix_projects_name", "projects", ["name"], unique=False)
    op.create_index("ix_projects_director_id", "projects", ["director_id"], unique=False)

    # Membership rows go away with either side.
    op.create_table(
        "employee_projects",
        sa.Column("employee_id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("employee_id", "project_id"),
    )

    op.create_table(
        "objectives",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("executor_id", sa.Uuid(), nullable=True),
        sa.Column("status", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment", sa.String(length=256), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(["author_id"], ["employees.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["executor_id"], ["employees.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_objectives_name", "objectives", ["name"], unique=False)
    op.create_index("ix_objectives_author_id", "objectives", ["author_id"], unique=False)
    op.create_index("ix_objectives_executor_id", "objectives", ["executor_id"], unique=False)
    op.create_index("ix_objectives_project_id", "objectives", ["project_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_objectives_project_id", table_name="objectives")
    op.drop_index("ix_objectives_executor_id", table_name="objectives")
    op.drop_index("ix_objectives_author_id", table_name="objectives")
    op.drop_index("ix_objectives_name", table_name="objectives")
    op.drop_table("objectives")

    op.drop_table("employee_projects")

    op.drop_index("ix_projects_director_id", table_name="projects")
    op.drop_index("ix_projects_name", table_name="projects")
    op.drop_table("projects")

    op.drop_index("ix_employees_user_id", table_name="employees")
    op.drop_index("ix_employees_last_name", table_name="employees")
    op.drop_table("employees")
