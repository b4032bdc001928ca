"""Progress reviews, WHS registers and funding eligibility

Revision ID: 20260301_000000
Revises: 20260101_000000
Create Date: 2026-03-01 00:00:00.000000

Adds:
- Progress review templates, reviews, participants and action items
- WHS risk assessments and policies
- Funding eligibility criteria and apprentice eligibility records

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = "20260101_000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the progress review, WHS register and eligibility tables."""

    # Create progress_review_templates table
    op.create_table(
        "progress_review_templates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("template_name", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("template_version", sa.String(16), nullable=False, server_default="1.0"),
        sa.Column("form_structure", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_progress_review_templates_is_active", "is_active"),
    )

    # Create progress_reviews table
    op.create_table(
        "progress_reviews",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("apprentice_id", sa.Integer(), sa.ForeignKey("apprentices.id"), nullable=False),
        sa.Column("template_id", sa.Integer(), sa.ForeignKey("progress_review_templates.id"), nullable=False),
        sa.Column("reviewer_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("host_employer_id", sa.Integer(), sa.ForeignKey("host_employers.id"), nullable=True),
        sa.Column("scheduled_date", sa.DateTime(), nullable=False),
        sa.Column("review_date", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="scheduled"),
        sa.Column("review_period_start", sa.Date(), nullable=True),
        sa.Column("review_period_end", sa.Date(), nullable=True),
        sa.Column("review_location", sa.String(255), nullable=True),
        sa.Column("review_data", sa.JSON(), nullable=False),
        sa.Column("overall_rating", sa.Integer(), nullable=True),
        sa.Column("review_summary", sa.Text(), nullable=True),
        sa.Column("apprentice_feedback", sa.Text(), nullable=True),
        sa.Column("next_review_date", sa.DateTime(), nullable=True),
        sa.Column("next_review_goals", sa.JSON(), nullable=False),
        sa.Column("supervisor_present", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("supervisor_name", sa.String(128), nullable=True),
        sa.Column("supervisor_feedback", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_progress_reviews_apprentice_id", "apprentice_id"),
        sa.Index("ix_progress_reviews_reviewer_id", "reviewer_id"),
        sa.Index("ix_progress_reviews_scheduled_date", "scheduled_date"),
        sa.Index("ix_progress_reviews_review_date", "review_date"),
        sa.Index("ix_progress_reviews_status", "status"),
    )

    # Create progress_review_participants table
    op.create_table(
        "progress_review_participants",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("review_id", sa.Integer(), sa.ForeignKey("progress_reviews.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("attendance_status", sa.String(16), nullable=False, server_default="invited"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_progress_review_participants_review_id", "review_id"),
        sa.Index("ix_progress_review_participants_user_id", "user_id"),
    )

    # Create progress_review_action_items table
    op.create_table(
        "progress_review_action_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("review_id", sa.Integer(), sa.ForeignKey("progress_reviews.id"), nullable=False),
        sa.Column("action_description", sa.Text(), nullable=False),
        sa.Column("priority", sa.String(16), nullable=False, server_default="medium"),
        sa.Column("assignee_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("completion_date", sa.DateTime(), nullable=True),
        sa.Column("completion_notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_progress_review_action_items_review_id", "review_id"),
        sa.Index("ix_progress_review_action_items_status", "status"),
    )

    # Create whs_risk_assessments table
    op.create_table(
        "whs_risk_assessments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("work_area", sa.String(128), nullable=True),
        sa.Column("department", sa.String(128), nullable=True),
        sa.Column("host_employer_id", sa.Integer(), sa.ForeignKey("host_employers.id"), nullable=True),
        sa.Column("host_employer_name", sa.String(255), nullable=True),
        sa.Column("assessor_name", sa.String(128), nullable=False),
        sa.Column("assessment_date", sa.DateTime(), nullable=False),
        sa.Column("review_date", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="draft"),
        sa.Column("hazards", sa.JSON(), nullable=False),
        sa.Column("findings", sa.Text(), nullable=True),
        sa.Column("recommendations", sa.Text(), nullable=True),
        sa.Column("action_plan", sa.Text(), nullable=True),
        sa.Column("approver_name", sa.String(128), nullable=True),
        sa.Column("approval_date", sa.DateTime(), nullable=True),
        sa.Column("approval_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_whs_risk_assessments_host_employer_id", "host_employer_id"),
        sa.Index("ix_whs_risk_assessments_assessment_date", "assessment_date"),
        sa.Index("ix_whs_risk_assessments_status", "status"),
    )

    # Create whs_policies table
    op.create_table(
        "whs_policies",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("document_type", sa.String(64), nullable=True),
        sa.Column("file_path", sa.String(512), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="draft"),
        sa.Column("version", sa.String(16), nullable=False, server_default="1.0"),
        sa.Column("effective_date", sa.Date(), nullable=True),
        sa.Column("review_date", sa.Date(), nullable=True),
        sa.Column("approved_by_name", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_whs_policies_status", "status"),
        sa.Index("ix_whs_policies_created_at", "created_at"),
    )

    # Create eligibility_criteria table
    op.create_table(
        "eligibility_criteria",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("claim_type", sa.String(32), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("jurisdiction", sa.String(50), nullable=False),
        sa.Column("funding_body", sa.String(100), nullable=False),
        sa.Column("eligibility_rules", sa.JSON(), nullable=False),
        sa.Column("documentation_required", sa.JSON(), nullable=False),
        sa.Column("maximum_amount", sa.Integer(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("expiry_date", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_eligibility_criteria_claim_type", "claim_type"),
        sa.Index("ix_eligibility_criteria_jurisdiction", "jurisdiction"),
        sa.Index("ix_eligibility_criteria_active", "active"),
    )

    # Create apprentice_eligibility table
    op.create_table(
        "apprentice_eligibility",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("apprentice_id", sa.Integer(), sa.ForeignKey("apprentices.id"), nullable=False),
        sa.Column("apprentice_name", sa.String(255), nullable=True),
        sa.Column("criteria_id", sa.Integer(), sa.ForeignKey("eligibility_criteria.id"), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending-review"),
        sa.Column("eligible_from_date", sa.DateTime(), nullable=True),
        sa.Column("eligible_to_date", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("reviewed_by_name", sa.String(128), nullable=True),
        sa.Column("review_date", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_apprentice_eligibility_apprentice_id", "apprentice_id"),
        sa.Index("ix_apprentice_eligibility_criteria_id", "criteria_id"),
    )


def downgrade() -> None:
    """Drop the tables added by this revision."""
    op.drop_table("apprentice_eligibility")
    op.drop_table("eligibility_criteria")
    op.drop_table("whs_policies")
    op.drop_table("whs_risk_assessments")
    op.drop_table("progress_review_action_items")
    op.drop_table("progress_review_participants")
    op.drop_table("progress_reviews")
    op.drop_table("progress_review_templates")
