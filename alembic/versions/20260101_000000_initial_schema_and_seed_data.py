"""Initial schema and seed data for GTO Workforce

Revision ID: 20260101_000000
Revises: None
Create Date: 2026-01-01 00:00:00.000000

This is the initial migration that creates all necessary tables and seeds default data
for the GTO Workforce service. This includes:
- People and placement tables (users, apprentices, host employers, placements)
- Operational tables (timesheets, tasks, compliance records, WHS incidents)
- Rates tables (awards, classifications, award rates, rate templates, charge rates, quotes)
- Commercial tables (claims, invoices, expenses, leads)
- Default awards with apprentice classifications and an admin user

Revision format: YYYYMMDD_HHMMSS_description

"""

from datetime import datetime
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260101_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(32), nullable=False, server_default="field_officer"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_username", "username", unique=True),
    )

    # Create apprentices table
    op.create_table(
        "apprentices",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("trade", sa.String(128), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="applicant"),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("apprenticeship_year", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_adult", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_completed_year12", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_apprentices_email", "email", unique=True),
        sa.Index("ix_apprentices_trade", "trade"),
        sa.Index("ix_apprentices_status", "status"),
    )

    # Create host_employers table
    op.create_table(
        "host_employers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("industry", sa.String(128), nullable=False),
        sa.Column("contact_person", sa.String(128), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("abn", sa.String(14), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("safety_rating", sa.Integer(), nullable=True),
        sa.Column("compliance_status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("custom_margin_rate", sa.Float(), nullable=True),
        sa.Column("custom_admin_rate", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_host_employers_name", "name"),
        sa.Index("ix_host_employers_status", "status"),
        sa.Index("ix_host_employers_compliance_status", "compliance_status"),
    )

    # Create placements table
    op.create_table(
        "placements",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("apprentice_id", sa.Integer(), sa.ForeignKey("apprentices.id"), nullable=False),
        sa.Column("host_employer_id", sa.Integer(), sa.ForeignKey("host_employers.id"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("position", sa.String(128), nullable=True),
        sa.Column("supervisor", sa.String(128), nullable=True),
        sa.Column("supervisor_contact", sa.String(128), nullable=True),
        sa.Column("negotiated_rate", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("charge_rate", sa.Float(), nullable=True),
        sa.Column("last_charge_rate_update", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_placements_apprentice_id", "apprentice_id"),
        sa.Index("ix_placements_host_employer_id", "host_employer_id"),
        sa.Index("ix_placements_status", "status"),
    )

    # Create timesheets table
    op.create_table(
        "timesheets",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("apprentice_id", sa.Integer(), sa.ForeignKey("apprentices.id"), nullable=False),
        sa.Column("placement_id", sa.Integer(), sa.ForeignKey("placements.id"), nullable=False),
        sa.Column("week_starting", sa.Date(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("total_hours", sa.Float(), nullable=False, server_default="0"),
        sa.Column("submitted_date", sa.DateTime(), nullable=True),
        sa.Column("approved_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("approval_date", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_timesheets_apprentice_id", "apprentice_id"),
        sa.Index("ix_timesheets_placement_id", "placement_id"),
        sa.Index("ix_timesheets_week_starting", "week_starting"),
        sa.Index("ix_timesheets_status", "status"),
    )

    # Create timesheet_details table
    op.create_table(
        "timesheet_details",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("timesheet_id", sa.Integer(), sa.ForeignKey("timesheets.id"), nullable=False),
        sa.Column("work_date", sa.Date(), nullable=False),
        sa.Column("hours_worked", sa.Float(), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=True),
        sa.Column("end_time", sa.String(5), nullable=True),
        sa.Column("break_hours", sa.Float(), nullable=False, server_default="0"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_timesheet_details_timesheet_id", "timesheet_id"),
        sa.Index("ix_timesheet_details_work_date", "work_date"),
    )

    # Create tasks table
    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("assigned_to", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("due_date", sa.DateTime(), nullable=True),
        sa.Column("priority", sa.String(16), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("related_to", sa.String(32), nullable=True),
        sa.Column("related_id", sa.Integer(), nullable=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_tasks_assigned_to", "assigned_to"),
        sa.Index("ix_tasks_due_date", "due_date"),
        sa.Index("ix_tasks_priority", "priority"),
        sa.Index("ix_tasks_status", "status"),
    )

    # Create compliance_records table
    op.create_table(
        "compliance_records",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("related_to", sa.String(32), nullable=False),
        sa.Column("related_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("completion_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_compliance_records_type", "type"),
        sa.Index("ix_compliance_records_related_to", "related_to"),
        sa.Index("ix_compliance_records_related_id", "related_id"),
        sa.Index("ix_compliance_records_status", "status"),
    )

    # Create awards table
    op.create_table(
        "awards",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(16), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("short_name", sa.String(64), nullable=True),
        sa.Column("industry", sa.String(128), nullable=True),
        sa.Column("published_year", sa.Integer(), nullable=True),
        sa.Column("effective_from", sa.Date(), nullable=True),
        sa.Column("effective_to", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_awards_code", "code", unique=True),
    )

    # Create award_classifications table
    op.create_table(
        "award_classifications",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("award_id", sa.Integer(), sa.ForeignKey("awards.id"), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_apprentice", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_trainee", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_award_classifications_award_id", "award_id"),
    )

    # Create award_rates table
    op.create_table(
        "award_rates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "classification_id", sa.Integer(), sa.ForeignKey("award_classifications.id"), nullable=False
        ),
        sa.Column("hourly_rate", sa.Float(), nullable=False),
        sa.Column("weekly_rate", sa.Float(), nullable=True),
        sa.Column("annual_rate", sa.Float(), nullable=True),
        sa.Column("is_adult", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("has_completed_year12", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("apprentice_year", sa.Integer(), nullable=True),
        sa.Column("effective_from", sa.Date(), nullable=False),
        sa.Column("effective_to", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_award_rates_classification_id", "classification_id"),
        sa.Index("ix_award_rates_apprentice_year", "apprentice_year"),
    )

    # Create rate_templates table
    op.create_table(
        "rate_templates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("org_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("template_type", sa.String(16), nullable=False, server_default="hourly"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("award_code", sa.String(16), nullable=True),
        sa.Column("base_rate", sa.Float(), nullable=False),
        sa.Column("base_margin", sa.Float(), nullable=False, server_default="0.15"),
        sa.Column("super_rate", sa.Float(), nullable=False, server_default="0.115"),
        sa.Column("leave_loading", sa.Float(), nullable=False, server_default="0"),
        sa.Column("workers_comp_rate", sa.Float(), nullable=False, server_default="0"),
        sa.Column("payroll_tax_rate", sa.Float(), nullable=False, server_default="0"),
        sa.Column("training_cost_rate", sa.Float(), nullable=False, server_default="0"),
        sa.Column("other_costs_rate", sa.Float(), nullable=False, server_default="0"),
        sa.Column("funding_offset", sa.Float(), nullable=False, server_default="0"),
        sa.Column("casual_loading", sa.Float(), nullable=False, server_default="0"),
        sa.Column("effective_from", sa.Date(), nullable=False),
        sa.Column("effective_to", sa.Date(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="draft"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_by", sa.String(128), nullable=True),
        sa.Column("updated_by", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_rate_templates_org_id", "org_id"),
        sa.Index("ix_rate_templates_status", "status"),
    )

    # Create rate_template_history table
    op.create_table(
        "rate_template_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("template_id", sa.Integer(), sa.ForeignKey("rate_templates.id"), nullable=False),
        sa.Column("org_id", sa.String(64), nullable=False),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("changes", sa.JSON(), nullable=False),
        sa.Column("performed_by", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_rate_template_history_template_id", "template_id"),
        sa.Index("ix_rate_template_history_created_at", "created_at"),
    )

    # Create charge_rate_calculations table
    op.create_table(
        "charge_rate_calculations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("apprentice_id", sa.Integer(), sa.ForeignKey("apprentices.id"), nullable=False),
        sa.Column("host_employer_id", sa.Integer(), sa.ForeignKey("host_employers.id"), nullable=False),
        sa.Column("pay_rate", sa.Float(), nullable=False),
        sa.Column("total_hours", sa.Float(), nullable=False),
        sa.Column("billable_hours", sa.Float(), nullable=False),
        sa.Column("base_wage", sa.Float(), nullable=False),
        sa.Column("on_costs", sa.JSON(), nullable=False),
        sa.Column("total_cost", sa.Float(), nullable=False),
        sa.Column("cost_per_hour", sa.Float(), nullable=False),
        sa.Column("margin", sa.Float(), nullable=False),
        sa.Column("charge_rate", sa.Float(), nullable=False),
        sa.Column("approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("approved_date", sa.DateTime(), nullable=True),
        sa.Column("calculation_date", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_charge_rate_calculations_apprentice_id", "apprentice_id"),
        sa.Index("ix_charge_rate_calculations_host_employer_id", "host_employer_id"),
        sa.Index("ix_charge_rate_calculations_approved", "approved"),
    )

    # Create quotes table
    op.create_table(
        "quotes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("quote_number", sa.String(32), nullable=False),
        sa.Column("host_employer_id", sa.Integer(), sa.ForeignKey("host_employers.id"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="draft"),
        sa.Column("valid_until", sa.Date(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_quotes_quote_number", "quote_number", unique=True),
        sa.Index("ix_quotes_host_employer_id", "host_employer_id"),
    )

    # Create quote_line_items table
    op.create_table(
        "quote_line_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("quote_id", sa.Integer(), sa.ForeignKey("quotes.id"), nullable=False),
        sa.Column("apprentice_id", sa.Integer(), sa.ForeignKey("apprentices.id"), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("weekly_hours", sa.Float(), nullable=False),
        sa.Column("rate", sa.Float(), nullable=False),
        sa.Column("total", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_quote_line_items_quote_id", "quote_id"),
    )

    # Create whs_incidents table
    op.create_table(
        "whs_incidents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("severity", sa.String(16), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("date_occurred", sa.DateTime(), nullable=False),
        sa.Column("reporter_name", sa.String(128), nullable=True),
        sa.Column("reporter_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("apprentice_id", sa.Integer(), sa.ForeignKey("apprentices.id"), nullable=True),
        sa.Column("host_employer_id", sa.Integer(), sa.ForeignKey("host_employers.id"), nullable=True),
        sa.Column("immediate_actions", sa.Text(), nullable=True),
        sa.Column("notifiable_incident", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("authority_notified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("followup_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(32), nullable=False, server_default="reported"),
        sa.Column("date_reported", sa.DateTime(), nullable=False),
        sa.Column("investigation_notes", sa.Text(), nullable=True),
        sa.Column("resolution_details", sa.Text(), nullable=True),
        sa.Column("resolution_date", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_whs_incidents_type", "type"),
        sa.Index("ix_whs_incidents_severity", "severity"),
        sa.Index("ix_whs_incidents_status", "status"),
        sa.Index("ix_whs_incidents_apprentice_id", "apprentice_id"),
        sa.Index("ix_whs_incidents_host_employer_id", "host_employer_id"),
    )

    # Create whs_witnesses table
    op.create_table(
        "whs_witnesses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("incident_id", sa.Integer(), sa.ForeignKey("whs_incidents.id"), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("contact", sa.String(128), nullable=True),
        sa.Column("statement", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_whs_witnesses_incident_id", "incident_id"),
    )

    # Create claims table
    op.create_table(
        "claims",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("claim_number", sa.String(32), nullable=False),
        sa.Column("apprentice_id", sa.Integer(), sa.ForeignKey("apprentices.id"), nullable=True),
        sa.Column("apprentice_name", sa.String(255), nullable=True),
        sa.Column("claim_type", sa.String(32), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="draft"),
        sa.Column("amount_requested", sa.Integer(), nullable=False),
        sa.Column("amount_approved", sa.Integer(), nullable=True),
        sa.Column("funding_body", sa.String(128), nullable=True),
        sa.Column("jurisdiction", sa.String(16), nullable=True),
        sa.Column("submission_date", sa.DateTime(), nullable=True),
        sa.Column("reviewer", sa.String(128), nullable=True),
        sa.Column("review_date", sa.DateTime(), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("payment_date", sa.DateTime(), nullable=True),
        sa.Column("payment_reference", sa.String(64), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_claims_claim_number", "claim_number", unique=True),
        sa.Index("ix_claims_apprentice_id", "apprentice_id"),
        sa.Index("ix_claims_claim_type", "claim_type"),
        sa.Index("ix_claims_status", "status"),
        sa.Index("ix_claims_created_at", "created_at"),
    )

    # Create claim_history table
    op.create_table(
        "claim_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("claim_id", sa.Integer(), sa.ForeignKey("claims.id"), nullable=False),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("changes", sa.JSON(), nullable=False),
        sa.Column("performed_by", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_claim_history_claim_id", "claim_id"),
    )

    # Create invoices table
    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("invoice_number", sa.String(32), nullable=False),
        sa.Column("host_employer_id", sa.Integer(), sa.ForeignKey("host_employers.id"), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="draft"),
        sa.Column("issue_date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("subtotal", sa.Float(), nullable=False),
        sa.Column("tax", sa.Float(), nullable=False),
        sa.Column("total", sa.Float(), nullable=False),
        sa.Column("amount_paid", sa.Float(), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_invoices_invoice_number", "invoice_number", unique=True),
        sa.Index("ix_invoices_host_employer_id", "host_employer_id"),
        sa.Index("ix_invoices_status", "status"),
        sa.Index("ix_invoices_issue_date", "issue_date"),
    )

    # Create expenses table
    op.create_table(
        "expenses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("expense_date", sa.Date(), nullable=False),
        sa.Column("vendor", sa.String(128), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_expenses_category", "category"),
        sa.Index("ix_expenses_expense_date", "expense_date"),
    )

    # Create leads table
    op.create_table(
        "leads",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("job_title", sa.String(128), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("service_interest", sa.JSON(), nullable=False),
        sa.Column("source", sa.String(64), nullable=False, server_default="website"),
        sa.Column("status", sa.String(16), nullable=False, server_default="new"),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("lead_metadata", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_leads_email", "email"),
        sa.Index("ix_leads_status", "status"),
    )

    # Seed default awards
    now = datetime.utcnow()

    default_awards = [
        {
            "code": "MA000003",
            "name": "Fast Food Industry Award 2020",
            "short_name": "Fast Food",
            "industry": "Hospitality",
        },
        {
            "code": "MA000010",
            "name": "Manufacturing and Associated Industries and Occupations Award 2020",
            "short_name": "Manufacturing",
            "industry": "Manufacturing",
        },
        {
            "code": "MA000020",
            "name": "Building and Construction General On-site Award 2020",
            "short_name": "Building and Construction",
            "industry": "Construction",
        },
    ]

    awards_columns = [
        "code",
        "name",
        "short_name",
        "industry",
        "published_year",
        "effective_from",
        "is_active",
        "created_at",
        "updated_at",
    ]

    for award in default_awards:
        values = ", ".join(
            [
                f"'{award['code']}'",
                f"'{award['name']}'",
                f"'{award['short_name']}'",
                f"'{award['industry']}'",
                "2020",
                "'2020-07-01'",
                "true",
                f"'{now}'",
                f"'{now}'",
            ]
        )
        op.execute(f"INSERT INTO awards ({', '.join(awards_columns)}) VALUES ({values})")

    # Seed one apprentice classification per year of each award
    classification_columns = ["award_id", "code", "name", "level", "is_apprentice", "is_trainee", "created_at"]

    for award in default_awards:
        for year in range(1, 5):
            values = ", ".join(
                [
                    f"(SELECT id FROM awards WHERE code = '{award['code']}')",
                    f"'{award['code']}-APP{year}'",
                    f"'Apprentice Year {year}'",
                    f"{year}",
                    "true",
                    "false",
                    f"'{now}'",
                ]
            )
            op.execute(
                f"INSERT INTO award_classifications ({', '.join(classification_columns)}) " f"VALUES ({values})"
            )

    # Seed admin user
    users_columns = ["username", "email", "first_name", "last_name", "role", "is_active", "created_at"]
    values = ", ".join(["'admin'", "'admin@gto.local'", "'System'", "'Administrator'", "'admin'", "true", f"'{now}'"])
    op.execute(f"INSERT INTO users ({', '.join(users_columns)}) VALUES ({values})")


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("leads")
    op.drop_table("expenses")
    op.drop_table("invoices")
    op.drop_table("claim_history")
    op.drop_table("claims")
    op.drop_table("whs_witnesses")
    op.drop_table("whs_incidents")
    op.drop_table("quote_line_items")
    op.drop_table("quotes")
    op.drop_table("charge_rate_calculations")
    op.drop_table("rate_template_history")
    op.drop_table("rate_templates")
    op.drop_table("award_rates")
    op.drop_table("award_classifications")
    op.drop_table("awards")
    op.drop_table("compliance_records")
    op.drop_table("tasks")
    op.drop_table("timesheet_details")
    op.drop_table("timesheets")
    op.drop_table("placements")
    op.drop_table("host_employers")
    op.drop_table("apprentices")
    op.drop_table("users")
