"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create ENUM types
    op.execute("CREATE TYPE application_status AS ENUM ('draft', 'submitted', 'under_review', 'pending_documents', 'accepted', 'rejected', 'withdrawn')")
    op.execute("CREATE TYPE admission_decision AS ENUM ('pending', 'accepted', 'rejected', 'waitlisted')")
    op.execute("CREATE TYPE entry_semester AS ENUM ('fall', 'spring', 'summer')")
    op.execute("CREATE TYPE document_type AS ENUM ('national_id', 'transcript', 'photo', 'certificate', 'passport', 'other')")
    op.execute("CREATE TYPE document_status AS ENUM ('pending_review', 'approved', 'rejected')")
    op.execute("CREATE TYPE eligibility_status AS ENUM ('eligible', 'not_eligible', 'pending_review')")
    op.execute("CREATE TYPE evaluation_policy AS ENUM ('weighted', 'boolean')")

    # Create programs table
    op.create_table(
        'programs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('department', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
    )
    op.create_index('ix_programs_code', 'programs', ['code'], unique=True)
    op.create_index('ix_programs_active', 'programs', ['active'])

    # Create program_requirements table (NULL list columns fall back to configured defaults)
    op.create_table(
        'program_requirements',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('program_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('min_gpa', sa.Numeric(precision=4, scale=2), nullable=True),
        sa.Column('mandatory_courses', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('required_documents', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_program_requirements_program_id', 'program_requirements', ['program_id'], unique=True)

    # Create applications table
    op.create_table(
        'applications',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('program_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('status', postgresql.ENUM(name='application_status', create_type=False), nullable=False, server_default='draft'),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('nationality', sa.String(length=100), nullable=True),
        sa.Column('national_id', sa.String(length=100), nullable=True),
        sa.Column('address_line1', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('entry_year', sa.Integer(), nullable=True),
        sa.Column('entry_semester', postgresql.ENUM(name='entry_semester', create_type=False), nullable=True),
        sa.Column('high_school_name', sa.String(length=255), nullable=True),
        sa.Column('high_school_graduation_year', sa.Integer(), nullable=True),
        sa.Column('high_school_gpa', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('gpa_scale', sa.Numeric(precision=5, scale=2), nullable=False, server_default='4.00'),
        sa.Column('courses', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='[]'),
        sa.Column('fee_paid', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('payment_reference', sa.String(length=100), nullable=True),
        sa.Column('decision', postgresql.ENUM(name='admission_decision', create_type=False), nullable=False, server_default='pending'),
        sa.Column('decision_by', sa.String(length=64), nullable=True),
        sa.Column('decision_notes', sa.Text(), nullable=True),
        sa.Column('decision_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reviewed_by', sa.String(length=64), nullable=True),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ondelete='RESTRICT'),
    )
    op.create_index('ix_applications_user_id', 'applications', ['user_id'])
    op.create_index('ix_applications_program_id', 'applications', ['program_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])

    # Create documents table
    op.create_table(
        'documents',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('application_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('type', postgresql.ENUM(name='document_type', create_type=False), nullable=False),
        sa.Column('status', postgresql.ENUM(name='document_status', create_type=False), nullable=False, server_default='pending_review'),
        sa.Column('file_reference', sa.String(length=500), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=True),
        sa.Column('uploaded_by', sa.String(length=64), nullable=False),
        sa.Column('verified_by', sa.String(length=64), nullable=True),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('verify_note', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_documents_application_id', 'documents', ['application_id'])
    op.create_index('ix_documents_status', 'documents', ['status'])

    # Create eligibility_results table (one row per application)
    op.create_table(
        'eligibility_results',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('application_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('program_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('status', postgresql.ENUM(name='eligibility_status', create_type=False), nullable=False, server_default='pending_review'),
        sa.Column('eligibility_score', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('policy', postgresql.ENUM(name='evaluation_policy', create_type=False), nullable=False),
        sa.Column('recommended_status', postgresql.ENUM(name='application_status', create_type=False), nullable=True),
        sa.Column('criteria_checked', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('reasons', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('evaluated_by', sa.String(length=64), nullable=False, server_default='system'),
        sa.Column('evaluated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_eligibility_results_application_id', 'eligibility_results', ['application_id'], unique=True)
    op.create_index('ix_eligibility_results_user_id', 'eligibility_results', ['user_id'])
    op.create_index('ix_eligibility_results_program_id', 'eligibility_results', ['program_id'])
    op.create_index('ix_eligibility_results_status', 'eligibility_results', ['status'])
    op.create_index('ix_eligibility_results_evaluated_at', 'eligibility_results', ['evaluated_at'])


def downgrade() -> None:
    # Drop tables in reverse order (respecting foreign key constraints)
    op.drop_index('ix_eligibility_results_evaluated_at', table_name='eligibility_results')
    op.drop_index('ix_eligibility_results_status', table_name='eligibility_results')
    op.drop_index('ix_eligibility_results_program_id', table_name='eligibility_results')
    op.drop_index('ix_eligibility_results_user_id', table_name='eligibility_results')
    op.drop_index('ix_eligibility_results_application_id', table_name='eligibility_results')
    op.drop_table('eligibility_results')

    op.drop_index('ix_documents_status', table_name='documents')
    op.drop_index('ix_documents_application_id', table_name='documents')
    op.drop_table('documents')

    op.drop_index('ix_applications_status', table_name='applications')
    op.drop_index('ix_applications_program_id', table_name='applications')
    op.drop_index('ix_applications_user_id', table_name='applications')
    op.drop_table('applications')

    op.drop_index('ix_program_requirements_program_id', table_name='program_requirements')
    op.drop_table('program_requirements')

    op.drop_index('ix_programs_active', table_name='programs')
    op.drop_index('ix_programs_code', table_name='programs')
    op.drop_table('programs')

    # Drop ENUM types
    op.execute('DROP TYPE IF EXISTS evaluation_policy')
    op.execute('DROP TYPE IF EXISTS eligibility_status')
    op.execute('DROP TYPE IF EXISTS document_status')
    op.execute('DROP TYPE IF EXISTS document_type')
    op.execute('DROP TYPE IF EXISTS entry_semester')
    op.execute('DROP TYPE IF EXISTS admission_decision')
    op.execute('DROP TYPE IF EXISTS application_status')
