"""initial schema : tests psychologiques (DISC / Big Five / Leadership)

Revision ID: 001_initial
Create Date: 18/10/2026
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '001_initial'
down_revision = None

# Valeurs des Enums
TEST_STATUS = ('in_progress', 'completed')


def upgrade() -> None:
    # ── 1. CREATION MANUELLE DU TYPE ENUM (SÉCURISÉE) ──
    vals_str = ", ".join([f"'{v}'" for v in TEST_STATUS])
    op.execute(f"""
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = 'teststatus') THEN
                CREATE TYPE teststatus AS ENUM ({vals_str});
            END IF;
        END $$;
    """)

    # ── 2. CREATION DES TABLES ──
    op.create_table("users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email", sa.String, nullable=False),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("is_active", sa.Boolean, default=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table("test_questions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("question_number", sa.Integer, nullable=False),
        sa.Column("question_text", sa.Text, nullable=False),
        sa.Column("question_type", sa.String, nullable=False),
        sa.Column("dimension", sa.String, nullable=True),
        sa.Column("options", sa.JSON, nullable=True),
        sa.Column("scoring_weights", sa.JSON, nullable=False),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
    )
    op.create_index("ix_test_questions_question_number", "test_questions", ["question_number"])
    op.create_index("ix_test_questions_question_type", "test_questions", ["question_type"])

    op.create_table("psychological_tests",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("test_type", sa.String, nullable=False, server_default="unified"),
        sa.Column("total_questions", sa.Integer, nullable=False),
        sa.Column("answered_questions", sa.Integer, nullable=False, server_default="0"),
        sa.Column("status", postgresql.ENUM(*TEST_STATUS, name='teststatus', create_type=False), nullable=False, server_default="in_progress"),
        sa.Column("disc_scores", sa.JSON, nullable=True),
        sa.Column("big_five_scores", sa.JSON, nullable=True),
        sa.Column("leadership_scores", sa.JSON, nullable=True),
        sa.Column("overall_analysis", sa.Text, nullable=True),
        sa.Column("recommendations", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_psychological_tests_user_id", "psychological_tests", ["user_id"])

    op.create_table("test_responses",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("test_id", sa.Integer, sa.ForeignKey("psychological_tests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("question_id", sa.Integer, sa.ForeignKey("test_questions.id"), nullable=False),
        sa.Column("question_number", sa.Integer, nullable=False),
        sa.Column("selected_option", sa.String(1), nullable=False),
        sa.Column("response_value", sa.Integer, nullable=False),
        sa.Column("dimension_scores", sa.JSON, nullable=False),
        sa.Column("answered_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("test_id", "question_number", name="uq_test_responses_test_question"),
    )
    op.create_index("ix_test_responses_test_id", "test_responses", ["test_id"])

    op.create_table("personality_profiles",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("test_id", sa.Integer, sa.ForeignKey("psychological_tests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("profile_type", sa.String, nullable=False),
        sa.Column("primary_trait", sa.String, nullable=False),
        sa.Column("secondary_trait", sa.String, nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("strengths", sa.Text, nullable=True),
        sa.Column("development_areas", sa.Text, nullable=True),
        sa.Column("career_suggestions", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_personality_profiles_test_id", "personality_profiles", ["test_id"])


def downgrade() -> None:
    op.drop_table("personality_profiles")
    op.drop_table("test_responses")
    op.drop_table("psychological_tests")
    op.drop_table("test_questions")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS teststatus")
