"""appointments_no_overlap

Revision ID: 002_appointments_no_overlap
Revises: 001_scheduling_baseline
Create Date: 2026-10-17

Adds the exclusion constraint that rejects two active, slot-blocking
appointments of the same doctor with overlapping [start_time, end_time)
ranges. It backs the application-level conflict check when two writers
race past it. Requires btree_gist for the equality operator on UUIDs.
"""

from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002_appointments_no_overlap"
down_revision: Union[str, Sequence[str], None] = "001_scheduling_baseline"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Enable btree_gist and add the overlap exclusion constraint."""
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    op.execute(
        """
        ALTER TABLE appointments
        ADD CONSTRAINT appointments_no_overlap
        EXCLUDE USING gist (
            tenant_id WITH =,
            doctor_id WITH =,
            tstzrange(start_time, end_time, '[)') WITH &&
        )
        WHERE (is_active AND status NOT IN ('CANCELLED', 'NO_SHOW'))
        """
    )


def downgrade() -> None:
    """Drop the overlap exclusion constraint (btree_gist is left installed)."""
    op.execute("ALTER TABLE appointments DROP CONSTRAINT IF EXISTS appointments_no_overlap")
