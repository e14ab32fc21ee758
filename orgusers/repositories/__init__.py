from .assignment_repository import (
    AssignmentRepository,
    existing_emails,
    find_self_assignment,
    join_assignments,
    role_options,
)
