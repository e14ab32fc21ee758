from enum import Enum


class AssignmentStatus(str, Enum):
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    DECLINED = 'DECLINED'

    def __str__(self):
        return str(self.value)
