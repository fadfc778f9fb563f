from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional

from ..attendance.model import StaffIdentity, StudentIdentity


@dataclass(frozen=True)
class UserRecord:
    """What the login collaborator stores into the Flask session.

    The engine only reads it to parameterize requests; it never writes it.
    """

    user_id: str
    batch_id: Optional[str] = None
    institution_id: Optional[str] = None
    access_token: Optional[str] = None
    staff_id: Optional[str] = None
    staff_name: str = ""
    staff_code: Optional[str] = None
    student_id: Optional[str] = None
    class_id: Optional[str] = None
    section: Optional[str] = None

    @classmethod
    def from_session(cls, data: Optional[dict[str, Any]]) -> Optional["UserRecord"]:
        if not data or not data.get("user_id"):
            return None
        fields = cls.__dataclass_fields__
        return cls(**{k: v for k, v in data.items() if k in fields})

    def to_session(self) -> dict[str, Any]:
        return asdict(self)

    def staff_identity(self) -> Optional[StaffIdentity]:
        if not self.staff_id:
            return None
        return StaffIdentity(
            staff_id=self.staff_id,
            name=self.staff_name,
            code=self.staff_code,
            institution_id=self.institution_id,
        )

    def student_identity(self) -> Optional[StudentIdentity]:
        if not (self.student_id and self.class_id and self.section):
            return None
        return StudentIdentity(student_id=self.student_id, class_id=self.class_id, section=self.section)
