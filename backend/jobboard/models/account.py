from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Enum as SQLEnum
import uuid
import enum

from jobboard.database import Base
from jobboard.database_types import JSONBlob


class AccountRole(str, enum.Enum):
    """Account type. Fixed at registration."""
    STUDENT = "student"  # Applies to accepted posts
    EMPLOYER = "employer"  # Owns posts, decides on received applications
    ADMINISTRATOR = "administrator"  # Moderates pending posts


class AccountStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


def new_identifier() -> str:
    """Fresh opaque account identifier (128-bit random UUID4)."""
    return str(uuid.uuid4())


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Permanent bearer token and public account key
    unique_id = Column(String(36), unique=True, nullable=False, index=True, default=new_identifier)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)

    account_type = Column(
        SQLEnum(AccountRole, name="account_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True
    )
    status = Column(
        SQLEnum(AccountStatus, name="account_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AccountStatus.ACTIVE
    )

    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)

    # Onboarding forms + task checklist, see jobboard.schemas.profile
    # Structure: {"kind": "employer", "pfp": "...", "forms": {...}, "tasks": [...]}
    profile = Column(JSONBlob, nullable=False, default=dict)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_login = Column(DateTime, nullable=True)

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def has_role(self, role: AccountRole) -> bool:
        return self.account_type == role

    def is_admin(self) -> bool:
        return self.account_type == AccountRole.ADMINISTRATOR

    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    def has_completed_onboarding(self) -> bool:
        """
        Check if an employer has completed all four agreement forms.

        Required flags (profile.forms):
        - employer_agreement
        - job_posting_guidelines
        - insurance_certificate
        - benefits_description
        """
        from jobboard.schemas.profile import EmployerProfile, load_profile

        profile = load_profile(self.profile)
        if not isinstance(profile, EmployerProfile):
            return False
        return profile.forms.is_complete()
