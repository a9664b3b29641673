"""Profile-related Pydantic schemas.

The ``accounts.profile`` column holds one of three role-tagged variants.
Everything that reads or writes the blob goes through ``load_profile`` /
``default_profile`` so business logic never handles a raw dict.
"""
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from jobboard.models.account import AccountRole

DEFAULT_PFP = "https://github.com/leafdevs.png"

STUDENT_TASKS = [
    "Complete profile",
    "Upload resume",
    "Submit required forms",
]

EMPLOYER_TASKS = [
    "Complete company profile",
    "Submit required documentation",
    "Post job opportunities",
]


class StudentForms(BaseModel):
    """Student onboarding documents."""
    resume: bool = False
    transcript: bool = False
    agreement: bool = False
    background_check: bool = False


class EmployerForms(BaseModel):
    """Employer agreements. All four must be true before posting jobs."""
    employer_agreement: bool = False
    job_posting_guidelines: bool = False
    insurance_certificate: bool = False
    benefits_description: bool = False

    def is_complete(self) -> bool:
        return all([
            self.employer_agreement,
            self.job_posting_guidelines,
            self.insurance_certificate,
            self.benefits_description,
        ])


class StudentProfile(BaseModel):
    kind: Literal["student"] = "student"
    pfp: str = DEFAULT_PFP
    forms: StudentForms = Field(default_factory=StudentForms)
    tasks: list[str] = Field(default_factory=lambda: list(STUDENT_TASKS))


class EmployerProfile(BaseModel):
    kind: Literal["employer"] = "employer"
    pfp: str = DEFAULT_PFP
    forms: EmployerForms = Field(default_factory=EmployerForms)
    tasks: list[str] = Field(default_factory=lambda: list(EMPLOYER_TASKS))


class AdministratorProfile(BaseModel):
    kind: Literal["administrator"] = "administrator"
    pfp: str = DEFAULT_PFP
    tasks: list[str] = Field(default_factory=list)


Profile = Annotated[
    Union[StudentProfile, EmployerProfile, AdministratorProfile],
    Field(discriminator="kind"),
]

_profile_adapter = TypeAdapter(Profile)

_PROFILE_BY_ROLE = {
    AccountRole.STUDENT: StudentProfile,
    AccountRole.EMPLOYER: EmployerProfile,
    AccountRole.ADMINISTRATOR: AdministratorProfile,
}


def default_profile(role: AccountRole) -> Union[StudentProfile, EmployerProfile, AdministratorProfile]:
    """Fresh profile for a new account: role task list, every form flag false."""
    return _PROFILE_BY_ROLE[AccountRole(role)]()


def load_profile(raw: Optional[dict]) -> Union[StudentProfile, EmployerProfile, AdministratorProfile]:
    """Validate a stored profile blob (raises pydantic.ValidationError on bad shape)."""
    return _profile_adapter.validate_python(raw or {})


class EmployerAgreementsRequest(BaseModel):
    """Request body for updating employer agreement flags."""
    employer_agreement: bool
    job_posting_guidelines: bool
    insurance_certificate: bool
    benefits_description: bool


class EmployerAgreementsResponse(BaseModel):
    success: bool = True
    message: str
    forms: EmployerForms


class UserResponse(BaseModel):
    """Current account with its onboarding scaffold."""
    success: bool = True
    unique_id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    account_type: str
    status: str
    profile: Profile
    forms: dict
    tasks: list[str]
    created_at: datetime
    last_login: Optional[datetime] = None


class PublicUser(BaseModel):
    """Directory entry with no private information."""
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    pfp: str
    account_type: str


class UserDirectoryResponse(BaseModel):
    success: bool = True
    users: list[PublicUser]


class TotalUsersResponse(BaseModel):
    success: bool = True
    total_users: int


class TotalEmployersResponse(BaseModel):
    success: bool = True
    total_employers: int
