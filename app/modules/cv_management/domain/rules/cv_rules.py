# 📄 File: app/modules/cv_management/domain/rules/cv_rules.py
# 🧭 Purpose (Layman Explanation):
# The checks for what goes inside a CV: the title, the look, the person's basic details, and every
# list of education, jobs, projects, skills and social links, including how many of each are allowed.
# 🧪 Purpose (Technical Summary):
# Pure CV content validators. Each returns an ordered list of Violation records with indexed
# field paths (``education[2].institution``). Status transition checking lives here as well.
# 🔗 Dependencies:
# domain.constants, domain.models, domain.rules.environment, app.shared.utils.validators
# 🔄 Connected Modules / Calls From:
# validation_service.py, cv_service.py, tests

from typing import Any, Callable, List, Mapping, Sequence

from app.shared.utils.validators import (
    is_at_least,
    is_blank,
    is_in_range,
    is_valid_url,
    trimmed_length,
)

from ..constants import (
    CGPA_MAX,
    CGPA_MIN,
    CV_TITLE_MAX_LENGTH,
    CV_TITLE_MIN_LENGTH,
    CVLayout,
    DESCRIPTION_MAX_LENGTH,
    DocumentStatus,
    MAX_EDUCATION_ENTRIES,
    MAX_EXPERIENCE_ENTRIES,
    MAX_PROJECT_ENTRIES,
    MAX_SKILL_ENTRIES,
    MAX_SOCIAL_PROFILE_ENTRIES,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PERCENTAGE_MAX,
    PERCENTAGE_MIN,
    PROJECT_TITLE_MAX_LENGTH,
    PROJECT_TITLE_MIN_LENGTH,
    SKILL_NAME_MAX_LENGTH,
    SKILL_NAME_MIN_LENGTH,
    STATUS_TRANSITIONS,
    SkillCategory,
    TEAM_SIZE_MIN,
)
from ..models import PolicyDecision, Violation
from .environment import DEFAULT_ENVIRONMENT, PolicyEnvironment
from .user_rules import validate_contact_number, validate_email

VALID_LAYOUTS = tuple(layout.value for layout in CVLayout)
VALID_STATUSES = tuple(status.value for status in DocumentStatus)
VALID_SKILL_CATEGORIES = tuple(category.value for category in SkillCategory)


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def _entry(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _validate_entries(
    section: str,
    entries: Any,
    max_entries: int,
    label: str,
    validate_entry: Callable[[str, Mapping[str, Any]], List[Violation]],
) -> List[Violation]:
    """Shared count cap plus per-entry validation for a section list."""
    if entries is None:
        return []
    if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Sequence):
        return [Violation(section, f"{label} must be a list")]

    errors: List[Violation] = []
    if len(entries) > max_entries:
        errors.append(Violation(section, f"Maximum {max_entries} {label} entries allowed"))

    for index, raw in enumerate(entries):
        errors.extend(validate_entry(f"{section}[{index}]", _entry(raw)))

    return errors


# ==============================================================================
# CV RECORD
# ==============================================================================

def validate_title(title: Any) -> List[Violation]:
    if is_blank(title):
        return [Violation("title", "CV title is required")]

    errors: List[Violation] = []
    length = trimmed_length(title)
    if length < CV_TITLE_MIN_LENGTH:
        errors.append(Violation("title", f"CV title must be at least {CV_TITLE_MIN_LENGTH} characters long"))
    if length > CV_TITLE_MAX_LENGTH:
        errors.append(Violation("title", f"CV title must not exceed {CV_TITLE_MAX_LENGTH} characters"))
    return errors


def validate_layout(layout: Any) -> List[Violation]:
    if not _is_present(layout):
        return [Violation("layout", "CV layout is required")]

    if layout not in VALID_LAYOUTS:
        return [Violation("layout", f"Invalid layout. Must be one of: {', '.join(VALID_LAYOUTS)}")]

    return []


def validate_status(status: Any) -> List[Violation]:
    if status not in VALID_STATUSES:
        return [Violation("status", f"Status must be one of: {', '.join(VALID_STATUSES)}")]
    return []


def can_transition_status(
    current: DocumentStatus,
    target: DocumentStatus,
    env: PolicyEnvironment = DEFAULT_ENVIRONMENT,
) -> PolicyDecision:
    """
    Status changes are free-form unless the environment enforces the lifecycle
    draft -> published -> archived (with published -> draft allowed).
    """
    if not env.enforce_status_transitions or current == target:
        return PolicyDecision.allow()

    if current not in VALID_STATUSES or target not in VALID_STATUSES:
        return PolicyDecision.deny(f"Status must be one of: {', '.join(VALID_STATUSES)}")

    current = DocumentStatus(current)
    target = DocumentStatus(target)
    if target in STATUS_TRANSITIONS.get(current, frozenset()):
        return PolicyDecision.allow()

    return PolicyDecision.deny(f"Cannot change CV status from {current.value} to {target.value}")


# ==============================================================================
# SECTIONS
# ==============================================================================

def validate_basic_details(basic_details: Any) -> List[Violation]:
    """
    Validate the basic details block.

    Full name is required (2-50 characters), email is required, phone and
    introduction are optional.
    """
    details = _entry(basic_details)
    errors: List[Violation] = []

    full_name = details.get("full_name")
    if is_blank(full_name):
        errors.append(Violation("full_name", "Full name is required"))
    else:
        length = trimmed_length(full_name)
        if length < NAME_MIN_LENGTH:
            errors.append(Violation("full_name", f"Full name must be at least {NAME_MIN_LENGTH} characters long"))
        if length > NAME_MAX_LENGTH:
            errors.append(Violation("full_name", f"Full name must not exceed {NAME_MAX_LENGTH} characters"))

    if validate_email(details.get("email")):
        errors.append(Violation("email", "Valid email is required"))

    if validate_contact_number(details.get("phone"), field="phone"):
        errors.append(Violation("phone", "Please provide a valid phone number"))

    introduction = details.get("introduction")
    if isinstance(introduction, str) and len(introduction) > DESCRIPTION_MAX_LENGTH:
        errors.append(Violation(
            "introduction",
            f"Introduction must not exceed {DESCRIPTION_MAX_LENGTH} characters"
        ))

    return errors


def _validate_education_entry(path: str, edu: Mapping[str, Any]) -> List[Violation]:
    errors: List[Violation] = []
    if is_blank(edu.get("degree_name")):
        errors.append(Violation(f"{path}.degree_name", "Degree name is required"))
    if is_blank(edu.get("institution")):
        errors.append(Violation(f"{path}.institution", "Institution name is required"))
    if not _is_present(edu.get("start_date")):
        errors.append(Violation(f"{path}.start_date", "Start date is required"))

    percentage = edu.get("percentage")
    if _is_present(percentage) and not is_in_range(percentage, PERCENTAGE_MIN, PERCENTAGE_MAX):
        errors.append(Violation(f"{path}.percentage", "Percentage must be between 0 and 100"))

    cgpa = edu.get("cgpa")
    if _is_present(cgpa) and not is_in_range(cgpa, CGPA_MIN, CGPA_MAX):
        errors.append(Violation(f"{path}.cgpa", "CGPA must be between 0 and 10"))
    return errors


def validate_education(education: Any) -> List[Violation]:
    return _validate_entries("education", education, MAX_EDUCATION_ENTRIES, "education", _validate_education_entry)


def _validate_experience_entry(path: str, exp: Mapping[str, Any]) -> List[Violation]:
    errors: List[Violation] = []
    if is_blank(exp.get("organization_name")):
        errors.append(Violation(f"{path}.organization_name", "Organization name is required"))
    if is_blank(exp.get("position")):
        errors.append(Violation(f"{path}.position", "Position is required"))
    if not _is_present(exp.get("joining_date")):
        errors.append(Violation(f"{path}.joining_date", "Joining date is required"))
    return errors


def validate_experience(experience: Any) -> List[Violation]:
    return _validate_entries("experience", experience, MAX_EXPERIENCE_ENTRIES, "experience", _validate_experience_entry)


def _validate_project_entry(path: str, project: Mapping[str, Any]) -> List[Violation]:
    errors: List[Violation] = []
    title = project.get("title")
    if is_blank(title):
        errors.append(Violation(f"{path}.title", "Project title is required"))
    else:
        length = trimmed_length(title)
        if length < PROJECT_TITLE_MIN_LENGTH:
            errors.append(Violation(
                f"{path}.title",
                f"Project title must be at least {PROJECT_TITLE_MIN_LENGTH} characters long"
            ))
        if length > PROJECT_TITLE_MAX_LENGTH:
            errors.append(Violation(
                f"{path}.title",
                f"Project title must not exceed {PROJECT_TITLE_MAX_LENGTH} characters"
            ))

    team_size = project.get("team_size")
    if _is_present(team_size) and not is_at_least(team_size, TEAM_SIZE_MIN):
        errors.append(Violation(f"{path}.team_size", "Team size must be at least 1"))
    return errors


def validate_projects(projects: Any) -> List[Violation]:
    return _validate_entries("projects", projects, MAX_PROJECT_ENTRIES, "project", _validate_project_entry)


def _validate_skill_entry(path: str, skill: Mapping[str, Any]) -> List[Violation]:
    errors: List[Violation] = []
    skill_name = skill.get("skill_name")
    if is_blank(skill_name):
        errors.append(Violation(f"{path}.skill_name", "Skill name is required"))
    else:
        length = trimmed_length(skill_name)
        if length < SKILL_NAME_MIN_LENGTH:
            errors.append(Violation(
                f"{path}.skill_name",
                f"Skill name must be at least {SKILL_NAME_MIN_LENGTH} characters long"
            ))
        if length > SKILL_NAME_MAX_LENGTH:
            errors.append(Violation(
                f"{path}.skill_name",
                f"Skill name must not exceed {SKILL_NAME_MAX_LENGTH} characters"
            ))

    if not is_in_range(skill.get("proficiency_percentage"), PERCENTAGE_MIN, PERCENTAGE_MAX):
        errors.append(Violation(
            f"{path}.proficiency_percentage",
            "Proficiency percentage must be between 0 and 100"
        ))

    if skill.get("category") not in VALID_SKILL_CATEGORIES:
        errors.append(Violation(
            f"{path}.category",
            "Category must be technical, interpersonal, or language"
        ))
    return errors


def validate_skills(skills: Any) -> List[Violation]:
    return _validate_entries("skills", skills, MAX_SKILL_ENTRIES, "skill", _validate_skill_entry)


def _validate_social_profile_entry(path: str, profile: Mapping[str, Any]) -> List[Violation]:
    errors: List[Violation] = []
    if is_blank(profile.get("platform_name")):
        errors.append(Violation(f"{path}.platform_name", "Platform name is required"))

    profile_url = profile.get("profile_url")
    if is_blank(profile_url):
        errors.append(Violation(f"{path}.profile_url", "Profile URL is required"))
    elif not is_valid_url(profile_url):
        errors.append(Violation(f"{path}.profile_url", "Please provide a valid URL"))
    return errors


def validate_social_profiles(social_profiles: Any) -> List[Violation]:
    return _validate_entries(
        "social_profiles",
        social_profiles,
        MAX_SOCIAL_PROFILE_ENTRIES,
        "social profile",
        _validate_social_profile_entry,
    )


def section_validators() -> List[tuple]:
    """Section name and validator pairs in the fixed aggregate order."""
    return [
        ("education", validate_education),
        ("experience", validate_experience),
        ("projects", validate_projects),
        ("skills", validate_skills),
        ("social_profiles", validate_social_profiles),
    ]
