"""Tests for CV content validators and status transitions."""

import pytest

from app.modules.cv_management.domain.constants import DocumentStatus
from app.modules.cv_management.domain.models import Violation
from app.modules.cv_management.domain.rules.cv_rules import (
    can_transition_status,
    validate_basic_details,
    validate_education,
    validate_experience,
    validate_layout,
    validate_projects,
    validate_skills,
    validate_social_profiles,
    validate_status,
    validate_title,
)
from app.modules.cv_management.domain.rules.environment import PolicyEnvironment


def _skill(**overrides):
    skill = {"skill_name": "Python", "proficiency_percentage": 80, "category": "technical"}
    skill.update(overrides)
    return skill


class TestTitleLayoutStatus:
    def test_valid_title(self):
        assert validate_title("Backend Engineer") == []

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_title_required(self, title):
        assert validate_title(title) == [Violation("title", "CV title is required")]

    def test_title_length_bounds(self):
        assert validate_title("abc") == []
        assert validate_title("a" * 100) == []
        assert validate_title(" ab ") == [Violation("title", "CV title must be at least 3 characters long")]
        assert validate_title("a" * 101) == [Violation("title", "CV title must not exceed 100 characters")]

    @pytest.mark.parametrize("layout", ["modern", "classic", "creative"])
    def test_valid_layouts(self, layout):
        assert validate_layout(layout) == []

    def test_layout_required(self):
        assert validate_layout(None) == [Violation("layout", "CV layout is required")]

    def test_unknown_layout(self):
        assert validate_layout("fancy") == [
            Violation("layout", "Invalid layout. Must be one of: modern, classic, creative")
        ]

    def test_status(self):
        assert validate_status("published") == []
        assert validate_status("deleted") == [
            Violation("status", "Status must be one of: draft, published, archived")
        ]


class TestBasicDetails:
    def test_valid(self):
        details = {"full_name": "Jane Doe", "email": "jane@example.com"}
        assert validate_basic_details(details) == []

    def test_missing_block_reports_required_fields(self):
        assert validate_basic_details(None) == [
            Violation("full_name", "Full name is required"),
            Violation("email", "Valid email is required"),
        ]

    def test_name_length(self):
        errors = validate_basic_details({"full_name": "J", "email": "jane@example.com"})
        assert errors == [Violation("full_name", "Full name must be at least 2 characters long")]
        errors = validate_basic_details({"full_name": "J" * 51, "email": "jane@example.com"})
        assert errors == [Violation("full_name", "Full name must not exceed 50 characters")]

    def test_invalid_phone_and_long_introduction(self):
        errors = validate_basic_details({
            "full_name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "not a phone",
            "introduction": "x" * 1001,
        })
        assert errors == [
            Violation("phone", "Please provide a valid phone number"),
            Violation("introduction", "Introduction must not exceed 1000 characters"),
        ]


class TestEducation:
    def test_valid_entry(self):
        entry = {"degree_name": "BSc", "institution": "Uni", "start_date": "2014-09-01", "cgpa": "9.1"}
        assert validate_education([entry]) == []

    def test_indexed_field_paths(self):
        errors = validate_education([
            {"degree_name": "BSc", "institution": "Uni", "start_date": "2014-09-01"},
            {"percentage": 101, "cgpa": -1},
        ])
        assert [e.field for e in errors] == [
            "education[1].degree_name",
            "education[1].institution",
            "education[1].start_date",
            "education[1].percentage",
            "education[1].cgpa",
        ]

    def test_max_entries(self):
        entry = {"degree_name": "BSc", "institution": "Uni", "start_date": "2014-09-01"}
        errors = validate_education([entry] * 11)
        assert errors == [Violation("education", "Maximum 10 education entries allowed")]

    def test_non_list_section(self):
        assert validate_education("BSc") == [Violation("education", "education must be a list")]

    def test_non_mapping_entry_is_treated_as_empty(self):
        fields = [e.field for e in validate_education(["oops"])]
        assert fields == ["education[0].degree_name", "education[0].institution", "education[0].start_date"]


class TestExperience:
    def test_required_fields(self):
        errors = validate_experience([{}])
        assert errors == [
            Violation("experience[0].organization_name", "Organization name is required"),
            Violation("experience[0].position", "Position is required"),
            Violation("experience[0].joining_date", "Joining date is required"),
        ]

    def test_max_entries(self):
        entry = {"organization_name": "Acme", "position": "Dev", "joining_date": "2020-01-01"}
        assert validate_experience([entry] * 20) == []
        assert validate_experience([entry] * 21) == [
            Violation("experience", "Maximum 20 experience entries allowed")
        ]


class TestProjects:
    def test_title_length(self):
        errors = validate_projects([{"title": "ab"}])
        assert errors == [Violation("projects[0].title", "Project title must be at least 3 characters long")]

    @pytest.mark.parametrize("team_size", [0, -2, "0"])
    def test_team_size_below_one(self, team_size):
        errors = validate_projects([{"title": "Portfolio", "team_size": team_size}])
        assert errors == [Violation("projects[0].team_size", "Team size must be at least 1")]

    @pytest.mark.parametrize("team_size", [1, 12, "3", None])
    def test_team_size_valid(self, team_size):
        assert validate_projects([{"title": "Portfolio", "team_size": team_size}]) == []


class TestSkills:
    @pytest.mark.parametrize("proficiency", [0, 100, 55.5, "70"])
    def test_proficiency_in_range(self, proficiency):
        assert validate_skills([_skill(proficiency_percentage=proficiency)]) == []

    @pytest.mark.parametrize("proficiency", [-1, 101, None, "high"])
    def test_proficiency_out_of_range(self, proficiency):
        errors = validate_skills([_skill(proficiency_percentage=proficiency)])
        assert errors == [
            Violation("skills[0].proficiency_percentage", "Proficiency percentage must be between 0 and 100")
        ]

    def test_category(self):
        errors = validate_skills([_skill(category="cooking")])
        assert errors == [
            Violation("skills[0].category", "Category must be technical, interpersonal, or language")
        ]

    def test_skill_name_length(self):
        errors = validate_skills([_skill(skill_name="C")])
        assert errors == [Violation("skills[0].skill_name", "Skill name must be at least 2 characters long")]

    def test_max_entries(self):
        errors = validate_skills([_skill()] * 51)
        assert errors == [Violation("skills", "Maximum 50 skill entries allowed")]


class TestSocialProfiles:
    def test_valid_profile(self):
        profile = {"platform_name": "GitHub", "profile_url": "https://github.com/jane"}
        assert validate_social_profiles([profile]) == []

    def test_invalid_url(self):
        errors = validate_social_profiles([{"platform_name": "GitHub", "profile_url": "github.com/jane"}])
        assert errors == [Violation("social_profiles[0].profile_url", "Please provide a valid URL")]

    def test_out_of_range_port_is_invalid(self):
        errors = validate_social_profiles([{"platform_name": "Site", "profile_url": "https://jane.dev:99999"}])
        assert errors == [Violation("social_profiles[0].profile_url", "Please provide a valid URL")]

    def test_required_fields(self):
        errors = validate_social_profiles([{}])
        assert errors == [
            Violation("social_profiles[0].platform_name", "Platform name is required"),
            Violation("social_profiles[0].profile_url", "Profile URL is required"),
        ]


class TestStatusTransitions:
    def test_free_form_when_not_enforced(self):
        assert can_transition_status(DocumentStatus.ARCHIVED, DocumentStatus.DRAFT).allowed

    @pytest.mark.parametrize("current,target", [
        ("draft", "published"),
        ("draft", "archived"),
        ("published", "archived"),
        ("published", "draft"),
        ("archived", "archived"),
    ])
    def test_allowed_moves(self, current, target):
        env = PolicyEnvironment(enforce_status_transitions=True)
        assert can_transition_status(DocumentStatus(current), target, env).allowed

    def test_archived_is_terminal(self):
        env = PolicyEnvironment(enforce_status_transitions=True)
        decision = can_transition_status(DocumentStatus.ARCHIVED, "published", env)
        assert decision.reason == "Cannot change CV status from archived to published"
