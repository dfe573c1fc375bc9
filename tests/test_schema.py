"""Tests for lenient resume validation."""
from rattle_fit.schema import (
    CompressionStep,
    FitSettings,
    SpacingTokens,
    StructuredResume,
    coerce_resume,
    split_bullets,
)


class TestStructuredResume:
    """Tests for resume coercion."""

    def test_camel_case_keys(self, sample_resume):
        resume = StructuredResume.model_validate(sample_resume)

        assert resume.full_name == "Jordan Rivera"
        assert resume.experience[0].bullets == sample_resume["experience"][0]["description"]

    def test_snake_case_keys(self):
        resume = StructuredResume(full_name="A", experience=[{"role": "Dev", "bullets": ["x"]}])
        assert resume.experience[0].bullets == ["x"]

    def test_description_string_split_into_bullets(self):
        resume = coerce_resume({"experience": [{"role": "Dev", "description": "Built APIs\n• Led team\n- Cut costs"}]})
        assert resume.experience[0].bullets == ["Built APIs", "Led team", "Cut costs"]

    def test_nulls_become_defaults(self):
        resume = coerce_resume({
            "fullName": None,
            "summary": None,
            "skills": None,
            "experience": None,
            "education": None,
            "contact": None,
        })

        assert resume.full_name == ""
        assert resume.summary == ""
        assert resume.skills == []
        assert resume.experience == []
        assert resume.education == []
        assert resume.contact.email is None

    def test_malformed_shapes_coerced(self):
        resume = coerce_resume({
            "skills": ["Python", None, 3, {"bad": True}],
            "experience": ["not a dict", {"role": 42, "description": None}],
            "certifications": "PMP",
            "contact": "email@example.com",
        })

        assert resume.skills == ["Python", "3"]
        assert len(resume.experience) == 1
        assert resume.experience[0].role == "42"
        assert resume.experience[0].bullets == []
        assert resume.certifications == ["PMP"]
        assert resume.contact.email is None

    def test_non_mapping_payload(self):
        assert coerce_resume("resume") == StructuredResume()
        assert coerce_resume(None) == StructuredResume()
        assert coerce_resume([1, 2]) == StructuredResume()

    def test_existing_model_passes_through(self, sample_resume):
        resume = StructuredResume.model_validate(sample_resume)
        assert coerce_resume(resume) is resume

    def test_to_dict_uses_client_keys(self, sample_resume):
        data = StructuredResume.model_validate(sample_resume).to_dict()

        assert data["fullName"] == "Jordan Rivera"
        assert "description" in data["experience"][0]
        assert "certifications" not in data

    def test_split_bullets_empty(self):
        assert split_bullets("   ") == []


class TestFitModels:
    def test_fit_settings_camel_case(self):
        settings = FitSettings.model_validate({
            "maxSkillsShown": 10,
            "maxBulletsPerRole": 4,
            "bulletMaxWords": 16,
            "summaryMaxWords": 75,
            "lineHeight": 1.28,
            "baseFontSize": 11.5,
            "certMaxChars": 90,
        })

        assert settings.max_skills_shown == 10
        assert settings.to_dict()["baseFontSize"] == 11.5

    def test_compression_step_overrides(self):
        assert CompressionStep(max_skills_shown=6).overrides() == {"max_skills_shown": 6}
        assert CompressionStep().overrides() == {}

    def test_spacing_tokens_css(self):
        css = SpacingTokens().as_css()

        assert css["sectionTitleMarginBottom"] == "6px"
        assert css["bulletItemMargin"] == "2px 0"
        assert css["sidebarWidth"] == "2.35in"
        assert css["bulletPaddingLeft"] == "1.1em"
