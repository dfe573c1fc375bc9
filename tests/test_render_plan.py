"""
Tests for the render plan builder.
"""

import json

from rattle_fit.fit_settings import MAX_COMPRESSION_LEVEL, FitPolicy
from rattle_fit.render_plan import (
    CERTIFICATIONS_OVERFLOW_PRIORITY,
    CERTIFICATIONS_PRIORITY,
    create_render_plan,
)


def _blocks(plan, block_type):
    return [block for block in plan.blocks if block.type == block_type]


class TestCertificationSplit:
    """Test page assignment of certifications."""

    def test_long_resume_keeps_one_certification_on_page_one(self, make_resume):
        resume = make_resume(roles=6, certifications=["PMP", "CSM", "AWS SAA"])
        plan = create_render_plan(resume, "modern", 0)

        page1_certs = [b for b in plan.page1_sections if b.type == "certifications"]
        page2_certs = [b for b in plan.page2_sections if b.type == "certifications"]

        assert len(page1_certs) == 1
        assert page1_certs[0].data == ["PMP"]
        assert page1_certs[0].priority == CERTIFICATIONS_PRIORITY
        assert len(page2_certs) == 1
        assert page2_certs[0].data == ["CSM", "AWS SAA"]
        assert page2_certs[0].priority == CERTIFICATIONS_OVERFLOW_PRIORITY
        assert plan.page_count == 2

    def test_short_resume_keeps_all_certifications(self, make_resume):
        plan = create_render_plan(make_resume(roles=3, certifications=["PMP", "CSM", "AWS SAA"]))

        certs = _blocks(plan, "certifications")
        assert len(certs) == 1
        assert certs[0].data == ["PMP", "CSM", "AWS SAA"]
        assert plan.page2_sections == []
        assert plan.page_count == 1

    def test_certifications_are_char_trimmed(self, make_resume):
        long_cert = "AWS Certified Solutions Architect - Professional " * 3
        plan = create_render_plan(make_resume(certifications=[long_cert]))

        cert = _blocks(plan, "certifications")[0].data[0]
        assert len(cert) <= plan.fit_settings.cert_max_chars
        assert cert.endswith("…")


class TestBlocks:
    """Test block content and priorities."""

    def test_block_order_and_priorities(self, make_resume):
        plan = create_render_plan(make_resume(roles=2, certifications=["PMP"]))

        assert [(b.type, b.priority) for b in plan.blocks] == [
            ("header", 0),
            ("summary", 2),
            ("skills", 3),
            ("experience", 1),
            ("experience", 1),
            ("certifications", 4),
            ("education", 5),
            ("awards", 6),
        ]

    def test_header_always_present(self):
        plan = create_render_plan({})

        assert [b.type for b in plan.blocks] == ["header"]
        assert plan.blocks[0].data == {"name": "", "title": "", "contact": {}}
        assert plan.page_count == 1

    def test_experience_bullets_use_policy_ceiling(self, make_resume):
        plan = create_render_plan(make_resume(roles=4, bullets=6))

        for block in _blocks(plan, "experience"):
            assert len(block.data["bullets"]) == 3

    def test_experience_bullets_word_trimmed(self, make_resume):
        plan = create_render_plan(make_resume(roles=2), compression_level=4)

        for block in _blocks(plan, "experience"):
            for bullet in block.data["bullets"]:
                assert len(bullet.split()) <= 12

    def test_skills_split(self, make_resume):
        plan = create_render_plan(make_resume(skills=12, certifications=["PMP"]))

        skills = _blocks(plan, "skills")[0].data
        assert skills["visible"] == [f"Skill {i}" for i in range(8)]
        assert skills["overflow"] == 4

    def test_education_compact_for_long_resumes(self, make_resume):
        short_plan = create_render_plan(make_resume(roles=2))
        long_plan = create_render_plan(make_resume(roles=5))

        assert _blocks(short_plan, "education")[0].data["compact"] is False
        assert _blocks(long_plan, "education")[0].data["compact"] is True

    def test_missing_sections_are_skipped(self, make_resume):
        resume = make_resume(skills=0, summary="")
        resume["awards"] = []
        resume["education"] = None
        plan = create_render_plan(resume)

        assert {b.type for b in plan.blocks} == {"header", "experience"}


class TestCompressionAndPurity:
    """Test level handling and repeatability."""

    def test_fit_settings_follow_level(self, make_resume):
        resume = make_resume(roles=2)
        assert create_render_plan(resume, compression_level=0).fit_settings.max_skills_shown == 10
        assert create_render_plan(resume, compression_level=2).fit_settings.max_skills_shown == 6

    def test_level_clamped(self, make_resume):
        plan = create_render_plan(make_resume(), compression_level=MAX_COMPRESSION_LEVEL + 4)
        assert plan.compression_level == MAX_COMPRESSION_LEVEL

    def test_repeatable_output(self, make_resume):
        resume = make_resume(roles=6, certifications=["PMP", "CSM", "AWS SAA"])
        first = json.dumps(create_render_plan(resume, "modern", 3).to_dict(), sort_keys=True)
        second = json.dumps(create_render_plan(resume, "modern", 3).to_dict(), sort_keys=True)
        assert first == second

    def test_input_not_mutated(self, make_resume):
        resume = make_resume(roles=6, bullets=5, certifications=["PMP", "CSM"])
        snapshot = json.dumps(resume, sort_keys=True)
        create_render_plan(resume, "modern", MAX_COMPRESSION_LEVEL)
        assert json.dumps(resume, sort_keys=True) == snapshot

    def test_overflow_threshold_from_policy(self, make_resume):
        """A higher threshold keeps the overflow certifications on page one."""
        policy = FitPolicy(overflow_priority=20)
        plan = create_render_plan(make_resume(roles=6, certifications=["PMP", "CSM"]), policy=policy)

        assert plan.page_count == 1
        assert plan.page2_sections == []
