"""
Layout height estimation for render plans.

The clients measure real rendered height; this module provides a
deterministic estimate so the fit loop can run headless (CLI, batch jobs,
tests). Heights are in CSS pixels at 96 per inch, the same unit the web
client compares against ``page_count * 11in``.
"""

from __future__ import annotations

import math
from typing import Optional

from rattle_fit.schema import RenderPlan, SectionBlock, SpacingTokens

PX_PER_INCH = 96
PX_PER_POINT = PX_PER_INCH / 72
LETTER_HEIGHT_IN = 11.0

# Characters per full-width line at the reference font size
REFERENCE_CHARS_PER_LINE = 95
REFERENCE_FONT_SIZE = 11.5
SKILLS_PER_LINE = 3
HEADER_LINES = 4  # name renders at roughly double height


def page_height_px(page_count: int = 1, page_height_in: float = LETTER_HEIGHT_IN) -> float:
    return page_count * page_height_in * PX_PER_INCH


def _wrapped_lines(text: str, chars_per_line: int) -> int:
    if not text:
        return 0
    return max(1, math.ceil(len(text) / chars_per_line))


def _block_lines(block: SectionBlock, chars_per_line: int) -> int:
    data = block.data
    if block.type == "header":
        return HEADER_LINES
    if block.type == "summary":
        return _wrapped_lines(data, chars_per_line)
    if block.type == "skills":
        lines = math.ceil(len(data["visible"]) / SKILLS_PER_LINE)
        return lines + (1 if data["overflow"] else 0)
    if block.type == "experience":
        return 2 + sum(_wrapped_lines(bullet, chars_per_line) for bullet in data["bullets"])
    if block.type in ("certifications", "awards"):
        return sum(_wrapped_lines(item, chars_per_line) for item in data)
    if block.type == "education":
        per_entry = 1 if data["compact"] else 2
        return per_entry * len(data["entries"])
    return 0


def _block_spacing(block: SectionBlock, spacing: SpacingTokens) -> float:
    if block.type == "header":
        return spacing.section_padding_bottom
    if block.type == "experience":
        bullets = len(block.data["bullets"])
        return (
            spacing.role_block_margin_bottom
            + (spacing.bullet_list_margin_top if bullets else 0)
            + bullets * 2 * spacing.bullet_item_margin
        )
    return spacing.section_title_margin_bottom + spacing.section_padding_bottom


def estimate_plan_height(
    plan: RenderPlan,
    spacing: Optional[SpacingTokens] = None,
    chars_per_line: int = REFERENCE_CHARS_PER_LINE,
) -> float:
    """
    Estimate the rendered height of every block in a plan.

    Args:
        plan: Render plan to measure
        spacing: Spacing tokens (defaults to SpacingTokens())
        chars_per_line: Line capacity at the reference font size; scaled
            inversely with the plan's base font size

    Returns:
        Estimated content height in CSS pixels
    """
    spacing = spacing or SpacingTokens()
    settings = plan.fit_settings
    line_px = settings.base_font_size * PX_PER_POINT * settings.line_height
    capacity = max(1, int(chars_per_line * REFERENCE_FONT_SIZE / settings.base_font_size))

    height = 0.0
    section_types = set()
    for block in plan.blocks:
        height += _block_lines(block, capacity) * line_px + _block_spacing(block, spacing)
        if block.type != "header" and block.type not in section_types:
            # One title line per section, however many blocks it spans
            section_types.add(block.type)
            height += line_px

    return round(height, 2)
