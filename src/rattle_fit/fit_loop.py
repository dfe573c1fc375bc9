"""
Measure / compress / re-render loop.

The web client runs this loop implicitly through re-render effects: render at
a compression level, measure the content height on the next paint, and if it
overflows ask for the next level, growing to a second page once the ladder is
exhausted. ``FitController`` models that loop as an explicit state machine so
any caller (async UI bridge, batch exporter, CLI) can drive it, and
``fit_resume`` runs it to completion with a synchronous measure function.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel

from rattle_fit.fit_constraints import apply_fit_constraints
from rattle_fit.fit_settings import DEFAULT_FIT_POLICY, FitPolicy
from rattle_fit.layout_estimate import estimate_plan_height, page_height_px
from rattle_fit.logger import get_logger
from rattle_fit.render_plan import DEFAULT_TEMPLATE_ID, create_render_plan
from rattle_fit.schema import RenderPlan, StructuredResume, coerce_resume

logger = get_logger("fit_loop")

DEFAULT_MAX_PAGES = 2
# Sub-pixel rounding in the browser reports a couple of px over a full page
DEFAULT_TOLERANCE_PX = 2.0


class FitState(str, Enum):
    IDLE = "idle"
    MEASURING = "measuring"
    COMPRESSING = "compressing"
    SETTLED = "settled"


class FitStep(BaseModel):
    """One measurement and the decision taken on it."""
    compression_level: int
    page_count: int
    content_height: float
    available_height: float
    action: Literal["settle", "compress", "grow", "give_up"]


class FitOutcome(BaseModel):
    plan: RenderPlan
    resume: StructuredResume
    compression_level: int
    page_count: int
    iterations: int
    settled: bool
    overflowing: bool
    history: List[FitStep]

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", exclude={"resume"})
        data["resume"] = self.resume.to_dict()
        return data


class FitController:
    """
    Explicit state machine for fitting one resume.

    States:
        IDLE -> MEASURING        plan() hands out a plan to render
        MEASURING -> COMPRESSING report_height() overflowed; level or pages grew
        COMPRESSING -> MEASURING plan() for the re-render
        MEASURING -> SETTLED     content fits, or nothing is left to shrink
    """

    def __init__(
        self,
        resume: StructuredResume | Any,
        template_id: str = DEFAULT_TEMPLATE_ID,
        policy: Optional[FitPolicy] = None,
        max_pages: int = DEFAULT_MAX_PAGES,
        tolerance: float = DEFAULT_TOLERANCE_PX,
    ):
        self.resume = coerce_resume(resume)
        self.template_id = template_id
        self.policy = policy or DEFAULT_FIT_POLICY
        self.max_pages = max(1, max_pages)
        self.tolerance = tolerance
        self.reset()

    def reset(self) -> None:
        """Back to level 0 on one page; call when the resume or template changes."""
        self.compression_level = 0
        self.page_count = 1
        self.state = FitState.IDLE
        self.overflowing = False
        self.history: List[FitStep] = []

    @property
    def settled(self) -> bool:
        return self.state is FitState.SETTLED

    def plan(self) -> RenderPlan:
        plan = create_render_plan(self.resume, self.template_id, self.compression_level, self.policy)
        if not self.settled:
            self.state = FitState.MEASURING
        return plan

    def report_height(self, content_height: float, page_height: float) -> FitState:
        """Feed back a measurement of the last plan and advance the machine."""
        if self.settled:
            return self.state

        available = self.page_count * page_height + self.tolerance
        if content_height <= available:
            action = "settle"
            self.overflowing = False
            self.state = FitState.SETTLED
        elif self.compression_level < self.policy.max_compression_level:
            action = "compress"
            self.compression_level += 1
            self.state = FitState.COMPRESSING
        elif self.page_count < self.max_pages:
            action = "grow"
            self.page_count = self.max_pages
            self.state = FitState.COMPRESSING
        else:
            action = "give_up"
            self.overflowing = True
            self.state = FitState.SETTLED

        self.history.append(FitStep(
            compression_level=self.compression_level,
            page_count=self.page_count,
            content_height=content_height,
            available_height=available,
            action=action,
        ))
        logger.debug(f"Measured {content_height:.1f}px of {available:.1f}px -> {action}")
        return self.state


def fit_resume(
    resume: StructuredResume | Any,
    measure: Optional[Callable[[RenderPlan], float]] = None,
    page_height: Optional[float] = None,
    template_id: str = DEFAULT_TEMPLATE_ID,
    policy: Optional[FitPolicy] = None,
    max_pages: int = DEFAULT_MAX_PAGES,
    max_iterations: Optional[int] = None,
) -> FitOutcome:
    """
    Run the fit loop until it settles.

    Args:
        resume: Resume model or raw dict
        measure: Callable returning the rendered height of a plan (defaults
            to the layout estimator)
        page_height: Height of one page in the measure's unit (defaults to
            US Letter in CSS pixels)
        template_id: Template the plans are built for
        policy: Fit policy (defaults to DEFAULT_FIT_POLICY)
        max_pages: Page count the loop may grow to once compression runs out
        max_iterations: Safety cap on measurements (defaults to one per
            ladder step plus page growth)

    Returns:
        FitOutcome with the final plan, the constrained resume and the
        measurement history
    """
    policy = policy or DEFAULT_FIT_POLICY
    if measure is None:
        def measure(plan: RenderPlan) -> float:
            return estimate_plan_height(plan, policy.spacing)
    if page_height is None:
        page_height = page_height_px(1)
    controller = FitController(resume, template_id, policy, max_pages)
    if max_iterations is None:
        max_iterations = policy.max_compression_level + controller.max_pages + 1

    plan = controller.plan()
    iterations = 0
    while not controller.settled and iterations < max_iterations:
        iterations += 1
        controller.report_height(measure(plan), page_height)
        plan = controller.plan()

    if not controller.settled:
        logger.warning(f"Fit loop stopped after {iterations} measurements without settling")

    page_count = max(controller.page_count, plan.page_count)
    logger.info(
        f"Fit finished at level {controller.compression_level}/{policy.max_compression_level}, "
        f"{page_count} page(s), {iterations} measurement(s)"
    )

    return FitOutcome(
        plan=plan,
        resume=apply_fit_constraints(controller.resume, plan.fit_settings),
        compression_level=controller.compression_level,
        page_count=page_count,
        iterations=iterations,
        settled=controller.settled,
        overflowing=controller.overflowing or not controller.settled,
        history=controller.history,
    )
