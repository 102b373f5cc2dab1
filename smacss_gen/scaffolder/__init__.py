"""SMACSS scaffolder -- plans and writes front-end project trees.

This package maps an ``AnswerSet`` to a ``GenerationPlan`` and writes the plan
under a target directory, rendering Jinja2 templates and copying static files
from ``smacss_gen/scaffolder/templates/``.

Quick usage::

    from smacss_gen.scaffolder import AnswerSet, AppType, Emitter, PlanBuilder

    answers = AnswerSet(app_name="My Site", app_type=AppType.SIMPLE_WEB_APP)
    plan = PlanBuilder().build(answers)
    project_root = await Emitter().emit(plan, "/tmp/output")
"""

from smacss_gen.scaffolder.emitter import Emitter, IOWriteError
from smacss_gen.scaffolder.models import (
    AnswerSet,
    AppType,
    FeatureFlags,
    GenerationPlan,
    InvalidAnswerSet,
    ModuleFlags,
    PostInstallPlan,
    TemplateRef,
)
from smacss_gen.scaffolder.planner import PlanBuilder, build_plan
from smacss_gen.scaffolder.templates import TemplateRenderer, TemplateRenderError

__all__ = [
    "AnswerSet",
    "AppType",
    "Emitter",
    "FeatureFlags",
    "GenerationPlan",
    "IOWriteError",
    "InvalidAnswerSet",
    "ModuleFlags",
    "PlanBuilder",
    "PostInstallPlan",
    "TemplateRef",
    "TemplateRenderError",
    "TemplateRenderer",
    "build_plan",
]
