"""Answer-driven generation planning.

``PlanBuilder`` maps an ``AnswerSet`` to a ``GenerationPlan``: the ordered
directories to create, the ordered files to emit (rendered or copied), and the
template context.  Building a plan touches nothing on disk.

Every choice that depends on the app type is a mapping keyed by ``AppType``
and looked up through ``_select``, so an unmapped app type fails loudly with
``InvalidAnswerSet`` rather than falling through to some default.
"""

from __future__ import annotations

from typing import Any, TypeVar

from .models import (
    MODULE_TOKENS,
    AnswerSet,
    AppType,
    GenerationPlan,
    InvalidAnswerSet,
    TemplateRef,
)

_T = TypeVar("_T")


# ---------------------------------------------------------------------------
# Directory layout
# ---------------------------------------------------------------------------

BASE_DIRECTORIES: list[str] = [
    "app",
    "app/css",
    "app/scss",
    "app/js",
    "app/images",
    "app/fonts",
]

PARTIALS_DIRECTORIES: list[str] = [
    "app/partials",
    "build",
]

DIRECTORIES: dict[AppType, list[str]] = {
    AppType.SIMPLE_WEB_APP: BASE_DIRECTORIES,
    AppType.FULL_PACK_WEB_APP: BASE_DIRECTORIES + PARTIALS_DIRECTORIES,
    AppType.ANGULAR_APP: BASE_DIRECTORIES + PARTIALS_DIRECTORIES,
}


# ---------------------------------------------------------------------------
# Template families
# ---------------------------------------------------------------------------

LANDING_TEMPLATES: dict[AppType, str] = {
    AppType.SIMPLE_WEB_APP: "simple-web-app/index.html.j2",
    AppType.FULL_PACK_WEB_APP: "full-pack-web-app/index.html.j2",
    AppType.ANGULAR_APP: "angular-app/index.html.j2",
}

PARTIAL_TEMPLATES: list[tuple[str, str]] = [
    ("partials/_header.html.j2", "app/partials/_header.html"),
    ("partials/_footer.html.j2", "app/partials/_footer.html"),
]

# Copied byte-for-byte for every app type.
STYLE_AND_SCRIPT_FILES: list[tuple[str, str]] = [
    ("css/master.css", "app/css/master.css"),
    ("scss/master.scss", "app/scss/master.scss"),
    ("scss/base.scss", "app/scss/base.scss"),
    ("scss/layout.scss", "app/scss/layout.scss"),
    ("scss/reset.scss", "app/scss/reset.scss"),
    ("scss/variables.scss", "app/scss/variables.scss"),
    ("scss/mixins.scss", "app/scss/mixins.scss"),
    ("scss/module.scss", "app/scss/modules/module.scss"),
    ("scss/page_landing.scss", "app/scss/pages/page-landing.scss"),
    ("js/application.js", "app/js/application.js"),
]

PROJECT_TEMPLATES: dict[AppType, list[tuple[str, str]]] = {
    AppType.SIMPLE_WEB_APP: [
        ("simple-web-app/gulpfile.js.j2", "gulpfile.js"),
        ("simple-web-app/package.json.j2", "package.json"),
    ],
    AppType.FULL_PACK_WEB_APP: [
        ("gulpfile.js.j2", "gulpfile.js"),
        ("package.json.j2", "package.json"),
        ("root/jshintrc.j2", ".jshintrc"),
    ],
    AppType.ANGULAR_APP: [
        ("gulpfile.js.j2", "gulpfile.js"),
        ("package.json.j2", "package.json"),
        ("root/jshintrc.j2", ".jshintrc"),
    ],
}

ROOT_FILES: list[tuple[str, str]] = [
    ("root/gitignore", ".gitignore"),
    ("root/gitattributes", ".gitattributes"),
    ("root/robots.txt", "robots.txt"),
    ("root/favicon.ico", "app/favicon.ico"),
]

BOWER_CONFIG: tuple[str, str] = ("root/bowerrc", ".bowerrc")

BOWER_TEMPLATES: dict[AppType, str] = {
    AppType.FULL_PACK_WEB_APP: "root/full_pack_bower.json.j2",
    AppType.ANGULAR_APP: "root/angular_bower.json.j2",
}


# ---------------------------------------------------------------------------
# PlanBuilder
# ---------------------------------------------------------------------------


class PlanBuilder:
    """Builds the ``GenerationPlan`` for an ``AnswerSet``.

    Args:
        app_suffix: Appended to the app name to form the Angular module name.
    """

    def __init__(self, app_suffix: str = "") -> None:
        self.app_suffix = app_suffix

    def build(self, answers: AnswerSet) -> GenerationPlan:
        """Return the deterministic plan for *answers*.

        Raises:
            InvalidAnswerSet: ``answers.app_type`` is not a known ``AppType``.
        """
        app_type = answers.app_type
        if not isinstance(app_type, AppType):
            raise InvalidAnswerSet(f"Unknown app type: {app_type!r}")

        files: list[TemplateRef] = []

        # Landing markup
        files.append(_templated(_select(LANDING_TEMPLATES, app_type), "app/index.html"))

        # Header / footer partials
        if app_type.has_partials:
            files.extend(_templated(src, dest) for src, dest in PARTIAL_TEMPLATES)

        # Stylesheets and scripts
        files.extend(_static(src, dest) for src, dest in STYLE_AND_SCRIPT_FILES)

        # Build config and package manifest
        files.extend(_templated(src, dest) for src, dest in _select(PROJECT_TEMPLATES, app_type))
        files.extend(_static(src, dest) for src, dest in ROOT_FILES)

        # Bower is supported only for full pack and angular apps
        if app_type.has_partials:
            files.append(_static(*BOWER_CONFIG))
            files.append(_templated(_select(BOWER_TEMPLATES, app_type), "bower.json"))

        return GenerationPlan(
            app_name=answers.app_name,
            directories=list(_select(DIRECTORIES, app_type)),
            files=files,
            context=self.build_context(answers),
        )

    def build_context(self, answers: AnswerSet) -> dict[str, Any]:
        """Build the template context.

        Feature fields appear only for app types that collect features, and
        Angular fields only for Angular apps.
        """
        context: dict[str, Any] = {"site_name": answers.app_name}

        if answers.app_type.has_partials:
            context["include_jquery"] = answers.features.include_jquery
            context["include_modernizr"] = answers.features.include_modernizr

        if answers.app_type is AppType.ANGULAR_APP:
            context["module_name"] = f"{answers.app_name}{self.app_suffix}"
            context["angular_deps"] = angular_dependencies(answers)
            for flag, enabled in answers.modules.model_dump().items():
                context[f"include_{flag}"] = enabled

        return context


def build_plan(answers: AnswerSet, app_suffix: str = "") -> GenerationPlan:
    """Shortcut for ``PlanBuilder(app_suffix).build(answers)``."""
    return PlanBuilder(app_suffix).build(answers)


def angular_dependencies(answers: AnswerSet) -> str:
    """Comma-joined module tokens for the enabled Angular modules.

    Tokens follow the fixed order route, resource, sanitize, animate.  Returns
    an empty string when no module is enabled.
    """
    enabled = answers.modules.model_dump()
    return ", ".join(token for flag, token in MODULE_TOKENS.items() if enabled[flag])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _select(mapping: dict[AppType, _T], app_type: AppType) -> _T:
    try:
        return mapping[app_type]
    except KeyError:
        raise InvalidAnswerSet(f"No template mapping for app type: {app_type!r}") from None


def _templated(source_key: str, dest_path: str) -> TemplateRef:
    return TemplateRef(source_key=source_key, dest_path=dest_path, is_templated=True)


def _static(source_key: str, dest_path: str) -> TemplateRef:
    return TemplateRef(source_key=source_key, dest_path=dest_path, is_templated=False)
