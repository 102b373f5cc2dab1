"""Tests for answer-driven generation planning.

Covers:
- Directory sets per app type
- Landing template selection with no cross-family leakage
- Partials, lint config and bower files present only where they belong
- Angular module-dependency list ordering
- Context fields per app type
- Every app-type mapping covers every app type
"""

from __future__ import annotations

import pytest

from smacss_gen.scaffolder.models import AnswerSet, AppType, FeatureFlags, InvalidAnswerSet, ModuleFlags
from smacss_gen.scaffolder.planner import (
    BASE_DIRECTORIES,
    BOWER_TEMPLATES,
    DIRECTORIES,
    LANDING_TEMPLATES,
    PROJECT_TEMPLATES,
    STYLE_AND_SCRIPT_FILES,
    PlanBuilder,
    angular_dependencies,
    build_plan,
)

pytestmark = pytest.mark.unit

BOWER_FILES = {".bowerrc", "bower.json"}
PARTIAL_FILES = {"app/partials/_header.html", "app/partials/_footer.html"}


def _angular(**modules: bool) -> AnswerSet:
    return AnswerSet(app_name="ng", app_type=AppType.ANGULAR_APP, modules=ModuleFlags(**modules))


# ---------------------------------------------------------------------------
# Mapping totality
# ---------------------------------------------------------------------------


class TestMappings:
    @pytest.mark.parametrize("mapping", [LANDING_TEMPLATES, PROJECT_TEMPLATES, DIRECTORIES])
    def test_mapping_covers_every_app_type(self, mapping):
        assert set(mapping) == set(AppType)

    def test_bower_mapping_covers_every_app_type_with_partials(self):
        assert set(BOWER_TEMPLATES) == {t for t in AppType if t.has_partials}

    def test_landing_templates_are_distinct(self):
        assert len(set(LANDING_TEMPLATES.values())) == len(AppType)


# ---------------------------------------------------------------------------
# Directories
# ---------------------------------------------------------------------------


class TestDirectories:
    def test_simple_app_directories(self, simple_answers):
        plan = build_plan(simple_answers)
        assert plan.directories == [
            "app", "app/css", "app/scss", "app/js", "app/images", "app/fonts",
        ]

    @pytest.mark.parametrize("app_type", [AppType.FULL_PACK_WEB_APP, AppType.ANGULAR_APP])
    def test_partials_and_build_directories(self, app_type):
        plan = build_plan(AnswerSet(app_name="x", app_type=app_type))
        assert plan.directories == BASE_DIRECTORIES + ["app/partials", "build"]

    def test_directories_are_a_copy(self, simple_answers):
        plan = build_plan(simple_answers)
        plan.directories.append("junk")
        assert "junk" not in BASE_DIRECTORIES


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestFiles:
    def test_exactly_one_landing_page_from_matching_family(self, any_answers):
        plan = build_plan(any_answers)
        landing = [ref for ref in plan.files if ref.dest_path == "app/index.html"]
        assert len(landing) == 1
        assert landing[0].is_templated is True
        assert landing[0].source_key == LANDING_TEMPLATES[any_answers.app_type]

    def test_no_other_family_landing_templates(self, any_answers):
        plan = build_plan(any_answers)
        sources = {ref.source_key for ref in plan.files}
        others = set(LANDING_TEMPLATES.values()) - {LANDING_TEMPLATES[any_answers.app_type]}
        assert not sources & others

    def test_static_styles_always_present(self, any_answers):
        plan = build_plan(any_answers)
        for source, dest in STYLE_AND_SCRIPT_FILES:
            ref = plan.file_for(dest)
            assert ref is not None, dest
            assert ref.source_key == source
            assert ref.is_templated is False

    def test_root_files_always_copied(self, any_answers):
        plan = build_plan(any_answers)
        for dest in (".gitignore", ".gitattributes", "robots.txt", "app/favicon.ico"):
            ref = plan.file_for(dest)
            assert ref is not None, dest
            assert ref.is_templated is False

    def test_simple_app_has_no_partials_bower_or_lint(self, simple_answers):
        plan = build_plan(simple_answers)
        dests = set(plan.dest_paths)
        assert not dests & PARTIAL_FILES
        assert not dests & BOWER_FILES
        assert ".jshintrc" not in dests
        assert "app/partials" not in plan.directories

    def test_simple_app_uses_simple_family_project_files(self, simple_answers):
        plan = build_plan(simple_answers)
        assert plan.file_for("gulpfile.js").source_key == "simple-web-app/gulpfile.js.j2"
        assert plan.file_for("package.json").source_key == "simple-web-app/package.json.j2"

    @pytest.mark.parametrize("app_type", [AppType.FULL_PACK_WEB_APP, AppType.ANGULAR_APP])
    def test_general_family_project_files(self, app_type):
        plan = build_plan(AnswerSet(app_name="x", app_type=app_type))
        assert plan.file_for("gulpfile.js").source_key == "gulpfile.js.j2"
        assert plan.file_for("package.json").source_key == "package.json.j2"
        assert plan.file_for(".jshintrc").is_templated is True

    @pytest.mark.parametrize("app_type", [AppType.FULL_PACK_WEB_APP, AppType.ANGULAR_APP])
    def test_partials_and_bower_present(self, app_type):
        plan = build_plan(AnswerSet(app_name="x", app_type=app_type))
        dests = set(plan.dest_paths)
        assert PARTIAL_FILES <= dests
        assert BOWER_FILES <= dests
        assert plan.file_for(".bowerrc").is_templated is False
        assert plan.file_for("bower.json").is_templated is True

    def test_bower_family_follows_app_type(self, full_pack_answers, angular_answers):
        assert build_plan(full_pack_answers).file_for("bower.json").source_key == "root/full_pack_bower.json.j2"
        assert build_plan(angular_answers).file_for("bower.json").source_key == "root/angular_bower.json.j2"

    def test_dest_paths_are_unique(self, any_answers):
        plan = build_plan(any_answers)
        assert len(plan.dest_paths) == len(set(plan.dest_paths))

    def test_landing_page_is_first(self, any_answers):
        plan = build_plan(any_answers)
        assert plan.files[0].dest_path == "app/index.html"

    def test_build_is_deterministic(self, any_answers):
        assert build_plan(any_answers) == build_plan(any_answers)


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


class TestContext:
    def test_site_name_always_present(self, any_answers):
        assert build_plan(any_answers).context["site_name"] == "everyType"

    def test_simple_context_has_only_site_name(self, simple_answers):
        assert build_plan(simple_answers).context == {"site_name": "mySite"}

    def test_full_pack_context_has_features_not_modules(self, full_pack_answers):
        context = build_plan(full_pack_answers).context
        assert context["include_jquery"] is True
        assert context["include_modernizr"] is False
        assert "angular_deps" not in context
        assert "include_route" not in context

    def test_angular_context(self, angular_answers):
        context = build_plan(angular_answers).context
        assert context["angular_deps"] == "'ngRoute', 'ngSanitize'"
        assert context["module_name"] == "ngShop"
        assert context["include_route"] is True
        assert context["include_resource"] is False
        assert context["include_sanitize"] is True
        assert context["include_animate"] is False

    def test_app_suffix_extends_module_name(self, angular_answers):
        context = PlanBuilder(app_suffix="App").build(angular_answers).context
        assert context["module_name"] == "ngShopApp"
        assert context["site_name"] == "ngShop"

    def test_context_does_not_leak_between_builds(self, angular_answers, simple_answers):
        builder = PlanBuilder()
        builder.build(angular_answers)
        assert "angular_deps" not in builder.build(simple_answers).context


class TestAngularDependencies:
    def test_resource_and_animate(self):
        assert angular_dependencies(_angular(resource=True, animate=True)) == "'ngResource', 'ngAnimate'"

    def test_route_and_sanitize(self):
        assert angular_dependencies(_angular(route=True, sanitize=True)) == "'ngRoute', 'ngSanitize'"

    def test_all_modules_in_fixed_order(self):
        deps = angular_dependencies(_angular(animate=True, sanitize=True, resource=True, route=True))
        assert deps == "'ngRoute', 'ngResource', 'ngSanitize', 'ngAnimate'"

    def test_no_modules_gives_empty_string(self):
        assert angular_dependencies(_angular()) == ""
        assert build_plan(_angular()).context["angular_deps"] == ""


# ---------------------------------------------------------------------------
# Invalid input
# ---------------------------------------------------------------------------


class TestInvalidAnswers:
    def test_unknown_app_type_raises(self):
        answers = AnswerSet.model_construct(
            app_name="x",
            app_type="typeReactApp",
            features=FeatureFlags(),
            modules=ModuleFlags(),
        )
        with pytest.raises(InvalidAnswerSet):
            build_plan(answers)
