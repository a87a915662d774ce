from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from hamlbuild.core.errors import ConfigurationError
from hamlbuild.core.models import (
    DEFAULT_NAMESPACE,
    CompileOptions,
    Language,
    Placement,
    Target,
)
from hamlbuild.core.options import (
    backend_options,
    for_file,
    merge_options,
    parse_options,
    template_name,
)


class TestParseOptions:
    def test_defaults(self):
        options = parse_options()

        assert options.target is Target.HTML
        assert options.language is Language.JS
        assert options.placement is Placement.GLOBAL
        assert options.namespace == DEFAULT_NAMESPACE == "window.HAML"
        assert options.dependencies == {}
        assert options.name is None
        assert options.context is None

    def test_unknown_language_names_value_and_choices(self):
        with pytest.raises(ConfigurationError) as excinfo:
            parse_options({"language": "ruby"})

        message = str(excinfo.value)
        assert "ruby" in message
        assert "coffee and js" in message

    def test_unknown_target_names_value_and_choices(self):
        with pytest.raises(ConfigurationError) as excinfo:
            parse_options({"language": "js", "target": "xml"})

        message = str(excinfo.value)
        assert "xml" in message
        assert "html and js" in message

    def test_unknown_placement_names_value_and_choices(self):
        with pytest.raises(ConfigurationError, match="amd and global"):
            parse_options({"target": "js", "placement": "commonjs"})

    def test_enum_members_are_accepted(self):
        options = parse_options({"language": Language.COFFEE, "target": Target.JS})

        assert options.language is Language.COFFEE
        assert options.target is Target.JS

    def test_wrong_field_type_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Invalid options"):
            parse_options({"dependencies": ["jquery"]})

    def test_existing_model_is_returned_unchanged(self):
        options = CompileOptions(namespace="window.T")

        assert parse_options(options) is options

    def test_options_are_frozen(self):
        options = parse_options({"namespace": "window.T"})

        with pytest.raises(ValidationError):
            options.namespace = "window.X"

    def test_unknown_keys_are_kept_as_passthrough(self):
        options = parse_options({"escapeHtml": False, "format": "html5"})

        assert options.passthrough == {"escapeHtml": False, "format": "html5"}


class TestPerFileOptions:
    def test_filename_is_always_the_file_under_compilation(self):
        base = parse_options({"filename": "stale.haml"})

        derived = for_file(base, Path("views/index.haml"))

        assert derived.filename == Path("views/index.haml")
        assert base.filename == Path("stale.haml")

    def test_derived_dependencies_do_not_leak(self):
        base = parse_options({"dependencies": {"jquery": "vendor/jquery"}})

        first = for_file(base, Path("a.haml"))
        first.dependencies["extra"] = "lib/extra"
        second = for_file(base, Path("b.haml"))

        assert base.dependencies == {"jquery": "vendor/jquery"}
        assert second.dependencies == {"jquery": "vendor/jquery"}

    def test_template_name_defaults_to_stem(self):
        options = parse_options()

        assert template_name(options, Path("views/user.list.haml")) == "user.list"

    def test_template_name_option_wins(self):
        options = parse_options({"name": "profile"})

        assert template_name(options, Path("views/user.haml")) == "profile"

    def test_backend_options_drop_namespace_and_housekeeping_keys(self):
        options = for_file(
            parse_options(
                {
                    "language": "coffee",
                    "target": "js",
                    "name": "x",
                    "context": {"a": 1},
                    "namespace": "window.T",
                    "dependencies": {"a": "b"},
                    "uglify": True,
                }
            ),
            Path("x.hamlc"),
        )

        assert backend_options(options) == {
            "filename": "x.hamlc",
            "placement": "global",
            "dependencies": {"a": "b"},
            "uglify": True,
        }

    def test_backend_options_always_carry_dependencies(self):
        options = for_file(parse_options({"language": "coffee"}), Path("x.hamlc"))

        assert backend_options(options)["dependencies"] == {}


def test_merge_options_later_layers_win():
    merged = merge_options(
        {"namespace": "window.A", "target": "js"}, None, {"namespace": "window.B"}
    )

    assert merged == {"namespace": "window.B", "target": "js"}
